# topmark:header:start
#
#   project      : TokSwap
#   file         : __init__.py
#   file_relpath : src/tokswap/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core building blocks: error kinds, exit codes and enum helpers."""
