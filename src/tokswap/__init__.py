# topmark:header:start
#
#   project      : TokSwap
#   file         : __init__.py
#   file_relpath : src/tokswap/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokSwap package.

TokSwap replaces a literal token in a text document, streaming it line by line
through a staging file that is atomically renamed over the original, and
records what it did in an audit log. It exposes both a CLI and a small typed
API for automation.
"""

from __future__ import annotations
