# topmark:header:start
#
#   project      : TokSwap
#   file         : __main__.py
#   file_relpath : src/tokswap/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running TokSwap via ``python -m tokswap``.

Delegates to :func:`tokswap.cli.main.cli`, the single CLI entry point.
"""

from __future__ import annotations

from tokswap.cli.main import cli

if __name__ == "__main__":
    cli()
