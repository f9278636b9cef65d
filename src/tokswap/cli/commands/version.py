# topmark:header:start
#
#   project      : TokSwap
#   file         : version.py
#   file_relpath : src/tokswap/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokSwap `version` command.

Prints the current TokSwap version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from tokswap.cli.console import ClickConsole, get_console_safely
from tokswap.cli.utils import get_effective_verbosity
from tokswap.constants import TOKSWAP_VERSION


@click.command(
    name="version",
    help="Show the current version of TokSwap.",
)
def version_command() -> None:
    """Show the current version of TokSwap."""
    console: ClickConsole = get_console_safely()
    if get_effective_verbosity(click.get_current_context()) > 0:
        console.print(console.styled("TokSwap version:", bold=True, underline=True))
        console.print(f"    {console.styled(TOKSWAP_VERSION, bold=True)}")
    else:
        console.print(console.styled(TOKSWAP_VERSION, bold=True))
