# topmark:header:start
#
#   project      : TokSwap
#   file         : config.py
#   file_relpath : src/tokswap/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokSwap `config` command group.

Subcommands:
    dump: print the effective merged configuration as TOML.
"""

from __future__ import annotations

import click

from tokswap.cli.config_resolver import resolve_config_from_click
from tokswap.cli.console import ClickConsole, get_console_safely
from tokswap.cli.options import common_config_options, common_transform_options
from tokswap.cli.utils import get_effective_verbosity


@click.group(name="config", help="Inspect the TokSwap configuration.")
def config_command() -> None:
    """Configuration commands."""


@config_command.command(
    name="dump",
    help="Print the effective configuration (defaults, config files and options) as TOML.",
)
@common_transform_options
@common_config_options
def dump_command(
    *,
    source: str | None,
    token: str | None,
    replacement: str | None,
    staging: str | None,
    log: str | None,
    high_water_mark: int | None,
    no_config: bool,
    config_paths: tuple[str, ...],
) -> None:
    """Dump the merged configuration."""
    console: ClickConsole = get_console_safely()
    config = resolve_config_from_click(
        no_config=no_config,
        config_paths=config_paths,
        source=source,
        token=token,
        replacement=replacement,
        staging=staging,
        log=log,
        high_water_mark=high_water_mark,
    )
    if get_effective_verbosity(click.get_current_context()) > 0:
        for path in config.config_files:
            console.print(f"# merged from {path}")
    console.print(config.to_toml(), nl=False)
