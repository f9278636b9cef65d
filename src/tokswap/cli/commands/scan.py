# topmark:header:start
#
#   project      : TokSwap
#   file         : scan.py
#   file_relpath : src/tokswap/cli/commands/scan.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokSwap `scan` command.

Read-only preview: reports the occurrences ``tokswap run`` would replace and
exits with `ExitCode.WOULD_CHANGE` (2) when there is at least one.
"""

from __future__ import annotations

import click

from tokswap.cli.config_resolver import resolve_config_from_click
from tokswap.cli.console import ClickConsole, get_console_safely
from tokswap.cli.errors import error_for
from tokswap.cli.options import common_config_options, common_transform_options
from tokswap.cli.utils import get_effective_verbosity, render_scan_report
from tokswap.core.errors import TransformError
from tokswap.core.exit_codes import ExitCode
from tokswap.pipeline.scanner import ScanReport, scan


@click.command(
    name="scan",
    help="Count TOKEN in SOURCE without modifying anything (exit 2 if a run would change it).",
)
@common_transform_options
@common_config_options
def scan_command(
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
    """Preview the transformation of the source document."""
    ctx = click.get_current_context()
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
    try:
        report: ScanReport = scan(config)
    except TransformError as e:
        raise error_for(e) from e

    render_scan_report(console, report, verbosity=get_effective_verbosity(ctx))
    if report.would_change:
        ctx.exit(ExitCode.WOULD_CHANGE)
