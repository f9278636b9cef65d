# topmark:header:start
#
#   project      : TokSwap
#   file         : run.py
#   file_relpath : src/tokswap/cli/commands/run.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokSwap `run` command.

Replaces the match token in the source document, atomically, and writes the
audit record. Exit status follows `tokswap.core.exit_codes.ExitCode`: ``0``
when the run reached ``done`` (an audit log failure is shown as a warning),
otherwise the code of the failure kind.
"""

from __future__ import annotations

import click

from tokswap.cli.config_resolver import resolve_config_from_click
from tokswap.cli.console import ClickConsole, get_console_safely
from tokswap.cli.errors import error_for
from tokswap.cli.options import common_config_options, common_transform_options
from tokswap.cli.utils import get_effective_verbosity, render_run_summary
from tokswap.config.logging import TokswapLogger, get_logger
from tokswap.pipeline.context import RunContext
from tokswap.pipeline.runner import run_transform

logger: TokswapLogger = get_logger(__name__)


@click.command(
    name="run",
    help="Replace TOKEN in SOURCE (default: sample.txt) and write an audit record.",
)
@common_transform_options
@common_config_options
def run_command(
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
    """Transform the source document in place."""
    ctx = click.get_current_context()
    console: ClickConsole = get_console_safely()
    verbosity: int = get_effective_verbosity(ctx)

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
    if not config.match_token:
        console.warn("Warning: the match token is empty; the document is left unchanged.")

    result: RunContext = run_transform(config)
    if result.error is not None:
        if verbosity > 0:
            console.error(f"Run failed while {result.history[-2].value}")
        raise error_for(result.error)

    if result.log_error is not None:
        console.warn(f"Warning: {result.log_error.message} (the document was updated).")
    render_run_summary(console, result, verbosity=verbosity)
