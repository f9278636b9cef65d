# topmark:header:start
#
#   project      : TokSwap
#   file         : utils.py
#   file_relpath : src/tokswap/cli/utils.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable rendering of run results for the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tokswap.pipeline.audit import format_line_numbers

if TYPE_CHECKING:
    from tokswap.cli.console import ClickConsole
    from tokswap.pipeline.context import RunContext
    from tokswap.pipeline.scanner import ScanReport


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored by the group (0 when unset)."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return int(obj.get("verbosity_level", 0))


def render_state_history(run: RunContext, *, enable_color: bool) -> str:
    """Return the visited states as ``idle → validating → ...`` (colored per state)."""
    return " → ".join(s.styled(enable_color=enable_color) for s in run.history)


def render_run_summary(console: ClickConsole, run: RunContext, *, verbosity: int) -> None:
    """Print the summary of a finished run (nothing when quiet)."""
    if verbosity < 0:
        return
    cfg = run.config
    tally = run.tally
    console.print(
        f"{cfg.source_path}: replaced {tally.total_occurrences} occurrence(s) of "
        f'"{cfg.match_token}" with "{cfg.replacement_token}"'
    )
    console.print(f"Lines containing original text: {format_line_numbers(tally.matched_lines)}")
    if run.log_error is None:
        console.print(f"Audit record: {cfg.log_path}")
    if verbosity > 0:
        console.print(f"Lines processed: {tally.lines}")
        console.print(f"States: {render_state_history(run, enable_color=console.enable_color)}")
    if verbosity > 1 and run.record is not None:
        console.print()
        console.print(run.record.render(), nl=False)


def render_scan_report(console: ClickConsole, report: ScanReport, *, verbosity: int) -> None:
    """Print the result of a read-only scan (nothing when quiet)."""
    if verbosity < 0:
        return
    if report.would_change:
        status = console.styled("would change", fg="yellow", bold=True)
    else:
        status = console.styled("unchanged", fg="green")
    console.print(
        f'{report.source}: {report.total_occurrences} occurrence(s) of "{report.match_token}" '
        f"({status})"
    )
    console.print(f"Lines containing original text: {report.describe_lines()}")
    if verbosity > 0:
        console.print(f"Lines scanned: {report.lines}")
