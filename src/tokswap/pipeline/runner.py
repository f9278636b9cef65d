# topmark:header:start
#
#   project      : TokSwap
#   file         : runner.py
#   file_relpath : src/tokswap/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run the TokSwap transform pipeline for a single document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.pipeline.context import RunContext
from tokswap.pipeline.pipelines import TRANSFORM_PIPELINE
from tokswap.pipeline.status import RunState

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tokswap.config import Config
    from tokswap.config.logging import TokswapLogger
    from tokswap.pipeline.context import Clock
    from tokswap.pipeline.steps.base import BaseStep

logger: TokswapLogger = get_logger(__name__)


def run(ctx: RunContext, steps: Sequence[BaseStep]) -> RunContext:
    """Execute the pipeline sequentially.

    Stops at the first failing step. A run that got through every step moves
    to ``done``.

    Args:
        ctx (RunContext): Mutable run context (state ``idle``).
        steps (Sequence[BaseStep]): Ordered sequence of pipeline steps.

    Returns:
        RunContext: The final run context, in state ``done`` or ``failed``.
    """
    logger.info(
        "Transforming %s: %r -> %r",
        ctx.config.source_path,
        ctx.config.match_token,
        ctx.config.replacement_token,
    )
    for step in steps:
        ctx = step(ctx)
        if ctx.is_failed:
            logger.info("Run halted by %s", step.name)
            break
    else:
        ctx.enter(RunState.DONE)
    return ctx


def run_transform(config: Config, *, clock: Clock | None = None) -> RunContext:
    """Run the full transform pipeline for ``config``.

    Args:
        config (Config): Frozen run configuration.
        clock (Clock | None): Time source for the audit timestamp (local time if None).

    Returns:
        RunContext: The finished run.
    """
    ctx: RunContext = RunContext.bootstrap(config, clock=clock)
    return run(ctx, TRANSFORM_PIPELINE)
