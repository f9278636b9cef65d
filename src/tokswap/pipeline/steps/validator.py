# topmark:header:start
#
#   project      : TokSwap
#   file         : validator.py
#   file_relpath : src/tokswap/pipeline/steps/validator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Validator step: check the source document and the staging slot.

Nothing is mutated here. The source must exist, be a regular file and be
readable as UTF-8 (the first line is read eagerly by `LineSource`). A staging
file left over from an earlier run, typically after a failed commit, blocks
the run: it may hold the only copy of transformed content, so it is reported
and never removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.core.errors import WriteFailureError
from tokswap.pipeline.source import LineSource
from tokswap.pipeline.status import RunState
from tokswap.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from tokswap.config.logging import TokswapLogger
    from tokswap.core.errors import TransformError
    from tokswap.pipeline.context import RunContext

logger: TokswapLogger = get_logger(__name__)


@dataclass
class ValidatorStep(BaseStep):
    """Open the line source and make sure the staging path is free."""

    name: str = "validator"
    state: RunState = RunState.VALIDATING

    def run(self, ctx: RunContext) -> None:
        """Open ``ctx.source``.

        Raises:
            NotFoundError: If the source does not exist.
            UnreadableError: If the source cannot be opened or decoded.
            WriteFailureError: If a staging file is already present.
        """
        config = ctx.config
        ctx.source = LineSource(config.source_path)
        if config.staging_path.exists():
            raise WriteFailureError(
                f"Staging file already exists: {config.staging_path}. It may hold the "
                f"result of an earlier run that failed to commit; inspect and remove it.",
                path=config.staging_path,
            )
        logger.debug("Validated %s (staging: %s)", config.source_path, config.staging_path)

    def on_failure(self, ctx: RunContext, error: TransformError) -> None:
        """Release the line source, if it was opened."""
        if ctx.source is not None:
            ctx.source.close()
            ctx.source = None
