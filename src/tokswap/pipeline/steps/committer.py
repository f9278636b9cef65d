# topmark:header:start
#
#   project      : TokSwap
#   file         : committer.py
#   file_relpath : src/tokswap/pipeline/steps/committer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Committer step: promote the staging file over the source document.

The audit record (and its timestamp) is built when this step starts. The
rename itself is delegated to `tokswap.pipeline.commit.commit`. On failure the
staging file is deliberately kept: it is the only copy of the transformed
content.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.pipeline.audit import AuditRecord
from tokswap.pipeline.commit import commit
from tokswap.pipeline.status import RunState
from tokswap.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from tokswap.config.logging import TokswapLogger
    from tokswap.core.errors import TransformError
    from tokswap.pipeline.context import RunContext

logger: TokswapLogger = get_logger(__name__)


@dataclass
class CommitterStep(BaseStep):
    """Build the audit record, then atomically replace the source."""

    name: str = "committer"
    state: RunState = RunState.COMMITTING

    def run(self, ctx: RunContext) -> None:
        """Commit the finalized staging file.

        Raises:
            CommitFailureError: If the rename fails.
        """
        config = ctx.config
        ctx.record = AuditRecord.from_tally(
            ctx.tally,
            source=config.source_path,
            match_token=config.match_token,
            replacement_token=config.replacement_token,
            at=ctx.clock(),
        )
        commit(config.staging_path, config.source_path)
        ctx.sink = None
        ctx.source = None

    def on_failure(self, ctx: RunContext, error: TransformError) -> None:
        logger.warning(
            "Source %s left unchanged; transformed content kept in %s",
            ctx.config.source_path,
            ctx.config.staging_path,
        )
