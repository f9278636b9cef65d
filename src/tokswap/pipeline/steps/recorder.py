# topmark:header:start
#
#   project      : TokSwap
#   file         : recorder.py
#   file_relpath : src/tokswap/pipeline/steps/recorder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Recorder step: write the audit record of a committed run.

The document is already committed when this step runs, so a failure to write
the log does not fail the run. It is kept on ``ctx.log_error`` and reported
as a warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.core.errors import LogFailureError
from tokswap.pipeline.audit import write_audit_record
from tokswap.pipeline.status import RunState
from tokswap.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from tokswap.config.logging import TokswapLogger
    from tokswap.pipeline.context import RunContext

logger: TokswapLogger = get_logger(__name__)


@dataclass
class RecorderStep(BaseStep):
    """Write the audit record to the configured log, replacing any previous one."""

    name: str = "recorder"
    state: RunState = RunState.LOGGING

    def run(self, ctx: RunContext) -> None:
        assert ctx.record is not None, "recorder requires an audit record"
        try:
            write_audit_record(ctx.record, ctx.config.log_path)
        except LogFailureError as e:
            ctx.log_error = e
            logger.warning("%s (the document was committed)", e.message)
