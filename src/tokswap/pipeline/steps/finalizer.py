# topmark:header:start
#
#   project      : TokSwap
#   file         : finalizer.py
#   file_relpath : src/tokswap/pipeline/steps/finalizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Finalizer step: make the staging file durable before the commit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tokswap.pipeline.status import RunState
from tokswap.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from tokswap.core.errors import TransformError
    from tokswap.pipeline.context import RunContext


@dataclass
class FinalizerStep(BaseStep):
    """Flush, fsync and close the staged sink.

    The last line keeps a terminator only if the source's last line had one.
    """

    name: str = "finalizer"
    state: RunState = RunState.FINALIZING

    def run(self, ctx: RunContext) -> None:
        assert ctx.sink is not None, "finalizer requires a staged sink"
        trailing: bool = ctx.source.ends_with_newline if ctx.source is not None else False
        ctx.sink.finalize(trailing_newline=trailing)

    def on_failure(self, ctx: RunContext, error: TransformError) -> None:
        if ctx.sink is not None:
            ctx.sink.discard()
