# topmark:header:start
#
#   project      : TokSwap
#   file         : streamer.py
#   file_relpath : src/tokswap/pipeline/steps/streamer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Streamer step: transform the document line by line into the staging file.

The step pulls one line at a time from the `LineSource`, runs it through the
occurrence engine, and writes the result to the `StagedSink`. When the sink
reports saturation, the step blocks in ``drain()`` before pulling the next
line, so memory stays bounded by the high-water mark (plus one line).

On any failure (including interrupts) the staging file is discarded; the
source document is never touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.pipeline.engine import transform_line
from tokswap.pipeline.sink import StagedSink
from tokswap.pipeline.status import RunState
from tokswap.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from tokswap.config.logging import TokswapLogger
    from tokswap.core.errors import TransformError
    from tokswap.pipeline.context import RunContext
    from tokswap.pipeline.engine import LineRecord
    from tokswap.pipeline.source import LineSource

logger: TokswapLogger = get_logger(__name__)


@dataclass
class StreamerStep(BaseStep):
    """Stream transformed lines from the source into the staged sink."""

    name: str = "streamer"
    state: RunState = RunState.STREAMING

    def run(self, ctx: RunContext) -> None:
        """Create the sink and pump every line through it.

        Raises:
            UnreadableError: If reading the source fails mid-stream.
            WriteFailureError: If the staging file cannot be created or written.
        """
        source: LineSource | None = ctx.source
        assert source is not None, "streamer requires an open line source"
        config = ctx.config
        token: str = config.match_token
        replacement: str = config.replacement_token

        ctx.sink = StagedSink(
            config.staging_path,
            newline=source.newline,
            high_water_mark=config.high_water_mark,
        )
        sink: StagedSink = ctx.sink
        try:
            for number, text in enumerate(source, start=1):
                record: LineRecord = transform_line(number, text, token, replacement)
                ctx.tally.add(record)
                if record.matched:
                    logger.trace(
                        "Line %d: %d occurrence(s) replaced", number, record.occurrences
                    )
                if not sink.write(record.transformed):
                    sink.drain()
        except BaseException:
            # Interrupts included: never leave a partial staging file behind
            sink.discard()
            raise
        finally:
            source.close()
        logger.info(
            "Streamed %d lines (%d occurrences) into %s",
            ctx.tally.lines,
            ctx.tally.total_occurrences,
            config.staging_path,
        )

    def on_failure(self, ctx: RunContext, error: TransformError) -> None:
        """Discard the partial staging file and release the source."""
        if ctx.sink is not None:
            ctx.sink.discard()
        if ctx.source is not None:
            ctx.source.close()
