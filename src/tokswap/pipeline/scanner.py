# topmark:header:start
#
#   project      : TokSwap
#   file         : scanner.py
#   file_relpath : src/tokswap/pipeline/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read-only preview of a transformation.

`scan` streams the document through the line source and the occurrence
engine exactly like a real run, but never creates a staging file, never
touches the document and never writes an audit record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.pipeline.audit import format_line_numbers
from tokswap.pipeline.engine import count_non_overlapping
from tokswap.pipeline.source import LineSource

if TYPE_CHECKING:
    from pathlib import Path

    from tokswap.config import Config
    from tokswap.config.logging import TokswapLogger

logger: TokswapLogger = get_logger(__name__)


@dataclass(frozen=True)
class ScanReport:
    """Result of a read-only scan.

    Attributes:
        source (Path): Scanned document.
        match_token (str): Token searched for.
        lines (int): Lines read.
        total_occurrences (int): Matches that a run would replace.
        matched_lines (tuple[int, ...]): One-based numbers of lines with a match.
    """

    source: Path
    match_token: str
    lines: int = 0
    total_occurrences: int = 0
    matched_lines: tuple[int, ...] = field(default=())

    @property
    def would_change(self) -> bool:
        """Return True if a run would modify the document."""
        return self.total_occurrences > 0

    def describe_lines(self) -> str:
        """Return the matched lines as ``"1, 3"`` (or ``"(none)"``)."""
        return format_line_numbers(self.matched_lines)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable mapping of this report."""
        return {
            "source": str(self.source),
            "match_token": self.match_token,
            "lines": self.lines,
            "total_occurrences": self.total_occurrences,
            "matched_lines": list(self.matched_lines),
        }


def scan(config: Config) -> ScanReport:
    """Count the occurrences a run with ``config`` would replace.

    Raises:
        NotFoundError: If the source does not exist.
        UnreadableError: If the source cannot be opened, read or decoded.
    """
    token: str = config.match_token
    total: int = 0
    matched: list[int] = []
    lines: int = 0
    with LineSource(config.source_path) as source:
        for number, text in enumerate(source, start=1):
            lines = number
            n: int = count_non_overlapping(text, token)
            if n:
                total += n
                matched.append(number)
    logger.info(
        "Scanned %s: %d occurrence(s) on %d line(s)", config.source_path, total, len(matched)
    )
    return ScanReport(
        source=config.source_path,
        match_token=token,
        lines=lines,
        total_occurrences=total,
        matched_lines=tuple(matched),
    )
