# topmark:header:start
#
#   project      : TokSwap
#   file         : audit.py
#   file_relpath : src/tokswap/pipeline/audit.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Audit record of a completed transformation.

The record is built once, when the commit starts, and written once, after the
commit succeeded, so the log always describes a transformation that has taken
effect. The layout is fixed and human-readable:

```
Timestamp: 2026-10-17T09:30:00+02:00
Source file: /work/sample.txt
Occurrences replaced ("devmode" -> "HelloWorld"): 3
Lines containing original text (1-based): 1, 3
```

With no occurrences the last line reads ``(none)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.constants import NONE_MARKER, TEXT_ENCODING
from tokswap.core.errors import LogFailureError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from pathlib import Path

    from tokswap.config.logging import TokswapLogger
    from tokswap.pipeline.engine import LineRecord

logger: TokswapLogger = get_logger(__name__)


@dataclass
class RunTally:
    """Running counters of a streaming pass.

    ``total_occurrences`` is always the sum of the per-line counts, and
    ``matched_lines`` holds exactly the (strictly increasing) numbers of the
    lines with a nonzero count.

    Attributes:
        lines (int): Lines processed.
        total_occurrences (int): Matches replaced so far.
        matched_lines (list[int]): One-based numbers of lines with at least one match.
    """

    lines: int = 0
    total_occurrences: int = 0
    matched_lines: list[int] = field(default_factory=lambda: [])

    def add(self, record: LineRecord) -> None:
        """Account for one transformed line.

        Raises:
            ValueError: If lines are not added in order, one at a time.
        """
        if record.number != self.lines + 1:
            raise ValueError(f"Expected line {self.lines + 1}, got line {record.number}")
        self.lines = record.number
        if record.occurrences:
            self.total_occurrences += record.occurrences
            self.matched_lines.append(record.number)


def format_line_numbers(numbers: Iterable[int]) -> str:
    """Return ``"1, 3"`` for ``[1, 3]`` and ``"(none)"`` for an empty sequence."""
    parts: list[str] = [str(n) for n in numbers]
    return ", ".join(parts) if parts else NONE_MARKER


@dataclass(frozen=True)
class AuditRecord:
    """Immutable summary of one transformation run.

    Attributes:
        timestamp (str): ISO-8601 timestamp taken when the commit started.
        source (str): Absolute path of the transformed document.
        match_token (str): Token that was replaced.
        replacement_token (str): Replacement that was spliced in.
        total_occurrences (int): Number of replacements.
        matched_lines (tuple[int, ...]): One-based numbers of lines with a match.
    """

    timestamp: str
    source: str
    match_token: str
    replacement_token: str
    total_occurrences: int
    matched_lines: tuple[int, ...] = ()

    @classmethod
    def from_tally(
        cls,
        tally: RunTally,
        *,
        source: Path,
        match_token: str,
        replacement_token: str,
        at: datetime,
    ) -> AuditRecord:
        """Build the record for a finished streaming pass.

        Args:
            tally (RunTally): Final counters.
            source (Path): The document (recorded as an absolute path).
            match_token (str): Token that was replaced.
            replacement_token (str): Replacement token.
            at (datetime): Moment the commit started.

        Returns:
            AuditRecord: The frozen record.
        """
        return cls(
            timestamp=at.isoformat(timespec="seconds"),
            source=str(source.absolute()),
            match_token=match_token,
            replacement_token=replacement_token,
            total_occurrences=tally.total_occurrences,
            matched_lines=tuple(tally.matched_lines),
        )

    def render(self) -> str:
        """Return the textual layout written to the audit log."""
        return (
            f"Timestamp: {self.timestamp}\n"
            f"Source file: {self.source}\n"
            f'Occurrences replaced ("{self.match_token}" -> "{self.replacement_token}"): '
            f"{self.total_occurrences}\n"
            f"Lines containing original text (1-based): "
            f"{format_line_numbers(self.matched_lines)}\n"
        )

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable mapping of this record."""
        return {
            "timestamp": self.timestamp,
            "source": self.source,
            "match_token": self.match_token,
            "replacement_token": self.replacement_token,
            "total_occurrences": self.total_occurrences,
            "matched_lines": list(self.matched_lines),
        }


def write_audit_record(record: AuditRecord, log_path: Path) -> None:
    """Write ``record`` to ``log_path``, replacing any previous log.

    Raises:
        LogFailureError: If the log cannot be written.
    """
    try:
        log_path.write_text(record.render(), encoding=TEXT_ENCODING)
    except OSError as e:
        raise LogFailureError(f"Cannot write audit log {log_path}: {e}", path=log_path) from e
    logger.info("Wrote audit record to %s", log_path)
