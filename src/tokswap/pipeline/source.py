# topmark:header:start
#
#   project      : TokSwap
#   file         : source.py
#   file_relpath : src/tokswap/pipeline/source.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Line source: lazy, single-use iteration over a UTF-8 document.

The document is opened when the source is constructed, so a missing or
unreadable file fails before the first line is requested. Lines are yielded in
file order with their terminator (``\n``, ``\r\n`` or a lone ``\r``) stripped.

Implementation details:
  * The file is opened with ``newline=""`` so terminators are seen verbatim and
    ``\r\n`` is recognized as a single terminator.
  * The first line is read eagerly (one line of look-ahead). That fixes the
    newline convention (``newline``) before any output is written, and surfaces
    decode errors in the first chunk at open time.
  * ``ends_with_newline`` is only meaningful once the source is exhausted.
  * Only the first terminator is recorded. A document mixing ``\r\n`` and
    ``\n`` is written back with the first one throughout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.constants import TEXT_ENCODING
from tokswap.core.errors import NotFoundError, UnreadableError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import TracebackType
    from typing import IO

    from tokswap.config.logging import TokswapLogger

logger: TokswapLogger = get_logger(__name__)

_TERMINATORS: tuple[str, ...] = ("\r\n", "\n", "\r")


def split_terminator(raw: str) -> tuple[str, str]:
    r"""Split a raw line into ``(text, terminator)``; the terminator may be ``""``."""
    for term in _TERMINATORS:
        if raw.endswith(term):
            return raw[: -len(term)], term
    return raw, ""


class LineSource:
    """Single-use iterator over the lines of a text document.

    Attributes:
        path (Path): The document being read.
        newline (str): Terminator of the first line (``"\\n"`` when the first line has none).
        ends_with_newline (bool): Whether the last line read had a terminator.
        lines_read (int): Number of lines yielded so far.
    """

    def __init__(self, path: Path) -> None:
        self.path: Path = path
        self.newline: str = "\n"
        self.ends_with_newline: bool = False
        self.lines_read: int = 0
        self._consumed: bool = False
        self._fh: IO[str] | None = None

        if not path.exists():
            raise NotFoundError(f"Source document not found: {path}", path=path)
        if not path.is_file():
            raise UnreadableError(f"Source is not a regular file: {path}", path=path)
        try:
            self._fh = path.open("r", encoding=TEXT_ENCODING, newline="")
        except FileNotFoundError as e:
            # Removed between the existence check and open
            raise NotFoundError(f"Source document not found: {path}", path=path) from e
        except OSError as e:
            raise UnreadableError(f"Cannot open source document {path}: {e}", path=path) from e

        try:
            self._lookahead: str = self._fh.readline()
        except (OSError, UnicodeDecodeError) as e:
            self.close()
            raise UnreadableError(f"Cannot read source document {path}: {e}", path=path) from e

        _, term = split_terminator(self._lookahead)
        if term:
            self.newline = term
        logger.debug("Opened line source %s (newline=%r)", path, self.newline)

    def __iter__(self) -> Iterator[str]:
        """Return the line iterator; the source can be iterated only once.

        Raises:
            RuntimeError: If the source was already iterated.
        """
        if self._consumed:
            raise RuntimeError(f"Line source for {self.path} was already consumed")
        self._consumed = True
        return self._iter_lines()

    def _iter_lines(self) -> Iterator[str]:
        raw: str = self._lookahead
        self._lookahead = ""
        try:
            while raw:
                text, term = split_terminator(raw)
                self.ends_with_newline = bool(term)
                self.lines_read += 1
                yield text
                assert self._fh is not None
                raw = self._fh.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadableError(
                f"Cannot read source document {self.path} after line {self.lines_read}: {e}",
                path=self.path,
            ) from e
        finally:
            self.close()
        logger.debug("Line source %s exhausted after %d lines", self.path, self.lines_read)

    def close(self) -> None:
        """Release the underlying file handle (idempotent)."""
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> LineSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
