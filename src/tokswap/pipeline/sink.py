# topmark:header:start
#
#   project      : TokSwap
#   file         : sink.py
#   file_relpath : src/tokswap/pipeline/sink.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Staged sink: buffered, backpressure-aware writer for the staging file.

Transformed lines never touch the source document. They are buffered here and
written to a staging file in the source's directory, which the commit step later
renames over the source.

Backpressure contract
---------------------
``write()`` returns ``False`` once the buffered text reaches the high-water mark
(counted in UTF-8 bytes). The caller must then call ``drain()``, a blocking wait
that hands the buffer to the file and flushes it, before the next ``write()``.
Writing to a saturated sink raises `SinkSaturatedError`.

Line terminators
----------------
The terminator goes *between* lines and is always the one the sink was created
with. ``finalize(trailing_newline=...)`` decides whether the last line gets one,
so a document with uniform terminators is reproduced byte-for-byte when nothing
in it matched. Mixed terminators are normalized to the sink's terminator.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.constants import DEFAULT_HIGH_WATER_MARK, TEXT_ENCODING
from tokswap.core.errors import WriteFailureError
from tokswap.utils.file import safe_unlink

if TYPE_CHECKING:
    from pathlib import Path
    from typing import IO

    from tokswap.config.logging import TokswapLogger

logger: TokswapLogger = get_logger(__name__)


class SinkSaturatedError(RuntimeError):
    """Raised when ``write()`` is called on a saturated sink without draining first."""


class StagedSink:
    """Write target for transformed lines, backed by an exclusive staging file.

    Args:
        path (Path): Staging file to create. It must not exist yet.
        newline (str): Terminator written between lines.
        high_water_mark (int): Buffered bytes at which ``write()`` reports saturation.

    Attributes:
        path (Path): The staging file.
        lines_written (int): Lines accepted so far.
        bytes_written (int): UTF-8 bytes handed to the file so far.
        drains (int): Number of ``drain()`` calls that flushed buffered data.

    Raises:
        WriteFailureError: If the staging file exists or cannot be created.
    """

    def __init__(
        self,
        path: Path,
        *,
        newline: str = "\n",
        high_water_mark: int = DEFAULT_HIGH_WATER_MARK,
    ) -> None:
        if high_water_mark <= 0:
            raise ValueError(f"high_water_mark must be positive, got {high_water_mark}")
        self.path: Path = path
        self.newline: str = newline
        self.high_water_mark: int = high_water_mark
        self.lines_written: int = 0
        self.bytes_written: int = 0
        self.drains: int = 0
        self.finalized: bool = False

        self._buffer: list[str] = []
        self._buffered_bytes: int = 0
        self._saturated: bool = False

        try:
            # "x": never clobber an existing file (e.g. a staging file left for recovery)
            self._fh: IO[str] | None = path.open("x", encoding=TEXT_ENCODING, newline="")
        except FileExistsError as e:
            raise WriteFailureError(
                f"Staging file already exists: {path} (left over from an earlier run?)",
                path=path,
            ) from e
        except OSError as e:
            raise WriteFailureError(f"Cannot create staging file {path}: {e}", path=path) from e
        logger.debug("Created staging file %s (high_water_mark=%d)", path, high_water_mark)

    @property
    def saturated(self) -> bool:
        """Return True while the caller must ``drain()`` before writing again."""
        return self._saturated

    @property
    def buffered_bytes(self) -> int:
        """Return the number of UTF-8 bytes currently buffered."""
        return self._buffered_bytes

    def _append(self, text: str) -> None:
        self._buffer.append(text)
        self._buffered_bytes += len(text.encode(TEXT_ENCODING))

    def write(self, line: str) -> bool:
        """Accept one transformed line (without terminator).

        Args:
            line (str): The line text.

        Returns:
            bool: True if more lines may be written right away; False if the
            buffer is saturated and the caller must ``drain()`` first.

        Raises:
            SinkSaturatedError: If the sink is saturated.
            WriteFailureError: If the sink is already finalized or discarded.
        """
        if self._fh is None:
            raise WriteFailureError(f"Staging file {self.path} is closed", path=self.path)
        if self._saturated:
            raise SinkSaturatedError(
                f"Staged sink {self.path} is saturated; drain() before writing again"
            )
        if self.lines_written:
            self._append(self.newline)
        self._append(line)
        self.lines_written += 1
        if self._buffered_bytes >= self.high_water_mark:
            self._saturated = True
            logger.trace(
                "Sink saturated at line %d (%d bytes buffered)",
                self.lines_written,
                self._buffered_bytes,
            )
        return not self._saturated

    def drain(self) -> None:
        """Block until the buffered text is handed to the file and flushed.

        Raises:
            WriteFailureError: On any underlying I/O error.
        """
        if self._fh is None:
            raise WriteFailureError(f"Staging file {self.path} is closed", path=self.path)
        if self._buffer:
            try:
                self._fh.write("".join(self._buffer))
                self._fh.flush()
            except (OSError, UnicodeEncodeError) as e:
                raise WriteFailureError(
                    f"Cannot write staging file {self.path}: {e}", path=self.path
                ) from e
            self.bytes_written += self._buffered_bytes
            self.drains += 1
            self._buffer.clear()
            self._buffered_bytes = 0
        self._saturated = False

    def finalize(self, *, trailing_newline: bool) -> None:
        """Flush, fsync and close the staging file.

        When this returns, every accepted line is durably in the staging file.

        Args:
            trailing_newline (bool): Whether to terminate the last line.

        Raises:
            WriteFailureError: On any underlying I/O error, or if already finalized.
        """
        if self._fh is None:
            raise WriteFailureError(f"Staging file {self.path} is closed", path=self.path)
        if trailing_newline and self.lines_written:
            self._append(self.newline)
        self.drain()
        fh: IO[str] = self._fh
        self._fh = None
        try:
            fh.flush()
            os.fsync(fh.fileno())
        except OSError as e:
            raise WriteFailureError(
                f"Cannot flush staging file {self.path}: {e}", path=self.path
            ) from e
        finally:
            fh.close()
        self.finalized = True
        logger.debug(
            "Finalized staging file %s: %d lines, %d bytes, %d drains",
            self.path,
            self.lines_written,
            self.bytes_written,
            self.drains,
        )

    def discard(self) -> None:
        """Close and delete the staging file; errors are logged, never raised."""
        if self._fh is not None:
            fh: IO[str] = self._fh
            self._fh = None
            try:
                fh.close()
            except OSError as e:
                logger.error("Failed to close staging file %s: %s", self.path, e)
        self._buffer.clear()
        self._buffered_bytes = 0
        safe_unlink(self.path)
