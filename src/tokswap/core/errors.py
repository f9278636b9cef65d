# topmark:header:start
#
#   project      : TokSwap
#   file         : errors.py
#   file_relpath : src/tokswap/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error kinds raised by the TokSwap transform pipeline.

Every failure of a run is terminal: nothing in the pipeline retries. The error
kind tells the orchestrator which cleanup applies and tells the CLI which exit
code to report:

- ``NOT_FOUND`` / ``UNREADABLE``: raised before any mutation; no cleanup.
- ``WRITE_FAILURE``: staging file could not be written; it is removed
  (best effort).
- ``COMMIT_FAILURE``: the atomic rename failed; the source is untouched and the
  staging file is kept for manual recovery.
- ``LOG_FAILURE``: the audit record could not be written after a successful
  commit; reported, but the run still succeeds.

These are library exceptions. The CLI maps them onto `click.ClickException`
subclasses in `tokswap.cli.errors`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tokswap.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from pathlib import Path


class ErrorKind(KeyedStrEnum):
    """Kinds of terminal run failures."""

    NOT_FOUND = ("not_found", "source document not found", ("NotFound",))
    UNREADABLE = ("unreadable", "source document unreadable", ("Unreadable",))
    WRITE_FAILURE = ("write_failure", "staging write failed", ("WriteFailure",))
    COMMIT_FAILURE = ("commit_failure", "atomic commit failed", ("CommitFailure",))
    LOG_FAILURE = ("log_failure", "audit log write failed", ("LogFailure",))


class TransformError(Exception):
    """Base class for run failures.

    Attributes:
        kind (ErrorKind): Failure classification.
        path (Path | None): File the failure relates to, if any.
    """

    kind: ErrorKind = ErrorKind.WRITE_FAILURE

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path

    @property
    def message(self) -> str:
        """Return the plain error message."""
        return str(self.args[0]) if self.args else ""


class NotFoundError(TransformError):
    """The source document does not exist."""

    kind = ErrorKind.NOT_FOUND


class UnreadableError(TransformError):
    """The source document exists but cannot be opened, read or decoded."""

    kind = ErrorKind.UNREADABLE


class WriteFailureError(TransformError):
    """The staging file could not be created, written, flushed or closed."""

    kind = ErrorKind.WRITE_FAILURE


class CommitFailureError(TransformError):
    """The staging file could not be renamed over the source document.

    Attributes:
        staging_path (Path | None): The intact staging file, kept for recovery.
    """

    kind = ErrorKind.COMMIT_FAILURE

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        staging_path: Path | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.staging_path = staging_path


class LogFailureError(TransformError):
    """The audit record could not be written."""

    kind = ErrorKind.LOG_FAILURE


class ConfigError(ValueError):
    """Invalid, unreadable or malformed TokSwap configuration."""
