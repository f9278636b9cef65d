# topmark:header:start
#
#   project      : TokSwap
#   file         : errors.py
#   file_relpath : src/tokswap/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the TokSwap CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Library failures (`TransformError`) are mapped
    with [`error_for`][tokswap.cli.errors.error_for].

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from tokswap.core.errors import TransformError
from tokswap.core.exit_codes import ExitCode, exit_code_for


class TokswapError(click.ClickException):
    """Base class for all TokSwap CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(self.format_message())
                return
        super().show(file)


class TokswapUsageError(TokswapError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class TokswapConfigError(TokswapError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class TokswapFileNotFoundError(TokswapError):
    """Error when the source document does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class TokswapUnreadableError(TokswapError):
    """Error when the source document cannot be opened, read or decoded."""

    exit_code = ExitCode.INPUT_UNREADABLE


class TokswapIOError(TokswapError):
    """Error for failures writing the staging file."""

    exit_code = ExitCode.IO_ERROR


class TokswapCommitError(TokswapError):
    """Error when the atomic rename fails (the staging file is kept)."""

    exit_code = ExitCode.COMMIT_ERROR


class TokswapUnexpectedError(TokswapError):
    """Error for unhandled/unknown errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR


_ERROR_CLASSES: dict[ExitCode, type[TokswapError]] = {
    cls.exit_code: cls
    for cls in (
        TokswapFileNotFoundError,
        TokswapUnreadableError,
        TokswapIOError,
        TokswapCommitError,
    )
}


def error_for(error: TransformError) -> TokswapError:
    """Return the CLI exception reporting ``error``.

    The exception class is picked by `exit_code_for`, and the message is
    prefixed with the kind's label, e.g. ``atomic commit failed: ...``.
    ``LOG_FAILURE`` is not a run failure and maps to `TokswapUnexpectedError`
    if it ever gets here.
    """
    code: ExitCode = exit_code_for(error.kind)
    cls: type[TokswapError] = _ERROR_CLASSES.get(code, TokswapUnexpectedError)
    return cls(f"{error.kind.label}: {error.message}")
