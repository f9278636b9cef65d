# topmark:header:start
#
#   project      : TokSwap
#   file         : exit_codes.py
#   file_relpath : src/tokswap/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the TokSwap CLI.

TokSwap aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. The one deliberate divergence is `WOULD_CHANGE=2`,
returned by ``tokswap scan`` when the document contains occurrences that ``tokswap run``
would replace. Tests must assert `result.exception is None` to disambiguate this from
Click's own usage errors (which also default to 2).
"""

from __future__ import annotations

from enum import IntEnum

from tokswap.core.errors import ErrorKind


class ExitCode(IntEnum):
    """Standardized exit codes for the TokSwap CLI.

    Attributes:
        SUCCESS: The run reached ``done`` (an audit-log failure is reported but
            does not change this).
        FAILURE: Generic failure.
        WOULD_CHANGE: ``scan`` found occurrences that ``run`` would replace.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        INPUT_UNREADABLE: Source exists but cannot be read or decoded. Mirrors BSD
            ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Source document does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        COMMIT_ERROR: Atomic rename failed; staging file kept. Mirrors BSD
            ``EX_CANTCREAT (73)``.
        IO_ERROR: Writing the staging file failed. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see module docstring

    USAGE_ERROR = 64  # EX_USAGE
    INPUT_UNREADABLE = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    COMMIT_ERROR = 73  # EX_CANTCREAT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255


def exit_code_for(kind: ErrorKind) -> ExitCode:
    """Return the process exit code for a run failure of the given kind.

    ``LOG_FAILURE`` maps to ``SUCCESS``: the document transformation already
    took effect when the audit record is written.
    """
    return {
        ErrorKind.NOT_FOUND: ExitCode.FILE_NOT_FOUND,
        ErrorKind.UNREADABLE: ExitCode.INPUT_UNREADABLE,
        ErrorKind.WRITE_FAILURE: ExitCode.IO_ERROR,
        ErrorKind.COMMIT_FAILURE: ExitCode.COMMIT_ERROR,
        ErrorKind.LOG_FAILURE: ExitCode.SUCCESS,
    }[kind]
