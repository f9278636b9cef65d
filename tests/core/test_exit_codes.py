# topmark:header:start
#
#   project      : TokSwap
#   file         : test_exit_codes.py
#   file_relpath : tests/core/test_exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit code mapping and error kind parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.conftest import parametrize
from tokswap.core.errors import (
    CommitFailureError,
    ErrorKind,
    LogFailureError,
    NotFoundError,
    TransformError,
    UnreadableError,
    WriteFailureError,
)
from tokswap.core.exit_codes import ExitCode, exit_code_for

if TYPE_CHECKING:
    from pathlib import Path


@parametrize(
    "kind, expected",
    [
        (ErrorKind.NOT_FOUND, ExitCode.FILE_NOT_FOUND),
        (ErrorKind.UNREADABLE, ExitCode.INPUT_UNREADABLE),
        (ErrorKind.WRITE_FAILURE, ExitCode.IO_ERROR),
        (ErrorKind.COMMIT_FAILURE, ExitCode.COMMIT_ERROR),
        (ErrorKind.LOG_FAILURE, ExitCode.SUCCESS),
    ],
)
def test_exit_code_for(kind: ErrorKind, expected: ExitCode) -> None:
    assert exit_code_for(kind) is expected


@parametrize(
    "raw, expected",
    [
        ("not_found", ErrorKind.NOT_FOUND),
        ("NotFound", ErrorKind.NOT_FOUND),
        ("commit-failure", ErrorKind.COMMIT_FAILURE),
        ("WRITE_FAILURE", ErrorKind.WRITE_FAILURE),
        ("nope", None),
        (None, None),
    ],
)
def test_error_kind_parse(raw: str | None, expected: ErrorKind | None) -> None:
    assert ErrorKind.parse(raw) is expected


@parametrize(
    "cls, kind",
    [
        (NotFoundError, ErrorKind.NOT_FOUND),
        (UnreadableError, ErrorKind.UNREADABLE),
        (WriteFailureError, ErrorKind.WRITE_FAILURE),
        (LogFailureError, ErrorKind.LOG_FAILURE),
    ],
)
def test_error_classes_carry_their_kind(cls: type[TransformError], kind: ErrorKind) -> None:
    err: TransformError = cls("boom")
    assert err.kind is kind
    assert err.message == "boom"


def test_commit_failure_keeps_staging_path(tmp_path: Path) -> None:
    staging: Path = tmp_path / ".doc.txt.tokswap-staging"
    err = CommitFailureError("boom", path=tmp_path / "doc.txt", staging_path=staging)
    assert err.kind is ErrorKind.COMMIT_FAILURE
    assert err.staging_path == staging
    assert err.path == tmp_path / "doc.txt"
