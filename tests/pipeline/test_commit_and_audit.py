# topmark:header:start
#
#   project      : TokSwap
#   file         : test_commit_and_audit.py
#   file_relpath : tests/pipeline/test_commit_and_audit.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the atomic commit and the audit record."""

from __future__ import annotations

import os
import stat
from typing import TYPE_CHECKING

import pytest

from tests.conftest import FIXED_NOW, FIXED_NOW_ISO, parametrize
from tokswap.core.errors import CommitFailureError, LogFailureError
from tokswap.pipeline.audit import (
    AuditRecord,
    RunTally,
    format_line_numbers,
    write_audit_record,
)
from tokswap.pipeline.commit import commit
from tokswap.pipeline.engine import transform_line

if TYPE_CHECKING:
    from pathlib import Path


def test_commit_replaces_source(tmp_path: Path) -> None:
    source: Path = tmp_path / "sample.txt"
    staging: Path = tmp_path / ".sample.txt.tokswap-staging"
    source.write_text("old\n", encoding="utf-8")
    staging.write_text("new\n", encoding="utf-8")

    commit(staging, source)

    assert source.read_text(encoding="utf-8") == "new\n"
    assert not staging.exists()


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
@parametrize("mode", [0o600, 0o640, 0o755])
def test_commit_keeps_source_mode(tmp_path: Path, mode: int) -> None:
    source: Path = tmp_path / "sample.txt"
    staging: Path = tmp_path / ".sample.txt.tokswap-staging"
    source.write_text("old\n", encoding="utf-8")
    staging.write_text("new\n", encoding="utf-8")
    source.chmod(mode)
    staging.chmod(0o644)

    commit(staging, source)

    assert stat.S_IMODE(source.stat().st_mode) == mode
    assert source.read_text(encoding="utf-8") == "new\n"


def test_commit_failure_keeps_both_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source: Path = tmp_path / "sample.txt"
    staging: Path = tmp_path / ".sample.txt.tokswap-staging"
    source.write_text("old\n", encoding="utf-8")
    staging.write_text("new\n", encoding="utf-8")

    def _fail(src: object, dst: object) -> None:
        raise OSError(18, "Invalid cross-device link")

    monkeypatch.setattr(os, "replace", _fail)
    with pytest.raises(CommitFailureError) as excinfo:
        commit(staging, source)

    assert excinfo.value.staging_path == staging
    assert str(staging) in excinfo.value.message
    assert source.read_text(encoding="utf-8") == "old\n"
    assert staging.read_text(encoding="utf-8") == "new\n"


def test_tally_accumulates_per_line_counts() -> None:
    tally = RunTally()
    for n, text in enumerate(["a devmode b", "nothing here", "devmodedevmode"], start=1):
        tally.add(transform_line(n, text, "devmode", "HelloWorld"))
    assert tally.lines == 3
    assert tally.total_occurrences == 3
    assert tally.matched_lines == [1, 3]


def test_tally_rejects_out_of_order_lines() -> None:
    tally = RunTally()
    with pytest.raises(ValueError):
        tally.add(transform_line(2, "x", "x", "y"))


def test_format_line_numbers() -> None:
    assert format_line_numbers([1, 3]) == "1, 3"
    assert format_line_numbers([]) == "(none)"


def test_record_renders_fixed_layout(tmp_path: Path) -> None:
    tally = RunTally(lines=3, total_occurrences=3, matched_lines=[1, 3])
    record = AuditRecord.from_tally(
        tally,
        source=tmp_path / "sample.txt",
        match_token="devmode",
        replacement_token="HelloWorld",
        at=FIXED_NOW,
    )
    assert record.render() == (
        f"Timestamp: {FIXED_NOW_ISO}\n"
        f"Source file: {tmp_path / 'sample.txt'}\n"
        'Occurrences replaced ("devmode" -> "HelloWorld"): 3\n'
        "Lines containing original text (1-based): 1, 3\n"
    )


def test_record_without_matches_renders_none() -> None:
    record = AuditRecord(
        timestamp=FIXED_NOW_ISO,
        source="/work/sample.txt",
        match_token="devmode",
        replacement_token="HelloWorld",
        total_occurrences=0,
    )
    assert record.render().endswith("Lines containing original text (1-based): (none)\n")


def test_write_audit_record_overwrites(tmp_path: Path) -> None:
    log: Path = tmp_path / "result.txt"
    log.write_text("stale\n", encoding="utf-8")
    record = AuditRecord(FIXED_NOW_ISO, "/work/sample.txt", "a", "b", 0)
    write_audit_record(record, log)
    assert log.read_text(encoding="utf-8") == record.render()


def test_write_audit_record_failure(tmp_path: Path) -> None:
    record = AuditRecord(FIXED_NOW_ISO, "/work/sample.txt", "a", "b", 0)
    with pytest.raises(LogFailureError):
        write_audit_record(record, tmp_path / "missing-dir" / "result.txt")
