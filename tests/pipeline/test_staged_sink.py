# topmark:header:start
#
#   project      : TokSwap
#   file         : test_staged_sink.py
#   file_relpath : tests/pipeline/test_staged_sink.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the backpressure-aware staged sink."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tokswap.core.errors import WriteFailureError
from tokswap.pipeline.sink import SinkSaturatedError, StagedSink

if TYPE_CHECKING:
    from pathlib import Path


def _staging(tmp_path: Path) -> Path:
    return tmp_path / ".sample.txt.tokswap-staging"


def test_write_below_high_water_mark_returns_true(tmp_path: Path) -> None:
    sink = StagedSink(_staging(tmp_path), high_water_mark=100)
    assert sink.write("hello") is True
    assert sink.saturated is False
    assert sink.buffered_bytes == 5
    sink.discard()


def test_write_reports_saturation_and_requires_drain(tmp_path: Path) -> None:
    sink = StagedSink(_staging(tmp_path), high_water_mark=8)
    assert sink.write("1234") is True
    # "\n" + "5678" brings the buffer to 9 bytes
    assert sink.write("5678") is False
    assert sink.saturated is True

    with pytest.raises(SinkSaturatedError):
        sink.write("more")

    sink.drain()
    assert sink.saturated is False
    assert sink.buffered_bytes == 0
    assert sink.drains == 1
    assert sink.write("more") is True
    sink.finalize(trailing_newline=False)
    assert _staging(tmp_path).read_bytes() == b"1234\n5678\nmore"


def test_high_water_mark_counts_utf8_bytes(tmp_path: Path) -> None:
    sink = StagedSink(_staging(tmp_path), high_water_mark=4)
    # Two characters, four bytes
    assert sink.write("éé") is False
    assert sink.buffered_bytes == 4
    sink.discard()


def test_finalize_honors_trailing_newline_and_terminator(tmp_path: Path) -> None:
    sink = StagedSink(_staging(tmp_path), newline="\r\n")
    sink.write("a")
    sink.write("b")
    sink.finalize(trailing_newline=True)
    assert sink.finalized is True
    assert _staging(tmp_path).read_bytes() == b"a\r\nb\r\n"


def test_finalize_without_lines_writes_empty_file(tmp_path: Path) -> None:
    sink = StagedSink(_staging(tmp_path))
    sink.finalize(trailing_newline=True)
    assert _staging(tmp_path).read_bytes() == b""


def test_write_after_finalize_fails(tmp_path: Path) -> None:
    sink = StagedSink(_staging(tmp_path))
    sink.finalize(trailing_newline=False)
    with pytest.raises(WriteFailureError):
        sink.write("late")
    with pytest.raises(WriteFailureError):
        sink.finalize(trailing_newline=False)


def test_existing_staging_file_is_never_clobbered(tmp_path: Path) -> None:
    staging: Path = _staging(tmp_path)
    staging.write_text("recovered content", encoding="utf-8")
    with pytest.raises(WriteFailureError):
        StagedSink(staging)
    assert staging.read_text(encoding="utf-8") == "recovered content"


def test_missing_directory_is_a_write_failure(tmp_path: Path) -> None:
    with pytest.raises(WriteFailureError):
        StagedSink(tmp_path / "nope" / "staging")


def test_discard_removes_staging_file(tmp_path: Path) -> None:
    sink = StagedSink(_staging(tmp_path), high_water_mark=1)
    sink.write("partial")
    sink.drain()
    assert _staging(tmp_path).exists()
    sink.discard()
    assert not _staging(tmp_path).exists()
    # Idempotent
    sink.discard()


def test_invalid_high_water_mark(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        StagedSink(_staging(tmp_path), high_water_mark=0)
    assert not _staging(tmp_path).exists()
