# topmark:header:start
#
#   project      : TokSwap
#   file         : test_transform_runner.py
#   file_relpath : tests/pipeline/test_transform_runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests of the transform pipeline (`run_transform`)."""

from __future__ import annotations

import os
import stat
from typing import TYPE_CHECKING

import pytest

from tests.conftest import FIXED_NOW_ISO, fixed_clock, make_config, parametrize, write_source
from tokswap.core.errors import ErrorKind, WriteFailureError
from tokswap.pipeline.engine import count_non_overlapping
from tokswap.pipeline.runner import run_transform
from tokswap.pipeline.sink import StagedSink
from tokswap.pipeline.status import RunState

if TYPE_CHECKING:
    from pathlib import Path

    from tokswap.pipeline.context import RunContext

EXAMPLE: str = "a devmode b\nnothing here\ndevmodedevmode\n"

_HAPPY_PATH: list[RunState] = [
    RunState.IDLE,
    RunState.VALIDATING,
    RunState.STREAMING,
    RunState.FINALIZING,
    RunState.COMMITTING,
    RunState.LOGGING,
    RunState.DONE,
]


def _staging_files(directory: Path) -> list[Path]:
    return sorted(directory.glob(".*.tokswap-staging"))


def test_example_document(tmp_path: Path) -> None:
    source: Path = write_source(tmp_path, EXAMPLE)
    run: RunContext = run_transform(make_config(source), clock=fixed_clock)

    assert run.succeeded
    assert run.error is None
    assert run.history == _HAPPY_PATH
    assert source.read_text(encoding="utf-8") == (
        "a HelloWorld b\nnothing here\nHelloWorldHelloWorld\n"
    )
    assert run.tally.total_occurrences == 3
    assert run.tally.matched_lines == [1, 3]
    assert _staging_files(tmp_path) == []

    log: Path = tmp_path / "result.txt"
    assert log.read_text(encoding="utf-8") == (
        f"Timestamp: {FIXED_NOW_ISO}\n"
        f"Source file: {source}\n"
        'Occurrences replaced ("devmode" -> "HelloWorld"): 3\n'
        "Lines containing original text (1-based): 1, 3\n"
    )


def test_total_equals_independent_recount(tmp_path: Path) -> None:
    lines: list[str] = ["devmode" * n + " tail" for n in range(6)]
    source: Path = write_source(tmp_path, "\n".join(lines) + "\n")
    run = run_transform(make_config(source), clock=fixed_clock)

    expected: int = sum(count_non_overlapping(line, "devmode") for line in lines)
    assert run.tally.total_occurrences == expected
    assert run.tally.matched_lines == [n for n in range(1, 7) if n > 1]
    assert run.tally.matched_lines == sorted(set(run.tally.matched_lines))


def test_second_run_is_idempotent(tmp_path: Path) -> None:
    source: Path = write_source(tmp_path, EXAMPLE)
    run_transform(make_config(source), clock=fixed_clock)
    after_first: bytes = source.read_bytes()

    second = run_transform(make_config(source), clock=fixed_clock)
    assert second.succeeded
    assert second.tally.total_occurrences == 0
    assert second.tally.matched_lines == []
    assert source.read_bytes() == after_first
    assert (tmp_path / "result.txt").read_text(encoding="utf-8").endswith("(none)\n")


def test_case_sensitive_token(tmp_path: Path) -> None:
    source: Path = write_source(tmp_path, "DevMode DEVMODE\n")
    run = run_transform(make_config(source), clock=fixed_clock)
    assert run.succeeded
    assert run.tally.total_occurrences == 0
    assert source.read_text(encoding="utf-8") == "DevMode DEVMODE\n"


def test_empty_token_leaves_document_unchanged(tmp_path: Path) -> None:
    content: bytes = b"keep\r\nthis\r\nas is"
    source: Path = write_source(tmp_path, content)
    run = run_transform(make_config(source, token=""), clock=fixed_clock)
    assert run.succeeded
    assert run.tally.total_occurrences == 0
    assert source.read_bytes() == content


@parametrize(
    "content, expected",
    [
        (b"devmode\r\nx\r\n", b"HelloWorld\r\nx\r\n"),
        (b"devmode", b"HelloWorld"),
        (b"", b""),
        (b"\n\n", b"\n\n"),
        (b"a\r\nb\nc\n", b"a\r\nb\r\nc\r\n"),
        (b"a\nb\r\n", b"a\nb\n"),
    ],
)
def test_terminators_follow_first_seen(tmp_path: Path, content: bytes, expected: bytes) -> None:
    source: Path = write_source(tmp_path, content)
    run = run_transform(make_config(source), clock=fixed_clock)
    assert run.succeeded
    assert source.read_bytes() == expected


def test_backpressure_drains_many_times(tmp_path: Path) -> None:
    lines: list[str] = [f"line {n} devmode" for n in range(500)]
    source: Path = write_source(tmp_path, "\n".join(lines) + "\n")
    run = run_transform(make_config(source, high_water_mark=64), clock=fixed_clock)
    assert run.succeeded
    assert run.tally.total_occurrences == 500
    assert source.read_text(encoding="utf-8").count("HelloWorld") == 500


def test_missing_source_fails_without_staging(tmp_path: Path) -> None:
    run = run_transform(make_config(tmp_path / "sample.txt"), clock=fixed_clock)
    assert run.state == RunState.FAILED
    assert run.history == [RunState.IDLE, RunState.VALIDATING, RunState.FAILED]
    assert run.error is not None
    assert run.error.kind == ErrorKind.NOT_FOUND
    assert _staging_files(tmp_path) == []
    assert not (tmp_path / "result.txt").exists()


def test_unreadable_source_mid_stream_cleans_up(tmp_path: Path) -> None:
    content: bytes = b"devmode\n" * 5_000 + b"\xff\n"
    source: Path = write_source(tmp_path, content)
    run = run_transform(make_config(source), clock=fixed_clock)
    assert run.state == RunState.FAILED
    assert run.error is not None
    assert run.error.kind == ErrorKind.UNREADABLE
    assert run.history[-2] == RunState.STREAMING
    assert source.read_bytes() == content
    assert _staging_files(tmp_path) == []


def test_leftover_staging_file_blocks_run(tmp_path: Path) -> None:
    source: Path = write_source(tmp_path, EXAMPLE)
    leftover: Path = tmp_path / ".sample.txt.tokswap-staging"
    leftover.write_text("from an earlier run\n", encoding="utf-8")

    run = run_transform(make_config(source), clock=fixed_clock)
    assert run.state == RunState.FAILED
    assert run.error is not None
    assert run.error.kind == ErrorKind.WRITE_FAILURE
    assert leftover.read_text(encoding="utf-8") == "from an earlier run\n"
    assert source.read_text(encoding="utf-8") == EXAMPLE


def test_write_failure_discards_staging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source: Path = write_source(tmp_path, EXAMPLE)

    def _broken_drain(self: StagedSink) -> None:
        raise WriteFailureError("disk full", path=self.path)

    monkeypatch.setattr(StagedSink, "drain", _broken_drain)
    run = run_transform(make_config(source, high_water_mark=1), clock=fixed_clock)

    assert run.state == RunState.FAILED
    assert run.error is not None
    assert run.error.kind == ErrorKind.WRITE_FAILURE
    assert run.history[-2] == RunState.STREAMING
    assert _staging_files(tmp_path) == []
    assert source.read_text(encoding="utf-8") == EXAMPLE


def test_commit_failure_keeps_staging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source: Path = write_source(tmp_path, EXAMPLE)

    def _fail(src: object, dst: object) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", _fail)
    run = run_transform(make_config(source), clock=fixed_clock)

    assert run.state == RunState.FAILED
    assert run.error is not None
    assert run.error.kind == ErrorKind.COMMIT_FAILURE
    assert run.history[-2] == RunState.COMMITTING
    assert source.read_text(encoding="utf-8") == EXAMPLE
    staging: list[Path] = _staging_files(tmp_path)
    assert len(staging) == 1
    assert staging[0].read_text(encoding="utf-8") == (
        "a HelloWorld b\nnothing here\nHelloWorldHelloWorld\n"
    )
    assert not (tmp_path / "result.txt").exists()


def test_log_failure_still_done(tmp_path: Path) -> None:
    source: Path = write_source(tmp_path, EXAMPLE)
    run = run_transform(
        make_config(source, log=str(tmp_path / "missing" / "result.txt")),
        clock=fixed_clock,
    )
    assert run.succeeded
    assert run.state == RunState.DONE
    assert run.error is None
    assert run.log_error is not None
    assert run.log_error.kind == ErrorKind.LOG_FAILURE
    assert source.read_text(encoding="utf-8").startswith("a HelloWorld b")


def test_run_result_serializes(tmp_path: Path) -> None:
    run = run_transform(make_config(write_source(tmp_path, EXAMPLE)), clock=fixed_clock)
    data = run.to_dict()
    assert data["state"] == "done"
    assert data["total_occurrences"] == 3
    assert data["matched_lines"] == [1, 3]
    assert data["error"] is None


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_run_keeps_source_mode(tmp_path: Path) -> None:
    source: Path = write_source(tmp_path, "devmode\n")
    source.chmod(0o600)

    run: RunContext = run_transform(make_config(source), clock=fixed_clock)

    assert run.succeeded
    assert stat.S_IMODE(source.stat().st_mode) == 0o600
    assert source.read_text(encoding="utf-8") == "HelloWorld\n"


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinked_source_transforms_target(tmp_path: Path) -> None:
    real: Path = write_source(tmp_path, "devmode\n", name="real.txt")
    link: Path = tmp_path / "sample.txt"
    link.symlink_to(real)

    run: RunContext = run_transform(make_config(link), clock=fixed_clock)

    assert run.succeeded
    assert link.is_symlink()
    assert real.read_text(encoding="utf-8") == "HelloWorld\n"
    assert run.record is not None
    assert run.record.source == str(real)
    assert _staging_files(tmp_path) == []
