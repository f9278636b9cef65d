# topmark:header:start
#
#   project      : TokSwap
#   file         : test_run_state.py
#   file_relpath : tests/pipeline/test_run_state.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the run state machine."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import make_config, parametrize, write_source
from tokswap.pipeline.context import RunContext
from tokswap.pipeline.status import RunState, can_transition

if TYPE_CHECKING:
    from pathlib import Path

_ORDER: list[RunState] = [
    RunState.IDLE,
    RunState.VALIDATING,
    RunState.STREAMING,
    RunState.FINALIZING,
    RunState.COMMITTING,
    RunState.LOGGING,
    RunState.DONE,
]


@parametrize("current, target", list(zip(_ORDER, _ORDER[1:])))
def test_forward_edges_are_allowed(current: RunState, target: RunState) -> None:
    assert can_transition(current, target)


@parametrize("state", _ORDER[:-1])
def test_failed_reachable_from_non_terminal(state: RunState) -> None:
    assert can_transition(state, RunState.FAILED)


@parametrize("state", [RunState.DONE, RunState.FAILED])
def test_terminal_states_have_no_exit(state: RunState) -> None:
    assert state.is_terminal
    for target in RunState:
        assert not can_transition(state, target)


def test_no_skipping_or_going_back() -> None:
    assert not can_transition(RunState.IDLE, RunState.STREAMING)
    assert not can_transition(RunState.COMMITTING, RunState.DONE)
    assert not can_transition(RunState.STREAMING, RunState.VALIDATING)


def test_context_records_history(tmp_path: Path) -> None:
    ctx = RunContext.bootstrap(make_config(write_source(tmp_path, "x\n")))
    ctx.enter(RunState.VALIDATING)
    with pytest.raises(RuntimeError):
        ctx.enter(RunState.DONE)
    assert ctx.history == [RunState.IDLE, RunState.VALIDATING]
    assert not ctx.is_terminal


def test_state_values_are_readable() -> None:
    assert RunState.COMMITTING.value == "committing"
    assert RunState.DONE.styled(enable_color=False) == "done"
