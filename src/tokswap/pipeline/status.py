# topmark:header:start
#
#   project      : TokSwap
#   file         : status.py
#   file_relpath : src/tokswap/pipeline/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run states of the TokSwap orchestrator.

A run moves strictly forward through
``idle → validating → streaming → finalizing → committing → logging → done``.
``failed`` is terminal and reachable from every non-terminal state.

Values are human-readable strings used in CLI output; prefer equality (`==`)
over identity checks.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from yachalk import chalk

from tokswap.rendering.colored_enum import ColoredStrEnum

if TYPE_CHECKING:
    from collections.abc import Mapping


class RunState(ColoredStrEnum):
    """States of a single transform run."""

    IDLE = ("idle", chalk.gray)
    VALIDATING = ("validating", chalk.blue)
    STREAMING = ("streaming", chalk.blue)
    FINALIZING = ("finalizing", chalk.blue)
    COMMITTING = ("committing", chalk.yellow)
    LOGGING = ("logging", chalk.blue)
    DONE = ("done", chalk.green)
    FAILED = ("failed", chalk.red_bright)

    @property
    def is_terminal(self) -> bool:
        """Return True for ``done`` and ``failed``."""
        return self in (RunState.DONE, RunState.FAILED)


# Forward edges of the state machine; FAILED is added for every non-terminal state.
_FORWARD: Mapping[RunState, RunState] = MappingProxyType(
    {
        RunState.IDLE: RunState.VALIDATING,
        RunState.VALIDATING: RunState.STREAMING,
        RunState.STREAMING: RunState.FINALIZING,
        RunState.FINALIZING: RunState.COMMITTING,
        RunState.COMMITTING: RunState.LOGGING,
        RunState.LOGGING: RunState.DONE,
    }
)


def can_transition(current: RunState, target: RunState) -> bool:
    """Return whether the state machine allows ``current → target``."""
    if current.is_terminal:
        return False
    if target == RunState.FAILED:
        return True
    return _FORWARD.get(current) == target
