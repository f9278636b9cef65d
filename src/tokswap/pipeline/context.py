# topmark:header:start
#
#   project      : TokSwap
#   file         : context.py
#   file_relpath : src/tokswap/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run context for the TokSwap transform pipeline.

A [`RunContext`][tokswap.pipeline.context.RunContext] carries the complete,
mutable state of one run as it flows through the steps: the frozen
configuration, the current `RunState` and the ordered history of visited
states, the running tally, the audit record, and the terminal error (if any).

It doubles as the run result returned by `tokswap.api.transform`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.pipeline.audit import RunTally
from tokswap.pipeline.status import RunState, can_transition

if TYPE_CHECKING:
    from tokswap.config import Config
    from tokswap.config.logging import TokswapLogger
    from tokswap.core.errors import LogFailureError, TransformError
    from tokswap.pipeline.audit import AuditRecord
    from tokswap.pipeline.sink import StagedSink
    from tokswap.pipeline.source import LineSource
    from tokswap.pipeline.steps.base import BaseStep

logger: TokswapLogger = get_logger(__name__)

__all__: list[str] = [
    "Clock",
    "RunContext",
    "local_now",
]

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Return the current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


@dataclass
class RunContext:
    """Mutable state of a single transform run.

    Attributes:
        config (Config): Effective configuration for the run.
        state (RunState): Current state of the run.
        history (list[RunState]): States visited, in order, starting with ``idle``.
        steps (list[BaseStep]): Steps that were invoked, in order.
        tally (RunTally): Running occurrence counters.
        error (TransformError | None): Terminal error of a failed run.
        log_error (LogFailureError | None): Audit log failure of an otherwise
            successful run.
        record (AuditRecord | None): Audit record, built when the commit starts.
        source (LineSource | None): Open line source (between validating and streaming).
        sink (StagedSink | None): Staged sink (between streaming and committing).
        clock (Clock): Time source for the audit timestamp.
    """

    config: Config
    state: RunState = RunState.IDLE
    history: list[RunState] = field(default_factory=lambda: [RunState.IDLE])
    steps: list[BaseStep] = field(default_factory=lambda: [])
    tally: RunTally = field(default_factory=RunTally)
    error: TransformError | None = None
    log_error: LogFailureError | None = None
    record: AuditRecord | None = None
    source: LineSource | None = None
    sink: StagedSink | None = None
    clock: Clock = local_now

    @classmethod
    def bootstrap(cls, config: Config, *, clock: Clock | None = None) -> RunContext:
        """Return a fresh context in state ``idle`` for ``config``."""
        return cls(config=config, clock=clock or local_now)

    def enter(self, target: RunState) -> None:
        """Move the run to ``target``.

        Raises:
            RuntimeError: If the state machine does not allow the transition.
        """
        if not can_transition(self.state, target):
            raise RuntimeError(
                f"Illegal run state transition: {self.state.value} -> {target.value}"
            )
        logger.debug("Run state %s -> %s", self.state.value, target.value)
        self.state = target
        self.history.append(target)

    def fail(self, error: TransformError) -> None:
        """Record ``error`` as the terminal error and move to ``failed``."""
        self.error = error
        logger.error("%s failed (%s): %s", self.state.value, error.kind.key, error.message)
        self.enter(RunState.FAILED)

    @property
    def is_terminal(self) -> bool:
        """Return True once the run reached ``done`` or ``failed``."""
        return self.state.is_terminal

    @property
    def is_failed(self) -> bool:
        """Return True if the run ended in ``failed``."""
        return self.state == RunState.FAILED

    @property
    def succeeded(self) -> bool:
        """Return True if the run ended in ``done`` (a log failure still counts)."""
        return self.state == RunState.DONE

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable summary of the run."""
        return {
            "source": str(self.config.source_path),
            "state": self.state.value,
            "history": [s.value for s in self.history],
            "lines": self.tally.lines,
            "total_occurrences": self.tally.total_occurrences,
            "matched_lines": list(self.tally.matched_lines),
            "error": (
                {"kind": self.error.kind.key, "message": self.error.message}
                if self.error
                else None
            ),
            "log_error": self.log_error.message if self.log_error else None,
            "record": self.record.to_dict() if self.record else None,
        }
