# topmark:header:start
#
#   project      : TokSwap
#   file         : base.py
#   file_relpath : src/tokswap/pipeline/steps/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class for class-based pipeline steps.

The runner invokes steps as *callables*. `BaseStep` implements the common
lifecycle:

    ctx = step(ctx)  # internally: may_proceed → enter state → run (→ on_failure)

Each step owns exactly one `RunState`: entering the step moves the run into
that state. A `TransformError` raised by ``run()`` is terminal: the step gets a
chance to clean up in ``on_failure()`` and the run moves to ``failed``. Other
exceptions (including ``KeyboardInterrupt``) propagate to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.core.errors import TransformError

if TYPE_CHECKING:
    from tokswap.config.logging import TokswapLogger
    from tokswap.pipeline.context import RunContext
    from tokswap.pipeline.status import RunState

logger: TokswapLogger = get_logger(__name__)


@dataclass
class BaseStep:
    """Reusable foundation for pipeline steps.

    Subclass this to implement a concrete step by overriding ``run()`` and,
    where a failure needs cleanup, ``on_failure()``. Do not override
    ``__call__`` unless you need custom lifecycle behavior.

    Attributes:
        name (str): Stable step identifier for logs/tracing.
        state (RunState): The run state this step represents.
    """

    name: str
    state: RunState

    def __call__(self, ctx: RunContext) -> RunContext:
        """Invoke the step lifecycle: gate → enter state → run.

        Args:
            ctx (RunContext): The mutable run context.

        Returns:
            RunContext: The same context instance after mutation.
        """
        ctx.steps.append(self)
        if not self.may_proceed(ctx):
            logger.info(
                "BaseStep: step %s may not proceed (state=%s)", self.name, ctx.state.value
            )
            return ctx

        ctx.enter(self.state)
        logger.info("BaseStep: step %s - running", self.name)
        try:
            self.run(ctx)
        except TransformError as e:
            self.on_failure(ctx, e)
            ctx.fail(e)
        return ctx

    def may_proceed(self, ctx: RunContext) -> bool:
        """Return whether the step should run given the current context.

        Default: run unless the run already reached a terminal state.
        """
        return not ctx.is_terminal

    def run(self, ctx: RunContext) -> None:
        """Perform the step's primary work, mutating ``ctx`` in place.

        Raises:
            TransformError: On a terminal failure.
        """
        pass

    def on_failure(self, ctx: RunContext, error: TransformError) -> None:
        """Clean up after ``run()`` raised ``error`` (optional)."""
        pass
