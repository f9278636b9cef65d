# topmark:header:start
#
#   project      : TokSwap
#   file         : pipelines.py
#   file_relpath : src/tokswap/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Named pipeline variants for TokSwap (immutable step sequences).

```mermaid
flowchart LR
  V[validator] --> S[streamer] --> F[finalizer] --> C[committer] --> R[recorder]
```

Notes:
* Pipelines are immutable (Final[tuple[BaseStep, ...]]) and steps are
  instantiated objects (not functions).
* Each step enters exactly one `RunState`; the order of the tuple is the order
  of the state machine.
"""

from __future__ import annotations

from typing import Final

from .steps import committer, finalizer, recorder, streamer, validator
from .steps.base import BaseStep

TRANSFORM_PIPELINE: Final[tuple[BaseStep, ...]] = (
    validator.ValidatorStep(),  # Open the source, check the staging slot
    streamer.StreamerStep(),  # Transform lines into the staged sink
    finalizer.FinalizerStep(),  # Flush + fsync the staging file
    committer.CommitterStep(),  # Build the audit record, atomic rename
    recorder.RecorderStep(),  # Write the audit record
)
