# topmark:header:start
#
#   project      : TokSwap
#   file         : __init__.py
#   file_relpath : src/tokswap/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokSwap transform pipeline.

The pipeline reads the source document line by line (`source`), replaces the
token on each line (`engine`), stages the output with backpressure (`sink`),
promotes it with a single atomic rename (`commit`) and writes an audit record
(`audit`). The orchestration lives in `runner`, driven by the steps in
`steps` and the state machine in `status`.
"""

from __future__ import annotations

from tokswap.pipeline.context import RunContext
from tokswap.pipeline.runner import run_transform
from tokswap.pipeline.scanner import ScanReport, scan
from tokswap.pipeline.status import RunState

__all__: list[str] = [
    "RunContext",
    "RunState",
    "ScanReport",
    "run_transform",
    "scan",
]
