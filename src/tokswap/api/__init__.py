# topmark:header:start
#
#   project      : TokSwap
#   file         : __init__.py
#   file_relpath : src/tokswap/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public TokSwap API (stable surface).

This module exposes a **small, typed API** for integrations that want to run
TokSwap programmatically without going through the CLI.

Configuration contract
----------------------
- `transform` and `scan` accept a frozen [`tokswap.config.Config`][], a plain
  **mapping** mirroring the TOML shape, or ``None`` (defaults, plus config files
  discovered in the working directory, exactly like the CLI).
- Mappings are layered over the defaults and frozen before execution; relative
  paths in a mapping resolve against the working directory.
- `build_config` builds a `Config` from keyword overrides using the CLI option
  names (``source``, ``staging``, ``log``, ``token``, ``replacement``,
  ``high_water_mark``).

```python
from tokswap import api

run = api.transform(api.build_config(source="notes.txt", token="TODO", replacement="DONE"))
if run.succeeded:
    print(run.tally.total_occurrences, run.tally.matched_lines)
```

Errors
------
`transform` never raises for run failures: inspect ``run.error`` (a
`TransformError` whose ``kind`` is an `ErrorKind`) and ``run.log_error``.
`scan` raises `NotFoundError` / `UnreadableError` since there is no run to
report on. Invalid configuration raises `ConfigError` in both.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tokswap.config import Config, MutableConfig
from tokswap.config.logging import get_logger
from tokswap.core.errors import (
    CommitFailureError,
    ConfigError,
    ErrorKind,
    LogFailureError,
    NotFoundError,
    TransformError,
    UnreadableError,
    WriteFailureError,
)
from tokswap.pipeline import scanner
from tokswap.pipeline.context import RunContext
from tokswap.pipeline.runner import run_transform
from tokswap.pipeline.scanner import ScanReport
from tokswap.pipeline.status import RunState

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from tokswap.config.logging import TokswapLogger
    from tokswap.pipeline.context import Clock

logger: TokswapLogger = get_logger(__name__)

__all__: list[str] = [
    "CommitFailureError",
    "Config",
    "ConfigError",
    "ErrorKind",
    "LogFailureError",
    "NotFoundError",
    "RunContext",
    "RunState",
    "ScanReport",
    "TransformError",
    "UnreadableError",
    "WriteFailureError",
    "build_config",
    "scan",
    "transform",
]

ConfigLike = Config | Mapping[str, Any] | None


def build_config(
    *,
    config_files: Iterable[Path] = (),
    discover: bool = False,
    cwd: Path | None = None,
    **overrides: Any,
) -> Config:
    """Build a frozen `Config` from the defaults and keyword overrides.

    Args:
        config_files (Iterable[Path]): Config files to merge (in order) before the overrides.
        discover (bool): Whether to merge config files found in ``cwd``.
        cwd (Path | None): Base directory for relative paths and discovery.
        **overrides (Any): CLI-style overrides (``source``, ``token``, ...).
            ``None`` values are ignored.

    Returns:
        Config: The validated configuration.

    Raises:
        ConfigError: If a file is malformed or the result is inconsistent.
    """
    draft: MutableConfig = MutableConfig.load_merged(
        extra_config_files=config_files,
        discover=discover,
        cwd=cwd,
    )
    draft.apply_args(overrides, cwd=cwd)
    return draft.freeze(cwd=cwd)


def _resolve_config(config: ConfigLike) -> Config:
    if isinstance(config, Config):
        return config
    draft: MutableConfig = MutableConfig.load_merged(discover=config is None)
    if config is not None:
        draft = draft.merge_with(MutableConfig.from_toml_dict(dict(config)))
    return draft.freeze()


def transform(config: ConfigLike = None, *, clock: Clock | None = None) -> RunContext:
    """Replace the match token in the source document, atomically.

    Args:
        config (ConfigLike): Frozen config, TOML-shaped mapping, or None for discovery.
        clock (Clock | None): Time source for the audit timestamp.

    Returns:
        RunContext: The finished run (``state`` is ``done`` or ``failed``).

    Raises:
        ConfigError: If the configuration is invalid.
    """
    cfg: Config = _resolve_config(config)
    return run_transform(cfg, clock=clock)


def scan(config: ConfigLike = None) -> ScanReport:
    """Report what `transform` would replace, without touching any file.

    Raises:
        ConfigError: If the configuration is invalid.
        NotFoundError: If the source does not exist.
        UnreadableError: If the source cannot be read.
    """
    return scanner.scan(_resolve_config(config))
