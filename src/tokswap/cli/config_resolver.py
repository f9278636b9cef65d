# topmark:header:start
#
#   project      : TokSwap
#   file         : config_resolver.py
#   file_relpath : src/tokswap/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the TokSwap configuration from Click parameters.

Resolution order (lowest → highest precedence):
  1. Built-in defaults.
  2. Config files discovered in the working directory, unless ``--no-config``:
     ``pyproject.toml`` (``[tool.tokswap]``) first, then ``tokswap.toml``.
  3. Explicit config files passed via ``--config``, merged in order.
  4. CLI overrides (arguments and options), applied last.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from tokswap.cli.errors import TokswapConfigError
from tokswap.config import Config, ConfigError, MutableConfig
from tokswap.config.keys import ArgKey
from tokswap.config.logging import TokswapLogger, get_logger

logger: TokswapLogger = get_logger(__name__)


def build_args(
    *,
    source: str | None,
    token: str | None,
    replacement: str | None,
    staging: str | None,
    log: str | None,
    high_water_mark: int | None,
) -> dict[str, Any]:
    """Return the CLI overrides keyed by `ArgKey` (unset options are left out)."""
    args: dict[str, Any] = {
        ArgKey.SOURCE: source,
        ArgKey.MATCH_TOKEN: token,
        ArgKey.REPLACEMENT_TOKEN: replacement,
        ArgKey.STAGING: staging,
        ArgKey.LOG: log,
        ArgKey.HIGH_WATER_MARK: high_water_mark,
    }
    return {k: v for k, v in args.items() if v is not None}


def resolve_config_from_click(
    *,
    no_config: bool,
    config_paths: tuple[str, ...] | list[str],
    **overrides: Any,
) -> Config:
    """Build the frozen `Config` for a command.

    Args:
        no_config (bool): Skip config discovery in the working directory.
        config_paths (tuple[str, ...] | list[str]): Explicit ``--config`` files.
        **overrides (Any): Keyword arguments accepted by `build_args`.

    Returns:
        Config: The validated configuration.

    Raises:
        TokswapConfigError: If a config file is malformed or the result is invalid.
    """
    args: dict[str, Any] = build_args(**overrides)
    logger.trace("CLI overrides: %s", args)
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            extra_config_files=[Path(p) for p in config_paths],
            discover=not no_config,
        )
        draft.apply_args(args)
        return draft.freeze()
    except ConfigError as e:
        raise TokswapConfigError(f"Configuration error: {e}") from e
