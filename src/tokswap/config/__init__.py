# topmark:header:start
#
#   project      : TokSwap
#   file         : __init__.py
#   file_relpath : src/tokswap/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokSwap configuration: immutable `Config`, mutable `MutableConfig` builder, logging."""

from __future__ import annotations

from tokswap.config import logging
from tokswap.config.model import ArgsLike, Config, MutableConfig
from tokswap.core.errors import ConfigError

__all__: list[str] = [
    "ArgsLike",
    "Config",
    "ConfigError",
    "MutableConfig",
    "logging",
]
