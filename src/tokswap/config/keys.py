# topmark:header:start
#
#   project      : TokSwap
#   file         : keys.py
#   file_relpath : src/tokswap/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for TokSwap configuration.

These constants are the external configuration schema as it appears in
``tokswap.toml`` and in ``[tool.tokswap]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change. CLI argument keys live in
`ArgKey`.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by TokSwap configuration."""

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_SOURCE: Final[str] = "source"
    KEY_STAGING: Final[str] = "staging"
    KEY_LOG: Final[str] = "log"

    # [tokens]
    SECTION_TOKENS: Final[str] = "tokens"

    KEY_MATCH: Final[str] = "match"
    KEY_REPLACEMENT: Final[str] = "replacement"

    # [writer]
    SECTION_WRITER: Final[str] = "writer"

    KEY_HIGH_WATER_MARK: Final[str] = "high_water_mark"


class ArgKey:
    """Keys of the CLI/API override mapping accepted by `MutableConfig.apply_args`."""

    SOURCE: Final[str] = "source"
    STAGING: Final[str] = "staging"
    LOG: Final[str] = "log"
    MATCH_TOKEN: Final[str] = "token"
    REPLACEMENT_TOKEN: Final[str] = "replacement"
    HIGH_WATER_MARK: Final[str] = "high_water_mark"
