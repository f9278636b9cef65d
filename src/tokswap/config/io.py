# topmark:header:start
#
#   project      : TokSwap
#   file         : io.py
#   file_relpath : src/tokswap/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and render TOML configuration sources.

Parsing and rendering are done with `tomlkit`; parsed documents are returned
as plain `dict` structures. Runtime defaults are defined in code
(`load_defaults_dict`) so TokSwap operates without any config file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from tokswap.config.keys import Toml
from tokswap.config.logging import get_logger
from tokswap.constants import (
    DEFAULT_HIGH_WATER_MARK,
    DEFAULT_MATCH_TOKEN,
    DEFAULT_REPLACEMENT_TOKEN,
    DEFAULT_SOURCE_NAME,
)
from tokswap.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from tokswap.config.logging import TokswapLogger

TomlTable = dict[str, Any]

logger: TokswapLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return TokSwap's **runtime defaults** as a Python dict.

    This function performs no I/O. Empty strings for ``staging`` and ``log``
    mean "derive from the source path".

    Returns:
        A new TOML-table-compatible dict; callers may mutate it.
    """
    return {
        Toml.SECTION_FILES: {
            Toml.KEY_SOURCE: DEFAULT_SOURCE_NAME,
            Toml.KEY_STAGING: "",
            Toml.KEY_LOG: "",
        },
        Toml.SECTION_TOKENS: {
            Toml.KEY_MATCH: DEFAULT_MATCH_TOKEN,
            Toml.KEY_REPLACEMENT: DEFAULT_REPLACEMENT_TOKEN,
        },
        Toml.SECTION_WRITER: {
            Toml.KEY_HIGH_WATER_MARK: DEFAULT_HIGH_WATER_MARK,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``tokswap.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except (TomlkitParseError, UnicodeDecodeError) as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def to_toml(toml_dict: TomlTable) -> str:
    """Render a TOML table as a TOML document string."""
    return tomlkit.dumps(toml_dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table at ``key``, or an empty dict when absent.

    Raises:
        ConfigError: If ``key`` is present but is not a table.
    """
    value: Any = table.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"[{key}] must be a table, got {type(value).__name__}")
    return cast("TomlTable", value)


def get_string_value_or_none(table: TomlTable, key: str, *, section: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Returns:
        str | None: The string, or ``None`` when the key is absent.

    Raises:
        ConfigError: If the value is present but is not a string.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"[{section}].{key} must be a string, got {type(value).__name__}")
    return value


def get_int_value_or_none(table: TomlTable, key: str, *, section: str) -> int | None:
    """Extract an optional integer value from a TOML table.

    Booleans are rejected even though ``bool`` subclasses ``int``.

    Raises:
        ConfigError: If the value is present but is not an integer.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"[{section}].{key} must be an integer, got {type(value).__name__}")
    return value
