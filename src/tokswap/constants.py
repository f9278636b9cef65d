# topmark:header:start
#
#   project      : TokSwap
#   file         : constants.py
#   file_relpath : src/tokswap/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TokSwap Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    TOKSWAP_VERSION: str = get_version("tokswap")
except PackageNotFoundError:  # running from a source checkout
    TOKSWAP_VERSION = "0.0.0"

# Conventional file names, relative to the working directory / source document:
DEFAULT_SOURCE_NAME: str = "sample.txt"
DEFAULT_LOG_NAME: str = "result.txt"
STAGING_SUFFIX: str = ".tokswap-staging"

DEFAULT_MATCH_TOKEN: str = "devmode"
DEFAULT_REPLACEMENT_TOKEN: str = "HelloWorld"

# Buffered bytes at which the staged sink reports saturation.
DEFAULT_HIGH_WATER_MARK: int = 16 * 1024

# Config discovery
TOKSWAP_TOML_NAME: str = "tokswap.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "tokswap"

TEXT_ENCODING: str = "utf-8"

VALUE_NOT_SET: str = "<not set>"
NONE_MARKER: str = "(none)"
