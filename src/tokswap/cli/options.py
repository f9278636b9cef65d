# topmark:header:start
#
#   project      : TokSwap
#   file         : options.py
#   file_relpath : src/tokswap/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the Click-based TokSwap CLI.

This module centralizes reusable options (verbosity, color, config, tokens and
paths) and their resolution logic, so commands and groups can stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from tokswap.cli.errors import TokswapUsageError

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from the ``-v`` and ``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` is passed.
        quiet_count (int): Number of times ``-q`` is passed.

    Returns:
        int: ``-1`` when quiet, ``0`` by default, otherwise the ``-v`` count (capped at 2).

    Raises:
        TokswapUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise TokswapUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return min(verbose_count, 2)


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Both options count occurrences and are mutually exclusive.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress the summary; errors and warnings are still shown.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Honors ``--color``/``--no-color`` first, then the ``FORCE_COLOR`` and
    ``NO_COLOR`` environment variables, and defaults to color on a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply common configuration options (``--no-config`` and ``--config``)."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore config files in the working directory (only use defaults).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge, in order.",
    )(f)
    return f


def common_transform_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply the source argument and the token/path options shared by ``run`` and ``scan``."""
    f = click.argument(
        "source",
        required=False,
        type=click.Path(dir_okay=True, file_okay=True),
    )(f)
    f = click.option(
        "--token",
        "-t",
        "token",
        default=None,
        help="Literal token to replace (case-sensitive).",
    )(f)
    f = click.option(
        "--replacement",
        "-r",
        "replacement",
        default=None,
        help="Literal replacement text.",
    )(f)
    f = click.option(
        "--staging",
        "staging",
        default=None,
        type=click.Path(dir_okay=False),
        help="Staging file (must be in the source's directory).",
    )(f)
    f = click.option(
        "--log",
        "log",
        default=None,
        type=click.Path(dir_okay=False),
        help="Audit log file (default: result.txt next to the source).",
    )(f)
    f = click.option(
        "--high-water-mark",
        "high_water_mark",
        default=None,
        type=click.IntRange(min=1),
        help="Buffered bytes at which the writer drains to disk.",
    )(f)
    return f
