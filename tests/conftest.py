# topmark:header:start
#
#   project      : TokSwap
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the TokSwap test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs, ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `tokswap.config.MutableConfig` (mutable), then
      `freeze()` into a `tokswap.config.Config` for pipeline and API calls.
    - Do **not** mutate a frozen `Config`. If you need to tweak one, call
      `Config.thaw()`, edit the returned `MutableConfig`, then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from tokswap.config import MutableConfig, logging

if TYPE_CHECKING:
    from pathlib import Path

    from tokswap.config import Config

F = TypeVar("F", bound=Callable[..., object])

# A decorator that takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

#: Timestamp returned by `fixed_clock` (and rendered in audit records).
FIXED_NOW: datetime = datetime(2026, 10, 17, 9, 30, 0, tzinfo=timezone(timedelta(hours=2)))
FIXED_NOW_ISO: str = "2026-10-17T09:30:00+02:00"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.hypothesis_slow`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_tokswap_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure TokSwap's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    TOKSWAP_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test in an isolated, empty working directory.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory.

    Returns:
        Path: The working directory (``tmp_path / "proj"``).
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


def fixed_clock() -> datetime:
    """Deterministic clock for audit timestamps."""
    return FIXED_NOW


def write_source(directory: Path, content: str | bytes, *, name: str = "sample.txt") -> Path:
    """Create a source document in ``directory`` and return its path.

    ``str`` content is written as UTF-8 bytes verbatim (no newline translation).
    """
    path: Path = directory / name
    data: bytes = content.encode("utf-8") if isinstance(content, str) else content
    path.write_bytes(data)
    return path


def make_config(source: Path, **overrides: Any) -> Config:
    """Return a frozen `Config` for ``source`` built from defaults and overrides.

    Args:
        source (Path): The source document.
        **overrides (Any): CLI-style overrides (``token``, ``replacement``,
            ``staging``, ``log``, ``high_water_mark``).

    Returns:
        Config: The frozen config (no config file discovery).
    """
    draft: MutableConfig = MutableConfig.from_defaults()
    draft.apply_args({"source": source, **overrides}, cwd=source.parent)
    return draft.freeze(cwd=source.parent)
