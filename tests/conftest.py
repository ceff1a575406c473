# topmark:header:start
#
#   project      : FormatSniff
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the FormatSniff test suite.

Sets up global fixtures and logging for test runs: logging goes through
`formatsniff.config.logging` at TRACE level so that every refinement step
is visible in failure reports, while the environment override is cleared so
a developer's exported ``FORMATSNIFF_LOG_LEVEL`` does not leak into tests.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from formatsniff.config import logging
from formatsniff.sniffers.default import DefaultFormatSniffer

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_property: DecoratorType[Any] = as_typed_mark(pytest.mark.property)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_formatsniff_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to clear the environment variable.
    """
    monkeypatch.delenv("FORMATSNIFF_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def sniffer() -> DefaultFormatSniffer:
    """Default resolver without third-party plugins, for reproducible results."""
    return DefaultFormatSniffer(load_plugins=False)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test in an isolated working directory (no config discovered above it).

    Returns:
        Path: The working directory, marked as a config root.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "formatsniff.toml").write_text("root = true\n", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd
