# topmark:header:start
#
#   project      : FormatSniff
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running FormatSniff in a controlled working directory.

`run_cli_in` changes the process working directory before invoking the
Click CLI, so configuration discovery starts from the test's directory and
never picks up the developer's own ``pyproject.toml``.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, cast

import click
import pytest
from click.testing import CliRunner, Result

from formatsniff.cli.main import cli as _cli
from formatsniff.config import logging

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

cli = cast(click.Command, _cli)


def run_cli_in(cwd: Path, argv: Sequence[str], *, color: bool = False) -> Result:
    """Invoke the CLI with ``cwd`` as the working directory.

    Args:
        cwd (Path): Directory to run the command from.
        argv (Sequence[str]): Arguments, without the program name.
        color (bool): Keep ANSI styling (``--no-color`` is passed otherwise).

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    args: list[str] = list(argv) if color else ["--no-color", *argv]
    previous: str = os.getcwd()
    try:
        os.chdir(cwd)
        return CliRunner().invoke(cli, args)
    finally:
        os.chdir(previous)


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Reset logging after each CLI test.

    The CLI binds its log handler to the runner's temporary stderr, which is
    closed when the invocation returns.
    """
    yield
    logging.setup_logging(level=logging.TRACE_LEVEL)
