# topmark:header:start
#
#   project      : FormatSniff
#   file         : options.py
#   file_relpath : src/formatsniff/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, output format)
and their resolution logic, so commands and groups can stay thin.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import ParamSpec, TypeVar

import click

from formatsniff.cli.cli_types import EnumChoiceParam
from formatsniff.cli.errors import FormatSniffUsageError
from formatsniff.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document (machine-readable).
      NDJSON: One JSON object per line (machine-readable).
      MARKDOWN: A Markdown table.

    Machine formats (``JSON`` and ``NDJSON``) never include ANSI color.
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"
    MARKDOWN = "markdown"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the logging level from the ``-v`` and ``-q`` counts.

    Behavior:
        The --verbose and --quiet options are mutually exclusive.
        Three or more -v flags set TRACE level.
        Two -v flags set DEBUG level.
        One -v flag sets INFO level.
        One or more -q flags set ERROR level.
        Default level is WARNING.

    Raises:
        FormatSniffUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise FormatSniffUsageError(
            "The '--verbose' and '--quiet' options are mutually exclusive."
        )

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO
    if quiet_count >= 1:  # -q
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting -v/--verbose and -q/--quiet options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity (-v info, -vv debug, -vvv trace).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--format`` option shared by listing commands."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
