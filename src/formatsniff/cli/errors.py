# topmark:header:start
#
#   project      : FormatSniff
#   file         : errors.py
#   file_relpath : src/formatsniff/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the FormatSniff CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with
    standardized messages and exit codes.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's default
    styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from formatsniff.cli.exit_codes import ExitCode
from formatsniff.resource.errors import (
    PermissionDeniedError,
    ReadError,
    ResourceNotFoundError,
)


class FormatSniffError(click.ClickException):
    """Base class for all FormatSniff CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized later by `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console: Any = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class FormatSniffUsageError(FormatSniffError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class FormatSniffConfigError(FormatSniffError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


def exit_code_for(error: ReadError) -> ExitCode:
    """Map a library `ReadError` to the exit code reported for it."""
    if isinstance(error, ResourceNotFoundError):
        return ExitCode.FILE_NOT_FOUND
    if isinstance(error, PermissionDeniedError):
        return ExitCode.PERMISSION_DENIED
    return ExitCode.IO_ERROR
