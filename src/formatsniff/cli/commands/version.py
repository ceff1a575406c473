# topmark:header:start
#
#   project      : FormatSniff
#   file         : version.py
#   file_relpath : src/formatsniff/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatSniff `version` command.

Prints the FormatSniff version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from formatsniff.cli.options import OutputFormat, output_format_option
from formatsniff.constants import FORMATSNIFF_VERSION

if TYPE_CHECKING:
    from formatsniff.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of FormatSniff.",
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of FormatSniff.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt in (OutputFormat.JSON, OutputFormat.NDJSON):
        console.print(json.dumps({"version": FORMATSNIFF_VERSION}))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# FormatSniff Version\n")
        console.print(f"**FormatSniff version: {FORMATSNIFF_VERSION}**")
    elif vlevel > 0:
        console.print(console.styled("FormatSniff version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(FORMATSNIFF_VERSION, bold=True)}")
    else:
        console.print(console.styled(FORMATSNIFF_VERSION, bold=True))
