# topmark:header:start
#
#   project      : FormatSniff
#   file         : formats.py
#   file_relpath : src/formatsniff/cli/commands/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatSniff `formats` command.

Lists the detectors the resolver runs, in priority order, and the
specification tags a resolved format can carry. Detectors turned off by the
``disable`` setting are listed as disabled.
"""

from __future__ import annotations

import inspect
import json
from typing import TYPE_CHECKING, Any

import click

from formatsniff.cli.options import OutputFormat, output_format_option
from formatsniff.cli.utils import render_markdown_table
from formatsniff.constants import FORMATSNIFF_VERSION
from formatsniff.format.specification import Specification
from formatsniff.sniffers.default import DefaultFormatSniffer

if TYPE_CHECKING:
    from formatsniff.cli.console import ClickConsole
    from formatsniff.config.model import Config
    from formatsniff.sniffers.base import FormatSniffer


def _summary(sniffer: FormatSniffer) -> str:
    """First line of the detector's class docstring."""
    doc: str | None = inspect.getdoc(type(sniffer))
    return doc.splitlines()[0] if doc else ""


@click.command(
    name="formats",
    help="List detectors and specifications.",
)
@output_format_option
def formats_command(*, output_format: OutputFormat | None = None) -> None:
    """List the registered detectors and the known specifications.

    Args:
        output_format (OutputFormat | None): Output format to use
            (``default``, ``json``, ``ndjson`` or ``markdown``).
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    config: Config = ctx.obj["config"]
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    all_sniffers: tuple[FormatSniffer, ...] = DefaultFormatSniffer().sniffers
    sniffers: list[dict[str, Any]] = [
        {
            "name": s.name,
            "enabled": s.name not in config.disable,
            "description": _summary(s),
        }
        for s in all_sniffers
    ]
    specifications: list[str] = [s.value for s in Specification]

    if fmt == OutputFormat.JSON:
        console.print(
            json.dumps({"sniffers": sniffers, "specifications": specifications}, indent=2)
        )
        return
    if fmt == OutputFormat.NDJSON:
        for item in sniffers:
            console.print(json.dumps({"kind": "sniffer", **item}))
        for spec in specifications:
            console.print(json.dumps({"kind": "specification", "name": spec}))
        return
    if fmt == OutputFormat.MARKDOWN:
        console.print(f"\n# FormatSniff {FORMATSNIFF_VERSION} detectors\n")
        rows: list[list[str]] = [
            [f"`{s['name']}`", "yes" if s["enabled"] else "**no**", s["description"]]
            for s in sniffers
        ]
        console.print(render_markdown_table(["Detector", "Enabled", "Description"], rows))
        console.print("# Specifications\n")
        spec_rows: list[list[str]] = [[f"`{s}`"] for s in specifications]
        console.print(render_markdown_table(["Specification"], spec_rows))
        return

    console.print(console.styled("Detectors (in resolution order):", bold=True, underline=True))
    width: int = max(len(s["name"]) for s in sniffers)
    for item in sniffers:
        name: str = f"{item['name']:<{width}}"
        if not item["enabled"]:
            name = console.styled(name, dim=True) + " (disabled)"
        console.print(f"  {name}  {item['description']}")
    console.print()
    console.print(console.styled("Specifications:", bold=True, underline=True))
    console.print(f"  {', '.join(specifications)}")
