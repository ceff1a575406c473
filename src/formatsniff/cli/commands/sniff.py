# topmark:header:start
#
#   project      : FormatSniff
#   file         : sniff.py
#   file_relpath : src/formatsniff/cli/commands/sniff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatSniff `sniff` command.

Resolves the format of each given path and prints its media type, file
extension and specifications. Directories are sniffed as exploded
publications; ZIP-based files are opened to classify their entries.

Exit status:
    * ``SUCCESS`` when every path was resolved;
    * ``UNRESOLVED`` when at least one path was read but not recognized;
    * the code of the first read failure otherwise (not found, permission
      denied, I/O error). Remaining paths are still processed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from formatsniff.asset import AssetSniffer
from formatsniff.cli.errors import exit_code_for
from formatsniff.cli.exit_codes import ExitCode
from formatsniff.cli.options import OutputFormat, output_format_option
from formatsniff.cli.utils import render_markdown_table
from formatsniff.config.logging import get_logger
from formatsniff.format.hints import FormatHints
from formatsniff.format.media_type import MediaType
from formatsniff.resource.errors import ReadError

if TYPE_CHECKING:
    from formatsniff.asset import SniffedAsset
    from formatsniff.cli.console import ClickConsole
    from formatsniff.config.model import Config
    from formatsniff.format.format import Format

logger = get_logger(__name__)


@dataclass
class SniffOutcome:
    """Result of sniffing one path, for rendering."""

    path: Path
    format: Format | None = None
    encrypted_entries: int = 0
    error: ReadError | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "format": self.format.to_dict() if self.format is not None else None,
            "encrypted_entries": self.encrypted_entries,
            "error": str(self.error) if self.error is not None else None,
        }


def _media_type_param(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter,
    value: str | None,
) -> MediaType | None:
    if value is None:
        return None
    parsed: MediaType | None = MediaType.parse(value)
    if parsed is None:
        raise click.BadParameter(f"Not a media type: {value!r}", param=param)
    return parsed


def sniff_one(
    sniffer: AssetSniffer,
    path: Path,
    *,
    media_type: MediaType | None,
    hints_only: bool,
) -> SniffOutcome:
    """Sniff a single path, capturing read failures in the outcome."""
    if hints_only:
        hints: FormatHints = FormatHints.from_path(path, media_type=media_type)
        return SniffOutcome(path, sniffer.sniffer.sniff_hints(hints))

    try:
        asset: SniffedAsset | None = sniffer.sniff_path(path, media_type=media_type)
    except ReadError as exc:
        logger.debug("Failed to sniff %s: %s", path, exc)
        return SniffOutcome(path, error=exc)
    if asset is None:
        return SniffOutcome(path)
    with asset:
        return SniffOutcome(path, asset.format, encrypted_entries=len(asset.encryptions))


def _render_default(console: ClickConsole, outcome: SniffOutcome, vlevel: int) -> None:
    name: str = console.styled(str(outcome.path), bold=True)
    if outcome.error is not None:
        console.error(f"{outcome.path}: {outcome.error}")
        return
    if outcome.format is None:
        console.print(f"{name}: {console.styled('unknown', fg='yellow')}")
        return
    fmt: Format = outcome.format
    console.print(
        f"{name}: {console.styled(str(fmt.media_type), fg='green')} (.{fmt.file_extension})"
    )
    if vlevel > 0:
        console.print(f"    specifications: {', '.join(s.value for s in fmt.specifications)}")
        if outcome.encrypted_entries:
            console.print(f"    encrypted entries: {outcome.encrypted_entries}")


def _markdown_row(outcome: SniffOutcome) -> list[str]:
    if outcome.format is None:
        return [f"`{outcome.path}`", "", "", ""]
    fmt: Format = outcome.format
    return [
        f"`{outcome.path}`",
        f"`{fmt.media_type}`",
        fmt.file_extension,
        ", ".join(s.value for s in fmt.specifications),
    ]


def _render(
    console: ClickConsole, outcomes: list[SniffOutcome], fmt: OutputFormat, vlevel: int
) -> None:
    if fmt == OutputFormat.JSON:
        console.print(json.dumps([o.to_dict() for o in outcomes], indent=2))
    elif fmt == OutputFormat.NDJSON:
        for outcome in outcomes:
            console.print(json.dumps(outcome.to_dict()))
    elif fmt == OutputFormat.MARKDOWN:
        rows: list[list[str]] = [_markdown_row(o) for o in outcomes]
        console.print(
            render_markdown_table(["Path", "Media Type", "Extension", "Specifications"], rows)
        )
    else:
        for outcome in outcomes:
            _render_default(console, outcome, vlevel)


@click.command(
    name="sniff",
    help="Resolve the format of files and directories.",
)
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path),
)
@click.option(
    "--media-type",
    "media_type",
    callback=_media_type_param,
    default=None,
    help="Declared media type hint, applied to every path (e.g. 'application/epub+zip').",
)
@click.option(
    "--hints-only",
    is_flag=True,
    default=False,
    help="Resolve from the file extension and --media-type only, without reading content.",
)
@output_format_option
def sniff_command(
    *,
    paths: tuple[Path, ...],
    media_type: MediaType | None = None,
    hints_only: bool = False,
    output_format: OutputFormat | None = None,
) -> None:
    """Resolve and print the format of each path.

    Args:
        paths (tuple[Path, ...]): Files or directories to sniff.
        media_type (MediaType | None): Declared media type hint.
        hints_only (bool): Whether to skip reading content.
        output_format (OutputFormat | None): Output format (default human-readable).
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    config: Config = ctx.obj["config"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    sniffer: AssetSniffer = AssetSniffer(config=config)
    outcomes: list[SniffOutcome] = [
        sniff_one(sniffer, path, media_type=media_type, hints_only=hints_only) for path in paths
    ]
    _render(console, outcomes, output_format or OutputFormat.DEFAULT, vlevel)

    errors: list[ReadError] = [o.error for o in outcomes if o.error is not None]
    if errors:
        ctx.exit(exit_code_for(errors[0]))
    if any(o.format is None for o in outcomes):
        ctx.exit(ExitCode.UNRESOLVED)
