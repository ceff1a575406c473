# topmark:header:start
#
#   project      : FormatSniff
#   file         : test_cli_sniff.py
#   file_relpath : tests/cli/test_cli_sniff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the `sniff` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from formatsniff.cli.exit_codes import ExitCode
from tests.cli.conftest import run_cli_in
from tests.conftest import mark_cli, parametrize
from tests.samples import JPEG_HEAD, PDF_HEAD, PNG_HEAD, epub_entries, write_tree, write_zip

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


@mark_cli
def test_sniff_epub(isolation: Path) -> None:
    """It prints the media type and extension of a recognized file."""
    write_zip(isolation / "book.epub", epub_entries())

    result: Result = run_cli_in(isolation, ["sniff", "book.epub"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert result.stdout.strip() == "book.epub: application/epub+zip (.epub)"


@mark_cli
def test_sniff_verbose_lists_specifications(isolation: Path) -> None:
    write_zip(isolation / "book.epub", epub_entries(drm="lcp"))

    result: Result = run_cli_in(isolation, ["-v", "sniff", "book.epub"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "specifications: zip, epub, lcp" in result.stdout
    assert "encrypted entries: 2" in result.stdout


@mark_cli
def test_sniff_json(isolation: Path) -> None:
    write_zip(isolation / "book.epub", epub_entries(drm="lcp"))
    (isolation / "doc").write_bytes(PDF_HEAD)

    result: Result = run_cli_in(isolation, ["sniff", "book.epub", "doc", "--format", "json"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    payload: list[dict[str, Any]] = json.loads(result.stdout)
    assert [item["path"] for item in payload] == ["book.epub", "doc"]
    assert payload[0]["format"] == {
        "media_type": "application/epub+zip",
        "file_extension": "epub",
        "specifications": ["zip", "epub", "lcp"],
    }
    assert payload[0]["encrypted_entries"] == 2
    assert payload[1]["format"]["specifications"] == ["pdf"]
    assert payload[1]["error"] is None


@mark_cli
def test_sniff_ndjson_and_markdown(isolation: Path) -> None:
    (isolation / "a.png").write_bytes(PNG_HEAD)
    (isolation / "b.jpg").write_bytes(JPEG_HEAD)

    ndjson: Result = run_cli_in(isolation, ["sniff", "a.png", "b.jpg", "--format", "ndjson"])
    markdown: Result = run_cli_in(isolation, ["sniff", "a.png", "--format", "MARKDOWN"])

    lines: list[dict[str, Any]] = [json.loads(x) for x in ndjson.stdout.splitlines()]
    assert [x["format"]["media_type"] for x in lines] == ["image/png", "image/jpeg"]
    assert markdown.stdout.splitlines()[0].startswith("| Path")
    assert "`image/png`" in markdown.stdout


@mark_cli
def test_sniff_directory(isolation: Path) -> None:
    write_tree(isolation / "exploded", epub_entries())

    result: Result = run_cli_in(isolation, ["sniff", "exploded", "--format", "json"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert json.loads(result.stdout)[0]["format"]["specifications"] == ["zip", "epub"]


@mark_cli
def test_unrecognized_file_exits_unresolved(isolation: Path) -> None:
    (isolation / "notes.bin").write_bytes(b"plain words")
    (isolation / "a.png").write_bytes(PNG_HEAD)

    result: Result = run_cli_in(isolation, ["sniff", "notes.bin", "a.png"])

    assert result.exit_code == ExitCode.UNRESOLVED
    assert "notes.bin: unknown" in result.stdout
    assert "a.png: image/png (.png)" in result.stdout


@mark_cli
def test_missing_file_exits_not_found(isolation: Path) -> None:
    """Read failures win over unresolved paths; other paths are still reported."""
    (isolation / "notes.bin").write_bytes(b"plain words")

    result: Result = run_cli_in(isolation, ["sniff", "notes.bin", "missing.bin"])

    assert result.exit_code == ExitCode.FILE_NOT_FOUND
    assert "notes.bin: unknown" in result.stdout
    assert "missing.bin" in result.stderr


@mark_cli
def test_hints_only_does_not_read(isolation: Path) -> None:
    """A missing file resolves from its extension alone."""
    result: Result = run_cli_in(
        isolation, ["sniff", "--hints-only", "missing.cbz", "--format", "json"]
    )

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert json.loads(result.stdout)[0]["format"]["media_type"] == "application/vnd.comicbook+zip"


@mark_cli
def test_declared_media_type(isolation: Path) -> None:
    (isolation / "download").write_bytes(b"no magic")

    result: Result = run_cli_in(
        isolation, ["sniff", "--media-type", "application/pdf", "download"]
    )

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "download: application/pdf (.pdf)" in result.stdout


@mark_cli
def test_invalid_media_type_is_rejected(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, ["sniff", "--media-type", "pdf", "x.pdf"])

    assert result.exit_code != ExitCode.SUCCESS
    assert "Not a media type" in result.output


@mark_cli
def test_disabled_detector_from_config(isolation: Path) -> None:
    (isolation / "formatsniff.toml").write_text(
        'root = true\ndisable = ["comic"]\n', encoding="utf-8"
    )
    write_zip(isolation / "pages", {"001.jpg": JPEG_HEAD})

    result: Result = run_cli_in(isolation, ["sniff", "pages"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "pages: application/zip (.zip)" in result.stdout


@mark_cli
@parametrize("flag", ["--format=yaml", "--format=JSON5"])
def test_unknown_output_format(isolation: Path, flag: str) -> None:
    result: Result = run_cli_in(isolation, ["sniff", flag, "x"])
    assert "Must be one of: default, json, ndjson, markdown" in result.output
