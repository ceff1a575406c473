# topmark:header:start
#
#   project      : FormatSniff
#   file         : test_cli_main.py
#   file_relpath : tests/cli/test_cli_main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the command group, `formats` and `version`."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import pytest

from formatsniff.cli.exit_codes import ExitCode
from formatsniff.constants import FORMATSNIFF_VERSION
from formatsniff.format.specification import Specification
from formatsniff.sniffers.default import available_sniffer_names
from tests.cli.conftest import run_cli_in
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


@mark_cli
def test_no_subcommand_prints_help(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, [])

    assert result.exit_code == ExitCode.SUCCESS
    assert "Hint: use 'formatsniff sniff" in result.stdout
    assert "Commands:" in result.stdout


@mark_cli
def test_version(isolation: Path) -> None:
    plain: Result = run_cli_in(isolation, ["version"])
    as_json: Result = run_cli_in(isolation, ["version", "--format", "json"])

    assert plain.exit_code == ExitCode.SUCCESS
    assert plain.stdout.strip() == FORMATSNIFF_VERSION
    assert json.loads(as_json.stdout) == {"version": FORMATSNIFF_VERSION}


@mark_cli
def test_formats_json(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, ["formats", "--format", "json"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    payload: dict[str, Any] = json.loads(result.stdout)
    names: list[str] = [s["name"] for s in payload["sniffers"]]
    assert names[-len(available_sniffer_names()) :] == list(available_sniffer_names())
    assert all(s["enabled"] for s in payload["sniffers"])
    assert payload["specifications"] == [s.value for s in Specification]
    epub: dict[str, Any] = next(s for s in payload["sniffers"] if s["name"] == "epub")
    assert epub["description"].startswith("EPUB packages")


@mark_cli
def test_formats_marks_disabled_detectors(isolation: Path) -> None:
    (isolation / "formatsniff.toml").write_text(
        'root = true\ndisable = ["rar"]\n', encoding="utf-8"
    )

    listing: Result = run_cli_in(isolation, ["formats"])
    as_json: Result = run_cli_in(isolation, ["formats", "--format", "json"])

    assert "(disabled)" in listing.stdout
    assert "Specifications:" in listing.stdout
    rar: dict[str, Any] = next(
        s for s in json.loads(as_json.stdout)["sniffers"] if s["name"] == "rar"
    )
    assert rar["enabled"] is False


@mark_cli
def test_formats_ndjson(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, ["formats", "--format", "ndjson"])

    kinds: list[str] = [json.loads(line)["kind"] for line in result.stdout.splitlines()]
    assert kinds.count("specification") == len(Specification)
    assert kinds.count("sniffer") >= len(available_sniffer_names())


@mark_cli
def test_verbose_and_quiet_are_exclusive(isolation: Path) -> None:
    result: Result = run_cli_in(isolation, ["-v", "-q", "version"])

    assert result.exit_code == ExitCode.USAGE_ERROR
    assert "mutually exclusive" in result.stderr


@mark_cli
def test_invalid_config_file(isolation: Path) -> None:
    bad: Path = isolation / "bad.toml"
    bad.write_text("disable = 3\n", encoding="utf-8")

    result: Result = run_cli_in(isolation, ["--config", str(bad), "version"])

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "'disable' must be a list of strings" in result.stderr


@mark_cli
@parametrize(
    ("args", "config_level", "expected"),
    [
        ([], None, logging.WARNING),
        (["-q"], None, logging.ERROR),
        (["-vv"], None, logging.DEBUG),
        ([], "ERROR", logging.ERROR),
        (["-v"], "ERROR", logging.INFO),
    ],
)
def test_log_level_precedence(
    isolation: Path, args: list[str], config_level: str | None, expected: int
) -> None:
    """Flags win over the config file, which wins over the default."""
    if config_level is not None:
        (isolation / "formatsniff.toml").write_text(
            f'root = true\nlog_level = "{config_level}"\n', encoding="utf-8"
        )

    result: Result = run_cli_in(isolation, [*args, "version"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert logging.getLogger().level == expected


@mark_cli
def test_environment_log_level_wins(isolation: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORMATSNIFF_LOG_LEVEL", "debug")

    result: Result = run_cli_in(isolation, ["-q", "version"])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert logging.getLogger().level == logging.DEBUG
