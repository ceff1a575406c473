# topmark:header:start
#
#   project      : FormatSniff
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for config discovery, parsing, merging and freezing."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from formatsniff.config import Config, ConfigError, MutableConfig, load_config
from formatsniff.config.io import discover_config_files, extract_section, load_toml_dict
from formatsniff.config.logging import TRACE_LEVEL
from tests.conftest import parametrize


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults(isolation: Path) -> None:
    config: Config = load_config()

    assert config.disable == frozenset()
    assert config.encoding == "utf-8"
    assert config.open_archives is True
    assert config.log_level is None
    assert config.config_files == ((isolation / "formatsniff.toml").resolve(),)


def test_formatsniff_toml_top_level_and_section(tmp_path: Path) -> None:
    flat: Path = write(tmp_path / "a" / "formatsniff.toml", 'disable = ["comic"]\n')
    nested: Path = write(
        tmp_path / "b" / "formatsniff.toml", '[formatsniff]\nencoding = "latin-1"\n'
    )

    flat_cfg: MutableConfig | None = MutableConfig.from_toml_file(flat)
    nested_cfg: MutableConfig | None = MutableConfig.from_toml_file(nested)
    assert flat_cfg is not None and flat_cfg.disable == ["comic"]
    assert nested_cfg is not None and nested_cfg.encoding == "latin-1"


def test_pyproject_needs_a_tool_section(tmp_path: Path) -> None:
    with_section: Path = write(
        tmp_path / "a" / "pyproject.toml",
        '[project]\nname = "x"\n\n[tool.formatsniff]\nopen_archives = false\n',
    )
    without: Path = write(tmp_path / "b" / "pyproject.toml", '[project]\nname = "x"\n')

    parsed: MutableConfig | None = MutableConfig.from_toml_file(with_section)
    assert parsed is not None and parsed.open_archives is False
    assert MutableConfig.from_toml_file(without) is None
    assert extract_section(without, load_toml_dict(without)) is None


def test_discovery_walks_up_to_the_root_marker(tmp_path: Path) -> None:
    """Files are ordered root-most first; directories above ``root = true`` are skipped."""
    write(tmp_path / "formatsniff.toml", 'disable = ["outside"]\n')
    top: Path = write(tmp_path / "repo" / "formatsniff.toml", 'root = true\ndisable = ["rar"]\n')
    pyproject: Path = write(
        tmp_path / "repo" / "pkg" / "pyproject.toml", '[tool.formatsniff]\ndisable = ["lpf"]\n'
    )
    ignored: Path = write(tmp_path / "repo" / "pkg" / "sub" / "pyproject.toml", "[project]\n")
    nearest: Path = write(
        tmp_path / "repo" / "pkg" / "sub" / "formatsniff.toml", 'encoding = "utf-16"\n'
    )

    found: list[Path] = discover_config_files(nearest.parent)
    assert found == [top.resolve(), pyproject.resolve(), nearest.resolve()]
    assert ignored.resolve() not in found

    config: Config = load_config(start=nearest.parent)
    assert config.disable == frozenset({"rar", "lpf"})
    assert config.encoding == "utf-16"


def test_explicit_file_wins(isolation: Path) -> None:
    write(isolation / "formatsniff.toml", 'root = true\nencoding = "latin-1"\nlog_level = "INFO"\n')
    explicit: Path = write(isolation / "ci" / "ci.toml", 'log_level = "trace"\n')

    config: Config = load_config(explicit)
    assert config.encoding == "iso8859-1"
    assert config.log_level == TRACE_LEVEL
    assert config.config_files[-1] == explicit


def test_explicit_pyproject_without_section_is_an_error(isolation: Path) -> None:
    explicit: Path = write(isolation / "other" / "pyproject.toml", "[project]\n")
    with pytest.raises(ConfigError, match="section missing"):
        load_config(explicit)


def test_explicit_invalid_toml_is_an_error(isolation: Path) -> None:
    explicit: Path = write(isolation / "bad.toml", "disable = [\n")
    with pytest.raises(ConfigError, match="invalid TOML") as excinfo:
        load_config(explicit)
    assert excinfo.value.path == explicit


def test_discovered_invalid_toml_is_logged(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    write(tmp_path / "formatsniff.toml", "root = true\ndisable = [\n")
    with caplog.at_level(logging.ERROR):
        config: Config = load_config(start=tmp_path)
    assert config.encoding == "utf-8"
    assert "Error decoding TOML" in caplog.text


@parametrize(
    ("text", "message"),
    [
        ('disable = "comic"\n', "'disable' must be a list of strings"),
        ("disable = [1, 2]\n", "'disable' must be a list of strings"),
        ("encoding = 8\n", "'encoding' must be a string"),
        ('open_archives = "yes"\n', "'open_archives' must be a boolean"),
    ],
)
def test_type_errors(tmp_path: Path, text: str, message: str) -> None:
    path: Path = write(tmp_path / "formatsniff.toml", text)
    with pytest.raises(ConfigError, match=message):
        MutableConfig.from_toml_file(path)


@parametrize(
    ("draft", "message"),
    [
        (MutableConfig(encoding="klingon"), "unknown encoding"),
        (MutableConfig(log_level="LOUD"), "unknown log level"),
    ],
)
def test_freeze_validates(draft: MutableConfig, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        draft.freeze()


def test_numeric_log_level(tmp_path: Path) -> None:
    path: Path = write(tmp_path / "formatsniff.toml", "log_level = 10\n")
    parsed: MutableConfig | None = MutableConfig.from_toml_file(path)
    assert parsed is not None
    assert parsed.freeze().log_level == logging.DEBUG


def test_unknown_keys_are_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path: Path = write(tmp_path / "formatsniff.toml", "colour = true\n")
    with caplog.at_level(logging.WARNING):
        parsed: MutableConfig | None = MutableConfig.from_toml_file(path)
    assert parsed is not None
    assert "Ignoring unknown config key 'colour'" in caplog.text


def test_merge_precedence() -> None:
    base: MutableConfig = MutableConfig(
        disable=["rar", "comic"], encoding="latin-1", open_archives=False
    )
    layer: MutableConfig = MutableConfig(disable=["comic", "lpf"], log_level="DEBUG")

    merged: MutableConfig = base.merge_with(layer)
    assert merged.disable == ["rar", "comic", "lpf"]
    assert merged.encoding == "latin-1"
    assert merged.open_archives is False
    assert merged.log_level == "DEBUG"


def test_thaw_round_trips() -> None:
    config: Config = Config(
        disable=frozenset({"rar"}), encoding="utf-16", open_archives=False, log_level=10
    )
    assert config.thaw().freeze() == config
