# topmark:header:start
#
#   project      : FormatSniff
#   file         : io.py
#   file_relpath : src/formatsniff/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading FormatSniff configuration from
on-disk TOML files (``formatsniff.toml`` / ``pyproject.toml``), plus the
runtime defaults and a few typed value getters.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.constants import (
    CONFIG_FILE_NAME,
    CONFIG_SECTION,
    DEFAULT_TEXT_ENCODING,
    PYPROJECT_FILE_NAME,
    PYPROJECT_SECTION,
)

if TYPE_CHECKING:
    from pathlib import Path

logger: SniffLogger = get_logger(__name__)

TomlTable = dict[str, Any]


class ConfigError(ValueError):
    """A configuration source is unreadable or holds an invalid value.

    Args:
        message (str): Human-readable description.
        path (Path | None): The offending configuration file, if known.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(f"{path}: {message}" if path is not None else message)
        self.path: Path | None = path


def load_defaults_dict() -> TomlTable:
    """Return the runtime defaults as a new dict (no I/O)."""
    return {
        "disable": [],
        "encoding": DEFAULT_TEXT_ENCODING,
        "open_archives": True,
    }


def load_toml_dict(path: Path, *, strict: bool = False) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.
        strict (bool): Raise instead of logging and returning an empty dict.

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If ``strict`` and the file cannot be read or parsed.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        if strict:
            raise ConfigError(f"cannot read configuration: {e.strerror or e}", path=path) from e
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        if strict:
            raise ConfigError(f"invalid TOML: {e}", path=path) from e
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_section(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the FormatSniff table of a parsed config file.

    ``pyproject.toml`` must carry a ``[tool.formatsniff]`` table. In
    ``formatsniff.toml`` the ``[formatsniff]`` table is used when present,
    the top level otherwise.

    Returns:
        TomlTable | None: The table, or None when a ``pyproject.toml`` has none.
    """
    if path.name == PYPROJECT_FILE_NAME:
        table: Any = data
        for key in PYPROJECT_SECTION:
            table = table.get(key) if isinstance(table, dict) else None
        return cast("TomlTable", table) if isinstance(table, dict) else None
    section: Any = data.get(CONFIG_SECTION)
    return cast("TomlTable", section) if isinstance(section, dict) else data


def discover_config_files(start: Path) -> list[Path]:
    """Return config files found by walking upward from ``start``.

    Files are ordered root-most first, nearest last, so that a later merge
    gives precedence to the nearest file. In one directory ``pyproject.toml``
    comes before ``formatsniff.toml``. A ``pyproject.toml`` without a
    ``[tool.formatsniff]`` table is skipped. Discovery stops after a
    directory whose config sets ``root = true``.

    Args:
        start (Path): Directory (or file) where discovery starts.

    Returns:
        list[Path]: Discovered config file paths.
    """
    per_dir: list[list[Path]] = []
    cur: Path = start.resolve()
    if cur.is_file():
        cur = cur.parent

    while True:
        stop_here: bool = False
        dir_entries: list[Path] = []
        for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME):
            p: Path = cur / name
            if not p.is_file():
                continue
            section: TomlTable | None = extract_section(p, load_toml_dict(p))
            if section is None:
                continue
            logger.debug("Discovered config file: %s", p)
            dir_entries.append(p)
            if section.get("root") is True:
                stop_here = True
        if dir_entries:
            per_dir.append(dir_entries)

        parent: Path = cur.parent
        if stop_here or parent == cur:
            break
        cur = parent

    ordered: list[Path] = []
    for dir_list in reversed(per_dir):
        ordered.extend(dir_list)
    return ordered


# --- Value getters ---


def get_string_list(table: TomlTable, key: str, *, path: Path | None = None) -> list[str] | None:
    """Return a list of strings, None when ``key`` is absent.

    Raises:
        ConfigError: If the value is not a list of strings.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings", path=path)
    return list(cast("list[str]", value))


def get_string(table: TomlTable, key: str, *, path: Path | None = None) -> str | None:
    """Return a string value, None when ``key`` is absent.

    Raises:
        ConfigError: If the value is not a string.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string", path=path)
    return value


def get_bool(table: TomlTable, key: str, *, path: Path | None = None) -> bool | None:
    """Return a boolean value, None when ``key`` is absent.

    Raises:
        ConfigError: If the value is not a boolean.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean", path=path)
    return value
