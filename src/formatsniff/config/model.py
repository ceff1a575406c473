# topmark:header:start
#
#   project      : FormatSniff
#   file         : model.py
#   file_relpath : src/formatsniff/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used by the asset sniffer and
      the CLI.
    - `MutableConfig`: a mutable builder used during discovery and merging;
      it is frozen into `Config` once all layers are applied.

Layers, lowest precedence first: runtime defaults, discovered config files
(root-most to nearest), an explicit config file, then overrides set by the
caller (e.g. CLI options) on the builder before freezing.

Values are validated at freeze time; TOML I/O lives in
[`formatsniff.config.io`][].
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from formatsniff.config.io import (
    ConfigError,
    discover_config_files,
    extract_section,
    get_bool,
    get_string,
    get_string_list,
    load_defaults_dict,
    load_toml_dict,
)
from formatsniff.config.logging import SniffLogger, get_logger, parse_log_level

if TYPE_CHECKING:
    from formatsniff.config.io import TomlTable

logger: SniffLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        disable (frozenset[str]): Names of detectors to leave out of resolution.
        encoding (str): Text encoding used to decode content when no ``charset``
            is hinted (a Python codec name).
        open_archives (bool): Whether ZIP assets are opened to classify their entries.
        log_level (int | None): Logging level requested by configuration, if any.
        config_files (tuple[Path, ...]): Config sources applied, in merge order.
    """

    disable: frozenset[str] = frozenset()
    encoding: str = "utf-8"
    open_archives: bool = True
    log_level: int | None = None
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this configuration."""
        return MutableConfig(
            disable=sorted(self.disable),
            encoding=self.encoding,
            open_archives=self.open_archives,
            log_level=None if self.log_level is None else str(self.log_level),
            config_files=list(self.config_files),
        )


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Unset values (None) inherit from the layer below when merged.

    Attributes:
        disable (list[str]): Names of detectors to leave out (accumulated across layers).
        encoding (str | None): Fallback text encoding.
        open_archives (bool | None): Whether to open ZIP assets.
        log_level (str | None): Level name or number, e.g. ``"DEBUG"``.
        config_files (list[Path]): Config sources applied so far.
    """

    disable: list[str] = field(default_factory=lambda: [])
    encoding: str | None = None
    open_archives: bool | None = None
    log_level: str | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Validate and freeze this builder into an immutable `Config`.

        Raises:
            ConfigError: If the encoding or the log level is unknown.
        """
        encoding: str = self.encoding or "utf-8"
        try:
            encoding = codecs.lookup(encoding).name
        except LookupError as exc:
            raise ConfigError(f"unknown encoding: {self.encoding!r}") from exc

        level: int | None = None
        if self.log_level is not None:
            level = parse_log_level(self.log_level)
            if level is None:
                raise ConfigError(f"unknown log level: {self.log_level!r}")

        return Config(
            disable=frozenset(self.disable),
            encoding=encoding,
            open_archives=True if self.open_archives is None else self.open_archives,
            log_level=level,
            config_files=tuple(self.config_files),
        )

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new builder where ``other``'s set values win.

        ``disable`` lists are concatenated (duplicates dropped).
        """
        return MutableConfig(
            disable=list(dict.fromkeys([*self.disable, *other.disable])),
            encoding=other.encoding if other.encoding is not None else self.encoding,
            open_archives=(
                other.open_archives if other.open_archives is not None else self.open_archives
            ),
            log_level=other.log_level if other.log_level is not None else self.log_level,
            config_files=[*self.config_files, *other.config_files],
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a builder from a parsed FormatSniff table.

        Unknown keys are logged and ignored.

        Raises:
            ConfigError: If a known key holds a value of the wrong type.
        """
        known: set[str] = {"disable", "encoding", "open_archives", "log_level", "root"}
        for key in data.keys() - known:
            logger.warning("Ignoring unknown config key %r in %s", key, config_file or "<defaults>")

        log_level_raw: object = data.get("log_level")
        if isinstance(log_level_raw, int) and not isinstance(log_level_raw, bool):
            log_level: str | None = str(log_level_raw)
        else:
            log_level = get_string(data, "log_level", path=config_file)

        draft: MutableConfig = cls(
            disable=get_string_list(data, "disable", path=config_file) or [],
            encoding=get_string(data, "encoding", path=config_file),
            open_archives=get_bool(data, "open_archives", path=config_file),
            log_level=log_level,
            config_files=[config_file] if config_file is not None else [],
        )
        logger.trace("Parsed config %s: %s", config_file or "<defaults>", draft)
        return draft

    @classmethod
    def from_toml_file(cls, path: Path, *, strict: bool = False) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Args:
            path (Path): A ``formatsniff.toml`` or ``pyproject.toml`` file.
            strict (bool): Raise on unreadable files and missing sections.

        Returns:
            MutableConfig | None: The builder, or None if the file holds no
            FormatSniff section (non-strict mode).

        Raises:
            ConfigError: On invalid values; in strict mode also on unreadable
                files or a missing ``[tool.formatsniff]`` table.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        section: TomlTable | None = extract_section(path, load_toml_dict(path, strict=strict))
        if section is None:
            if strict:
                raise ConfigError("[tool.formatsniff] section missing", path=path)
            logger.debug("No FormatSniff section in %s", path)
            return None
        return cls.from_toml_dict(section, config_file=path)

    @classmethod
    def load_merged(
        cls,
        config_path: Path | None = None,
        *,
        start: Path | None = None,
        discover: bool = True,
    ) -> MutableConfig:
        """Merge defaults, discovered files and an explicit file into one builder.

        Args:
            config_path (Path | None): Explicit config file, applied last.
            start (Path | None): Where upward discovery starts (defaults to the CWD).
            discover (bool): Whether to look for config files at all.

        Raises:
            ConfigError: If a config file is invalid.
        """
        merged: MutableConfig = cls.from_defaults()
        if discover:
            for path in discover_config_files(start or Path.cwd()):
                layer: MutableConfig | None = cls.from_toml_file(path)
                if layer is not None:
                    merged = merged.merge_with(layer)
        if config_path is not None:
            explicit: MutableConfig | None = cls.from_toml_file(config_path, strict=True)
            if explicit is not None:
                merged = merged.merge_with(explicit)
        logger.debug("Config sources: %s", [str(p) for p in merged.config_files])
        return merged


def load_config(config_path: Path | None = None, *, start: Path | None = None) -> Config:
    """Load and freeze the effective configuration."""
    return MutableConfig.load_merged(config_path, start=start).freeze()
