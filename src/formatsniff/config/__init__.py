# topmark:header:start
#
#   project      : FormatSniff
#   file         : __init__.py
#   file_relpath : src/formatsniff/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration: logging setup, TOML loading and the runtime config model."""

from __future__ import annotations

from formatsniff.config.io import ConfigError
from formatsniff.config.model import Config, MutableConfig, load_config

__all__ = ["Config", "ConfigError", "MutableConfig", "load_config"]
