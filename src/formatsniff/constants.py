# topmark:header:start
#
#   project      : FormatSniff
#   file         : constants.py
#   file_relpath : src/formatsniff/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatSniff constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    FORMATSNIFF_VERSION: str = get_version("formatsniff")
except PackageNotFoundError:  # running from a source checkout
    FORMATSNIFF_VERSION = "0.0.0"

LOG_LEVEL_ENV_VAR: str = "FORMATSNIFF_LOG_LEVEL"

CONFIG_FILE_NAME: str = "formatsniff.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
CONFIG_SECTION: str = "formatsniff"
PYPROJECT_SECTION: tuple[str, str] = ("tool", "formatsniff")

DEFAULT_TEXT_ENCODING: str = "utf-8"

# URI of the LCP encryption scheme, as declared in manifests and encryption.xml.
LCP_SCHEME: str = "http://readium.org/2014/01/lcp"
