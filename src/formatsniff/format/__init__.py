# topmark:header:start
#
#   project      : FormatSniff
#   file         : __init__.py
#   file_relpath : src/formatsniff/format/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Format value types: specifications, media types, formats and hints.

Submodules:
    specification: `Specification` conformance tags.
    media_type: `MediaType` parsing/comparison and well-known media types.
    format: `Format` value type and well-known formats.
    hints: `FormatHints` (extensions and declared media types).
"""

from __future__ import annotations

from formatsniff.format.format import Format
from formatsniff.format.hints import FormatHints
from formatsniff.format.media_type import MediaType
from formatsniff.format.specification import Specification

__all__ = ["Format", "FormatHints", "MediaType", "Specification"]
