# topmark:header:start
#
#   project      : FormatSniff
#   file         : __init__.py
#   file_relpath : src/formatsniff/container/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Container accessors: ZIP archives, directories and in-memory mappings."""

from __future__ import annotations

from formatsniff.container.base import (
    Container,
    entries_contain_extensions,
    is_ignored_entry,
)
from formatsniff.container.directory import DirectoryContainer
from formatsniff.container.memory import MemoryContainer
from formatsniff.container.zip import ZipContainer

__all__ = [
    "Container",
    "DirectoryContainer",
    "MemoryContainer",
    "ZipContainer",
    "entries_contain_extensions",
    "is_ignored_entry",
]
