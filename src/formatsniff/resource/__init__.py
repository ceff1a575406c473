# topmark:header:start
#
#   project      : FormatSniff
#   file         : __init__.py
#   file_relpath : src/formatsniff/resource/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Content accessors: byte-range resources, access errors and the memoizing blob."""

from __future__ import annotations

from formatsniff.resource.base import BytesResource, FailureResource, FileResource, Resource
from formatsniff.resource.blob import SnifferBlob
from formatsniff.resource.errors import (
    AccessError,
    ArchiveError,
    PermissionDeniedError,
    ReadError,
    ResourceIOError,
    ResourceNotFoundError,
)

__all__ = [
    "AccessError",
    "ArchiveError",
    "BytesResource",
    "FailureResource",
    "FileResource",
    "PermissionDeniedError",
    "ReadError",
    "Resource",
    "ResourceIOError",
    "ResourceNotFoundError",
    "SnifferBlob",
]
