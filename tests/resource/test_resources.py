# topmark:header:start
#
#   project      : FormatSniff
#   file         : test_resources.py
#   file_relpath : tests/resource/test_resources.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for byte-range resources and the `ReadError` hierarchy."""

from __future__ import annotations

import errno
from typing import TYPE_CHECKING

import pytest

from formatsniff.resource.base import BytesResource, FailureResource, FileResource, Resource
from formatsniff.resource.errors import (
    AccessError,
    PermissionDeniedError,
    ReadError,
    ResourceIOError,
    ResourceNotFoundError,
    from_os_error,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_file_resource_reads_ranges(tmp_path: Path) -> None:
    path: Path = tmp_path / "data.bin"
    path.write_bytes(b"0123456789")
    resource: FileResource = FileResource(path)

    assert resource.read() == b"0123456789"
    assert resource.read(0, 4) == b"0123"
    assert resource.read(6) == b"6789"
    assert resource.read(8, 100) == b"89"
    assert resource.read(5, 2) == b""
    assert resource.length() == 10
    assert isinstance(resource, Resource)


def test_missing_file_raises_not_found(tmp_path: Path) -> None:
    """The accessor source and the requested range travel with the error."""
    resource: FileResource = FileResource(tmp_path / "nope.epub")

    with pytest.raises(ResourceNotFoundError) as excinfo:
        resource.read(0, 4)

    err: ResourceNotFoundError = excinfo.value
    assert isinstance(err, AccessError)
    assert err.source == str(tmp_path / "nope.epub")
    assert (err.start, err.end) == (0, 4)
    assert "nope.epub" in str(err)
    assert "range 0..4" in str(err)

    with pytest.raises(ResourceNotFoundError):
        resource.length()


def test_directory_is_not_a_readable_file(tmp_path: Path) -> None:
    with pytest.raises(ResourceNotFoundError):
        FileResource(tmp_path).read()


def test_bytes_resource_factory_is_lazy() -> None:
    calls: list[int] = []

    def produce() -> bytes:
        calls.append(1)
        return b"abcdef"

    resource: BytesResource = BytesResource(produce, source="lazy")
    assert calls == []
    assert resource.read(1, 3) == b"bc"
    assert resource.length() == 6
    assert calls == [1]
    assert resource.source == "lazy"


def test_failure_resource_always_raises() -> None:
    error: ResourceIOError = ResourceIOError("disk on fire", source="mem")
    resource: FailureResource = FailureResource(error)

    with pytest.raises(ResourceIOError):
        resource.read()
    with pytest.raises(ResourceIOError):
        resource.length()
    assert resource.source == "mem"


def test_from_os_error_translation() -> None:
    not_found: ReadError = from_os_error(FileNotFoundError(errno.ENOENT, "gone"), source="a")
    denied: ReadError = from_os_error(PermissionError(errno.EACCES, "denied"), source="b")
    other: ReadError = from_os_error(OSError(errno.EIO, "I/O error"), source="c", start=3)

    assert isinstance(not_found, ResourceNotFoundError)
    assert isinstance(denied, PermissionDeniedError)
    assert isinstance(other, ResourceIOError)
    assert other.message == "I/O error"
    assert other.start == 3


def test_read_errors_compare_by_value() -> None:
    a: ReadError = ResourceIOError("boom", source="x", start=0, end=4)
    b: ReadError = ResourceIOError("boom", source="x", start=0, end=4)
    c: ReadError = ResourceNotFoundError("boom", source="x", start=0, end=4)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
