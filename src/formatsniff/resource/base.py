# topmark:header:start
#
#   project      : FormatSniff
#   file         : base.py
#   file_relpath : src/formatsniff/resource/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Byte-range readable resources.

A `Resource` is the lowest-level content accessor: it reads a byte range
of an asset and raises a [`ReadError`][formatsniff.resource.errors.ReadError]
on access failure. Detectors never talk to resources directly; they go
through a [`SnifferBlob`][formatsniff.resource.blob.SnifferBlob] that caches
decoded views.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.resource.errors import ReadError, from_os_error

if TYPE_CHECKING:
    from collections.abc import Callable
    from os import PathLike

logger: SniffLogger = get_logger(__name__)


@runtime_checkable
class Resource(Protocol):
    """Protocol for byte-range readable content."""

    @property
    def source(self) -> str:
        """Short description of where the bytes come from (for diagnostics)."""
        ...

    def read(self, start: int | None = None, end: int | None = None) -> bytes:
        """Read bytes in ``[start, end)``; the whole content when both are None.

        Args:
            start (int | None): Start offset (defaults to 0).
            end (int | None): End offset, exclusive (defaults to the end of content).

        Returns:
            bytes: At most ``end - start`` bytes; fewer when the content is shorter.

        Raises:
            ReadError: If the underlying storage cannot be read.
        """
        ...

    def length(self) -> int:
        """Return the total size of the content in bytes.

        Raises:
            ReadError: If the underlying storage cannot be accessed.
        """
        ...


class BytesResource:
    """Resource backed by an in-memory buffer.

    ``data`` may be a callable, evaluated lazily on first read.
    """

    def __init__(self, data: bytes | Callable[[], bytes], *, source: str = "<bytes>") -> None:
        self._data: bytes | None = data if isinstance(data, bytes) else None
        self._factory: Callable[[], bytes] | None = None if isinstance(data, bytes) else data
        self._source: str = source

    @property
    def source(self) -> str:
        return self._source

    def _buffer(self) -> bytes:
        if self._data is None:
            assert self._factory is not None
            self._data = self._factory()
        return self._data

    def read(self, start: int | None = None, end: int | None = None) -> bytes:
        """Read a slice of the buffer."""
        return self._buffer()[slice(start or 0, end)]

    def length(self) -> int:
        return len(self._buffer())

    def __repr__(self) -> str:
        return f"BytesResource({self._source!r})"


class FileResource:
    """Resource backed by a file on disk.

    Only the requested range is read from the file.
    """

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path: Path = Path(path)

    @property
    def source(self) -> str:
        return str(self.path)

    def read(self, start: int | None = None, end: int | None = None) -> bytes:
        """Read ``[start, end)`` from the file.

        Raises:
            ReadError: Translated from the `OSError` raised by the file system.
        """
        offset: int = start or 0
        logger.trace("Reading %s [%d..%s]", self.path, offset, "" if end is None else end)
        try:
            with self.path.open("rb") as fh:
                if offset:
                    fh.seek(offset)
                if end is None:
                    return fh.read()
                return fh.read(max(0, end - offset))
        except OSError as exc:
            raise from_os_error(exc, source=self.source, start=start, end=end) from exc

    def length(self) -> int:
        try:
            return self.path.stat().st_size
        except OSError as exc:
            raise from_os_error(exc, source=self.source) from exc

    def __repr__(self) -> str:
        return f"FileResource({str(self.path)!r})"


class FailureResource:
    """Resource that fails every read with the given error."""

    def __init__(self, error: ReadError) -> None:
        self.error: ReadError = error

    @property
    def source(self) -> str:
        return self.error.source or "<failure>"

    def read(self, start: int | None = None, end: int | None = None) -> bytes:
        """Raise the configured error."""
        raise self.error

    def length(self) -> int:
        raise self.error
