# topmark:header:start
#
#   project      : FormatSniff
#   file         : errors.py
#   file_relpath : src/formatsniff/resource/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Access failures raised by content and container accessors.

Only *access* failures are errors. A shape mismatch (content that is not
XML, a JSON object missing a key, absent magic bytes) is never raised: the
detector simply returns ``None``.

Hierarchy:
    ReadError
      AccessError
        ResourceNotFoundError
        PermissionDeniedError
        ResourceIOError
      ArchiveError
"""

from __future__ import annotations


class ReadError(Exception):
    """Base class for failures while reading an asset.

    Args:
        message (str): Human-readable description.
        source (str | None): Which accessor failed (file path, archive entry, ...).
        start (int | None): Start offset of the failed read, if range-scoped.
        end (int | None): End offset (exclusive) of the failed read, if range-scoped.

    Attributes:
        source (str | None): Which accessor failed.
        start (int | None): Start offset of the failed read.
        end (int | None): End offset of the failed read.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.source: str | None = source
        self.start: int | None = start
        self.end: int | None = end

    def __str__(self) -> str:
        where: str = f" [{self.source}]" if self.source else ""
        if self.start is not None or self.end is not None:
            where += f" (range {self.start or 0}..{'' if self.end is None else self.end})"
        return f"{self.message}{where}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReadError):
            return NotImplemented
        return (type(self), self.message, self.source, self.start, self.end) == (
            type(other),
            other.message,
            other.source,
            other.start,
            other.end,
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.source, self.start, self.end))


class AccessError(ReadError):
    """The underlying storage could not be accessed."""


class ResourceNotFoundError(AccessError):
    """The resource does not exist."""


class PermissionDeniedError(AccessError):
    """The resource exists but may not be read."""


class ResourceIOError(AccessError):
    """An I/O fault occurred while reading the resource."""


def from_os_error(
    exc: OSError,
    *,
    source: str,
    start: int | None = None,
    end: int | None = None,
) -> ReadError:
    """Translate an `OSError` into the matching `ReadError` subclass."""
    message: str = exc.strerror or str(exc)
    if isinstance(exc, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
        return ResourceNotFoundError(message, source=source, start=start, end=end)
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(message, source=source, start=start, end=end)
    return ResourceIOError(message, source=source, start=start, end=end)


class ArchiveError(ReadError):
    """The archive structure (central directory, entry stream) could not be decoded."""
