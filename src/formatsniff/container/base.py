# topmark:header:start
#
#   project      : FormatSniff
#   file         : base.py
#   file_relpath : src/formatsniff/container/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Container accessor protocol and entry-set heuristics.

A `Container` exposes the leaf entries of an archive-like asset (a ZIP
file, an exploded directory, an in-memory mapping) and opens any entry as
its own [`Resource`][formatsniff.resource.base.Resource].

Entry paths are relative POSIX paths without a leading slash. Directory
pseudo-entries are never listed. Nested archives are not expanded.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.format.hints import normalize_extension

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from formatsniff.resource.base import Resource

logger: SniffLogger = get_logger(__name__)

IGNORED_BASENAMES: Final[frozenset[str]] = frozenset({"Thumbs.db"})


@runtime_checkable
class Container(Protocol):
    """Protocol for archive-like assets."""

    @property
    def source(self) -> str:
        """Short description of the container (for diagnostics)."""
        ...

    @property
    def entries(self) -> frozenset[str]:
        """Relative paths of every leaf entry."""
        ...

    def get(self, path: str) -> Resource | None:
        """Open the entry at ``path``, or return None when there is no such entry."""
        ...

    def close(self) -> None:
        """Release the underlying handles."""
        ...


class ContainerBase:
    """Shared behavior of the built-in containers: membership and context management."""

    @property
    def entries(self) -> frozenset[str]:
        raise NotImplementedError

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_entry_path(path) in self.entries

    def close(self) -> None:
        """Release the underlying handles (no-op by default)."""

    def __enter__(self) -> ContainerBase:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def normalize_entry_path(path: str) -> str:
    """Return ``path`` as a relative POSIX path (backslashes and leading slashes removed)."""
    return path.replace("\\", "/").lstrip("/")


def is_ignored_entry(path: str) -> bool:
    """Return whether an entry is a hidden file or a platform artifact.

    Hidden files (``.DS_Store``, ``.gitkeep``) and ``Thumbs.db`` are left out
    of the extension-based heuristics.
    """
    name: str = PurePosixPath(path).name
    return name.startswith(".") or name in IGNORED_BASENAMES


def entry_extensions(entries: Iterable[str]) -> set[str]:
    """Return the lower-cased extensions of the non-ignored entries (``""`` when absent)."""
    return {
        normalize_extension(PurePosixPath(path).suffix)
        for path in entries
        if not is_ignored_entry(path)
    }


def entries_contain_extensions(
    container: Container,
    required: Iterable[str],
    allowed: Iterable[str] = (),
) -> bool:
    """Return whether the container's entries fit an extension profile.

    After ignored entries are filtered out, every extension must belong to
    ``required`` or ``allowed``, and at least one entry must have a
    ``required`` extension.

    Args:
        container (Container): The container to inspect.
        required (Iterable[str]): Extensions of which at least one must be present.
        allowed (Iterable[str]): Additional extensions that are tolerated.

    Returns:
        bool: True if the entries match the profile.
    """
    required_set: set[str] = {normalize_extension(e) for e in required}
    accepted: set[str] = required_set | {normalize_extension(e) for e in allowed}
    found: set[str] = entry_extensions(container.entries)
    if not found:
        return False
    if not found <= accepted:
        logger.trace(
            "%s: unexpected extension(s) %s", container.source, sorted(found - accepted)
        )
        return False
    return bool(found & required_set)
