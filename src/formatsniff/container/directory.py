# topmark:header:start
#
#   project      : FormatSniff
#   file         : directory.py
#   file_relpath : src/formatsniff/container/directory.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exploded directories as containers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.container.base import ContainerBase, normalize_entry_path
from formatsniff.resource.base import FileResource
from formatsniff.resource.errors import from_os_error

if TYPE_CHECKING:
    from os import PathLike

logger: SniffLogger = get_logger(__name__)


class DirectoryContainer(ContainerBase):
    """Container over the files below a directory.

    Entries are listed once, on first access. Symbolic links to files are
    listed; links pointing outside the directory are not followed.

    Raises:
        ReadError: If the directory cannot be listed.
    """

    def __init__(self, root: str | PathLike[str]) -> None:
        self.root: Path = Path(root)
        self._entries: frozenset[str] | None = None

    @property
    def source(self) -> str:
        return str(self.root)

    @property
    def entries(self) -> frozenset[str]:
        if self._entries is None:
            self._entries = self._scan()
        return self._entries

    def _scan(self) -> frozenset[str]:
        if not self.root.is_dir():
            raise from_os_error(
                NotADirectoryError(f"Not a directory: {self.root}"), source=self.source
            )
        resolved_root: Path = self.root.resolve()
        found: set[str] = set()
        try:
            for path in self.root.rglob("*"):
                if not path.is_file():
                    continue
                if not path.resolve().is_relative_to(resolved_root):
                    logger.debug("Skipping %s (outside %s)", path, self.root)
                    continue
                found.add(path.relative_to(self.root).as_posix())
        except OSError as exc:
            raise from_os_error(exc, source=self.source) from exc
        logger.debug("Listed %s (%d entries)", self.root, len(found))
        return frozenset(found)

    def get(self, path: str) -> FileResource | None:
        rel: str = normalize_entry_path(path)
        if rel not in self.entries:
            return None
        return FileResource(self.root / rel)

    def __repr__(self) -> str:
        return f"DirectoryContainer({str(self.root)!r})"
