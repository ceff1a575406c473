# topmark:header:start
#
#   project      : FormatSniff
#   file         : zip.py
#   file_relpath : src/formatsniff/container/zip.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ZIP archives as containers, backed by the standard `zipfile` module."""

from __future__ import annotations

import io
import zipfile
import zlib
from pathlib import Path
from typing import IO, TYPE_CHECKING

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.container.base import ContainerBase, normalize_entry_path
from formatsniff.resource.errors import ArchiveError, from_os_error

if TYPE_CHECKING:
    from os import PathLike

    from formatsniff.resource.base import Resource

logger: SniffLogger = get_logger(__name__)

# Failures zipfile raises on corrupt archives or entries.
_ZIP_ERRORS: tuple[type[Exception], ...] = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    EOFError,
    RuntimeError,
    NotImplementedError,
)


class ZipEntryResource:
    """A single entry of a `ZipContainer`."""

    def __init__(self, container: ZipContainer, info: zipfile.ZipInfo) -> None:
        self.container: ZipContainer = container
        self.info: zipfile.ZipInfo = info

    @property
    def source(self) -> str:
        return f"{self.container.source}!/{self.info.filename}"

    def length(self) -> int:
        return self.info.file_size

    def read(self, start: int | None = None, end: int | None = None) -> bytes:
        """Decompress ``[start, end)`` of the entry.

        Raises:
            ArchiveError: If the entry cannot be decompressed.
            ReadError: If the archive's storage cannot be read.
        """
        offset: int = start or 0
        logger.trace("Reading %s [%d..%s]", self.source, offset, "" if end is None else end)
        try:
            with self.container.archive.open(self.info) as fh:
                if offset:
                    fh.seek(offset)
                if end is None:
                    return fh.read()
                return fh.read(max(0, end - offset))
        except OSError as exc:
            raise from_os_error(exc, source=self.source, start=start, end=end) from exc
        except _ZIP_ERRORS as exc:
            raise ArchiveError(str(exc), source=self.source, start=start, end=end) from exc

    def __repr__(self) -> str:
        return f"ZipEntryResource({self.source!r})"


class ZipContainer(ContainerBase):
    """Container over a ZIP archive.

    The archive may be given as a file path, raw bytes, or any
    [`Resource`][formatsniff.resource.base.Resource] (read into memory).

    Raises:
        ArchiveError: If the content is not a readable ZIP archive.
        ReadError: If the underlying storage cannot be read.
    """

    def __init__(
        self,
        archive: str | PathLike[str] | bytes | Resource,
        *,
        source: str | None = None,
    ) -> None:
        fileobj: IO[bytes] | Path
        if isinstance(archive, bytes):
            fileobj = io.BytesIO(archive)
            self._source: str = source or "<zip>"
        elif isinstance(archive, (str, Path)) or hasattr(archive, "__fspath__"):
            fileobj = Path(archive)  # type: ignore[arg-type]
            self._source = source or str(fileobj)
        else:
            resource: Resource = archive  # type: ignore[assignment]
            self._source = source or resource.source
            fileobj = io.BytesIO(resource.read())

        try:
            self.archive: zipfile.ZipFile = zipfile.ZipFile(fileobj)
        except OSError as exc:
            raise from_os_error(exc, source=self._source) from exc
        except _ZIP_ERRORS as exc:
            raise ArchiveError(str(exc), source=self._source) from exc

        self._infos: dict[str, zipfile.ZipInfo] = {
            normalize_entry_path(info.filename): info
            for info in self.archive.infolist()
            if not info.is_dir()
        }
        logger.debug("Opened ZIP %s (%d entries)", self._source, len(self._infos))

    @property
    def source(self) -> str:
        return self._source

    @property
    def entries(self) -> frozenset[str]:
        return frozenset(self._infos)

    def get(self, path: str) -> ZipEntryResource | None:
        info: zipfile.ZipInfo | None = self._infos.get(normalize_entry_path(path))
        if info is None:
            return None
        return ZipEntryResource(self, info)

    def close(self) -> None:
        self.archive.close()

    def __repr__(self) -> str:
        return f"ZipContainer({self._source!r})"

