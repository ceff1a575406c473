# topmark:header:start
#
#   project      : FormatSniff
#   file         : asset.py
#   file_relpath : src/formatsniff/asset.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Sniffing assets on disk or behind a resource.

`AssetSniffer` drives the whole resolution for one asset: it derives hints
from the file name, sniffs the content, and when the content turns out to
be a ZIP archive, opens it as a container to classify its entries. A
directory is sniffed as an exploded container.

The result, `SniffedAsset`, carries the resolved format, the opened
container (if any) and, for DRM-protected publications, the per-entry
encryption descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from formatsniff import api
from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.config.model import Config
from formatsniff.container.directory import DirectoryContainer
from formatsniff.container.zip import ZipContainer
from formatsniff.encryption import parse_container_encryption
from formatsniff.format.hints import FormatHints
from formatsniff.format.specification import Specification
from formatsniff.resource.base import FileResource
from formatsniff.resource.blob import SnifferBlob
from formatsniff.resource.errors import ArchiveError
from formatsniff.sniffers.default import DefaultFormatSniffer

if TYPE_CHECKING:
    from os import PathLike
    from types import TracebackType

    from formatsniff.container.base import Container
    from formatsniff.encryption import Encryption
    from formatsniff.format.format import Format
    from formatsniff.format.media_type import MediaType
    from formatsniff.resource.base import Resource
    from formatsniff.sniffers.base import FormatSniffer

logger: SniffLogger = get_logger(__name__)


@dataclass
class SniffedAsset:
    """Outcome of sniffing one asset.

    The container, when present, is owned by the caller: close it (or use the
    asset as a context manager) when done.

    Attributes:
        format (Format): Resolved format.
        container (Container | None): Opened container for archive-like assets.
        encryptions (dict[str, Encryption]): Per-entry encryption, keyed by entry
            path; filled for LCP- or Adept-protected publications.
    """

    format: Format
    container: Container | None = None
    encryptions: dict[str, Encryption] = field(default_factory=lambda: {})

    @property
    def is_protected(self) -> bool:
        """Whether the publication is protected by a DRM."""
        return self.format.conforms_to_any(Specification.LCP, Specification.ADEPT)

    def close(self) -> None:
        if self.container is not None:
            self.container.close()

    def __enter__(self) -> SniffedAsset:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class AssetSniffer:
    """Resolve the format of files, directories and resources.

    Args:
        sniffer (FormatSniffer | None): Resolver to use; defaults to a
            `DefaultFormatSniffer` honoring ``config.disable``.
        config (Config | None): Runtime configuration (defaults when omitted).
    """

    def __init__(self, sniffer: FormatSniffer | None = None, config: Config | None = None) -> None:
        self.config: Config = config if config is not None else Config()
        self.sniffer: FormatSniffer = (
            sniffer if sniffer is not None else DefaultFormatSniffer(disabled=self.config.disable)
        )

    def sniff_path(
        self,
        path: str | PathLike[str],
        media_type: MediaType | str | None = None,
    ) -> SniffedAsset | None:
        """Sniff a file or a directory.

        Raises:
            ReadError: If the file cannot be read (including when it does not exist).
        """
        p: Path = Path(path)
        hints: FormatHints = FormatHints.from_path(p, media_type=media_type)
        if p.is_dir():
            logger.debug("Sniffing directory %s", p)
            return self.sniff_container(DirectoryContainer(p), hints)
        return self.sniff_resource(FileResource(p), hints)

    def sniff_resource(
        self, resource: Resource, hints: FormatHints | None = None
    ) -> SniffedAsset | None:
        """Sniff a resource, opening it as a ZIP container when it is one.

        Raises:
            ReadError: If the resource cannot be read.
        """
        blob: SnifferBlob = SnifferBlob(
            resource,
            encoding=(hints.encoding if hints is not None else None) or self.config.encoding,
        )
        found: Format | None = api.resolve(hints, blob=blob, sniffer=self.sniffer)
        if found is None:
            logger.debug("%s: no format found", resource.source)
            return None

        if not (self.config.open_archives and found.conforms_to(Specification.ZIP)):
            return SniffedAsset(found)

        try:
            container: ZipContainer = (
                ZipContainer(resource.path)
                if isinstance(resource, FileResource)
                else ZipContainer(resource)
            )
        except ArchiveError as exc:
            logger.warning("%s: cannot open as ZIP archive: %s", resource.source, exc)
            return SniffedAsset(found)

        try:
            return self.sniff_container(container, hints, refining=found)
        except BaseException:
            container.close()
            raise

    def sniff_container(
        self,
        container: Container,
        hints: FormatHints | None = None,
        refining: Format | None = None,
    ) -> SniffedAsset | None:
        """Sniff the entries of a container.

        Raises:
            ReadError: If an entry cannot be read.
        """
        found: Format | None = api.resolve(
            hints, container=container, refining=refining, sniffer=self.sniffer
        )
        if found is None:
            logger.debug("%s: no format found", container.source)
            return None

        asset: SniffedAsset = SniffedAsset(found, container)
        if asset.is_protected:
            asset.encryptions = parse_container_encryption(container, found)
            logger.debug(
                "%s: %d encrypted entr(y/ies)", container.source, len(asset.encryptions)
            )
        return asset
