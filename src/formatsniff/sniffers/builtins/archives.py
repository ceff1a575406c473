# topmark:header:start
#
#   project      : FormatSniff
#   file         : archives.py
#   file_relpath : src/formatsniff/sniffers/builtins/archives.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Archive signature detectors: ZIP and RAR.

Both only look at content when nothing is known yet, and read only the few
bytes their magic-number table needs. A `ZipContainer` is a ZIP archive by
construction.
Exports:
    SNIFFERS: `ZipSniffer` and `RarSniffer`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.container.zip import ZipContainer
from formatsniff.format import format as fmt
from formatsniff.sniffers.base import FormatSniffer

if TYPE_CHECKING:
    from formatsniff.container.base import Container
    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.resource.blob import SnifferBlob

logger: SniffLogger = get_logger(__name__)

# Local file header, empty archive, spanned archive.
ZIP_SIGNATURES: Final[tuple[bytes, ...]] = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")

# RAR 1.5 to 4.x, then RAR 5.
RAR_SIGNATURES: Final[tuple[bytes, ...]] = (b"Rar!\x1a\x07\x00", b"Rar!\x1a\x07\x01\x00")


class ZipSniffer(FormatSniffer):
    """Plain ZIP archives."""

    name = "zip"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("zip") or hints.has_media_type("application/zip"):
            return fmt.ZIP
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        if refining is not None and refining.has_specification:
            return None
        if blob.read(0, 4) in ZIP_SIGNATURES:
            return fmt.ZIP
        return None

    def sniff_container(
        self, container: Container, refining: Format | None = None
    ) -> Format | None:
        if refining is not None and refining.has_specification:
            return None
        if isinstance(container, ZipContainer):
            return fmt.ZIP
        return None


class RarSniffer(FormatSniffer):
    """RAR archives (legacy and v5)."""

    name = "rar"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("rar") or hints.has_media_type(
            "application/vnd.rar", "application/x-rar", "application/x-rar-compressed"
        ):
            return fmt.RAR
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        if refining is not None and refining.has_specification:
            return None
        head: bytes = blob.read(0, 8)
        if any(head.startswith(sig) for sig in RAR_SIGNATURES):
            return fmt.RAR
        return None


SNIFFERS: list[FormatSniffer] = [ZipSniffer(), RarSniffer()]
