# topmark:header:start
#
#   project      : FormatSniff
#   file         : publications.py
#   file_relpath : src/formatsniff/sniffers/builtins/publications.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Publication package detectors: Readium packages (RPF), EPUB and W3C LPF.

These classify ZIP-like containers from their entries: a ``manifest.json``
for RPF, a ``mimetype`` entry for EPUB, an ``index.html`` or
``publication.json`` for LPF. They only look at containers not yet known to
be anything but a ZIP archive. A container of unknown format (an exploded
directory, entries held in memory) is taken for a ZIP package, so every
family yields its packaged format, ZIP layer included.

Exports:
    SNIFFERS: `RpfSniffer`, `EpubSniffer` and `LpfSniffer`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.constants import LCP_SCHEME
from formatsniff.encryption import MANIFEST_ENTRY, detect_epub_drm
from formatsniff.format import format as fmt
from formatsniff.format import media_type as mt
from formatsniff.format.specification import Specification
from formatsniff.manifest import Profile
from formatsniff.sniffers.base import FormatSniffer, entry_blob, promote, refining_only, within

if TYPE_CHECKING:
    from formatsniff.container.base import Container
    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.manifest import Manifest
    from formatsniff.resource.blob import SnifferBlob

logger: SniffLogger = get_logger(__name__)

LPF_PUB_CONTEXT: Final[str] = "https://www.w3.org/ns/pub-context"


def with_lcp(format: Format) -> Format:
    """Tag ``format`` as LCP-protected, keeping its media type and extension."""
    return format.refined(
        Specification.LCP, media_type=format.media_type, file_extension=format.file_extension
    )


class RpfSniffer(FormatSniffer):
    """Readium packages, classified from their embedded manifest.

    One structural shape yields six formats: audiobook, Divina and generic
    webpub packages, each possibly LCP-protected (LCP-protected audiobooks
    and PDFs have their own media types).
    """

    name = "rpf"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("audiobook") or hints.has_media_type(mt.READIUM_AUDIOBOOK):
            return fmt.RPF_AUDIOBOOK
        if hints.has_file_extension("divina") or hints.has_media_type(mt.DIVINA):
            return fmt.RPF_DIVINA
        if hints.has_file_extension("webpub") or hints.has_media_type(mt.READIUM_WEBPUB):
            return fmt.RPF_WEBPUB
        if hints.has_file_extension("lcpa") or hints.has_media_type(mt.LCP_PROTECTED_AUDIOBOOK):
            return fmt.LCPA
        if hints.has_file_extension("lcpdf") or hints.has_media_type(mt.LCP_PROTECTED_PDF):
            return fmt.LCPDF
        return None

    def sniff_container(
        self, container: Container, refining: Format | None = None
    ) -> Format | None:
        if not within(refining, Specification.ZIP, Specification.RPF):
            return None
        blob: SnifferBlob | None = entry_blob(container, MANIFEST_ENTRY)
        if blob is None:
            return None
        manifest: Manifest | None = blob.read_as_rwpm()
        if manifest is None:
            return None

        is_lcp: bool = any(
            link.encryption is not None and link.encryption.scheme == LCP_SCHEME
            for link in manifest.reading_order
        )
        logger.trace("%s: embedded manifest found (lcp=%s)", container.source, is_lcp)

        target: Format
        if manifest.conforms_to(Profile.AUDIOBOOK):
            target = fmt.LCPA if is_lcp else fmt.RPF_AUDIOBOOK
        elif manifest.conforms_to(Profile.DIVINA):
            target = with_lcp(fmt.RPF_DIVINA) if is_lcp else fmt.RPF_DIVINA
        elif is_lcp and manifest.conforms_to(Profile.PDF):
            target = fmt.LCPDF
        else:
            target = with_lcp(fmt.RPF_WEBPUB) if is_lcp else fmt.RPF_WEBPUB
        return refining_only(promote(refining, target), refining)


class EpubSniffer(FormatSniffer):
    """EPUB packages, with LCP or Adobe Adept protection detection."""

    name = "epub"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("epub") or hints.has_media_type(mt.EPUB):
            return fmt.EPUB
        return None

    def sniff_container(
        self, container: Container, refining: Format | None = None
    ) -> Format | None:
        if not within(refining, Specification.ZIP, Specification.EPUB):
            return None
        blob: SnifferBlob | None = entry_blob(container, "mimetype")
        if blob is None:
            return None
        text: str | None = blob.read_as_string()
        if text is None or text.strip() != str(mt.EPUB):
            return None

        target: Format = promote(refining, fmt.EPUB)
        drm: Specification | None = detect_epub_drm(container)
        if drm is not None:
            logger.debug("%s: EPUB protected with %s", container.source, drm.value)
            target = target.refined(drm, media_type=mt.EPUB, file_extension="epub")
        return refining_only(target, refining)


class LpfSniffer(FormatSniffer):
    """W3C Lightweight Packaging Format (LPF) packages."""

    name = "lpf"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("lpf") or hints.has_media_type(mt.LPF):
            return fmt.LPF
        return None

    def sniff_container(
        self, container: Container, refining: Format | None = None
    ) -> Format | None:
        if not within(refining, Specification.ZIP):
            return None
        if "index.html" in container.entries or self._has_publication_manifest(container):
            return refining_only(promote(refining, fmt.LPF), refining)
        return None

    def _has_publication_manifest(self, container: Container) -> bool:
        blob: SnifferBlob | None = entry_blob(container, "publication.json")
        if blob is None:
            return False
        obj: Any = blob.read_as_json()
        if not isinstance(obj, dict):
            return False
        context: Any = obj.get("@context")
        contexts: list[Any] = context if isinstance(context, list) else [context]
        return LPF_PUB_CONTEXT in contexts


SNIFFERS: list[FormatSniffer] = [RpfSniffer(), EpubSniffer(), LpfSniffer()]
