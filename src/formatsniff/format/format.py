# topmark:header:start
#
#   project      : FormatSniff
#   file         : format.py
#   file_relpath : src/formatsniff/format/format.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolved format of an asset.

A `Format` is the immutable result of resolution: an ordered, duplicate-free
set of [`Specification`][formatsniff.format.specification.Specification] tags
plus the canonical media type and file extension of the most specific one.

Formats are never mutated. Detectors build a new one with `Format.refined`,
which appends specifications and overwrites the media type and extension.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from formatsniff.format import media_type as mt
from formatsniff.format.specification import Specification

if TYPE_CHECKING:
    from collections.abc import Iterable

    from formatsniff.format.media_type import MediaType


@dataclass(frozen=True, eq=False)
class Format:
    """Resolved classification of an asset.

    Attributes:
        specifications (tuple[Specification, ...]): Conformance tags, outer container
            first, most specific last. Membership (not order) is what consumers
            rely on; equality and hashing ignore the order.
        media_type (MediaType): Canonical media type of the most specific specification.
        file_extension (str): Canonical file extension, lower-case and without a dot.
    """

    specifications: tuple[Specification, ...]
    media_type: MediaType
    file_extension: str

    @classmethod
    def of(
        cls,
        *specifications: Specification,
        media_type: MediaType,
        file_extension: str,
    ) -> Format:
        """Build a format from specifications, dropping duplicates."""
        return cls(
            specifications=_dedupe(specifications),
            media_type=media_type,
            file_extension=file_extension.lower().lstrip("."),
        )

    @property
    def specification_set(self) -> frozenset[Specification]:
        """Specifications as an unordered set."""
        return frozenset(self.specifications)

    @property
    def has_specification(self) -> bool:
        """Whether at least one specification is known."""
        return bool(self.specifications)

    def conforms_to(self, specification: Specification) -> bool:
        """Return whether this format conforms to ``specification``."""
        return specification in self.specifications

    def conforms_to_any(self, *specifications: Specification) -> bool:
        """Return whether this format conforms to any of ``specifications``."""
        return any(s in self.specifications for s in specifications)

    def conforms_to_all(self, *specifications: Specification) -> bool:
        """Return whether this format conforms to all of ``specifications``."""
        return all(s in self.specifications for s in specifications)

    def refines(self, other: Format | None) -> bool:
        """Return whether this format strictly extends ``other``'s specifications.

        Any format with at least one specification refines the absent format.
        """
        if other is None:
            return self.has_specification
        return self.specification_set > other.specification_set

    def refined(
        self,
        *specifications: Specification,
        media_type: MediaType,
        file_extension: str,
    ) -> Format:
        """Return a new format with ``specifications`` appended.

        The media type and extension are overwritten, never merged.
        """
        return Format.of(
            *self.specifications,
            *specifications,
            media_type=media_type,
            file_extension=file_extension,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict."""
        return {
            "media_type": str(self.media_type),
            "file_extension": self.file_extension,
            "specifications": [s.value for s in self.specifications],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Format):
            return NotImplemented
        return (
            self.specification_set == other.specification_set
            and self.media_type == other.media_type
            and self.file_extension == other.file_extension
        )

    def __hash__(self) -> int:
        return hash((self.specification_set, self.media_type, self.file_extension))

    def __repr__(self) -> str:
        specs: str = ", ".join(s.value for s in self.specifications)
        return f"Format({{{specs}}}, {self.media_type}, {self.file_extension!r})"


def _dedupe(specifications: Iterable[Specification]) -> tuple[Specification, ...]:
    seen: set[Specification] = set()
    out: list[Specification] = []
    for spec in specifications:
        if spec not in seen:
            seen.add(spec)
            out.append(spec)
    return tuple(out)


S = Specification

# Well-known formats

AAC: Final[Format] = Format.of(S.AAC, media_type=mt.AAC, file_extension="aac")
AIFF: Final[Format] = Format.of(S.AIFF, media_type=mt.AIFF, file_extension="aiff")
AVIF: Final[Format] = Format.of(S.AVIF, media_type=mt.AVIF, file_extension="avif")
BMP: Final[Format] = Format.of(S.BMP, media_type=mt.BMP, file_extension="bmp")
CBR: Final[Format] = Format.of(
    S.RAR, S.INFORMAL_COMIC, media_type=mt.CBR, file_extension="cbr"
)
CBZ: Final[Format] = Format.of(
    S.ZIP, S.INFORMAL_COMIC, media_type=mt.CBZ, file_extension="cbz"
)
CSS: Final[Format] = Format.of(S.CSS, media_type=mt.CSS, file_extension="css")
EPUB: Final[Format] = Format.of(S.ZIP, S.EPUB, media_type=mt.EPUB, file_extension="epub")
FLAC: Final[Format] = Format.of(S.FLAC, media_type=mt.FLAC, file_extension="flac")
GIF: Final[Format] = Format.of(S.GIF, media_type=mt.GIF, file_extension="gif")
HTML: Final[Format] = Format.of(S.HTML, media_type=mt.HTML, file_extension="html")
JAVASCRIPT: Final[Format] = Format.of(
    S.JAVASCRIPT, media_type=mt.JAVASCRIPT, file_extension="js"
)
JPEG: Final[Format] = Format.of(S.JPEG, media_type=mt.JPEG, file_extension="jpg")
JSON: Final[Format] = Format.of(S.JSON, media_type=mt.JSON, file_extension="json")
JSON_PROBLEM_DETAILS: Final[Format] = Format.of(
    S.JSON, S.PROBLEM_DETAILS, media_type=mt.PROBLEM_DETAILS, file_extension="json"
)
JXL: Final[Format] = Format.of(S.JXL, media_type=mt.JXL, file_extension="jxl")
LCP_LICENSE: Final[Format] = Format.of(
    S.JSON, S.LCP_LICENSE, media_type=mt.LCP_LICENSE_DOCUMENT, file_extension="lcpl"
)
LCPA: Final[Format] = Format.of(
    S.ZIP, S.RPF, S.LCP, media_type=mt.LCP_PROTECTED_AUDIOBOOK, file_extension="lcpa"
)
LCPDF: Final[Format] = Format.of(
    S.ZIP, S.RPF, S.LCP, media_type=mt.LCP_PROTECTED_PDF, file_extension="lcpdf"
)
LPF: Final[Format] = Format.of(S.ZIP, S.LPF, media_type=mt.LPF, file_extension="lpf")
MP3: Final[Format] = Format.of(S.MP3, media_type=mt.MP3, file_extension="mp3")
MP4: Final[Format] = Format.of(S.MP4, media_type=mt.MP4, file_extension="m4a")
OGG: Final[Format] = Format.of(S.OGG, media_type=mt.OGG, file_extension="oga")
OPUS: Final[Format] = Format.of(S.OPUS, media_type=mt.OPUS, file_extension="opus")
OPDS1_CATALOG: Final[Format] = Format.of(
    S.XML, S.OPDS1_CATALOG, media_type=mt.OPDS1, file_extension="xml"
)
OPDS1_ENTRY: Final[Format] = Format.of(
    S.XML, S.OPDS1_ENTRY, media_type=mt.OPDS1_ENTRY, file_extension="xml"
)
OPDS2_CATALOG: Final[Format] = Format.of(
    S.JSON, S.OPDS2_CATALOG, media_type=mt.OPDS2, file_extension="json"
)
OPDS2_PUBLICATION: Final[Format] = Format.of(
    S.JSON, S.OPDS2_PUBLICATION, media_type=mt.OPDS2_PUBLICATION, file_extension="json"
)
OPDS_AUTHENTICATION: Final[Format] = Format.of(
    S.JSON, S.OPDS_AUTHENTICATION, media_type=mt.OPDS_AUTHENTICATION, file_extension="json"
)
PDF: Final[Format] = Format.of(S.PDF, media_type=mt.PDF, file_extension="pdf")
PNG: Final[Format] = Format.of(S.PNG, media_type=mt.PNG, file_extension="png")
RAR: Final[Format] = Format.of(S.RAR, media_type=mt.RAR, file_extension="rar")
RPF_AUDIOBOOK: Final[Format] = Format.of(
    S.ZIP, S.RPF, media_type=mt.READIUM_AUDIOBOOK, file_extension="audiobook"
)
RPF_DIVINA: Final[Format] = Format.of(
    S.ZIP, S.RPF, media_type=mt.DIVINA, file_extension="divina"
)
RPF_WEBPUB: Final[Format] = Format.of(
    S.ZIP, S.RPF, media_type=mt.READIUM_WEBPUB, file_extension="webpub"
)
RWPM_AUDIOBOOK: Final[Format] = Format.of(
    S.JSON, S.RWPM, media_type=mt.READIUM_AUDIOBOOK_MANIFEST, file_extension="json"
)
RWPM_DIVINA: Final[Format] = Format.of(
    S.JSON, S.RWPM, media_type=mt.DIVINA_MANIFEST, file_extension="json"
)
RWPM_WEBPUB: Final[Format] = Format.of(
    S.JSON, S.RWPM, media_type=mt.READIUM_WEBPUB_MANIFEST, file_extension="json"
)
TIFF: Final[Format] = Format.of(S.TIFF, media_type=mt.TIFF, file_extension="tiff")
W3C_WPUB_MANIFEST: Final[Format] = Format.of(
    S.JSON, S.W3C_PUB_MANIFEST, media_type=mt.W3C_WPUB_MANIFEST, file_extension="json"
)
WAV: Final[Format] = Format.of(S.WAV, media_type=mt.WAV, file_extension="wav")
WEBM_AUDIO: Final[Format] = Format.of(S.WEBM, media_type=mt.WEBM_AUDIO, file_extension="webm")
WEBP: Final[Format] = Format.of(S.WEBP, media_type=mt.WEBP, file_extension="webp")
XHTML: Final[Format] = Format.of(S.XML, S.HTML, media_type=mt.XHTML, file_extension="xhtml")
XML: Final[Format] = Format.of(S.XML, media_type=mt.XML, file_extension="xml")
ZAB: Final[Format] = Format.of(
    S.ZIP, S.INFORMAL_AUDIOBOOK, media_type=mt.ZAB, file_extension="zab"
)
ZIP: Final[Format] = Format.of(S.ZIP, media_type=mt.ZIP, file_extension="zip")
