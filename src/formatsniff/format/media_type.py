# topmark:header:start
#
#   project      : FormatSniff
#   file         : media_type.py
#   file_relpath : src/formatsniff/format/media_type.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RFC 6838 media types.

`MediaType` parses and compares media types such as
``application/epub+zip`` or ``application/atom+xml;profile=opds-catalog``.

Comparing media types is more involved than string equality: type and subtype
are case-insensitive, parameter order is irrelevant, and some formats rely on
parameters (OPDS 1 uses ``profile=opds-catalog``) while others only carry
noise such as ``charset``. The rules are:

* `MediaType.contains` is true when the other media type has the same type
  and subtype (``*`` wildcards allowed) and carries at least this media
  type's parameters. ``text/html`` contains ``text/html;charset=utf-8``.
* `MediaType.matches` is `contains` in either direction.

The structured syntax suffix (``+zip``, ``+json``) is exposed separately so
that detectors can opt into family-wide matching explicitly.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True)
class MediaType:
    """Parsed, normalized media type.

    Attributes:
        type (str): Top-level type, lower-cased (``application``).
        subtype (str): Subtype, lower-cased (``epub+zip``).
        parameters (tuple[tuple[str, str], ...]): Sorted ``(name, value)`` pairs.
            Names are lower-cased; the ``charset`` value is upper-cased.
    """

    type: str
    subtype: str
    parameters: tuple[tuple[str, str], ...] = field(default=())

    @classmethod
    def parse(cls, text: str | None) -> MediaType | None:
        """Parse a media type string.

        Args:
            text (str | None): Raw media type, e.g. ``"Text/HTML; charset=utf-8"``.

        Returns:
            MediaType | None: The parsed media type, or ``None`` when ``text`` is
            empty or not of the ``type/subtype`` shape.
        """
        if not text:
            return None

        components: list[str] = [c.strip() for c in text.split(";")]
        types: list[str] = components[0].split("/")
        if len(types) != 2 or not types[0] or not types[1]:
            return None

        params: dict[str, str] = {}
        for raw in components[1:]:
            parts: list[str] = raw.split("=")
            if len(parts) != 2:
                continue
            name: str = parts[0].strip().lower()
            value: str = parts[1].strip().strip('"')
            if name == "charset":
                value = value.upper()
            params[name] = value

        return cls(
            type=types[0].strip().lower(),
            subtype=types[1].strip().lower(),
            parameters=tuple(sorted(params.items())),
        )

    @classmethod
    def of(cls, text: str) -> MediaType:
        """Parse a media type known to be valid.

        Raises:
            ValueError: If ``text`` is not a valid media type.
        """
        media_type: MediaType | None = cls.parse(text)
        if media_type is None:
            raise ValueError(f"Invalid media type: {text!r}")
        return media_type

    @property
    def params(self) -> Mapping[str, str]:
        """Parameters as a mapping."""
        return dict(self.parameters)

    @property
    def structured_syntax_suffix(self) -> str | None:
        """Structured syntax suffix, e.g. ``+zip`` in ``application/epub+zip``."""
        parts: list[str] = [p for p in self.subtype.split("+") if p]
        return f"+{parts[-1]}" if len(parts) > 1 else None

    @property
    def encoding(self) -> str | None:
        """Python codec name declared by the ``charset`` parameter, if known."""
        charset: str | None = self.params.get("charset")
        if charset is None:
            return None
        try:
            return codecs.lookup(charset).name
        except LookupError:
            return None

    def without_parameters(self) -> MediaType:
        """Return this media type stripped of all parameters."""
        return MediaType(self.type, self.subtype)

    def contains(self, other: MediaType | str | None) -> bool:
        """Return whether ``other`` is included in this media type.

        ``other`` must carry this media type's parameters; extra parameters
        are ignored. Wildcards are supported (``image/*`` contains ``image/png``).
        """
        if isinstance(other, str):
            other = MediaType.parse(other)
        if other is None:
            return False
        if self.type not in ("*", other.type):
            return False
        if self.subtype not in ("*", other.subtype):
            return False
        return set(self.parameters) <= set(other.parameters)

    def matches(self, other: MediaType | str | None) -> bool:
        """Return whether both media types are the same, ignoring non-shared parameters."""
        if isinstance(other, str):
            other = MediaType.parse(other)
        if other is None:
            return False
        return self.contains(other) or other.contains(self)

    def matches_any(self, others: Iterable[MediaType | str]) -> bool:
        """Return whether this media type matches any of ``others``."""
        return any(self.matches(o) for o in others)

    @property
    def is_zip(self) -> bool:
        """Whether this media type is structured as a ZIP archive."""
        return (
            self.matches_any((ZIP, LCP_PROTECTED_AUDIOBOOK, LCP_PROTECTED_PDF))
            or self.structured_syntax_suffix == "+zip"
        )

    @property
    def is_json(self) -> bool:
        """Whether this media type is structured as JSON."""
        return self.matches(JSON) or self.structured_syntax_suffix == "+json"

    @property
    def is_html(self) -> bool:
        """Whether this media type is of an HTML document."""
        return self.matches_any((HTML, XHTML))

    @property
    def is_bitmap(self) -> bool:
        """Whether this media type is of a bitmap image (excluding vector formats)."""
        return self.matches_any(BITMAPS)

    @property
    def is_audio(self) -> bool:
        """Whether this media type is of an audio clip."""
        return self.type == "audio"

    @property
    def is_video(self) -> bool:
        """Whether this media type is of a video clip."""
        return self.type == "video"

    def __str__(self) -> str:
        params: str = "".join(f";{k}={v}" for k, v in self.parameters)
        return f"{self.type}/{self.subtype}{params}"


# Well-known media types

AAC: Final[MediaType] = MediaType.of("audio/aac")
ACSM: Final[MediaType] = MediaType.of("application/vnd.adobe.adept+xml")
AIFF: Final[MediaType] = MediaType.of("audio/aiff")
AVIF: Final[MediaType] = MediaType.of("image/avif")
BMP: Final[MediaType] = MediaType.of("image/bmp")
CBR: Final[MediaType] = MediaType.of("application/vnd.comicbook-rar")
CBZ: Final[MediaType] = MediaType.of("application/vnd.comicbook+zip")
CSS: Final[MediaType] = MediaType.of("text/css")
DIVINA: Final[MediaType] = MediaType.of("application/divina+zip")
DIVINA_MANIFEST: Final[MediaType] = MediaType.of("application/divina+json")
EPUB: Final[MediaType] = MediaType.of("application/epub+zip")
FLAC: Final[MediaType] = MediaType.of("audio/flac")
GIF: Final[MediaType] = MediaType.of("image/gif")
HTML: Final[MediaType] = MediaType.of("text/html")
JAVASCRIPT: Final[MediaType] = MediaType.of("text/javascript")
JPEG: Final[MediaType] = MediaType.of("image/jpeg")
JSON: Final[MediaType] = MediaType.of("application/json")
JXL: Final[MediaType] = MediaType.of("image/jxl")
LCP_LICENSE_DOCUMENT: Final[MediaType] = MediaType.of(
    "application/vnd.readium.lcp.license.v1.0+json"
)
LCP_PROTECTED_AUDIOBOOK: Final[MediaType] = MediaType.of("application/audiobook+lcp")
LCP_PROTECTED_PDF: Final[MediaType] = MediaType.of("application/pdf+lcp")
LPF: Final[MediaType] = MediaType.of("application/lpf+zip")
MP3: Final[MediaType] = MediaType.of("audio/mpeg")
MP4: Final[MediaType] = MediaType.of("audio/mp4")
OGG: Final[MediaType] = MediaType.of("audio/ogg")
OPUS: Final[MediaType] = MediaType.of("audio/opus")
OPDS1: Final[MediaType] = MediaType.of("application/atom+xml;profile=opds-catalog")
OPDS1_ENTRY: Final[MediaType] = MediaType.of(
    "application/atom+xml;type=entry;profile=opds-catalog"
)
OPDS2: Final[MediaType] = MediaType.of("application/opds+json")
OPDS2_PUBLICATION: Final[MediaType] = MediaType.of("application/opds-publication+json")
OPDS_AUTHENTICATION: Final[MediaType] = MediaType.of("application/opds-authentication+json")
PDF: Final[MediaType] = MediaType.of("application/pdf")
PNG: Final[MediaType] = MediaType.of("image/png")
PROBLEM_DETAILS: Final[MediaType] = MediaType.of("application/problem+json")
RAR: Final[MediaType] = MediaType.of("application/vnd.rar")
READIUM_AUDIOBOOK: Final[MediaType] = MediaType.of("application/audiobook+zip")
READIUM_AUDIOBOOK_MANIFEST: Final[MediaType] = MediaType.of("application/audiobook+json")
READIUM_WEBPUB: Final[MediaType] = MediaType.of("application/webpub+zip")
READIUM_WEBPUB_MANIFEST: Final[MediaType] = MediaType.of("application/webpub+json")
TIFF: Final[MediaType] = MediaType.of("image/tiff")
W3C_WPUB_MANIFEST: Final[MediaType] = MediaType.of("application/x.readium.w3c.wpub+json")
WAV: Final[MediaType] = MediaType.of("audio/wav")
WEBM_AUDIO: Final[MediaType] = MediaType.of("audio/webm")
WEBP: Final[MediaType] = MediaType.of("image/webp")
XHTML: Final[MediaType] = MediaType.of("application/xhtml+xml")
XML: Final[MediaType] = MediaType.of("application/xml")
ZAB: Final[MediaType] = MediaType.of("application/x.readium.zab+zip")
ZIP: Final[MediaType] = MediaType.of("application/zip")

BITMAPS: Final[tuple[MediaType, ...]] = (AVIF, BMP, GIF, JPEG, JXL, PNG, TIFF, WEBP)
