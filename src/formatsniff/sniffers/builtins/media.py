# topmark:header:start
#
#   project      : FormatSniff
#   file         : media.py
#   file_relpath : src/formatsniff/sniffers/builtins/media.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Terminal detectors for standalone media: PDF, audio, bitmap images, and
web languages (JavaScript, CSS).

Content checks compare the first bytes of the asset against magic-number
tables and only run when nothing else is known about the asset.

Exports:
    SNIFFERS: `PdfSniffer`, `AudioSniffer`, `BitmapSniffer` and `LanguageSniffer`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Final

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.format import format as fmt
from formatsniff.format import media_type as mt
from formatsniff.sniffers.base import FormatSniffer

if TYPE_CHECKING:
    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.resource.blob import SnifferBlob

logger: SniffLogger = get_logger(__name__)

# Enough for every signature below (the Ogg codec id sits at offset 28).
HEAD_SIZE: Final[int] = 36

Signature = Callable[[bytes], bool]

HintRule = tuple[tuple[str, ...], tuple[str, ...], "Format"]


def _mpeg_audio_frame(head: bytes) -> bool:
    # 11-bit frame sync, then a non-reserved layer.
    if len(head) < 2 or head[0] != 0xFF:
        return False
    return (head[1] & 0xE0) == 0xE0 and (head[1] & 0x06) != 0


def _adts_frame(head: bytes) -> bool:
    # 12-bit sync word, layer always 0.
    return len(head) >= 2 and head[0] == 0xFF and (head[1] & 0xF6) == 0xF0


def _ogg_opus(head: bytes) -> bool:
    return head.startswith(b"OggS") and head[28:36] == b"OpusHead"


AUDIO_SIGNATURES: Final[tuple[tuple[Signature, Format], ...]] = (
    (lambda h: h.startswith(b"ID3"), fmt.MP3),
    (_adts_frame, fmt.AAC),
    (_mpeg_audio_frame, fmt.MP3),
    (lambda h: h.startswith(b"fLaC"), fmt.FLAC),
    (_ogg_opus, fmt.OPUS),
    (lambda h: h.startswith(b"OggS"), fmt.OGG),
    (lambda h: h[:4] == b"RIFF" and h[8:12] == b"WAVE", fmt.WAV),
    (lambda h: h[:4] == b"FORM" and h[8:12] in (b"AIFF", b"AIFC"), fmt.AIFF),
    (lambda h: h[4:8] == b"ftyp" and h[8:12] in (b"M4A ", b"M4B ", b"M4P "), fmt.MP4),
)

BITMAP_SIGNATURES: Final[tuple[tuple[Signature, Format], ...]] = (
    (lambda h: h.startswith(b"\x89PNG\r\n\x1a\n"), fmt.PNG),
    (lambda h: h.startswith(b"\xff\xd8\xff"), fmt.JPEG),
    (lambda h: h[:6] in (b"GIF87a", b"GIF89a"), fmt.GIF),
    (lambda h: h[:4] == b"RIFF" and h[8:12] == b"WEBP", fmt.WEBP),
    (lambda h: h[4:12] in (b"ftypavif", b"ftypavis"), fmt.AVIF),
    (lambda h: h.startswith((b"\xff\x0a", b"\x00\x00\x00\x0cJXL \r\n\x87\n")), fmt.JXL),
    (lambda h: h[:4] in (b"II*\x00", b"MM\x00*"), fmt.TIFF),
    (lambda h: h.startswith(b"BM"), fmt.BMP),
)

AUDIO_HINTS: Final[tuple[HintRule, ...]] = (
    (("aac",), (str(mt.AAC),), fmt.AAC),
    (("aif", "aiff", "aifc"), (str(mt.AIFF), "audio/x-aiff"), fmt.AIFF),
    (("flac",), (str(mt.FLAC),), fmt.FLAC),
    (("m4a", "m4b", "mp4", "alac"), (str(mt.MP4),), fmt.MP4),
    (("mp3",), (str(mt.MP3),), fmt.MP3),
    (("ogg", "oga"), (str(mt.OGG),), fmt.OGG),
    (("opus",), (str(mt.OPUS),), fmt.OPUS),
    (("wav",), (str(mt.WAV), "audio/x-wav"), fmt.WAV),
    (("webm",), (str(mt.WEBM_AUDIO),), fmt.WEBM_AUDIO),
)

BITMAP_HINTS: Final[tuple[HintRule, ...]] = (
    (("avif",), (str(mt.AVIF),), fmt.AVIF),
    (("bmp", "dib"), (str(mt.BMP), "image/x-bmp"), fmt.BMP),
    (("gif",), (str(mt.GIF),), fmt.GIF),
    (("jpg", "jpeg", "jpe", "jif", "jfif", "jfi"), (str(mt.JPEG),), fmt.JPEG),
    (("jxl",), (str(mt.JXL),), fmt.JXL),
    (("png",), (str(mt.PNG),), fmt.PNG),
    (("tif", "tiff"), (str(mt.TIFF), "image/tiff-fx"), fmt.TIFF),
    (("webp",), (str(mt.WEBP),), fmt.WEBP),
)

LANGUAGE_HINTS: Final[tuple[HintRule, ...]] = (
    (("js",), (str(mt.JAVASCRIPT), "application/javascript"), fmt.JAVASCRIPT),
    (("css",), (str(mt.CSS),), fmt.CSS),
)


def match_hints(hints: FormatHints, rules: tuple[HintRule, ...]) -> Format | None:
    """Return the format of the first rule whose extensions or media types are hinted."""
    for extensions, media_types, target in rules:
        if hints.has_file_extension(*extensions) or hints.has_media_type(*media_types):
            return target
    return None


def match_signatures(
    blob: SnifferBlob,
    refining: Format | None,
    signatures: tuple[tuple[Signature, Format], ...],
) -> Format | None:
    """Return the format of the first signature found at the start of the content."""
    if refining is not None and refining.has_specification:
        return None
    head: bytes = blob.read(0, HEAD_SIZE)
    for signature, target in signatures:
        if signature(head):
            logger.trace("%s: %s signature", blob.source, target.file_extension)
            return target
    return None


class PdfSniffer(FormatSniffer):
    """PDF documents."""

    name = "pdf"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("pdf") or hints.has_media_type(mt.PDF):
            return fmt.PDF
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        if refining is not None and refining.has_specification:
            return None
        if blob.read(0, 5) == b"%PDF-":
            return fmt.PDF
        return None


class AudioSniffer(FormatSniffer):
    """Audio clips."""

    name = "audio"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        return match_hints(hints, AUDIO_HINTS)

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        return match_signatures(blob, refining, AUDIO_SIGNATURES)


class BitmapSniffer(FormatSniffer):
    """Bitmap images (vector formats are not covered)."""

    name = "bitmap"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        return match_hints(hints, BITMAP_HINTS)

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        return match_signatures(blob, refining, BITMAP_SIGNATURES)


class LanguageSniffer(FormatSniffer):
    """JavaScript and CSS, from hints only."""

    name = "language"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        return match_hints(hints, LANGUAGE_HINTS)


SNIFFERS: list[FormatSniffer] = [
    PdfSniffer(),
    AudioSniffer(),
    BitmapSniffer(),
    LanguageSniffer(),
]
