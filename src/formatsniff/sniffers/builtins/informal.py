# topmark:header:start
#
#   project      : FormatSniff
#   file         : informal.py
#   file_relpath : src/formatsniff/sniffers/builtins/informal.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detectors for informally structured archives: comic book archives and
audiobook packages.

Neither format has a manifest; both are recognized from the extensions of
their entries, after hidden files and platform artifacts are filtered out.
A container of unknown format is classified as the ZIP-based variant.

Exports:
    SNIFFERS: `AudiobookSniffer` and `ComicSniffer`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.container.base import entries_contain_extensions
from formatsniff.format import format as fmt
from formatsniff.format import media_type as mt
from formatsniff.format.specification import Specification
from formatsniff.sniffers.base import FormatSniffer, promote, refining_only, within

if TYPE_CHECKING:
    from formatsniff.container.base import Container
    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints

logger: SniffLogger = get_logger(__name__)


def is_archive(refining: Format | None, archive: Specification) -> bool:
    """Return whether ``refining`` is known to be a bare ``archive``, nothing more.

    Only RAR archives need it: a container of unknown format is taken for a
    ZIP package (see `within`).
    """
    return refining is not None and refining.specification_set == {archive}


BITMAP_EXTENSIONS: Final[frozenset[str]] = frozenset(
    "bmp dib gif jif jfi jfif jpg jpeg png tif tiff webp avif jxl".split()
)

# ComicRack metadata, plus the usual text sidecars.
COMIC_EXTRA_EXTENSIONS: Final[frozenset[str]] = frozenset({"acbf", "txt", "xml"})

AUDIO_EXTENSIONS: Final[frozenset[str]] = frozenset(
    "aac aiff alac flac m4a m4b mp3 ogg oga mogg opus wav webm".split()
)

PLAYLIST_EXTENSIONS: Final[frozenset[str]] = frozenset(
    "asx bio m3u m3u8 pla pls smil txt vlc wpl xspf zpl".split()
)


class AudiobookSniffer(FormatSniffer):
    """ZIP archives of audio files (ZAB)."""

    name = "audiobook"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("zab") or hints.has_media_type(mt.ZAB):
            return fmt.ZAB
        return None

    def sniff_container(
        self, container: Container, refining: Format | None = None
    ) -> Format | None:
        if not within(refining, Specification.ZIP):
            return None
        if not entries_contain_extensions(container, AUDIO_EXTENSIONS, PLAYLIST_EXTENSIONS):
            return None
        return refining_only(promote(refining, fmt.ZAB), refining)


class ComicSniffer(FormatSniffer):
    """ZIP (CBZ) or RAR (CBR) archives of bitmap images."""

    name = "comic"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("cbz") or hints.has_media_type(
            mt.CBZ, "application/x-cbz"
        ):
            return fmt.CBZ
        if hints.has_file_extension("cbr") or hints.has_media_type(
            mt.CBR, "application/x-cbr"
        ):
            return fmt.CBR
        return None

    def sniff_container(
        self, container: Container, refining: Format | None = None
    ) -> Format | None:
        target: Format
        if within(refining, Specification.ZIP):
            target = fmt.CBZ
        elif is_archive(refining, Specification.RAR):
            target = fmt.CBR
        else:
            return None
        if not entries_contain_extensions(container, BITMAP_EXTENSIONS, COMIC_EXTRA_EXTENSIONS):
            return None
        return refining_only(promote(refining, target), refining)


SNIFFERS: list[FormatSniffer] = [AudiobookSniffer(), ComicSniffer()]
