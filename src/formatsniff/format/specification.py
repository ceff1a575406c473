# topmark:header:start
#
#   project      : FormatSniff
#   file         : specification.py
#   file_relpath : src/formatsniff/format/specification.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Conformance tags for resolved formats.

A `Specification` names one structural layer an asset conforms to, e.g. "is a
ZIP archive", "is an EPUB" or "is protected with LCP". A
[`Format`][formatsniff.format.format.Format] holds an ordered set of them: outer
container first, most specific classification last.
"""

from __future__ import annotations

from enum import Enum


class Specification(str, Enum):
    """Opaque conformance tag satisfied by an asset.

    The value is the stable machine key used in logs and machine output.
    """

    # Archives
    RAR = "rar"
    ZIP = "zip"

    # Syntax
    JSON = "json"
    XML = "xml"

    # Publication manifests
    W3C_PUB_MANIFEST = "w3c-pub-manifest"
    RWPM = "rwpm"

    # Technical documents
    PROBLEM_DETAILS = "problem-details"

    # Media formats
    PDF = "pdf"
    HTML = "html"

    # DRM
    ADEPT = "adept"
    LCP = "lcp"
    LCP_LICENSE = "lcp-license"

    # Bitmaps
    AVIF = "avif"
    BMP = "bmp"
    GIF = "gif"
    JPEG = "jpeg"
    JXL = "jxl"
    PNG = "png"
    TIFF = "tiff"
    WEBP = "webp"

    # Audio
    AAC = "aac"
    AIFF = "aiff"
    FLAC = "flac"
    MP4 = "mp4"
    MP3 = "mp3"
    OGG = "ogg"
    OPUS = "opus"
    WAV = "wav"
    WEBM = "webm"

    # Publication packages
    EPUB = "epub"
    RPF = "rpf"
    LPF = "lpf"
    INFORMAL_AUDIOBOOK = "informal-audiobook"
    INFORMAL_COMIC = "informal-comic"

    # OPDS
    OPDS1_CATALOG = "opds1-catalog"
    OPDS1_ENTRY = "opds1-entry"
    OPDS2_CATALOG = "opds2-catalog"
    OPDS2_PUBLICATION = "opds2-publication"
    OPDS_AUTHENTICATION = "opds-authentication"

    # Languages
    JAVASCRIPT = "javascript"
    CSS = "css"

    def __str__(self) -> str:
        return self.value
