# topmark:header:start
#
#   project      : FormatSniff
#   file         : strategies_formatsniff.py
#   file_relpath : tests/strategies_formatsniff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating asset contents, hints and containers.

Contents mix well-formed samples (so detectors actually fire) with random
bytes and samples corrupted by truncation, which exercises the silent
non-match paths.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from hypothesis import strategies as st

from formatsniff.format import format as fmt
from formatsniff.format.format import Format
from formatsniff.format.hints import FormatHints
from tests.samples import (
    GIF_HEAD,
    HTML_DOC,
    JPEG_HEAD,
    LCP_LICENSE,
    MP3_HEAD,
    OPDS1_FEED,
    PDF_HEAD,
    PNG_HEAD,
    RAR5_HEAD,
    WAV_HEAD,
    XHTML_DOC,
    audiobook_manifest,
    divina_manifest,
    webpub_manifest,
    zip_bytes,
)

Draw = Callable[[st.SearchStrategy[Any]], Any]

SAMPLE_CONTENTS: tuple[bytes, ...] = (
    PDF_HEAD,
    PNG_HEAD,
    JPEG_HEAD,
    GIF_HEAD,
    MP3_HEAD,
    WAV_HEAD,
    RAR5_HEAD,
    XHTML_DOC.encode("utf-8"),
    HTML_DOC.encode("utf-8"),
    OPDS1_FEED.encode("utf-8"),
    json.dumps(LCP_LICENSE).encode("utf-8"),
    json.dumps(audiobook_manifest()).encode("utf-8"),
    json.dumps(divina_manifest()).encode("utf-8"),
    json.dumps(webpub_manifest()).encode("utf-8"),
    zip_bytes({"a.txt": "a"}),
)

# Formats a caller may already know before looking at the content.
KNOWN_FORMATS: tuple[Format | None, ...] = (
    None,
    fmt.ZIP,
    fmt.RAR,
    fmt.JSON,
    fmt.XML,
    fmt.HTML,
    fmt.PDF,
    fmt.EPUB,
    fmt.LCP_LICENSE,
)

EXTENSIONS: tuple[str, ...] = (
    "epub",
    "zip",
    "cbz",
    "json",
    "lcpl",
    "xml",
    "html",
    "pdf",
    "png",
    "mp3",
    "bin",
    "txt",
)

ENTRY_EXTENSIONS: tuple[str, ...] = ("jpg", "png", "mp3", "m3u", "xml", "txt", "html", "json")


@st.composite
def s_content(draw: Draw) -> bytes:
    """Sample content, possibly truncated, or random bytes."""
    kind: str = draw(st.sampled_from(("sample", "truncated", "random")))
    if kind == "random":
        return draw(st.binary(max_size=64))
    sample: bytes = draw(st.sampled_from(SAMPLE_CONTENTS))
    if kind == "truncated":
        return sample[: draw(st.integers(min_value=0, max_value=len(sample)))]
    return sample


def s_refining() -> st.SearchStrategy[Format | None]:
    """A format already known, or None."""
    return st.sampled_from(KNOWN_FORMATS)


def s_hints() -> st.SearchStrategy[FormatHints]:
    """Extension hints, possibly empty."""
    return st.builds(
        lambda exts: FormatHints.of(file_extensions=exts),
        st.lists(st.sampled_from(EXTENSIONS), max_size=2),
    )


@st.composite
def s_entries(draw: Draw) -> dict[str, bytes]:
    """Flat archive entries named after a small pool of extensions."""
    names: list[str] = draw(
        st.lists(
            st.builds(
                lambda stem, ext: f"{stem}.{ext}",
                st.from_regex(r"[a-z0-9]{1,8}", fullmatch=True),
                st.sampled_from(ENTRY_EXTENSIONS),
            ),
            max_size=6,
            unique=True,
        )
    )
    hidden: bool = draw(st.booleans())
    entries: dict[str, bytes] = {name: b"" for name in names}
    if hidden:
        entries[".DS_Store"] = b""
    return entries
