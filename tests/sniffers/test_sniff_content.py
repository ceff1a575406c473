# topmark:header:start
#
#   project      : FormatSniff
#   file         : test_sniff_content.py
#   file_relpath : tests/sniffers/test_sniff_content.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Content-based resolution: magic numbers, markup and JSON documents."""

from __future__ import annotations

import json
from typing import Any

from formatsniff.format import format as fmt
from formatsniff.format.format import Format
from formatsniff.resource.base import BytesResource
from formatsniff.resource.blob import SnifferBlob
from formatsniff.sniffers.default import DefaultFormatSniffer
from tests.conftest import parametrize
from tests.samples import (
    FLAC_HEAD,
    GIF_HEAD,
    HTML_DOC,
    JPEG_HEAD,
    LCP_LICENSE,
    MP3_HEAD,
    OPDS1_ENTRY,
    OPDS1_FEED,
    PDF_HEAD,
    PNG_HEAD,
    RAR5_HEAD,
    WAV_HEAD,
    XHTML_DOC,
    audiobook_manifest,
    divina_manifest,
    link,
    manifest,
    webpub_manifest,
    zip_bytes,
)


def _json(obj: Any) -> bytes:
    return json.dumps(obj).encode("utf-8")


def sniff(
    sniffer: DefaultFormatSniffer, data: bytes, refining: Format | None = None
) -> Format | None:
    return sniffer.sniff_blob(SnifferBlob(BytesResource(data)), refining)


@parametrize(
    ("data", "expected"),
    [
        (PDF_HEAD, fmt.PDF),
        (PNG_HEAD, fmt.PNG),
        (JPEG_HEAD, fmt.JPEG),
        (GIF_HEAD, fmt.GIF),
        (MP3_HEAD, fmt.MP3),
        (FLAC_HEAD, fmt.FLAC),
        (WAV_HEAD, fmt.WAV),
        (RAR5_HEAD, fmt.RAR),
        (zip_bytes({"a.txt": "a"}), fmt.ZIP),
    ],
    ids=["pdf", "png", "jpeg", "gif", "mp3", "flac", "wav", "rar", "zip"],
)
def test_magic_numbers(sniffer: DefaultFormatSniffer, data: bytes, expected: Format) -> None:
    assert sniff(sniffer, data) == expected


@parametrize(
    ("text", "expected"),
    [
        ("<root><child/></root>", fmt.XML),
        (XHTML_DOC, fmt.XHTML),
        (HTML_DOC, fmt.HTML),
        ("  <!doctype HTML><title>x</title><p>unclosed", fmt.HTML),
        (OPDS1_FEED, fmt.OPDS1_CATALOG),
        (OPDS1_ENTRY, fmt.OPDS1_ENTRY),
    ],
    ids=["xml", "xhtml", "html", "html-doctype-case", "opds1-feed", "opds1-entry"],
)
def test_markup(sniffer: DefaultFormatSniffer, text: str, expected: Format) -> None:
    assert sniff(sniffer, text.encode("utf-8")) == expected


@parametrize(
    ("doc", "expected"),
    [
        ({"title": "anything"}, fmt.JSON),
        ([1, 2, 3], fmt.JSON),
        (LCP_LICENSE, fmt.LCP_LICENSE),
        (audiobook_manifest(), fmt.RWPM_AUDIOBOOK),
        (divina_manifest(), fmt.RWPM_DIVINA),
        (webpub_manifest(), fmt.RWPM_WEBPUB),
        (
            manifest(links=[link("https://example.com/opds", "application/opds+json", rel="self")]),
            fmt.OPDS2_CATALOG,
        ),
        (
            manifest(
                links=[
                    link(
                        "https://example.com/book.epub",
                        "application/epub+zip",
                        rel="http://opds-spec.org/acquisition/open-access",
                    )
                ]
            ),
            fmt.OPDS2_PUBLICATION,
        ),
        (
            {"id": "https://example.com/auth", "title": "Login", "authentication": []},
            fmt.OPDS_AUTHENTICATION,
        ),
        (
            {"@context": ["https://schema.org", "https://www.w3.org/ns/wp-context"]},
            fmt.W3C_WPUB_MANIFEST,
        ),
        ({"@context": "https://www.w3.org/ns/pub-context"}, fmt.JSON),
        ({"id": "x", "issued": "2020", "provider": "p"}, fmt.JSON),
    ],
    ids=[
        "object",
        "array",
        "lcp-license",
        "rwpm-audiobook",
        "rwpm-divina",
        "rwpm-webpub",
        "opds2-catalog",
        "opds2-publication",
        "opds-authentication",
        "w3c-manifest",
        "lpf-context",
        "incomplete-license",
    ],
)
def test_json_documents(sniffer: DefaultFormatSniffer, doc: Any, expected: Format) -> None:
    assert sniff(sniffer, _json(doc)) == expected


@parametrize(
    "data",
    [b"", b"hello world", b"42", b'"just a string"', b"<unclosed", b"\x00\x01\x02\x03"],
)
def test_unrecognized_content(sniffer: DefaultFormatSniffer, data: bytes) -> None:
    assert sniff(sniffer, data) is None


def test_known_format_is_kept_when_content_adds_nothing(sniffer: DefaultFormatSniffer) -> None:
    """Blob detectors leave an already known format alone when the content adds nothing."""
    assert sniff(sniffer, PNG_HEAD, fmt.PDF) == fmt.PDF


def test_json_hint_is_refined_by_content(sniffer: DefaultFormatSniffer) -> None:
    assert sniff(sniffer, _json(LCP_LICENSE), fmt.JSON) == fmt.LCP_LICENSE


def test_xml_hint_is_refined_by_content(sniffer: DefaultFormatSniffer) -> None:
    assert sniff(sniffer, OPDS1_FEED.encode("utf-8"), fmt.XML) == fmt.OPDS1_CATALOG
