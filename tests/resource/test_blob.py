# topmark:header:start
#
#   project      : FormatSniff
#   file         : test_blob.py
#   file_relpath : tests/resource/test_blob.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `SnifferBlob` memoization and failure semantics."""

from __future__ import annotations

import json

import pytest

from formatsniff.manifest import Manifest
from formatsniff.resource.base import BytesResource
from formatsniff.resource.blob import XML_HEAD_LENGTH, SnifferBlob
from formatsniff.resource.errors import ResourceIOError
from tests.conftest import parametrize
from tests.samples import OPDS1_FEED, XHTML_DOC, audiobook_manifest, zip_bytes


class CountingResource:
    """Resource counting full and ranged reads."""

    def __init__(self, data: bytes) -> None:
        self.data: bytes = data
        self.reads: list[tuple[int | None, int | None]] = []

    @property
    def source(self) -> str:
        return "counting"

    def read(self, start: int | None = None, end: int | None = None) -> bytes:
        self.reads.append((start, end))
        return self.data[slice(start or 0, end)]

    def length(self) -> int:
        return len(self.data)


class FlakyResource(CountingResource):
    """Resource failing its first ``failures`` reads."""

    def __init__(self, data: bytes, failures: int) -> None:
        super().__init__(data)
        self.failures: int = failures

    def read(self, start: int | None = None, end: int | None = None) -> bytes:
        if self.failures:
            self.failures -= 1
            raise ResourceIOError("transient", source=self.source, start=start, end=end)
        return super().read(start, end)


def test_decoded_views_are_computed_once() -> None:
    resource: CountingResource = CountingResource(OPDS1_FEED.encode("utf-8"))
    blob: SnifferBlob = SnifferBlob(resource)

    first = blob.read_as_xml()
    second = blob.read_as_xml()
    text: str | None = blob.read_as_string()

    assert first is not None
    assert first is second
    assert text is not None and text.startswith("<?xml")
    assert resource.reads == [(0, XML_HEAD_LENGTH), (None, None)]


def test_ranged_reads_are_not_cached_until_full_content_is_held() -> None:
    resource: CountingResource = CountingResource(b"PK\x03\x04rest")
    blob: SnifferBlob = SnifferBlob(resource)

    assert blob.read(0, 4) == b"PK\x03\x04"
    assert blob.read(0, 4) == b"PK\x03\x04"
    assert resource.reads == [(0, 4), (0, 4)]

    blob.read_all()
    assert blob.read(4) == b"rest"
    assert len(resource.reads) == 3


def test_parse_failures_are_cached_as_none() -> None:
    resource: CountingResource = CountingResource(b"\xff\xfe not text, not xml")
    blob: SnifferBlob = SnifferBlob(resource)

    assert blob.read_as_string() is None
    assert blob.read_as_xml() is None
    assert blob.read_as_json() is None
    assert blob.read_as_rwpm() is None
    assert blob.read_as_json() is None
    assert len(resource.reads) == 1


def test_read_errors_propagate_and_are_not_cached() -> None:
    resource: FlakyResource = FlakyResource(b'{"a": 1}', failures=1)
    blob: SnifferBlob = SnifferBlob(resource)

    with pytest.raises(ResourceIOError):
        blob.read_as_json()
    assert blob.read_as_json() == {"a": 1}


def test_json_scalars_are_not_documents() -> None:
    assert SnifferBlob(BytesResource(b"42")).read_as_json() is None
    assert SnifferBlob(BytesResource(b"[1, 2]")).read_as_json() == [1, 2]


def test_utf8_bom_is_tolerated() -> None:
    blob: SnifferBlob = SnifferBlob(BytesResource(b'\xef\xbb\xbf{"id": "x"}'), encoding="utf-8")
    assert blob.read_as_string() == '{"id": "x"}'
    assert blob.read_as_json() == {"id": "x"}


def test_hinted_encoding_is_used() -> None:
    blob: SnifferBlob = SnifferBlob(BytesResource("café".encode("latin-1")), encoding="latin-1")
    assert blob.read_as_string() == "café"
    assert SnifferBlob(BytesResource("café".encode("latin-1"))).read_as_string() is None


def test_read_as_rwpm() -> None:
    blob: SnifferBlob = SnifferBlob(BytesResource(json.dumps(audiobook_manifest()).encode()))
    manifest: Manifest | None = blob.read_as_rwpm()
    assert manifest is not None
    assert len(manifest.reading_order) == 2
    assert blob.read_as_rwpm() is manifest


def test_binary_content_is_not_read_in_full_for_xml() -> None:
    data: bytes = zip_bytes({"a.txt": "a" * 4 * XML_HEAD_LENGTH})
    resource: CountingResource = CountingResource(data)
    blob: SnifferBlob = SnifferBlob(resource)

    assert blob.read_as_xml() is None
    assert blob.read_as_xml() is None
    assert resource.reads == [(0, XML_HEAD_LENGTH)]


@parametrize(
    "data",
    [
        XHTML_DOC.encode("utf-8"),
        b"\xef\xbb\xbf" + XHTML_DOC.encode("utf-8"),
        b"\n  \t<root/>",
        "<root>text</root>".encode("utf-16"),
        b" " * 2 * XML_HEAD_LENGTH + b"<root/>",
    ],
    ids=["plain", "utf8-bom", "leading-space", "utf16-bom", "long-whitespace"],
)
def test_xml_is_parsed_past_the_head(data: bytes) -> None:
    assert SnifferBlob(BytesResource(data)).read_as_xml() is not None
