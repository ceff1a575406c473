# topmark:header:start
#
#   project      : FormatSniff
#   file         : blob.py
#   file_relpath : src/formatsniff/resource/blob.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Memoizing content accessor handed to detectors.

Several detectors in one resolution typically want the same decoded view of
the content: the XML, HTML and OPDS detectors all parse the same markup, and
the JSON family parses the same object. `SnifferBlob` computes each view at
most once per instance.

Caching contract:
    * `read` is never cached: detectors request the minimal range they need
      (4 bytes for a ZIP signature).
    * `read_as_string`, `read_as_xml`, `read_as_json` and `read_as_rwpm` are
      write-once fields. A parse failure is cached as ``None``: it is negative
      evidence, not an error.
    * A `ReadError` is never cached; it propagates to the caller.

Instances are meant for one resolution call and are not thread-safe.
"""

from __future__ import annotations

import codecs
import json
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any, Final

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.manifest import Manifest, ManifestError

if TYPE_CHECKING:
    from formatsniff.resource.base import Resource

logger: SniffLogger = get_logger(__name__)

_UNSET: Final[object] = object()

XML_HEAD_LENGTH: Final[int] = 1024

XML_BOMS: Final[tuple[tuple[bytes, str], ...]] = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def looks_like_xml(head: bytes) -> bool:
    """Return whether ``head`` may start an XML document.

    A document starts with ``<`` once a byte order mark and leading
    whitespace are skipped. A head made of whitespace only is inconclusive.
    """
    for bom, encoding in XML_BOMS:
        if head.startswith(bom):
            text: str = head[len(bom) :].decode(encoding, errors="ignore").lstrip()
            return not text or text.startswith("<")
    # UTF-16 without a byte order mark
    stripped: bytes = head.replace(b"\x00", b"").lstrip()
    return not stripped or stripped.startswith(b"<")


class SnifferBlob:
    """Lazy, memoizing view over a resource's bytes.

    Args:
        resource (Resource): The underlying byte-range readable content.
        encoding (str | None): Text encoding to use for decoded views, usually
            taken from a ``charset`` hint. Defaults to UTF-8 (BOM tolerated).
    """

    def __init__(self, resource: Resource, *, encoding: str | None = None) -> None:
        self.resource: Resource = resource
        self.encoding: str | None = encoding
        self._bytes: object = _UNSET
        self._string: object = _UNSET
        self._xml: object = _UNSET
        self._json: object = _UNSET
        self._rwpm: object = _UNSET

    @property
    def source(self) -> str:
        """Diagnostic name of the underlying resource."""
        return self.resource.source

    def read(self, start: int | None = None, end: int | None = None) -> bytes:
        """Read a byte range of the content.

        Raises:
            ReadError: If the resource cannot be read.
        """
        if self._bytes is not _UNSET:
            return self._bytes[slice(start or 0, end)]  # type: ignore[index]
        return self.resource.read(start, end)

    def read_all(self) -> bytes:
        """Read (and keep) the whole content, for views that need full parsing."""
        if self._bytes is _UNSET:
            self._bytes = self.resource.read()
        return self._bytes  # type: ignore[return-value]

    def read_as_string(self) -> str | None:
        """Return the content decoded as text, or None if it is not valid text."""
        if self._string is _UNSET:
            data: bytes = self.read_all()
            encoding: str = self.encoding or "utf-8-sig"
            if encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
                encoding = "utf-8-sig"
            try:
                self._string = data.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.trace("%s is not %s text", self.source, encoding)
                self._string = None
        return self._string  # type: ignore[return-value]

    def read_as_xml(self) -> ET.Element | None:
        """Return the root element of the content parsed as XML, or None.

        Only the head of the content is read when it cannot start a document.
        """
        if self._xml is _UNSET and not looks_like_xml(self.read(0, XML_HEAD_LENGTH)):
            logger.trace("%s does not start like XML", self.source)
            self._xml = None
        if self._xml is _UNSET:
            data: bytes = self.read_all()
            try:
                self._xml = ET.fromstring(data) if data.strip() else None
            except (ET.ParseError, ValueError) as exc:
                logger.trace("%s is not XML: %s", self.source, exc)
                self._xml = None
        return self._xml  # type: ignore[return-value]

    def read_as_json(self) -> Any | None:
        """Return the content parsed as a JSON object or array, or None."""
        if self._json is _UNSET:
            text: str | None = self.read_as_string()
            parsed: Any = None
            if text is not None:
                try:
                    parsed = json.loads(text)
                except ValueError as exc:
                    logger.trace("%s is not JSON: %s", self.source, exc)
            self._json = parsed if isinstance(parsed, (dict, list)) else None
        return self._json

    def read_as_rwpm(self) -> Manifest | None:
        """Return the content parsed as a Readium Web Publication Manifest, or None."""
        if self._rwpm is _UNSET:
            obj: Any | None = self.read_as_json()
            manifest: Manifest | None = None
            if isinstance(obj, dict):
                try:
                    manifest = Manifest.from_json(obj)
                except ManifestError as exc:
                    logger.trace("%s is not a RWPM: %s", self.source, exc)
            self._rwpm = manifest
        return self._rwpm  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"SnifferBlob({self.resource!r})"
