# topmark:header:start
#
#   project      : FormatSniff
#   file         : markup.py
#   file_relpath : src/formatsniff/sniffers/builtins/markup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Markup detectors: generic XML, HTML and XHTML.

Exports:
    SNIFFERS: `XmlSniffer` and `HtmlSniffer`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.format import format as fmt
from formatsniff.format.specification import Specification
from formatsniff.sniffers.base import FormatSniffer, promote, refining_only

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.resource.blob import SnifferBlob

logger: SniffLogger = get_logger(__name__)

NS_XHTML: Final[str] = "http://www.w3.org/1999/xhtml"

HTML_DOCTYPE: Final[str] = "<!doctype html>"


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on qualified tags."""
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


class XmlSniffer(FormatSniffer):
    """Well-formed XML documents."""

    name = "xml"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("xml") or hints.has_media_type(
            "application/xml", "text/xml"
        ):
            return fmt.XML
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        if refining is not None and refining.has_specification:
            return None
        if blob.read_as_xml() is None:
            return None
        return fmt.XML


class HtmlSniffer(FormatSniffer):
    """HTML documents, and XHTML documents when they are well-formed XML."""

    name = "html"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("htm", "html") or hints.has_media_type("text/html"):
            return fmt.HTML
        if hints.has_file_extension("xht", "xhtml") or hints.has_media_type(
            "application/xhtml+xml"
        ):
            return fmt.XHTML
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        unknown: bool = refining is None or not refining.has_specification

        if unknown or (refining is not None and refining.conforms_to(Specification.XML)):
            root: ET.Element | None = blob.read_as_xml()
            if root is not None and local_name(root.tag).lower() == "html":
                if root.find(f"{{{NS_XHTML}}}body") is not None:
                    return refining_only(promote(refining, fmt.XHTML), refining)
                return refining_only(promote(refining, fmt.HTML), refining)

        if unknown:
            text: str | None = blob.read_as_string()
            if text is not None and text.lstrip()[: len(HTML_DOCTYPE)].lower() == HTML_DOCTYPE:
                logger.trace("%s: HTML doctype found", blob.source)
                return fmt.HTML
        return None


SNIFFERS: list[FormatSniffer] = [XmlSniffer(), HtmlSniffer()]
