# topmark:header:start
#
#   project      : FormatSniff
#   file         : opds.py
#   file_relpath : src/formatsniff/sniffers/builtins/opds.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""OPDS detectors: OPDS 1 (Atom) feeds and entries, OPDS 2 feeds and publications,
and OPDS authentication documents.

Exports:
    SNIFFERS: `OpdsSniffer`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.format import format as fmt
from formatsniff.format import media_type as mt
from formatsniff.format.specification import Specification
from formatsniff.sniffers.base import FormatSniffer, promote, refining_only
from formatsniff.sniffers.builtins.data import json_object, may_be_json

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.manifest import Link, Manifest
    from formatsniff.resource.blob import SnifferBlob

logger: SniffLogger = get_logger(__name__)

NS_ATOM: Final[str] = "http://www.w3.org/2005/Atom"

ACQUISITION_REL_PREFIX: Final[str] = "http://opds-spec.org/acquisition"

AUTHENTICATION_KEYS: Final[frozenset[str]] = frozenset({"id", "title", "authentication"})

AUTHENTICATION_MEDIA_TYPES: Final[tuple[str, ...]] = (
    str(mt.OPDS_AUTHENTICATION),
    "application/vnd.opds.authentication.v1.0+json",
)


class OpdsSniffer(FormatSniffer):
    """OPDS catalogs, publications and authentication documents."""

    name = "opds"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        # The entry media type also carries the catalog profile: test it first.
        if hints.has_media_type(mt.OPDS1_ENTRY):
            return fmt.OPDS1_ENTRY
        if hints.has_media_type(mt.OPDS1):
            return fmt.OPDS1_CATALOG
        if hints.has_media_type(mt.OPDS2):
            return fmt.OPDS2_CATALOG
        if hints.has_media_type(mt.OPDS2_PUBLICATION):
            return fmt.OPDS2_PUBLICATION
        if hints.has_media_type(*AUTHENTICATION_MEDIA_TYPES):
            return fmt.OPDS_AUTHENTICATION
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        target: Format | None = None
        if refining is None or not refining.has_specification or refining.conforms_to(
            Specification.XML
        ):
            target = self._sniff_xml(blob)
        if target is None and may_be_json(refining):
            target = self._sniff_json(blob)
        if target is None:
            return None
        return refining_only(promote(refining, target), refining)

    def _sniff_xml(self, blob: SnifferBlob) -> Format | None:
        root: ET.Element | None = blob.read_as_xml()
        if root is None:
            return None
        if root.tag == f"{{{NS_ATOM}}}feed":
            return fmt.OPDS1_CATALOG
        if root.tag == f"{{{NS_ATOM}}}entry":
            return fmt.OPDS1_ENTRY
        return None

    def _sniff_json(self, blob: SnifferBlob) -> Format | None:
        manifest: Manifest | None = blob.read_as_rwpm()
        if manifest is not None:
            self_link: Link | None = manifest.link_with_rel("self")
            if self_link is not None and mt.OPDS2.matches(self_link.type):
                return fmt.OPDS2_CATALOG
            if (
                manifest.link_with_rel_matching(lambda rel: rel.startswith(ACQUISITION_REL_PREFIX))
                is not None
            ):
                return fmt.OPDS2_PUBLICATION

        obj: dict[str, Any] | None = json_object(blob)
        if obj is not None and AUTHENTICATION_KEYS <= obj.keys():
            return fmt.OPDS_AUTHENTICATION
        return None


SNIFFERS: list[FormatSniffer] = [OpdsSniffer()]
