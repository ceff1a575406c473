# topmark:header:start
#
#   project      : FormatSniff
#   file         : data.py
#   file_relpath : src/formatsniff/sniffers/builtins/data.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Structured-data detectors: JSON and the JSON documents layered on it.

Refinements of bare JSON each impose their own shape check on the parsed
object: required keys for LCP licenses, manifest deserialization for RWPM,
a JSON-LD context for W3C publication manifests. A shape mismatch is a
silent non-match.

Exports:
    SNIFFERS: `JsonSniffer`, `LcpLicenseSniffer`, `RwpmSniffer` and
        `W3cPubManifestSniffer`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.format import format as fmt
from formatsniff.format import media_type as mt
from formatsniff.format.specification import Specification
from formatsniff.manifest import Profile
from formatsniff.sniffers.base import FormatSniffer, promote, refining_only

if TYPE_CHECKING:
    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.manifest import Link, Manifest
    from formatsniff.resource.blob import SnifferBlob

logger: SniffLogger = get_logger(__name__)

LCP_LICENSE_KEYS: Final[frozenset[str]] = frozenset({"id", "issued", "provider", "encryption"})

WPUB_CONTEXT: Final[str] = "https://www.w3.org/ns/wp-context"


def may_be_json(refining: Format | None) -> bool:
    """Return whether a JSON-layered detector should look at the content."""
    return (
        refining is None
        or not refining.has_specification
        or refining.conforms_to(Specification.JSON)
    )


def json_object(blob: SnifferBlob) -> dict[str, Any] | None:
    """Return the content parsed as a JSON object (not an array), or None."""
    obj: Any = blob.read_as_json()
    return obj if isinstance(obj, dict) else None


class JsonSniffer(FormatSniffer):
    """Any JSON object or array, and RFC 7807 problem details by media type."""

    name = "json"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_media_type(mt.PROBLEM_DETAILS):
            return fmt.JSON_PROBLEM_DETAILS
        if hints.has_file_extension("json") or hints.has_media_type(mt.JSON):
            return fmt.JSON
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        if refining is not None and refining.has_specification:
            return None
        if blob.read_as_json() is None:
            return None
        return fmt.JSON


class LcpLicenseSniffer(FormatSniffer):
    """Readium LCP license documents."""

    name = "lcp-license"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_file_extension("lcpl") or hints.has_media_type(mt.LCP_LICENSE_DOCUMENT):
            return fmt.LCP_LICENSE
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        if not may_be_json(refining):
            return None
        obj: dict[str, Any] | None = json_object(blob)
        if obj is None or not LCP_LICENSE_KEYS <= obj.keys():
            return None
        return refining_only(promote(refining, fmt.LCP_LICENSE), refining)


class RwpmSniffer(FormatSniffer):
    """Readium Web Publication Manifests (audiobook, Divina, generic webpub)."""

    name = "rwpm"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        if hints.has_media_type(mt.READIUM_AUDIOBOOK_MANIFEST):
            return fmt.RWPM_AUDIOBOOK
        if hints.has_media_type(mt.DIVINA_MANIFEST):
            return fmt.RWPM_DIVINA
        if hints.has_media_type(mt.READIUM_WEBPUB_MANIFEST):
            return fmt.RWPM_WEBPUB
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        if not may_be_json(refining):
            return None
        manifest: Manifest | None = blob.read_as_rwpm()
        if manifest is None:
            return None

        target: Format | None = None
        if manifest.conforms_to(Profile.AUDIOBOOK):
            target = fmt.RWPM_AUDIOBOOK
        elif manifest.conforms_to(Profile.DIVINA):
            target = fmt.RWPM_DIVINA
        else:
            self_link: Link | None = manifest.link_with_rel("self")
            if self_link is not None and mt.READIUM_WEBPUB_MANIFEST.matches(self_link.type):
                target = fmt.RWPM_WEBPUB

        if target is None:
            return None
        return refining_only(promote(refining, target), refining)


class W3cPubManifestSniffer(FormatSniffer):
    """W3C Publication Manifests, recognized by their JSON-LD context."""

    name = "w3c-pub-manifest"

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        if not may_be_json(refining):
            return None
        obj: dict[str, Any] | None = json_object(blob)
        if obj is None:
            return None
        context: Any = obj.get("@context")
        contexts: list[Any] = context if isinstance(context, list) else [context]
        if WPUB_CONTEXT not in contexts:
            return None
        return refining_only(promote(refining, fmt.W3C_WPUB_MANIFEST), refining)


SNIFFERS: list[FormatSniffer] = [
    JsonSniffer(),
    LcpLicenseSniffer(),
    RwpmSniffer(),
    W3cPubManifestSniffer(),
]
