# topmark:header:start
#
#   project      : FormatSniff
#   file         : encryption.py
#   file_relpath : src/formatsniff/encryption.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-resource encryption descriptors.

An `Encryption` describes how one resource of a publication is protected. It
is not part of a [`Format`][formatsniff.format.format.Format]; it is
produced while classifying EPUB and Readium packages, to tag protected
entries and to recognize the DRM scheme at the container level.

Sources:
    * EPUB: ``META-INF/encryption.xml`` (XML Encryption, with the IDPF
      compression extension), parsed by `parse_encryption_xml`.
    * Readium packages: the ``properties.encrypted`` object of manifest links,
      parsed by `Encryption.from_json`.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final
from urllib.parse import unquote

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.constants import LCP_SCHEME
from formatsniff.format.specification import Specification

if TYPE_CHECKING:
    from formatsniff.container.base import Container
    from formatsniff.format.format import Format
    from formatsniff.resource.base import Resource

logger: SniffLogger = get_logger(__name__)

NS_ENC: Final[str] = "http://www.w3.org/2001/04/xmlenc#"
NS_DS: Final[str] = "http://www.w3.org/2000/09/xmldsig#"
NS_COMP: Final[str] = "http://www.idpf.org/2016/encryption#compression"
NS_ADEPT: Final[str] = "http://ns.adobe.com/adept"

NAMESPACES: Final[dict[str, str]] = {
    "enc": NS_ENC,
    "ds": NS_DS,
    "comp": NS_COMP,
    "adept": NS_ADEPT,
}

LCP_KEY_RETRIEVAL_URI: Final[str] = "license.lcpl#/encryption/content_key"


@dataclass(frozen=True)
class Encryption:
    """How a single resource is encrypted.

    Attributes:
        algorithm (str): URI of the encryption algorithm.
        compression (str | None): ``"deflate"`` or ``"none"`` when the resource was
            compressed before encryption.
        original_length (int | None): Length of the resource before compression.
        scheme (str | None): URI of the DRM scheme (e.g. the LCP scheme).
        profile (str | None): URI of the DRM profile.
    """

    algorithm: str
    compression: str | None = None
    original_length: int | None = None
    scheme: str | None = None
    profile: str | None = None

    @classmethod
    def from_json(cls, obj: Any) -> Encryption | None:
        """Parse an RWPM ``encrypted`` properties object.

        Returns:
            Encryption | None: None when ``obj`` is not an object with an ``algorithm``.
        """
        if not isinstance(obj, dict):
            return None
        algorithm: Any = obj.get("algorithm")
        if not isinstance(algorithm, str) or not algorithm:
            return None
        original_length: Any = obj.get("originalLength", obj.get("original-length"))
        return cls(
            algorithm=algorithm,
            compression=_opt_str(obj.get("compression")),
            original_length=original_length if isinstance(original_length, int) else None,
            scheme=_opt_str(obj.get("scheme")),
            profile=_opt_str(obj.get("profile")),
        )

    @property
    def is_lcp(self) -> bool:
        """Whether the resource is protected with LCP."""
        return self.scheme == LCP_SCHEME


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def normalize_href(href: str) -> str:
    """Normalize an entry reference to a container-relative path."""
    return unquote(href).lstrip("/")


def has_lcp_retrieval_method(root: ET.Element) -> bool:
    """Return whether ``encryption.xml`` references a key held by an LCP license."""
    for method in root.iterfind(".//ds:KeyInfo/ds:RetrievalMethod", NAMESPACES):
        if method.get("URI") == LCP_KEY_RETRIEVAL_URI:
            return True
    return False


def has_adept_resource(root: ET.Element) -> bool:
    """Return whether ``encryption.xml`` carries an Adobe Adept ``resource`` marker."""
    return root.find(".//adept:resource", NAMESPACES) is not None


def parse_encryption_xml(root: ET.Element) -> dict[str, Encryption]:
    """Map each encrypted entry path to its `Encryption`.

    ``EncryptedData`` elements lacking an algorithm or a cipher reference are
    skipped.

    Args:
        root (ET.Element): Root element of ``META-INF/encryption.xml``.

    Returns:
        dict[str, Encryption]: Encryptions keyed by container-relative path.
    """
    encryptions: dict[str, Encryption] = {}

    for data in root.iterfind(".//enc:EncryptedData", NAMESPACES):
        method: ET.Element | None = data.find("enc:EncryptionMethod", NAMESPACES)
        reference: ET.Element | None = data.find("enc:CipherData/enc:CipherReference", NAMESPACES)
        algorithm: str | None = method.get("Algorithm") if method is not None else None
        uri: str | None = reference.get("URI") if reference is not None else None
        if not algorithm or not uri:
            continue

        scheme: str | None = None
        retrieval: ET.Element | None = data.find("ds:KeyInfo/ds:RetrievalMethod", NAMESPACES)
        if retrieval is not None and retrieval.get("URI") == LCP_KEY_RETRIEVAL_URI:
            scheme = LCP_SCHEME

        compression: str | None = None
        original_length: int | None = None
        for prop in data.iterfind("enc:EncryptionProperties/enc:EncryptionProperty", NAMESPACES):
            comp: ET.Element | None = prop.find("comp:Compression", NAMESPACES)
            if comp is None:
                continue
            method_attr: str | None = comp.get("Method")
            length_attr: str | None = comp.get("OriginalLength")
            if method_attr is None or length_attr is None:
                continue
            try:
                original_length = int(length_attr)
            except ValueError:
                original_length = None
            compression = "deflate" if method_attr == "8" else "none"
            break

        encryptions[normalize_href(uri)] = Encryption(
            algorithm=algorithm,
            compression=compression,
            original_length=original_length,
            scheme=scheme,
        )

    logger.debug("Parsed %d encrypted resource(s) from encryption.xml", len(encryptions))
    return encryptions


LICENSE_ENTRY: Final[str] = "META-INF/license.lcpl"
ENCRYPTION_ENTRY: Final[str] = "META-INF/encryption.xml"
MANIFEST_ENTRY: Final[str] = "manifest.json"


def _read_xml_entry(container: Container, path: str) -> ET.Element | None:
    resource: Resource | None = container.get(path)
    if resource is None:
        return None
    data: bytes = resource.read()
    try:
        return ET.fromstring(data)
    except (ET.ParseError, ValueError) as exc:
        logger.debug("%s is not well-formed XML: %s", resource.source, exc)
        return None


def detect_epub_drm(container: Container) -> Specification | None:
    """Return the DRM specification protecting an EPUB container, if any.

    A ``META-INF/license.lcpl`` entry means LCP. Otherwise
    ``META-INF/encryption.xml`` is inspected for an LCP key retrieval method
    or an Adobe Adept marker.

    Raises:
        ReadError: If ``encryption.xml`` cannot be read.
    """
    if LICENSE_ENTRY in container.entries:
        return Specification.LCP
    root: ET.Element | None = _read_xml_entry(container, ENCRYPTION_ENTRY)
    if root is None:
        return None
    if has_lcp_retrieval_method(root):
        return Specification.LCP
    if has_adept_resource(root):
        return Specification.ADEPT
    return None


def _manifest_link_encryptions(obj: Any) -> dict[str, Encryption]:
    encryptions: dict[str, Encryption] = {}
    if not isinstance(obj, dict):
        return encryptions
    for key in ("readingOrder", "spine", "resources"):
        links: Any = obj.get(key)
        if not isinstance(links, list):
            continue
        for link in links:
            if not isinstance(link, dict) or not isinstance(link.get("href"), str):
                continue
            properties: Any = link.get("properties")
            if not isinstance(properties, dict):
                continue
            encryption: Encryption | None = Encryption.from_json(properties.get("encrypted"))
            if encryption is not None:
                encryptions[normalize_href(link["href"])] = encryption
    return encryptions


def parse_container_encryption(container: Container, format: Format) -> dict[str, Encryption]:
    """Collect the per-entry encryptions declared by a publication package.

    EPUB packages declare them in ``META-INF/encryption.xml``; Readium
    packages in the ``properties.encrypted`` of their manifest links.

    Returns:
        dict[str, Encryption]: Encryptions keyed by entry path (empty for other formats).

    Raises:
        ReadError: If the declaring entry cannot be read.
    """
    if format.conforms_to(Specification.EPUB):
        root: ET.Element | None = _read_xml_entry(container, ENCRYPTION_ENTRY)
        return parse_encryption_xml(root) if root is not None else {}

    if format.conforms_to(Specification.RPF):
        resource: Resource | None = container.get(MANIFEST_ENTRY)
        if resource is None:
            return {}
        try:
            obj: Any = json.loads(resource.read().decode("utf-8-sig"))
        except ValueError as exc:
            logger.debug("%s is not valid JSON: %s", resource.source, exc)
            return {}
        return _manifest_link_encryptions(obj)

    return {}
