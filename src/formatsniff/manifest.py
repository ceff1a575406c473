# topmark:header:start
#
#   project      : FormatSniff
#   file         : manifest.py
#   file_relpath : src/formatsniff/manifest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Readium Web Publication Manifest (RWPM) model.

Only the parts of the manifest that format classification needs are
modeled: metadata (``title``, ``conformsTo``), ``links``, ``readingOrder``
(or its legacy ``spine`` alias) and ``resources``, with per-link encryption.

Parsing is lenient the way RWPM parsers are: links without ``href`` are
dropped, reading-order links without ``type`` are dropped. Only a missing
``metadata`` object or a missing ``title`` makes the document invalid.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.encryption import Encryption
from formatsniff.format import media_type as mt
from formatsniff.format.media_type import MediaType

logger: SniffLogger = get_logger(__name__)


class ManifestError(ValueError):
    """The JSON document is not a valid Readium Web Publication Manifest."""


class Profile(str, Enum):
    """Publication profiles a manifest can conform to."""

    AUDIOBOOK = "https://readium.org/webpub-manifest/profiles/audiobook"
    DIVINA = "https://readium.org/webpub-manifest/profiles/divina"
    EPUB = "https://readium.org/webpub-manifest/profiles/epub"
    PDF = "https://readium.org/webpub-manifest/profiles/pdf"

    def __str__(self) -> str:
        return self.value


def _str_list(value: Any) -> tuple[str, ...]:
    """Accept a string or a list of strings (RWPM allows both)."""
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(v for v in value if isinstance(v, str))
    return ()


@dataclass(frozen=True)
class Link:
    """A manifest link."""

    href: str
    type: MediaType | None = None
    rels: tuple[str, ...] = ()
    encryption: Encryption | None = None

    @classmethod
    def from_json(cls, obj: Any) -> Link | None:
        """Parse a link object, or return None when it has no ``href``."""
        if not isinstance(obj, dict):
            return None
        href: Any = obj.get("href")
        if not isinstance(href, str) or not href:
            return None
        type_: Any = obj.get("type")
        properties: Any = obj.get("properties")
        encrypted: Any = properties.get("encrypted") if isinstance(properties, dict) else None
        return cls(
            href=href,
            type=MediaType.parse(type_) if isinstance(type_, str) else None,
            rels=_str_list(obj.get("rel")),
            encryption=Encryption.from_json(encrypted),
        )

    @property
    def is_encrypted(self) -> bool:
        return self.encryption is not None


def _links(value: Any, *, require_type: bool = False) -> tuple[Link, ...]:
    if not isinstance(value, list):
        return ()
    links: list[Link] = []
    for item in value:
        link: Link | None = Link.from_json(item)
        if link is None:
            logger.trace("Dropping invalid link: %r", item)
            continue
        if require_type and link.type is None:
            logger.trace("Dropping reading order link without type: %s", link.href)
            continue
        links.append(link)
    return tuple(links)


@dataclass(frozen=True)
class Metadata:
    """Publication metadata relevant to classification."""

    title: str
    conforms_to: tuple[str, ...] = ()
    types: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, obj: Any) -> Metadata:
        """Parse a metadata object.

        Raises:
            ManifestError: If ``obj`` is not an object or has no title.
        """
        if not isinstance(obj, dict):
            raise ManifestError("manifest has no metadata object")
        title: Any = obj.get("title")
        if isinstance(title, dict):
            # Localized string: any translation will do.
            title = next((v for v in title.values() if isinstance(v, str)), None)
        if not isinstance(title, str):
            raise ManifestError("manifest metadata has no title")
        return cls(
            title=title,
            conforms_to=_str_list(obj.get("conformsTo")),
            types=_str_list(obj.get("@type")),
        )


@dataclass(frozen=True)
class Manifest:
    """A parsed Readium Web Publication Manifest."""

    metadata: Metadata
    links: tuple[Link, ...] = ()
    reading_order: tuple[Link, ...] = ()
    resources: tuple[Link, ...] = ()
    context: tuple[str, ...] = field(default=())

    @classmethod
    def from_json(cls, obj: Any) -> Manifest:
        """Build a manifest from a decoded JSON document.

        Raises:
            ManifestError: If the document is not a manifest.
        """
        if not isinstance(obj, dict):
            raise ManifestError("manifest is not a JSON object")
        reading_order: Any = obj.get("readingOrder")
        if reading_order is None:
            reading_order = obj.get("spine")
        return cls(
            metadata=Metadata.from_json(obj.get("metadata")),
            links=_links(obj.get("links")),
            reading_order=_links(reading_order, require_type=True),
            resources=_links(obj.get("resources")),
            context=_str_list(obj.get("@context")),
        )

    def link_with_rel(self, rel: str) -> Link | None:
        """Return the first link (``links``, then reading order, then resources) with ``rel``."""
        return self.link_matching(lambda link: rel in link.rels)

    def link_with_rel_matching(self, predicate: Callable[[str], bool]) -> Link | None:
        """Return the first link having a relation accepted by ``predicate``."""
        return self.link_matching(lambda link: any(predicate(r) for r in link.rels))

    def link_matching(self, predicate: Callable[[Link], bool]) -> Link | None:
        for link in (*self.links, *self.reading_order, *self.resources):
            if predicate(link):
                return link
        return None

    def _all_reading_order(self, predicate: Callable[[MediaType], bool]) -> bool:
        return bool(self.reading_order) and all(
            link.type is not None and predicate(link.type) for link in self.reading_order
        )

    def conforms_to(self, profile: Profile) -> bool:
        """Return whether the publication conforms to ``profile``.

        Profiles are inferred from the reading order when possible. An empty
        reading order conforms to nothing.
        """
        if not self.reading_order:
            return False
        declared: bool = profile.value in self.metadata.conforms_to
        if profile is Profile.AUDIOBOOK:
            return declared or self._all_reading_order(lambda t: t.is_audio)
        if profile is Profile.DIVINA:
            return declared or self._all_reading_order(lambda t: t.is_bitmap)
        if profile is Profile.PDF:
            return declared or self._all_reading_order(lambda t: t.matches(mt.PDF))
        if profile is Profile.EPUB:
            return declared and self._all_reading_order(lambda t: t.is_html)
        return declared
