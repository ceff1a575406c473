# topmark:header:start
#
#   project      : FormatSniff
#   file         : api.py
#   file_relpath : src/formatsniff/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolution entry points.

`resolve` combines the three kinds of evidence in order of cost:

1. hints are sniffed once, up front;
2. the content, when given, is sniffed through the blob loop. A hinted
   format is kept (and refined by the content) unless the content
   establishes a format sharing no specification with it, in which case
   the content wins;
3. the container, when given, is refined through the container loop.

The result is the most specific format established, or None when the asset
is not recognized. None is a legitimate outcome; an access failure raises
[`ReadError`][formatsniff.resource.errors.ReadError] instead.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import TYPE_CHECKING

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.resource.base import BytesResource
from formatsniff.resource.blob import SnifferBlob
from formatsniff.sniffers.default import DefaultFormatSniffer

if TYPE_CHECKING:
    from formatsniff.container.base import Container
    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.format.specification import Specification
    from formatsniff.resource.base import Resource
    from formatsniff.sniffers.base import FormatSniffer

logger: SniffLogger = get_logger(__name__)


@lru_cache(maxsize=1)
def default_sniffer() -> DefaultFormatSniffer:
    """Return the shared default resolver (built on first use)."""
    return DefaultFormatSniffer()


def as_blob(content: SnifferBlob | Resource | bytes, *, encoding: str | None = None) -> SnifferBlob:
    """Wrap raw content in a `SnifferBlob` (a blob is returned unchanged)."""
    if isinstance(content, SnifferBlob):
        return content
    if isinstance(content, bytes):
        return SnifferBlob(BytesResource(content), encoding=encoding)
    return SnifferBlob(content, encoding=encoding)


def reconcile(
    resolver: FormatSniffer,
    blob: SnifferBlob,
    refining: Format | None,
    from_hints: Format | None,
) -> Format | None:
    """Combine the format implied by hints with the evidence of the content.

    The content is sniffed from ``refining`` alone. Its result replaces the
    hinted format only when the specifications each adds to ``refining``
    are disjoint (a ``.epub`` file holding a PDF is a PDF). Otherwise the
    hinted format wins and the content may only refine it.

    Raises:
        ReadError: If the content cannot be read.
    """
    from_content: Format | None = resolver.sniff_blob(blob, refining)
    if from_hints is None:
        return from_content

    if from_content is not None and from_content.refines(refining):
        known: frozenset[Specification] = (
            refining.specification_set if refining is not None else frozenset()
        )
        added: frozenset[Specification] = from_content.specification_set - known
        if added.isdisjoint(from_hints.specification_set - known):
            logger.debug(
                "%s: content %r contradicts hints %r", blob.source, from_content, from_hints
            )
            return from_content
        if from_content.refines(from_hints):
            return from_content

    return resolver.sniff_blob(blob, from_hints)


def resolve(
    hints: FormatHints | None = None,
    *,
    blob: SnifferBlob | Resource | bytes | None = None,
    container: Container | None = None,
    refining: Format | None = None,
    sniffer: FormatSniffer | None = None,
) -> Format | None:
    """Resolve the format of an asset from hints, content and container entries.

    Args:
        hints (FormatHints | None): Extension and media type hints.
        blob (SnifferBlob | Resource | bytes | None): Content of the asset.
        container (Container | None): Entries of the asset, for archive-like assets.
        refining (Format | None): Format already known; hints only replace it
            when they refine it.
        sniffer (FormatSniffer | None): Resolver to use (the default resolver otherwise).

    Returns:
        Format | None: The most specific format established, or None.

    Raises:
        ReadError: If the content or an entry cannot be read.
        RefinementError: If a detector breaks the refinement contract.
    """
    resolver: FormatSniffer = sniffer if sniffer is not None else default_sniffer()
    current: Format | None = refining

    from_hints: Format | None = None
    if hints is not None and not hints.is_empty:
        candidate: Format | None = resolver.sniff_hints(hints)
        if candidate is not None and candidate.refines(current):
            logger.debug("Hints %s resolved to %r", hints, candidate)
            from_hints = candidate

    if blob is not None:
        content: SnifferBlob = as_blob(
            blob, encoding=hints.encoding if hints is not None else None
        )
        current = reconcile(resolver, content, current, from_hints)
    elif from_hints is not None:
        current = from_hints

    if container is not None:
        current = resolver.sniff_container(container, current)

    return current


async def resolve_async(
    hints: FormatHints | None = None,
    *,
    blob: SnifferBlob | Resource | bytes | None = None,
    container: Container | None = None,
    refining: Format | None = None,
    sniffer: FormatSniffer | None = None,
) -> Format | None:
    """Run `resolve` in a worker thread.

    Resolution is sequential within one call; independent calls may run
    concurrently as long as they do not share a blob.
    """
    return await asyncio.to_thread(
        resolve,
        hints,
        blob=blob,
        container=container,
        refining=refining,
        sniffer=sniffer,
    )
