# topmark:header:start
#
#   project      : FormatSniff
#   file         : base.py
#   file_relpath : src/formatsniff/sniffers/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detector base class.

A `FormatSniffer` is a stateless unit implementing up to three optional
checks, cheapest first:

* `FormatSniffer.sniff_hints`: pure, no I/O.
* `FormatSniffer.sniff_blob`: may read bytes or parse the content.
* `FormatSniffer.sniff_container`: may list and open container entries.

Each check either returns a [`Format`][formatsniff.format.format.Format]
that refines the format it was given, or abstains with ``None``. Abstaining
is silent: only a [`ReadError`][formatsniff.resource.errors.ReadError] from
an accessor is an error, and it propagates untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.resource.blob import SnifferBlob

if TYPE_CHECKING:
    from formatsniff.container.base import Container
    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.format.specification import Specification
    from formatsniff.resource.base import Resource

logger: SniffLogger = get_logger(__name__)


class FormatSniffer:
    """Base class for format detectors; every check abstains by default.

    Subclasses set `name` (used by configuration to disable a detector) and
    override the checks relevant to their family.
    """

    name: ClassVar[str] = "sniffer"

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        """Return the format implied by ``hints`` alone, or None."""
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        """Return a format refining ``refining`` from the content, or None.

        Raises:
            ReadError: If the content cannot be read.
        """
        return None

    def sniff_container(
        self, container: Container, refining: Format | None = None
    ) -> Format | None:
        """Return a format refining ``refining`` from the container entries, or None.

        Raises:
            ReadError: If an entry cannot be listed or read.
        """
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def refining_only(candidate: Format | None, refining: Format | None) -> Format | None:
    """Return ``candidate`` if it strictly refines ``refining``, else None."""
    if candidate is None or not candidate.refines(refining):
        return None
    return candidate


def promote(refining: Format | None, target: Format) -> Format:
    """Refine ``refining`` toward ``target``.

    The specifications already established are kept (outer layers first);
    ``target``'s specifications are appended and its media type and
    extension become the canonical pair.
    """
    if refining is None:
        return target
    return refining.refined(
        *target.specifications,
        media_type=target.media_type,
        file_extension=target.file_extension,
    )


def entry_blob(container: Container, path: str) -> SnifferBlob | None:
    """Open a container entry as a blob, or return None when it does not exist."""
    resource: Resource | None = container.get(path)
    if resource is None:
        return None
    return SnifferBlob(resource)


def within(refining: Format | None, *specifications: Specification) -> bool:
    """Return whether ``refining`` is unknown or made only of ``specifications``.

    Container detectors use it to leave alone assets already classified as
    something more specific than the layers they build on.
    """
    return refining is None or refining.specification_set <= set(specifications)
