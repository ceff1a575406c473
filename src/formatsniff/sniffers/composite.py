# topmark:header:start
#
#   project      : FormatSniff
#   file         : composite.py
#   file_relpath : src/formatsniff/sniffers/composite.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fixed-point composition of detectors.

`CompositeFormatSniffer` runs an ordered list of detectors as one resolver.
Hints are resolved by the first detector that recognizes them. Content and
container evidence is resolved by an explicit refinement loop:

1. ``current`` starts as the format being refined (possibly None).
2. Detectors are asked in order. The first one returning a format that
   strictly refines ``current`` wins: it becomes ``current`` and the scan
   restarts from the first detector, since a new specification (e.g. "is a
   ZIP archive") may unlock detectors that abstained before.
3. The loop stops when a full pass produces no refinement.

A detector returning a format that does not strictly grow the specification
set is ignored. Since each accepted step adds at least one specification,
the loop cannot run more passes than there are specifications; exceeding
that bound raises `RefinementError`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, ClassVar

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.format.specification import Specification
from formatsniff.sniffers.base import FormatSniffer

if TYPE_CHECKING:
    from formatsniff.container.base import Container
    from formatsniff.format.format import Format
    from formatsniff.format.hints import FormatHints
    from formatsniff.resource.blob import SnifferBlob

logger: SniffLogger = get_logger(__name__)


class RefinementError(RuntimeError):
    """The refinement loop did not reach a fixed point within its pass limit.

    This can only happen with a detector that breaks the refinement contract.
    """


class CompositeFormatSniffer(FormatSniffer):
    """Resolver composed of an ordered sequence of detectors.

    Args:
        sniffers (Sequence[FormatSniffer]): Detectors, in priority order.
    """

    name: ClassVar[str] = "composite"

    def __init__(self, sniffers: Sequence[FormatSniffer]) -> None:
        self.sniffers: tuple[FormatSniffer, ...] = tuple(sniffers)

    @property
    def max_passes(self) -> int:
        """Upper bound on scan passes for one refinement loop."""
        return len(Specification) + 1

    def sniff_hints(self, hints: FormatHints) -> Format | None:
        for sniffer in self.sniffers:
            found: Format | None = sniffer.sniff_hints(hints)
            if found is not None:
                logger.trace("Hints %s -> %r (%s)", hints, found, sniffer.name)
                return found
        return None

    def sniff_blob(self, blob: SnifferBlob, refining: Format | None = None) -> Format | None:
        return self._refine(
            blob.source, refining, lambda sniffer, current: sniffer.sniff_blob(blob, current)
        )

    def sniff_container(
        self, container: Container, refining: Format | None = None
    ) -> Format | None:
        return self._refine(
            container.source,
            refining,
            lambda sniffer, current: sniffer.sniff_container(container, current),
        )

    def _refine(
        self,
        source: str,
        refining: Format | None,
        step: Callable[[FormatSniffer, Format | None], Format | None],
    ) -> Format | None:
        """Run the refinement loop; a `ReadError` raised by ``step`` aborts it."""
        current: Format | None = refining
        passes: int = 0

        while True:
            passes += 1
            if passes > self.max_passes:
                raise RefinementError(
                    f"No fixed point for {source} after {self.max_passes} passes "
                    f"(last format: {current!r})"
                )

            refined: Format | None = None
            for sniffer in self.sniffers:
                candidate: Format | None = step(sniffer, current)
                if candidate is None:
                    continue
                if not candidate.refines(current):
                    if candidate != current:
                        logger.debug(
                            "%s: ignoring non-refining %r from %s", source, candidate, sniffer.name
                        )
                    continue
                logger.trace("%s: %r -> %r (%s)", source, current, candidate, sniffer.name)
                refined = candidate
                break

            if refined is None:
                return current
            current = refined

    def __repr__(self) -> str:
        names: str = ", ".join(s.name for s in self.sniffers)
        return f"{type(self).__name__}([{names}])"
