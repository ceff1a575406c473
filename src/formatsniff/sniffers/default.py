# topmark:header:start
#
#   project      : FormatSniff
#   file         : default.py
#   file_relpath : src/formatsniff/sniffers/default.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default resolver: every built-in detector, in priority order.

Built-in detectors are imported lazily from the topical modules of
[`formatsniff.sniffers.builtins`][] and arranged in `DEFAULT_ORDER`:
cheap structural checks on parsed text first (XML, HTML, JSON and the
documents layered on them), then archive signatures, then the families
layered on ZIP archives, and format-agnostic terminal checks last.

Third-party detectors can be contributed through the
``formatsniff.sniffers`` entry point group; they run before the built-ins,
after any detector passed explicitly to `DefaultFormatSniffer`.
"""

from __future__ import annotations

from collections.abc import Iterable as IterABC
from functools import lru_cache
from importlib import import_module
from importlib.metadata import EntryPoints, entry_points
from typing import TYPE_CHECKING, Any, ClassVar, Final, cast

from formatsniff.config.logging import SniffLogger, get_logger
from formatsniff.sniffers.base import FormatSniffer
from formatsniff.sniffers.composite import CompositeFormatSniffer

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from types import ModuleType

logger: SniffLogger = get_logger(__name__)

_BUILTIN_MODULES: Final[tuple[str, ...]] = (
    "formatsniff.sniffers.builtins.markup",
    "formatsniff.sniffers.builtins.data",
    "formatsniff.sniffers.builtins.opds",
    "formatsniff.sniffers.builtins.archives",
    "formatsniff.sniffers.builtins.publications",
    "formatsniff.sniffers.builtins.informal",
    "formatsniff.sniffers.builtins.media",
)

DEFAULT_ORDER: Final[tuple[str, ...]] = (
    "xml",
    "html",
    "json",
    "opds",
    "lcp-license",
    "rwpm",
    "w3c-pub-manifest",
    "zip",
    "rar",
    "rpf",
    "epub",
    "lpf",
    "audiobook",
    "comic",
    "pdf",
    "audio",
    "bitmap",
    "language",
)

ENTRYPOINT_GROUP: Final[str] = "formatsniff.sniffers"


def _iter_builtin_sniffers() -> Iterable[FormatSniffer]:
    """Yield built-in detectors from the topical modules (lazy import)."""
    for modname in _BUILTIN_MODULES:
        mod: ModuleType = import_module(modname)
        sniffers: Any = getattr(mod, "SNIFFERS", None)
        if not isinstance(sniffers, list):
            logger.warning("Module %s has no SNIFFERS list; skipping", modname)
            continue
        for obj in cast("list[object]", sniffers):
            if isinstance(obj, FormatSniffer):
                yield obj
            else:
                logger.warning("Non-FormatSniffer entry in %s.SNIFFERS: %r", modname, obj)


@lru_cache(maxsize=1)
def builtin_sniffers() -> dict[str, FormatSniffer]:
    """Return (and cache) the built-in detectors keyed by name, in `DEFAULT_ORDER`."""
    by_name: dict[str, FormatSniffer] = {}
    for sniffer in _iter_builtin_sniffers():
        if sniffer.name in by_name:
            raise ValueError(f"Duplicate sniffer name: {sniffer.name}")
        by_name[sniffer.name] = sniffer

    missing: set[str] = set(DEFAULT_ORDER) - by_name.keys()
    if missing:
        raise ValueError(f"Built-in sniffers not found: {sorted(missing)}")
    ordered: dict[str, FormatSniffer] = {name: by_name.pop(name) for name in DEFAULT_ORDER}
    # Detectors not placed explicitly run last, in module order.
    ordered.update(by_name)
    logger.debug("Loaded %d built-in sniffers", len(ordered))
    return ordered


def plugin_sniffers() -> list[FormatSniffer]:
    """Return the detectors provided by external plugins (entry points)."""
    found: list[FormatSniffer] = []
    try:
        eps: EntryPoints = entry_points().select(group=ENTRYPOINT_GROUP)
    except Exception:
        logger.exception("Failed to read entry points")
        return found

    for ep in eps:
        try:
            provider: Any = ep.load()
            provided: Any = provider() if callable(provider) else provider
        except Exception:
            logger.exception("Failed loading sniffers from entry point %s", ep.name)
            continue
        items: Any = [provided] if isinstance(provided, FormatSniffer) else provided
        if not isinstance(items, IterABC):
            logger.warning("Entry point %s did not provide sniffers: %r", ep.name, provided)
            continue
        for obj in cast("IterABC[object]", items):
            if isinstance(obj, FormatSniffer):
                found.append(obj)
            else:
                logger.warning("Entry point %s provided non-FormatSniffer: %r", ep.name, obj)
    return found


def available_sniffer_names() -> tuple[str, ...]:
    """Names accepted by the ``disable`` setting, in resolution order."""
    return tuple(builtin_sniffers())


class DefaultFormatSniffer(CompositeFormatSniffer):
    """Composite of every built-in detector, in `DEFAULT_ORDER`.

    Args:
        additional_sniffers (Sequence[FormatSniffer]): Detectors to run before
            the built-ins.
        disabled (Iterable[str]): Names of detectors to leave out.
        load_plugins (bool): Whether to include detectors registered under the
            ``formatsniff.sniffers`` entry point group.
    """

    name: ClassVar[str] = "default"

    def __init__(
        self,
        additional_sniffers: Sequence[FormatSniffer] = (),
        disabled: Iterable[str] = (),
        *,
        load_plugins: bool = True,
    ) -> None:
        skipped: frozenset[str] = frozenset(disabled)
        candidates: list[FormatSniffer] = [*additional_sniffers]
        if load_plugins:
            candidates.extend(plugin_sniffers())
        candidates.extend(builtin_sniffers().values())

        unknown: frozenset[str] = skipped - {s.name for s in candidates}
        if unknown:
            logger.warning("Cannot disable unknown sniffer(s): %s", ", ".join(sorted(unknown)))

        super().__init__([s for s in candidates if s.name not in skipped])
        self.disabled: frozenset[str] = skipped
