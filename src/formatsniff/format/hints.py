# topmark:header:start
#
#   project      : FormatSniff
#   file         : hints.py
#   file_relpath : src/formatsniff/format/hints.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cheap, pre-computed evidence about an asset.

`FormatHints` bundles the candidate file extensions and the declared media
types of an asset. Hints are read-only for the duration of a resolution and
are always evaluated first, since checking them costs no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import TYPE_CHECKING

from formatsniff.format.media_type import MediaType

if TYPE_CHECKING:
    from collections.abc import Iterable
    from os import PathLike


def normalize_extension(ext: str) -> str:
    """Lower-case ``ext`` and strip any leading dot."""
    return ext.strip().lstrip(".").lower()


@dataclass(frozen=True)
class FormatHints:
    """File extension and media type hints.

    Attributes:
        file_extensions (tuple[str, ...]): Lower-cased extensions without a leading dot.
        media_types (tuple[MediaType, ...]): Parsed media type hints.
    """

    file_extensions: tuple[str, ...] = field(default=())
    media_types: tuple[MediaType, ...] = field(default=())

    @classmethod
    def of(
        cls,
        *,
        file_extensions: Iterable[str] = (),
        media_types: Iterable[MediaType | str] = (),
    ) -> FormatHints:
        """Build hints from raw values.

        Empty extensions and malformed media types are dropped.
        """
        exts: list[str] = []
        for raw in file_extensions:
            ext: str = normalize_extension(raw)
            if ext and ext not in exts:
                exts.append(ext)

        types: list[MediaType] = []
        for raw_mt in media_types:
            parsed: MediaType | None = (
                raw_mt if isinstance(raw_mt, MediaType) else MediaType.parse(raw_mt)
            )
            if parsed is not None and parsed not in types:
                types.append(parsed)

        return cls(file_extensions=tuple(exts), media_types=tuple(types))

    @classmethod
    def from_path(
        cls,
        path: str | PathLike[str],
        *,
        media_type: MediaType | str | None = None,
    ) -> FormatHints:
        """Build hints from a file name and an optional declared media type."""
        suffix: str = PurePath(path).suffix
        return cls.of(
            file_extensions=[suffix] if suffix else [],
            media_types=[media_type] if media_type is not None else [],
        )

    def merged(self, other: FormatHints) -> FormatHints:
        """Return the union of both hint sets, this one's entries first."""
        return FormatHints.of(
            file_extensions=(*self.file_extensions, *other.file_extensions),
            media_types=(*self.media_types, *other.media_types),
        )

    @property
    def is_empty(self) -> bool:
        """Whether no hint is available at all."""
        return not self.file_extensions and not self.media_types

    @property
    def encoding(self) -> str | None:
        """First text encoding declared in a ``charset`` parameter."""
        for media_type in self.media_types:
            if media_type.encoding is not None:
                return media_type.encoding
        return None

    def has_file_extension(self, *candidates: str) -> bool:
        """Return whether any of ``candidates`` is a hinted extension, ignoring case."""
        return any(normalize_extension(c) in self.file_extensions for c in candidates)

    def has_media_type(self, *candidates: MediaType | str) -> bool:
        """Return whether any hinted media type is contained in one of ``candidates``.

        Extra hint parameters (``charset``) are ignored, but parameters carried
        by a candidate (OPDS ``profile=``) must be present in the hint.
        """
        for candidate in candidates:
            parsed: MediaType | None = (
                candidate if isinstance(candidate, MediaType) else MediaType.parse(candidate)
            )
            if parsed is None:
                continue
            if any(parsed.contains(hint) for hint in self.media_types):
                return True
        return False

    def has_media_type_suffix(self, suffix: str) -> bool:
        """Return whether any hinted media type carries the structured ``suffix``.

        This is an explicit, opt-in family rule (e.g. any ``application/*+zip``).
        """
        return any(mt.structured_syntax_suffix == suffix for mt in self.media_types)
