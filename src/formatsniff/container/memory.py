# topmark:header:start
#
#   project      : FormatSniff
#   file         : memory.py
#   file_relpath : src/formatsniff/container/memory.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory containers, mostly useful to callers that already hold entry bytes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from formatsniff.container.base import ContainerBase, normalize_entry_path
from formatsniff.resource.base import BytesResource

if TYPE_CHECKING:
    from collections.abc import Mapping


class MemoryContainer(ContainerBase):
    """Container over a mapping of entry paths to bytes (or text, encoded as UTF-8)."""

    def __init__(self, entries: Mapping[str, bytes | str], *, source: str = "<memory>") -> None:
        self._data: dict[str, bytes] = {
            normalize_entry_path(path): data.encode("utf-8") if isinstance(data, str) else data
            for path, data in entries.items()
            if not path.endswith("/")
        }
        self._source: str = source

    @property
    def source(self) -> str:
        return self._source

    @property
    def entries(self) -> frozenset[str]:
        return frozenset(self._data)

    def get(self, path: str) -> BytesResource | None:
        rel: str = normalize_entry_path(path)
        data: bytes | None = self._data.get(rel)
        if data is None:
            return None
        return BytesResource(data, source=f"{self._source}!/{rel}")

    def __repr__(self) -> str:
        return f"MemoryContainer({self._source!r}, {len(self._data)} entries)"
