# topmark:header:start
#
#   project      : FormatSniff
#   file         : test_containers.py
#   file_relpath : tests/container/test_containers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ZIP, directory and in-memory containers."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from formatsniff.container.base import (
    Container,
    entries_contain_extensions,
    is_ignored_entry,
)
from formatsniff.container.directory import DirectoryContainer
from formatsniff.container.memory import MemoryContainer
from formatsniff.container.zip import ZipContainer
from formatsniff.resource.base import BytesResource, FileResource
from formatsniff.resource.errors import ArchiveError, ResourceNotFoundError
from tests.conftest import parametrize
from tests.samples import write_tree, write_zip, zip_bytes

if TYPE_CHECKING:
    from pathlib import Path

    from formatsniff.resource.base import Resource


def test_zip_container_lists_leaf_entries_only() -> None:
    data: bytes = zip_bytes(
        {"mimetype": "application/epub+zip", "OEBPS/text.xhtml": "<html/>"},
        directories=["OEBPS/", "META-INF/"],
    )
    with ZipContainer(data, source="book.epub") as container:
        assert isinstance(container, Container)
        assert container.entries == frozenset({"mimetype", "OEBPS/text.xhtml"})
        assert "OEBPS/text.xhtml" in container
        assert "/OEBPS/text.xhtml" in container
        assert "OEBPS/" not in container
        assert container.get("missing") is None


def test_zip_entry_reads_ranges() -> None:
    container: ZipContainer = ZipContainer(zip_bytes({"a.txt": "hello world"}))
    entry: Resource | None = container.get("a.txt")

    assert entry is not None
    assert entry.read() == b"hello world"
    assert entry.read(0, 5) == b"hello"
    assert entry.read(6) == b"world"
    assert entry.length() == 11
    assert entry.source == "<zip>!/a.txt"
    container.close()


def test_zip_container_from_path_and_resource(tmp_path: Path) -> None:
    path: Path = write_zip(tmp_path / "a.zip", {"x/y.png": b"\x89PNG"})

    with ZipContainer(path) as by_path:
        assert by_path.entries == frozenset({"x/y.png"})
        assert by_path.source == str(path)
    with ZipContainer(FileResource(path)) as by_resource:
        assert by_resource.entries == frozenset({"x/y.png"})
        assert by_resource.source == str(path)


def test_corrupt_zip_raises_archive_error() -> None:
    with pytest.raises(ArchiveError) as excinfo:
        ZipContainer(BytesResource(b"PK\x03\x04 definitely not an archive", source="bad.zip"))
    assert excinfo.value.source == "bad.zip"


def test_missing_zip_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(ResourceNotFoundError):
        ZipContainer(tmp_path / "missing.zip")


def test_directory_container(tmp_path: Path) -> None:
    root: Path = write_tree(
        tmp_path / "book",
        {"mimetype": "application/epub+zip", "OEBPS/text.xhtml": "<html/>", ".DS_Store": b""},
    )
    (root / "empty").mkdir()
    container: DirectoryContainer = DirectoryContainer(root)

    assert container.entries == frozenset({"mimetype", "OEBPS/text.xhtml", ".DS_Store"})
    entry: Resource | None = container.get("OEBPS/text.xhtml")
    assert entry is not None
    assert entry.read() == b"<html/>"
    assert container.get("empty") is None
    assert container.get("../outside") is None


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_directory_container_skips_links_leaving_the_root(tmp_path: Path) -> None:
    outside: Path = tmp_path / "secret.txt"
    outside.write_text("secret", encoding="utf-8")
    root: Path = write_tree(tmp_path / "pub", {"index.html": "<html/>"})
    try:
        (root / "link.txt").symlink_to(outside)
    except OSError:
        pytest.skip("cannot create symlinks here")

    assert DirectoryContainer(root).entries == frozenset({"index.html"})


def test_directory_container_on_a_file_raises(tmp_path: Path) -> None:
    path: Path = tmp_path / "file.txt"
    path.write_text("x", encoding="utf-8")
    with pytest.raises(ResourceNotFoundError):
        _ = DirectoryContainer(path).entries


def test_memory_container() -> None:
    container: MemoryContainer = MemoryContainer(
        {"/manifest.json": "{}", "dir/": b"", "img.png": b"\x89PNG"}, source="mem"
    )
    assert container.entries == frozenset({"manifest.json", "img.png"})
    entry: Resource | None = container.get("manifest.json")
    assert entry is not None
    assert entry.read() == b"{}"
    assert entry.source == "mem!/manifest.json"


@parametrize(
    ("path", "ignored"),
    [
        (".DS_Store", True),
        ("pages/.hidden.png", True),
        ("Thumbs.db", True),
        ("pages/Thumbs.db", True),
        ("pages/001.png", False),
        ("thumbs.db.png", False),
    ],
)
def test_is_ignored_entry(path: str, ignored: bool) -> None:
    assert is_ignored_entry(path) is ignored


@parametrize(
    ("entries", "expected"),
    [
        (["001.jpg", "002.PNG"], True),
        (["001.jpg", "info.txt", "ComicInfo.xml"], True),
        (["info.txt"], False),
        (["001.jpg", "chapter.html"], False),
        (["001.jpg", ".DS_Store", "Thumbs.db"], True),
        ([], False),
        (["README"], False),
    ],
)
def test_entries_contain_extensions(entries: list[str], expected: bool) -> None:
    """Every extension must be accepted and at least one required extension present."""
    container: MemoryContainer = MemoryContainer({name: b"" for name in entries})
    assert (
        entries_contain_extensions(container, {"jpg", "png"}, {"txt", "xml"}) is expected
    )
