"""Tests for library file discovery and reading."""

from pathlib import Path

import pytest

from shelfctl.infrastructure.filesystem import (
    DEFAULT_EXTENSIONS,
    document_name,
    find_document_files,
    read_document_file,
)


def _touch(path: Path, text: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestFindDocumentFiles:
    def test_default_extensions(self, tmp_path: Path) -> None:
        _touch(tmp_path / "a.md")
        _touch(tmp_path / "b.markdown")
        _touch(tmp_path / "c.txt")
        _touch(tmp_path / "d.py")
        found = find_document_files(tmp_path)
        assert [p.name for p in found] == ["a.md", "b.markdown", "c.txt"]

    def test_sorted_by_relative_path(self, tmp_path: Path) -> None:
        _touch(tmp_path / "z.md")
        _touch(tmp_path / "part1" / "b.md")
        _touch(tmp_path / "part1" / "a.md")
        found = find_document_files(tmp_path)
        rel = [p.relative_to(tmp_path).as_posix() for p in found]
        assert rel == ["part1/a.md", "part1/b.md", "z.md"]

    def test_skips_hidden_and_vcs(self, tmp_path: Path) -> None:
        _touch(tmp_path / ".git" / "notes.md")
        _touch(tmp_path / ".obsidian" / "workspace.md")
        _touch(tmp_path / ".hidden.md")
        _touch(tmp_path / "kept.md")
        found = find_document_files(tmp_path)
        assert [p.name for p in found] == ["kept.md"]

    def test_custom_extensions_without_dot(self, tmp_path: Path) -> None:
        _touch(tmp_path / "a.md")
        _touch(tmp_path / "b.TXT")
        found = find_document_files(tmp_path, extensions=["txt"])
        assert [p.name for p in found] == ["b.TXT"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert find_document_files(tmp_path) == []

    def test_default_extension_constant(self) -> None:
        assert ".md" in DEFAULT_EXTENSIONS


class TestDocumentName:
    def test_top_level(self, tmp_path: Path) -> None:
        assert document_name(tmp_path, tmp_path / "chapter2.md") == "chapter2"

    def test_nested_uses_posix_separators(self, tmp_path: Path) -> None:
        path = tmp_path / "effective-java" / "chapter2.md"
        assert document_name(tmp_path, path) == "effective-java/chapter2"


class TestReadDocumentFile:
    def test_strips_bom(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.md"
        path.write_bytes("\ufeff# Title\n".encode("utf-8"))
        assert read_document_file(path) == "# Title\n"

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.md"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(UnicodeDecodeError):
            read_document_file(path)
