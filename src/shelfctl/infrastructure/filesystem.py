"""Filesystem operations for the document library.

INVARIANT: Files are truth and are never modified.  This module only
discovers and reads them; pure parsing lives in
:mod:`shelfctl.domain.document`.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md", ".markdown", ".txt")

# Directories to skip when discovering document files.
_SKIP_DIRS = frozenset({".git", ".hg", ".svn", "__pycache__", "node_modules"})


def _normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    return frozenset(
        ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions
    )


def _is_skipped(relative: Path) -> bool:
    for part in relative.parts[:-1]:
        if part in _SKIP_DIRS or part.startswith("."):
            return True
    return relative.name.startswith(".")


def find_document_files(
    root: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Discover document files under *root*.

    Skips hidden files and directories plus VCS/tooling directories.
    The result is sorted by relative POSIX path so load order is stable
    across runs and platforms.
    """
    wanted = _normalize_extensions(extensions)
    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        relative = path.relative_to(root)
        if _is_skipped(relative):
            continue
        if path.suffix.lower() in wanted:
            results.append(path)
    return sorted(results, key=lambda p: p.relative_to(root).as_posix())


def document_name(root: Path, path: Path) -> str:
    """Derive a document name: relative POSIX path without the extension."""
    return path.relative_to(root).with_suffix("").as_posix()


def read_document_file(path: Path) -> str:
    """Read a document file as UTF-8 text, dropping any byte-order mark.

    Raises:
        OSError: The file cannot be read.
        UnicodeDecodeError: The file is not valid UTF-8.
    """
    return path.read_text(encoding="utf-8-sig")
