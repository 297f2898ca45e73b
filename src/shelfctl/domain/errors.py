"""Exception hierarchy for document loading and lookup.

Services translate these into :class:`~shelfctl.services.result.ServiceError`
codes; the CLI never sees a raw traceback for an expected failure.
"""

from __future__ import annotations

from pathlib import Path


class ShelfError(Exception):
    """Base class for all shelfctl domain errors."""

    code = "SHELF_ERROR"


class NotFoundError(ShelfError):
    """No loaded document matches the requested name."""

    code = "NOT_FOUND"

    def __init__(self, name: str) -> None:
        super().__init__(f"No document found with name '{name}'")
        self.name = name


class SectionNotFoundError(NotFoundError):
    """The document exists but has no section with the requested heading."""

    code = "SECTION_NOT_FOUND"

    def __init__(self, document: str, heading: str) -> None:
        ShelfError.__init__(self, f"Document '{document}' has no section '{heading}'")
        self.name = document
        self.heading = heading


class DuplicateDocumentError(ShelfError):
    """Two source files resolve to the same document name."""

    code = "DUPLICATE_DOCUMENT"

    def __init__(self, name: str, paths: list[Path]) -> None:
        joined = ", ".join(str(p) for p in paths)
        super().__init__(f"Document name '{name}' is claimed by several files: {joined}")
        self.name = name
        self.paths = paths


class DocumentLoadError(ShelfError):
    """A source file (or the library root) could not be read or parsed."""

    code = "LOAD_ERROR"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot load {path}: {reason}")
        self.path = path
        self.reason = reason
