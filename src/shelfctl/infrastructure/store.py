"""DocumentStore — the read-only in-memory holder of loaded documents.

Documents are kept in a tuple (load order) with a read-only name index
over the same objects.  Nothing mutates either after construction, so
concurrent readers need no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from shelfctl.domain.document import Document, parse_document
from shelfctl.domain.errors import DocumentLoadError, DuplicateDocumentError, NotFoundError
from shelfctl.infrastructure.filesystem import (
    DEFAULT_EXTENSIONS,
    document_name,
    find_document_files,
    read_document_file,
)

logger = logging.getLogger(__name__)


class DocumentStore:
    """Ordered, immutable collection of documents addressed by name."""

    def __init__(self, documents: Iterable[Document], *, root: Path | None = None) -> None:
        docs = tuple(documents)
        index: dict[str, Document] = {}
        for doc in docs:
            if doc.name in index:
                paths = [Path(p) for p in (index[doc.name].path, doc.path) if p]
                raise DuplicateDocumentError(doc.name, paths)
            index[doc.name] = doc
        self._documents = docs
        self._index = MappingProxyType(index)
        self.root = root

    @classmethod
    def load(
        cls,
        root: Path,
        *,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ) -> DocumentStore:
        """Discover and parse every document file under *root*.

        Raises:
            DocumentLoadError: *root* is not a directory, or a file cannot
                be read, decoded, or its frontmatter parsed.
            DuplicateDocumentError: Two files resolve to one name.
        """
        if not root.is_dir():
            raise DocumentLoadError(root, "library directory does not exist")

        documents: list[Document] = []
        for path in find_document_files(root, extensions=extensions):
            name = document_name(root, path)
            relative = path.relative_to(root).as_posix()
            try:
                content = read_document_file(path)
                doc = parse_document(name, content, path=relative)
            except (OSError, UnicodeDecodeError) as exc:
                raise DocumentLoadError(path, str(exc)) from exc
            except YAMLError as exc:
                raise DocumentLoadError(path, f"invalid frontmatter: {exc}") from exc
            except ValidationError as exc:
                raise DocumentLoadError(path, f"unusable frontmatter: {exc}") from exc
            logger.debug("Loaded %s (%d sections)", relative, len(doc.sections))
            documents.append(doc)

        store = cls(documents, root=root)
        logger.info("Loaded %d documents from %s", len(store), root)
        return store

    def list(self) -> Sequence[str]:
        """All document names in load order."""
        return [doc.name for doc in self._documents]

    def get(self, name: str) -> Document:
        """Return the document called *name*.

        Raises:
            NotFoundError: No document has that name.
        """
        try:
            return self._index[name]
        except KeyError:
            raise NotFoundError(name) from None

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __contains__(self, name: object) -> bool:
        return name in self._index
