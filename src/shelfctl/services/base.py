"""BaseService — common foundation for shelfctl services.

Every service receives a loaded :class:`DocumentStore` at construction
time.  The store is read-only, so services hold no locks and own no
transactions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shelfctl.infrastructure.store import DocumentStore


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class DocumentService(BaseService):
            def get_document(self, name: str) -> ServiceResult:
                doc = self._store.get(name)
                ...
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
