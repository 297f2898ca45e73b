"""DocumentService — listing and retrieval over the document store.

Three read-only surfaces:
- list_documents: every document in load order with summary fields
- get_document: one document (or one of its sections) with full text
- outline: the heading sequence of one document
"""

from __future__ import annotations

from typing import Any

from shelfctl.domain.document import Document, Section
from shelfctl.domain.errors import NotFoundError
from shelfctl.services.base import BaseService
from shelfctl.services.result import ServiceResult
from shelfctl.services.telemetry import trace_span, traced


def _section_data(section: Section) -> dict[str, Any]:
    return {"heading": section.heading, "level": section.level, "body": section.body}


def _summary(doc: Document) -> dict[str, Any]:
    return {
        "name": doc.name,
        "title": doc.title,
        "section_count": len(doc.sections),
        "path": doc.path,
    }


class DocumentService(BaseService):
    """Handles document listing and retrieval."""

    @traced
    def list_documents(self, *, library_name: str | None = None) -> ServiceResult:
        """List every loaded document in load order.

        *library_name* is the configured display name, echoed back as
        ``library_name`` when given.
        """
        items = [_summary(doc) for doc in self._store]
        data: dict[str, Any] = {"items": items, "count": len(items)}
        if self._store.root is not None:
            data["library"] = str(self._store.root)
        if library_name:
            data["library_name"] = library_name
        return ServiceResult(ok=True, op="list_documents", data=data)

    @traced
    def get_document(self, name: str, *, section: str | None = None) -> ServiceResult:
        """Retrieve a document by name, optionally narrowed to one section.

        Unknown names yield ``NOT_FOUND``; unknown headings yield
        ``SECTION_NOT_FOUND``.
        """
        op = "get_document"
        try:
            doc = self._store.get(name)
            with trace_span("select_sections"):
                sections = [doc.section(section)] if section is not None else list(doc.sections)
        except NotFoundError as exc:
            return ServiceResult.failure(op, exc, name=name)

        data: dict[str, Any] = {
            **_summary(doc),
            "metadata": doc.metadata,
            "preamble": "" if section is not None else doc.preamble,
            "sections": [_section_data(s) for s in sections],
        }
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def outline(self, name: str) -> ServiceResult:
        """Return the heading outline of a document."""
        try:
            doc = self._store.get(name)
        except NotFoundError as exc:
            return ServiceResult.failure("outline", exc, name=name)

        headings = [{"heading": s.heading, "level": s.level} for s in doc.sections]
        return ServiceResult(
            ok=True,
            op="outline",
            data={"name": doc.name, "title": doc.title, "headings": headings},
        )
