"""CheckService — content health report for the library.

Single read-only command following the linter pattern.  Two categories:
structural validation (per document) and duplication (across documents).
"""

from __future__ import annotations

import difflib
import itertools
import logging
from typing import TYPE_CHECKING, Any

from shelfctl.services.base import BaseService
from shelfctl.services.result import ServiceResult
from shelfctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from shelfctl.domain.document import Document
    from shelfctl.infrastructure.store import DocumentStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

CAT_STRUCTURAL = "structural_validation"
CAT_DUPLICATION = "duplication"


def _issue(
    category: str,
    severity: str,
    kind: str,
    message: str,
    name: str,
    **extra: Any,
) -> dict[str, Any]:
    return {
        "category": category,
        "severity": severity,
        "kind": kind,
        "message": message,
        "name": name,
        **extra,
    }


class CheckService(BaseService):
    """Reports structural problems and duplicated content."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        duplicate_threshold: float = 0.9,
        min_body_chars: int = 1,
    ) -> None:
        super().__init__(store)
        self._duplicate_threshold = duplicate_threshold
        self._min_body_chars = min_body_chars

    @traced
    def check(self, *, min_severity: str = SEVERITY_WARNING) -> ServiceResult:
        """Report issues at or above *min_severity* without modifying anything."""
        issues: list[dict[str, Any]] = []
        with trace_span("structural_validation"):
            for doc in self._store:
                issues.extend(self._check_structure(doc))
        with trace_span("duplication"):
            issues.extend(self._check_duplicates())

        floor = _SEVERITY_RANK.get(min_severity, 0)
        issues = [i for i in issues if _SEVERITY_RANK[i["severity"]] >= floor]
        logger.debug("Check found %d issues across %d documents", len(issues), len(self._store))

        return ServiceResult(
            ok=True,
            op="check",
            data={"issues": issues, "count": len(issues), "documents": len(self._store)},
        )

    # ------------------------------------------------------------------
    # Structural validation
    # ------------------------------------------------------------------

    def _check_structure(self, doc: Document) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        if not doc.sections:
            if doc.preamble.strip():
                issues.append(
                    _issue(
                        CAT_STRUCTURAL,
                        SEVERITY_WARNING,
                        "no_sections",
                        "Document has text but no headings",
                        doc.name,
                    )
                )
            else:
                issues.append(
                    _issue(
                        CAT_STRUCTURAL,
                        SEVERITY_WARNING,
                        "empty_document",
                        "Document is empty",
                        doc.name,
                    )
                )
            return issues

        seen: set[str] = set()
        for sec in doc.sections:
            if len(sec.body.strip()) < self._min_body_chars:
                issues.append(
                    _issue(
                        CAT_STRUCTURAL,
                        SEVERITY_WARNING,
                        "empty_section",
                        f"Section '{sec.heading}' has no body",
                        doc.name,
                        heading=sec.heading,
                    )
                )
            key = sec.heading.casefold()
            if key in seen:
                issues.append(
                    _issue(
                        CAT_STRUCTURAL,
                        SEVERITY_WARNING,
                        "duplicate_heading",
                        f"Heading '{sec.heading}' appears more than once",
                        doc.name,
                        heading=sec.heading,
                    )
                )
            seen.add(key)
        return issues

    # ------------------------------------------------------------------
    # Duplication
    # ------------------------------------------------------------------

    def _check_duplicates(self) -> list[dict[str, Any]]:
        texts = [(doc.name, doc.to_markdown()) for doc in self._store]
        issues: list[dict[str, Any]] = []
        for (name_a, text_a), (name_b, text_b) in itertools.combinations(texts, 2):
            if not text_a.strip() or not text_b.strip():
                continue
            if text_a == text_b:
                issues.append(
                    _issue(
                        CAT_DUPLICATION,
                        SEVERITY_ERROR,
                        "identical",
                        f"Identical to '{name_b}'",
                        name_a,
                        other=name_b,
                        similarity=1.0,
                    )
                )
                continue
            matcher = difflib.SequenceMatcher(None, text_a, text_b, autojunk=False)
            # real_quick_ratio and quick_ratio are upper bounds on ratio.
            if matcher.real_quick_ratio() < self._duplicate_threshold:
                continue
            if matcher.quick_ratio() < self._duplicate_threshold:
                continue
            ratio = matcher.ratio()
            if ratio >= self._duplicate_threshold:
                issues.append(
                    _issue(
                        CAT_DUPLICATION,
                        SEVERITY_WARNING,
                        "near_duplicate",
                        f"{ratio:.0%} similar to '{name_b}'",
                        name_a,
                        other=name_b,
                        similarity=round(ratio, 4),
                    )
                )
        return issues
