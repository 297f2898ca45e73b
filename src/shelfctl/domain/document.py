"""Document and Section models plus the pure parsing that builds them.

A document file is optional YAML frontmatter followed by prose with ATX
heading markers (``#`` .. ``######``).  Sections are split at the
shallowest heading level present in the file; deeper headings stay inside
the section body as opaque text.  Headings inside fenced code blocks are
ignored.

Parsing is pure (text in, model out).  File discovery and I/O live in
:mod:`shelfctl.infrastructure.filesystem`.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field
from ruamel.yaml import YAML

from shelfctl.domain.errors import SectionNotFoundError

_FRONTMATTER_DELIMITER = "---"

_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.+?)[ \t]*$")
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Section(BaseModel):
    """A heading/body pair within a document."""

    model_config = {"frozen": True}

    heading: str
    body: str = ""
    level: int = Field(default=1, ge=1, le=6)


class Document(BaseModel):
    """A named unit of prose composed of ordered sections.

    Attributes:
        name: Identifier, unique within a store.
        sections: Sections in source order.
        title: Frontmatter ``title``, else the first heading, else *name*.
        preamble: Text before the first heading (may be empty).
        metadata: Parsed YAML frontmatter (empty when absent).
        path: Source file relative to the library root, if loaded from disk.
    """

    model_config = {"frozen": True}

    name: str
    sections: tuple[Section, ...] = ()
    title: str = ""
    preamble: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    path: str | None = None

    @property
    def headings(self) -> list[str]:
        return [s.heading for s in self.sections]

    def section(self, heading: str) -> Section:
        """Return the first section whose heading matches, ignoring case.

        Raises:
            SectionNotFoundError: No section carries *heading*.
        """
        wanted = heading.strip().casefold()
        for sec in self.sections:
            if sec.heading.casefold() == wanted:
                return sec
        raise SectionNotFoundError(self.name, heading)

    def to_markdown(self) -> str:
        """Render the document body back to markdown (frontmatter omitted)."""
        parts: list[str] = []
        if self.preamble:
            parts.append(self.preamble)
        for sec in self.sections:
            block = f"{'#' * sec.level} {sec.heading}"
            if sec.body:
                block += f"\n\n{sec.body}"
            parts.append(block)
        return "\n\n".join(parts)


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh safe-mode parser; frontmatter is only ever read."""
    return YAML(typ="safe", pure=True)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split YAML frontmatter from the body of *content*.

    Expects ``---`` on the first line and a second ``---`` closing the
    block.  Handles ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple.  Without valid
        delimiters, returns ``({}, content)`` with line endings normalized.

    Raises:
        ruamel.yaml.YAMLError: The frontmatter block is not valid YAML.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, normalized

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, normalized

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    loaded = _new_yaml().load(yaml_block)
    if not isinstance(loaded, dict):
        return {}, body
    # YAML allows int, bool and date keys; metadata is keyed by string.
    return {str(key): value for key, value in loaded.items()}, body


# ---------------------------------------------------------------------------
# Section splitting
# ---------------------------------------------------------------------------


def _trim_blank_lines(lines: list[str]) -> str:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(line.rstrip() for line in lines[start:end])


def _scan_headings(lines: list[str]) -> list[tuple[int, int, str]]:
    """Return ``(line_index, level, heading)`` for every heading outside fences."""
    found: list[tuple[int, int, str]] = []
    fence: str | None = None
    for idx, line in enumerate(lines):
        fence_match = _FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif (
                marker[0] == fence[0]
                and len(marker) >= len(fence)
                and not fence_match.group(2).strip()
            ):
                fence = None
            continue
        if fence is not None:
            continue
        match = _HEADING_RE.match(line)
        if match:
            text = _CLOSING_HASHES_RE.sub("", match.group(2)).strip()
            found.append((idx, len(match.group(1)), text))
    return found


def split_sections(body: str) -> tuple[str, list[Section]]:
    """Split markdown *body* into a preamble and top-level sections.

    The split level is the shallowest heading level found.  Text before
    the first such heading is the preamble.
    """
    lines = body.split("\n")
    headings = _scan_headings(lines)
    if not headings:
        return _trim_blank_lines(lines), []

    split_level = min(level for _, level, _ in headings)
    starts = [(idx, text) for idx, level, text in headings if level == split_level]

    preamble = _trim_blank_lines(lines[: starts[0][0]])
    sections: list[Section] = []
    for pos, (idx, text) in enumerate(starts):
        stop = starts[pos + 1][0] if pos + 1 < len(starts) else len(lines)
        sections.append(
            Section(
                heading=text,
                body=_trim_blank_lines(lines[idx + 1 : stop]),
                level=split_level,
            )
        )
    return preamble, sections


def parse_document(name: str, content: str, *, path: str | None = None) -> Document:
    """Build a :class:`Document` from raw file *content*.

    Raises:
        ruamel.yaml.YAMLError: Invalid frontmatter.
    """
    metadata, body = parse_frontmatter(content)
    preamble, sections = split_sections(body)

    title = metadata.get("title")
    if not isinstance(title, str) or not title.strip():
        title = sections[0].heading if sections else name

    return Document(
        name=name,
        sections=tuple(sections),
        title=title.strip(),
        preamble=preamble,
        metadata=metadata,
        path=path,
    )
