"""Shared pytest fixtures and test helpers for shelfctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from shelfctl.infrastructure.store import DocumentStore
from shelfctl.services.telemetry import disable_telemetry

CHAPTER_TWO = """\
---
title: Creating and Destroying Objects
tags:
  - java
  - object-creation
---
Study notes for chapter 2.

## Item 1: Consider static factory methods instead of constructors

Static factories have names and need not create a new object per call.

### Advantages

- They can return cached instances.

## Item 2: Consider a builder when faced with many constructor parameters

Telescoping constructors do not scale.

```java
## not a heading inside a code fence
NutritionFacts cocaCola = new NutritionFacts.Builder(240, 8).calories(100).build();
```

## Item 3: Enforce the singleton property with a private constructor or an enum type

A single-element enum is often the best way to implement a singleton.
"""

CHAPTER_TWO_COPY = CHAPTER_TWO.replace("Study notes for chapter 2.", "Study notes, chapter 2.")

CHAPTER_THREE = """\
# Item 10: Obey the general contract when overriding equals

Reflexive, symmetric, transitive, consistent.

# Item 11: Always override hashCode when you override equals

Equal objects must have equal hash codes.
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    """Temporary library with two documents, ``chapter2`` and ``chapter3``."""
    (tmp_path / "chapter2.md").write_text(CHAPTER_TWO, encoding="utf-8")
    (tmp_path / "chapter3.md").write_text(CHAPTER_THREE, encoding="utf-8")
    return tmp_path


@pytest.fixture
def store(library_root: Path) -> DocumentStore:
    """DocumentStore loaded from :func:`library_root`."""
    return DocumentStore.load(library_root)


@pytest.fixture
def _isolated_library(library_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp library so the CLI loads it by default.

    Use via ``@pytest.mark.usefixtures("_isolated_library")`` on command
    test classes.
    """
    monkeypatch.delenv("SHELFCTL_CONFIG", raising=False)
    monkeypatch.chdir(library_root)


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo the logging and telemetry setup each CLI invocation performs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    shelf_level = logging.getLogger("shelfctl").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("shelfctl").setLevel(shelf_level)
    disable_telemetry()
