"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, shelfctl.toml only contains
overrides.  An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from shelfctl.infrastructure.filesystem import DEFAULT_EXTENSIONS

# --- shelfctl.toml sections ---


class LibraryConfig(BaseModel):
    """[library] section."""

    model_config = {"frozen": True}

    name: str = "notes"
    path: str = "."
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    duplicate_threshold: float = Field(default=0.9, ge=0.0, le=1.0)
    min_body_chars: int = Field(default=1, ge=0)

