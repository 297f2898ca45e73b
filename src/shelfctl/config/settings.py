"""ShelfSettings: one frozen object for flags, environment and shelfctl.toml.

Precedence, highest first:

1. CLI flags (passed to the constructor by the root group)
2. ``SHELFCTL_*`` environment variables, ``__`` between section and key
3. ``shelfctl.toml``: ``--config``, else ``$SHELFCTL_CONFIG``, else the
   nearest one found walking up from the working directory
4. defaults on the section models

The file is read by pydantic-settings' own TOML source; only locating it
is done here.
"""

from __future__ import annotations

import os
import threading
import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, TomlConfigSettingsSource

from shelfctl.config.models import CheckConfig, LibraryConfig

CONFIG_FILENAME = "shelfctl.toml"
CONFIG_ENV_VAR = "SHELFCTL_CONFIG"

_active = threading.local()


def locate_config(start: Path | None = None, *, explicit: str | None = None) -> Path | None:
    """Return the config file to use, or None when there is none.

    Raises:
        click.ClickException: *explicit* or ``$SHELFCTL_CONFIG`` names a
            file that does not exist.
    """
    named = explicit or os.environ.get(CONFIG_ENV_VAR)
    if named:
        path = Path(named)
        if not path.is_file():
            raise click.ClickException(f"Config file not found: {path}")
        return path

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


@contextmanager
def _reading(toml_path: Path | None) -> Iterator[None]:
    _active.toml_path = toml_path
    try:
        yield
    finally:
        _active.toml_path = None


class ShelfSettings(BaseSettings):
    """Resolved configuration for one shelfctl invocation.

    Attributes:
        project_root: Directory of the config file (the working directory
            when there is none).  ``library.path`` is relative to it.
        config_path: The TOML file in use, or None.
        root_override: Library directory given with ``--root``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SHELFCTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    root_override: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    library: LibraryConfig = Field(default_factory=LibraryConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)

    @property
    def library_root(self) -> Path:
        """Directory the document store is loaded from."""
        if self.root_override is not None:
            return self.root_override
        return self.project_root / self.library.path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_path = getattr(_active, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        root: str | None = None,
        **cli_flags: Any,
    ) -> ShelfSettings:
        """Build settings for a CLI run.

        Raises:
            click.ClickException: The config file is missing, is not valid
                TOML, or holds values that fail validation.
        """
        toml_path = locate_config(project_root, explicit=config_path)
        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()
        if root is not None:
            cli_flags["root_override"] = Path(root)

        with _reading(toml_path):
            try:
                return cls(project_root=project_root, config_path=toml_path, **cli_flags)
            except tomllib.TOMLDecodeError as exc:
                raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
            except ValidationError as exc:
                source = toml_path or "environment"
                raise click.ClickException(f"Invalid configuration ({source}):\n{exc}") from exc
