"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``CEMENT_*`` prefix
  3. TOML file    — ``cement.toml`` discovered via walk-up
  4. Code defaults

Settings are resolved once, at the CLI boundary. The store itself only
ever receives the resolved ``database_file`` string.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

DEFAULT_DATABASE_FILE = "cement_development.sqlite3"
CONFIG_FILENAME = "cement.toml"
CONFIG_ENV_VAR = "CEMENT_CONFIG"


def locate_config(config_path: str | None = None, start: Path | None = None) -> Path | None:
    """Pick the ``cement.toml`` to merge, or None.

    An explicit *config_path* wins, then ``$CEMENT_CONFIG``; either one is
    used only if it names an existing file. Otherwise the first
    ``cement.toml`` in *start* (default: cwd) or any of its parents.
    """
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        candidate = Path(explicit)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``cement.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class CementSettings(BaseSettings):
    """Settings for the cement CLI, frozen after construction.

    Attributes:
        database_file: Location of the SQLite store file.
        pool_size: Maximum number of concurrently leased connections.
        pool_timeout: Seconds to wait for a free lease before failing.
        busy_timeout: Seconds a write waits on a file locked elsewhere.
        config_path: The ``cement.toml`` that was merged, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CEMENT_",
        "extra": "ignore",
    }

    database_file: str = DEFAULT_DATABASE_FILE
    pool_size: int = Field(default=1, ge=1)
    pool_timeout: float = Field(default=30.0, gt=0)
    busy_timeout: float = Field(default=5.0, ge=0)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> CementSettings:
        """Construct settings from a CLI invocation.

        Discovers ``cement.toml`` via walk-up from *start* (or uses the
        explicit *config_path*). Flags left at ``None`` fall through to the
        lower-priority sources.
        """
        toml_path = locate_config(config_path, start)

        overrides = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
