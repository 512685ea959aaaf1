"""BankSettings: one frozen object built from flags, environment and TOML.

Sources, strongest first:

1. keyword arguments (the CLI flags Click parsed)
2. ``BANKCTL_*`` environment variables, ``__`` separating nested keys
   (``BANKCTL_DATABASE__BUSY_TIMEOUT=10``)
3. the ``bankctl.toml`` in effect (``--config``, ``BANKCTL_CONFIG`` or walk-up)
4. the defaults in :mod:`bankctl.config.models`

Nested sections merge key by key, so a TOML file only needs the values it
changes.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from bankctl.config.discovery import find_config
from bankctl.config.models import DatabaseConfig, SecurityConfig

# The file the next BankSettings() call reads; set only inside from_cli().
_active_toml: ContextVar[Path | None] = ContextVar("bankctl_active_toml", default=None)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, turning syntax errors into a readable CLI error."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feeds the contents of one TOML file to pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(toml_path) if toml_path is not None else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class BankSettings(BaseSettings):
    """Resolved configuration for one bankctl invocation.

    Attributes:
        data_root: Directory holding the database file.  Defaults to the
            directory of the config file in effect, else the CWD.
        config_path: The TOML file that was read, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BANKCTL_",
        "env_nested_delimiter": "__",
    }

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Flags, then environment, then TOML; dotenv and secrets are unused."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | None = None,
        **cli_flags: Any,
    ) -> BankSettings:
        """Build settings for a CLI call.

        Raises:
            click.ClickException: *config_path* names a missing file, or
                the config file is not valid TOML.
        """
        toml_path = _resolve_config(config_path, data_root)
        if data_root is None:
            data_root = toml_path.parent if toml_path is not None else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(data_root=data_root, config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)


def _resolve_config(config_path: str | None, data_root: Path | None) -> Path | None:
    if config_path is None:
        return find_config(data_root)
    explicit = Path(config_path)
    if not explicit.is_file():
        msg = f"Config file not found: {explicit}"
        raise click.ClickException(msg)
    return explicit
