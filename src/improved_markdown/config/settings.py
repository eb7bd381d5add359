"""ImdSettings — CLI flags, ``IMD_*`` env vars and ``imd.toml`` merged.

Priority, highest first:

1. keyword arguments (the CLI flags Click parsed)
2. ``IMD_*`` environment variables, ``__`` for nested keys
   (``IMD_RENDER__RAW_PREFIX``)
3. the discovered ``imd.toml``
4. defaults on the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from improved_markdown.config.discovery import find_config, read_toml
from improved_markdown.config.models import ImdConfig, RenderConfig, SecretsConfig

# Config file for the ImdSettings instance currently being built.
_active_toml: ContextVar[Path | None] = ContextVar("imd_active_toml", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``imd.toml`` file.

    The sections are checked against :class:`ImdConfig` up front so a bad
    value is reported against the file it came from.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            data = read_toml(toml_path)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        try:
            ImdConfig.model_validate(data)
        except ValidationError as exc:
            raise click.ClickException(f"Invalid config in {toml_path}: {exc}") from exc
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class ImdSettings(BaseSettings):
    """Settings for one imd invocation.

    Attributes:
        root: Directory backing the virtual ``/``. Defaults to the directory
            holding ``imd.toml``, else the working directory.
        config_path: The config file that was read, if any.
        password: Encryption password (``IMD_PASSWORD``). Unset means the
            CLI asks for it when a secret is first needed.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "IMD_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    password: SecretStr | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    render: RenderConfig = Field(default_factory=RenderConfig)
    secrets: SecretsConfig = Field(default_factory=SecretsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
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
        root: Path | None = None,
        **cli_flags: Any,
    ) -> ImdSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored rather
        than falling back to discovery.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)

    def password_text(self) -> str | None:
        """The configured password, or None when unset or empty."""
        if self.password is None:
            return None
        return self.password.get_secret_value() or None
