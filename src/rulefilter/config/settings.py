"""RuleFilterSettings: one frozen object for flags, env vars and TOML.

Sources, highest priority first:

1. keyword arguments (the CLI flags)
2. ``RULEFILTER_*`` environment variables, ``__`` between nested keys
3. the ``rulefilter.toml`` picked by :func:`resolve_config_path`
4. the defaults in :mod:`rulefilter.config.models`
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, TomlConfigSettingsSource

from rulefilter.config.discovery import resolve_config_path
from rulefilter.config.models import BlankConfig, MessagesConfig, PluginsConfig

# The TOML file for the settings object currently being built.
_active_toml: ContextVar[Path | None] = ContextVar("rulefilter_active_toml", default=None)


class RuleFilterSettings(BaseSettings):
    """Resolved settings for the CLI and the services.

    Constructing the class directly skips the TOML file; use
    :meth:`from_cli` to include it.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "RULEFILTER_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    blank: BlankConfig = Field(default_factory=BlankConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

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
            TomlConfigSettingsSource(settings_cls, toml_file=_active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **cli_flags: Any,
    ) -> RuleFilterSettings:
        """Build settings for one CLI invocation.

        Raises:
            click.ClickException: the config file is not valid TOML.
        """
        toml_path = resolve_config_path(config_path, start=start_dir)
        token = _active_toml.set(toml_path)
        try:
            return cls(config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _active_toml.reset(token)
