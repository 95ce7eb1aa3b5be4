"""Pydantic models for the ``rulefilter.toml`` sections.

Defaults live here, so the file only needs the keys it changes and an
empty file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class MessagesConfig(BaseModel):
    """[messages] section.

    ``overrides`` maps a failure code (or ``<code>_NOT`` for failed
    ``is_not`` checks) to a ``str.format`` template.
    """

    model_config = {"frozen": True}

    overrides: dict[str, str] = Field(default_factory=dict)


class BlankConfig(BaseModel):
    """[blank] section."""

    model_config = {"frozen": True}

    strip_whitespace: bool = True


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str | None = None
