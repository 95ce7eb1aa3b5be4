"""Locate the ``rulefilter.toml`` that applies to an invocation.

Lookup order: an explicit ``--config`` path, then ``$RULEFILTER_CONFIG``,
then the nearest ``rulefilter.toml`` in the start directory or any of its
parents. An explicit or environment path that is not a file means "no
config"; it never falls through to the directory walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "rulefilter.toml"
CONFIG_ENV_VAR = "RULEFILTER_CONFIG"


def resolve_config_path(
    explicit: str | os.PathLike[str] | None = None,
    *,
    start: Path | None = None,
) -> Path | None:
    """Return the config file to read, or None to run on defaults."""
    override = explicit or os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
