"""BaseService: settings plus an optional plugin manager for events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rulefilter.config.settings import RuleFilterSettings
    from rulefilter.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Services read ``self._settings`` and report to plugins via events."""

    def __init__(
        self,
        settings: RuleFilterSettings,
        plugins: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._plugins = plugins

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Call *hook_name* on all plugins; a raising plugin adds to *warnings*."""
        if self._plugins is None:
            return
        try:
            getattr(self._plugins.hook, hook_name)(**payload)
        except Exception:
            logger.warning("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook failed for {hook_name}")
