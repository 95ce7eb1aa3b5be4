"""Plugin discovery and loading.

Plugins come from two places: the ``rulefilter.plugins`` entry-point group
(modules or plugin objects from installed distributions) and, optionally,
a directory of single-file plugins whose hook-bearing classes are
instantiated. Rules returned from ``register_rules`` go into the rule
registry; a plugin that misbehaves is logged and skipped.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

import pluggy

from rulefilter.domain.registry import register_rule
from rulefilter.plugins.hookspecs import RuleFilterHookSpec

PROJECT_NAME = "rulefilter"
ENTRY_POINT_GROUP = "rulefilter.plugins"
LOCAL_MODULE_PREFIX = "rulefilter_local_plugin_"

logger = logging.getLogger(__name__)


class PluginManager:
    """Wraps a :class:`pluggy.PluginManager` with rulefilter's discovery rules."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(RuleFilterHookSpec)
        self._loaded = False
        self._rules_from: set[str] = set()

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point and local plugins, then register their rules.

        Returns the names of all registered plugins.
        """
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        logger.debug("Loaded %d entry-point plugin(s)", count)
        if local_dir is not None:
            for module in self._import_local_modules(local_dir):
                self._register_local_classes(module)
        self._collect_rules()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register *plugin*; its rules are added at once if loading is done."""
        self._pm.register(plugin, name=name or type(plugin).__name__)
        if self._loaded:
            self._collect_rules()

    def unregister(self, plugin: object) -> None:
        name = self._pm.get_name(plugin)
        self._pm.unregister(plugin)
        self._rules_from.discard(name or "")

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [name for name, _plugin in self._pm.list_name_plugin()]

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _collect_rules(self) -> None:
        """Call ``register_rules`` once per plugin not yet collected."""
        for impl in self._pm.hook.register_rules.get_hookimpls():
            if impl.plugin_name in self._rules_from:
                continue
            self._rules_from.add(impl.plugin_name)
            try:
                rule_map = impl.function()
            except Exception:
                logger.warning(
                    "Failed to collect rules from plugin %s", impl.plugin_name, exc_info=True
                )
                continue
            if rule_map is None:
                continue
            if not isinstance(rule_map, dict):
                logger.warning("Plugin %s returned non-dict rule registrations", impl.plugin_name)
                continue
            for rule_name, rule_cls in rule_map.items():
                try:
                    register_rule(rule_name, rule_cls)
                except (TypeError, ValueError) as exc:
                    logger.warning(
                        "Skipping rule registration %r from plugin %s: %s",
                        rule_name,
                        impl.plugin_name,
                        exc,
                    )

    # ------------------------------------------------------------------
    # Local directory
    # ------------------------------------------------------------------

    def _import_local_modules(self, local_dir: Path) -> list[ModuleType]:
        """Import each ``*.py`` in *local_dir* not starting with ``_``."""
        if not local_dir.is_dir():
            logger.debug("Local plugin directory %s does not exist", local_dir)
            return []

        modules: list[ModuleType] = []
        for path in sorted(local_dir.glob("[!_]*.py")):
            module_name = LOCAL_MODULE_PREFIX + path.stem
            spec = importlib.util.spec_from_file_location(module_name, path)
            if spec is None or spec.loader is None:
                logger.warning("Failed to load local plugin %s: no module spec", path)
                continue
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except Exception:
                del sys.modules[module_name]
                logger.warning("Failed to load local plugin %s", path, exc_info=True)
                continue
            modules.append(module)
        return modules

    def _register_local_classes(self, module: ModuleType) -> None:
        """Instantiate and register the classes *module* defines with hookimpls."""
        for _attr, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module.__name__ or not self._defines_hooks(cls):
                continue
            try:
                self._pm.register(cls(), name=module.__name__)
            except Exception:
                logger.warning(
                    "Failed to register plugin class %s from %s",
                    cls.__name__,
                    module.__file__,
                    exc_info=True,
                )
                continue
            logger.debug("Loaded local plugin %s from %s", cls.__name__, module.__file__)

    def _defines_hooks(self, cls: type) -> bool:
        return any(
            self._pm.parse_hookimpl_opts(cls, attr) is not None
            for attr in dir(cls)
            if not attr.startswith("_")
        )
