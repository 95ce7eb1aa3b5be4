"""Plugins for rulefilter, built on pluggy.

A plugin may contribute rules (``register_rules``) and observe rule
applications (``post_apply``). Plugin failures are warnings, never errors.
"""

from rulefilter.plugins.manager import PluginManager

__all__ = ["PluginManager"]
