"""Pluggy hook specifications for rulefilter.

One setup-time hook lets plugins contribute rules to the registry.
One event hook is called after every rule application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from rulefilter.domain.rules import Rule

hookspec = pluggy.HookspecMarker("rulefilter")
hookimpl = pluggy.HookimplMarker("rulefilter")


class RuleFilterHookSpec:
    """Hook specifications for the rulefilter plugin system."""

    @hookspec
    def register_rules(self) -> dict[str, type[Rule]] | None:
        """Return name -> Rule subclass mappings to extend RULE_REGISTRY."""

    @hookspec
    def post_apply(self, rule_name: str, op: str, passed: bool) -> None:
        """Called after a rule operation has been applied."""
