"""Rule registry: name to rule class lookup.

Built-in rules are registered at import time and their names are
reserved. Plugins add rules through :func:`register_rule`.
"""

from __future__ import annotations

from typing import Any

from rulefilter.domain.rules import Rule, StrictEqualToValue

RULE_REGISTRY: dict[str, type[Rule]] = {}


def _builtin_rule_map() -> dict[str, type[Rule]]:
    return {StrictEqualToValue.name: StrictEqualToValue}


def get_rule_class(name: str) -> type[Rule]:
    """Look up the rule class registered under *name*.

    Raises:
        KeyError: If no rule is registered for *name*.
    """
    try:
        return RULE_REGISTRY[name]
    except KeyError:
        msg = f"No rule registered for name={name!r}"
        raise KeyError(msg) from None


def register_rule(name: str, rule_cls: type[Rule]) -> None:
    """Register a custom rule class under *name*.

    The class must extend :class:`Rule` and declare a failure ``code``.
    Built-in names are reserved and cannot be overridden by plugins.
    Registering the same class twice under one name is a no-op.
    """
    normalized_name = name.strip()
    if not normalized_name:
        msg = "Rule name must not be empty"
        raise ValueError(msg)

    if not isinstance(rule_cls, type) or not issubclass(rule_cls, Rule):
        msg = f"Rule {normalized_name!r} must extend Rule"
        raise TypeError(msg)

    if normalized_name in _builtin_rule_map():
        msg = f"Rule {normalized_name!r} conflicts with a built-in registration"
        raise ValueError(msg)

    if not rule_cls.code:
        msg = f"Rule {normalized_name!r} must declare a failure code"
        raise ValueError(msg)

    existing = RULE_REGISTRY.get(normalized_name)
    if existing is not None and existing is not rule_cls:
        msg = f"Rule {normalized_name!r} is already registered"
        raise ValueError(msg)

    RULE_REGISTRY[normalized_name] = rule_cls


def build_rule(name: str, reference: Any = None, *, strip_whitespace: bool = True) -> Rule:
    """Instantiate the rule registered under *name* with *reference*."""
    return get_rule_class(name)(reference, strip_whitespace=strip_whitespace)


def registered_rules() -> list[tuple[str, str]]:
    """Return ``(name, code)`` pairs for every registered rule, sorted by name."""
    return [(name, str(cls.code)) for name, cls in sorted(RULE_REGISTRY.items())]


RULE_REGISTRY.update(_builtin_rule_map())
