"""Failure codes and rule operation names."""

from __future__ import annotations

from enum import StrEnum


class FailureCode(StrEnum):
    """Machine-readable codes reported when a rule predicate fails."""

    STRICT_EQUAL_TO_VALUE = "FILTER_STRICT_EQUAL_TO_VALUE"


class RuleOp(StrEnum):
    """Operations every rule exposes."""

    IS = "is"
    IS_NOT = "is_not"
    IS_BLANK_OR = "is_blank_or"
    FIX = "fix"
    IS_BLANK_OR_FIX = "is_blank_or_fix"


PREDICATE_OPS = frozenset({RuleOp.IS, RuleOp.IS_NOT, RuleOp.IS_BLANK_OR})
FIX_OPS = frozenset({RuleOp.FIX, RuleOp.IS_BLANK_OR_FIX})
