"""RuleService: apply one named rule operation to one value."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from rulefilter.domain.equality import strict_equals
from rulefilter.domain.registry import build_rule, registered_rules
from rulefilter.domain.rules import Rule
from rulefilter.domain.types import FIX_OPS, RuleOp
from rulefilter.services.base import BaseService
from rulefilter.services.result import ServiceResult

logger = logging.getLogger(__name__)

RULE_ERROR = "RULE_ERROR"


class RuleService(BaseService):
    """Resolve rules from the registry and apply their operations.

    Predicate operations succeed when the predicate holds. When it does not,
    the result carries a ServiceError whose code is the rule's failure code.
    Fix operations always succeed and report the corrected value.

    Rules contributed by plugins may raise; that becomes a ``RULE_ERROR``
    result instead of propagating to the caller.
    """

    def apply(
        self,
        rule_name: str,
        op: str,
        value: Any,
        *,
        reference: Any = None,
    ) -> ServiceResult:
        try:
            rule_op = RuleOp(op)
        except ValueError:
            valid = ", ".join(o.value for o in RuleOp)
            return ServiceResult.failed(
                op,
                "UNKNOWN_OPERATION",
                f"Unknown operation {op!r}; expected one of: {valid}",
                detail={"op": op},
            )

        try:
            rule = build_rule(
                rule_name,
                reference,
                strip_whitespace=self._settings.blank.strip_whitespace,
            )
        except KeyError:
            return ServiceResult.failed(
                rule_op.value,
                "UNKNOWN_RULE",
                f"No rule named {rule_name!r}",
                detail={"rule": rule_name},
            )
        except Exception as exc:
            return self._rule_error(rule_name, rule_op, exc)

        warnings: list[str] = []
        with structlog.contextvars.bound_contextvars(rule=rule_name, op=rule_op.value):
            try:
                if rule_op in FIX_OPS:
                    return self._fix(rule, rule_name, rule_op, value, warnings)
                return self._check(rule, rule_name, rule_op, value, reference, warnings)
            except Exception as exc:
                return self._rule_error(rule_name, rule_op, exc)

    def list_rules(self) -> ServiceResult:
        """List registered rules with their failure codes."""
        items = [{"name": name, "code": code} for name, code in registered_rules()]
        return ServiceResult(
            ok=True,
            op="list_rules",
            data={"count": len(items), "items": items},
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _fix(
        self,
        rule: Rule,
        rule_name: str,
        rule_op: RuleOp,
        value: Any,
        warnings: list[str],
    ) -> ServiceResult:
        fixed = rule.fix(value) if rule_op is RuleOp.FIX else rule.is_blank_or_fix(value)
        changed = not strict_equals(fixed, value)
        logger.debug("Fixed value (changed=%s)", changed)
        self._dispatch_event(
            "post_apply",
            {"rule_name": rule_name, "op": rule_op.value, "passed": True},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=rule_op.value,
            data={"rule": rule_name, "value": value, "fixed": fixed, "changed": changed},
            warnings=warnings,
        )

    def _check(
        self,
        rule: Rule,
        rule_name: str,
        rule_op: RuleOp,
        value: Any,
        reference: Any,
        warnings: list[str],
    ) -> ServiceResult:
        if rule_op is RuleOp.IS:
            passed = rule.is_(value)
        elif rule_op is RuleOp.IS_NOT:
            passed = rule.is_not(value)
        else:
            passed = rule.is_blank_or(value)
        passed = bool(passed)
        logger.debug("Predicate evaluated (passed=%s)", passed)
        self._dispatch_event(
            "post_apply",
            {"rule_name": rule_name, "op": rule_op.value, "passed": passed},
            warnings,
        )

        if passed:
            return ServiceResult(
                ok=True,
                op=rule_op.value,
                data={
                    "rule": rule_name,
                    "code": str(rule.code),
                    "value": value,
                    "reference": reference,
                    "passed": True,
                },
                warnings=warnings,
            )

        # is_blank_or only fails on a non-blank value, where it matches is_.
        failure = rule.failure(
            value,
            negated=rule_op is RuleOp.IS_NOT,
            messages=self._settings.messages.overrides,
        )
        if failure is None:
            raise RuntimeError(f"{type(rule).__name__} gave inconsistent results for one value")
        return ServiceResult.failed(
            rule_op.value,
            failure.code,
            failure.message,
            detail={
                "rule": rule_name,
                "op": rule_op.value,
                "value": value,
                "reference": reference,
            },
            warnings=warnings,
        )

    @staticmethod
    def _rule_error(rule_name: str, rule_op: RuleOp, exc: Exception) -> ServiceResult:
        logger.warning("Rule %s raised during %s", rule_name, rule_op.value, exc_info=True)
        return ServiceResult.failed(
            rule_op.value,
            RULE_ERROR,
            f"Rule {rule_name!r} raised {type(exc).__name__}: {exc}",
            detail={"rule": rule_name, "op": rule_op.value},
        )
