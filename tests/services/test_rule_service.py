"""Tests for RuleService."""

from __future__ import annotations

from typing import Any

import pluggy
import pytest

from rulefilter.config.models import BlankConfig, MessagesConfig
from rulefilter.config.settings import RuleFilterSettings
from rulefilter.domain.registry import register_rule
from rulefilter.domain.rules import Rule
from rulefilter.plugins.manager import PluginManager
from rulefilter.services.base import BaseService
from rulefilter.services.rule import RuleService

hookimpl = pluggy.HookimplMarker("rulefilter")

RULE = "strict_equal_to_value"


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    @hookimpl
    def post_apply(self, rule_name: str, op: str, passed: bool) -> None:
        self.calls.append({"rule_name": rule_name, "op": op, "passed": passed})


class _Exploding:
    @hookimpl
    def post_apply(self, rule_name: str, op: str, passed: bool) -> None:
        raise RuntimeError("boom")


class _FragileRule(Rule):
    """Rejects a missing reference and cannot evaluate anything else."""

    name = "fragile"
    code = "FILTER_FRAGILE"

    def __init__(self, reference: Any = None, **kwargs: Any) -> None:
        if reference is None:
            raise ValueError("reference required")
        super().__init__(reference, **kwargs)

    def validate(self, value: Any) -> bool:
        raise RuntimeError("cannot compare")

    def sanitize(self, value: Any) -> Any:
        raise RuntimeError("cannot fix")


class TestPredicates:
    def test_is_passes(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply(RULE, "is", "abc", reference="abc")
        assert result.ok is True
        assert result.op == "is"
        assert result.data == {
            "rule": RULE,
            "code": "FILTER_STRICT_EQUAL_TO_VALUE",
            "value": "abc",
            "reference": "abc",
            "passed": True,
        }

    def test_is_fails_with_rule_code(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply(RULE, "is", "abc", reference=0)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "FILTER_STRICT_EQUAL_TO_VALUE"
        assert result.error.message == "Value must be strictly equal to 0."
        assert result.error.detail == {
            "rule": RULE,
            "op": "is",
            "value": "abc",
            "reference": 0,
        }

    def test_type_mismatch_fails(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply(RULE, "is", "1", reference=1)
        assert result.ok is False

    def test_is_not_passes_on_mismatch(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply(RULE, "is_not", "abc", reference=0)
        assert result.ok is True
        assert result.op == "is_not"

    def test_is_not_fails_on_match(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply(RULE, "is_not", "abc", reference="abc")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "FILTER_STRICT_EQUAL_TO_VALUE"
        assert result.error.detail["op"] == "is_not"
        assert result.error.message == "Value must not be strictly equal to 'abc'."

    def test_is_blank_or(self, settings: RuleFilterSettings) -> None:
        svc = RuleService(settings)
        assert svc.apply(RULE, "is_blank_or", None, reference=5).ok is True
        assert svc.apply(RULE, "is_blank_or", "  ", reference=5).ok is True
        assert svc.apply(RULE, "is_blank_or", 4, reference=5).ok is False

    def test_blank_config_respected(self) -> None:
        settings = RuleFilterSettings(blank=BlankConfig(strip_whitespace=False))
        result = RuleService(settings).apply(RULE, "is_blank_or", "  ", reference=5)
        assert result.ok is False

    def test_message_override(self) -> None:
        settings = RuleFilterSettings(
            messages=MessagesConfig(
                overrides={"FILTER_STRICT_EQUAL_TO_VALUE": "Want {reference}"},
            )
        )
        result = RuleService(settings).apply(RULE, "is", 1, reference=2)
        assert result.error is not None
        assert result.error.message == "Want 2"

    def test_is_not_message_override(self) -> None:
        settings = RuleFilterSettings(
            messages=MessagesConfig(
                overrides={"FILTER_STRICT_EQUAL_TO_VALUE_NOT": "Anything but {reference}"},
            )
        )
        result = RuleService(settings).apply(RULE, "is_not", 2, reference=2)
        assert result.error is not None
        assert result.error.message == "Anything but 2"


class TestFixOps:
    def test_fix_empty_string(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply(RULE, "fix", "", reference="")
        assert result.ok is True
        assert result.data == {"rule": RULE, "value": "", "fixed": "", "changed": False}

    def test_fix_forces_reference(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply(RULE, "fix", "1", reference=1)
        assert result.data["fixed"] == 1
        assert result.data["changed"] is True

    def test_is_blank_or_fix(self, settings: RuleFilterSettings) -> None:
        svc = RuleService(settings)
        blank = svc.apply(RULE, "is_blank_or_fix", "", reference="abc")
        assert blank.data["fixed"] is None
        assert blank.data["changed"] is True
        filled = svc.apply(RULE, "is_blank_or_fix", "x", reference="abc")
        assert filled.data["fixed"] == "abc"


@pytest.mark.usefixtures("restore_registry")
class TestErrors:
    def test_unknown_rule(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply("nope", "is", 1, reference=1)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "UNKNOWN_RULE"
        assert result.error.detail == {"rule": "nope"}

    def test_unknown_operation(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).apply(RULE, "maybe", 1, reference=1)
        assert result.ok is False
        assert result.op == "maybe"
        assert result.error is not None
        assert result.error.code == "UNKNOWN_OPERATION"
        assert "is_blank_or_fix" in result.error.message

    def test_rule_raising_in_constructor(
        self, settings: RuleFilterSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        register_rule("fragile", _FragileRule)
        with caplog.at_level("WARNING"):
            result = RuleService(settings).apply("fragile", "is", 1, reference=None)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "RULE_ERROR"
        assert "ValueError" in result.error.message
        assert "Rule fragile raised during is" in caplog.text

    @pytest.mark.parametrize("op", ["is", "is_not", "is_blank_or", "fix", "is_blank_or_fix"])
    def test_rule_raising_in_operation(self, settings: RuleFilterSettings, op: str) -> None:
        register_rule("fragile", _FragileRule)
        result = RuleService(settings).apply("fragile", op, "x", reference="ok")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "RULE_ERROR"
        assert result.error.detail == {"rule": "fragile", "op": op}

    def test_self_referencing_value(self, settings: RuleFilterSettings) -> None:
        looped: list[Any] = []
        looped.append(looped)
        result = RuleService(settings).apply(RULE, "is_not", looped, reference=looped)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "FILTER_STRICT_EQUAL_TO_VALUE"


class TestHooks:
    def test_post_apply_dispatched(self, settings: RuleFilterSettings) -> None:
        pm = PluginManager()
        recorder = _Recorder()
        pm.register_plugin(recorder, name="recorder")
        svc = RuleService(settings, pm)

        svc.apply(RULE, "is", "a", reference="b")
        svc.apply(RULE, "fix", "a", reference="b")

        assert recorder.calls == [
            {"rule_name": RULE, "op": "is", "passed": False},
            {"rule_name": RULE, "op": "fix", "passed": True},
        ]

    def test_hook_failure_becomes_warning(self, settings: RuleFilterSettings) -> None:
        pm = PluginManager()
        pm.register_plugin(_Exploding(), name="exploding")
        result = RuleService(settings, pm).apply(RULE, "is", "a", reference="a")
        assert result.ok is True
        assert result.warnings == ["Plugin hook failed for post_apply"]

    def test_no_plugins_is_noop(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings, None).apply(RULE, "is", "a", reference="a")
        assert result.warnings == []


class TestListRules:
    def test_lists_builtin(self, settings: RuleFilterSettings) -> None:
        result = RuleService(settings).list_rules()
        assert result.ok is True
        assert result.op == "list_rules"
        assert {"name": RULE, "code": "FILTER_STRICT_EQUAL_TO_VALUE"} in result.data["items"]
        assert result.data["count"] == len(result.data["items"])


@pytest.mark.parametrize("service_cls", [RuleService])
def test_inherits_base_service(service_cls: type, settings: RuleFilterSettings) -> None:
    assert issubclass(service_cls, BaseService)
    svc = service_cls(settings)
    assert svc._settings is settings
    assert svc._plugins is None
