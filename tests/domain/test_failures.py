"""Tests for failure records and message rendering."""

from __future__ import annotations

import pytest

from rulefilter.domain.failures import DEFAULT_MESSAGES, Failure, message_key, render_message


class TestRenderMessage:
    def test_default_template(self) -> None:
        msg = render_message("FILTER_STRICT_EQUAL_TO_VALUE", {"reference": 0})
        assert msg == "Value must be strictly equal to 0."

    def test_override_wins(self) -> None:
        msg = render_message(
            "FILTER_STRICT_EQUAL_TO_VALUE",
            {"reference": "x"},
            overrides={"FILTER_STRICT_EQUAL_TO_VALUE": "Expected {reference}."},
        )
        assert msg == "Expected x."

    def test_empty_override_falls_back(self) -> None:
        msg = render_message(
            "FILTER_STRICT_EQUAL_TO_VALUE",
            {"reference": 1},
            overrides={"FILTER_STRICT_EQUAL_TO_VALUE": ""},
        )
        assert msg == "Value must be strictly equal to 1."

    def test_unknown_code_returns_code(self) -> None:
        assert render_message("FILTER_UNKNOWN") == "FILTER_UNKNOWN"

    def test_missing_param_returns_template(self) -> None:
        msg = render_message("FILTER_STRICT_EQUAL_TO_VALUE")
        assert msg == DEFAULT_MESSAGES["FILTER_STRICT_EQUAL_TO_VALUE"]

    def test_negated_template(self) -> None:
        msg = render_message("FILTER_STRICT_EQUAL_TO_VALUE", {"reference": "abc"}, negated=True)
        assert msg == "Value must not be strictly equal to 'abc'."

    def test_negated_override_uses_suffixed_key(self) -> None:
        msg = render_message(
            "FILTER_STRICT_EQUAL_TO_VALUE",
            {"reference": 1},
            negated=True,
            overrides={
                "FILTER_STRICT_EQUAL_TO_VALUE": "Want {reference}",
                "FILTER_STRICT_EQUAL_TO_VALUE_NOT": "Anything but {reference}",
            },
        )
        assert msg == "Anything but 1"

    def test_negated_unknown_code_returns_key(self) -> None:
        assert render_message("FILTER_UNKNOWN", negated=True) == "FILTER_UNKNOWN_NOT"

    def test_message_key(self) -> None:
        assert message_key("FILTER_X") == "FILTER_X"
        assert message_key("FILTER_X", negated=True) == "FILTER_X_NOT"


class TestFailure:
    def test_frozen(self) -> None:
        failure = Failure(code="FILTER_STRICT_EQUAL_TO_VALUE", message="m")
        with pytest.raises(Exception):
            failure.code = "other"  # type: ignore[misc]

    def test_default_params(self) -> None:
        assert Failure(code="C", message="m").params == {}
