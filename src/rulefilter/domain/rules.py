"""Rule contract and the built-in strict-equal-to-value rule.

A rule is constructed once with its reference value and is then applied
to any number of subject values. Every operation is a pure function of
the subject and the reference:

- ``is_`` / ``is_not``: complementary predicates.
- ``is_blank_or``: passes blank subjects, otherwise ``is_``.
- ``fix``: returns a value that satisfies ``is_``.
- ``is_blank_or_fix``: maps blank subjects to ``None``, otherwise ``fix``.

No operation raises for any subject value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from rulefilter.domain.equality import is_blank, strict_equals
from rulefilter.domain.failures import Failure, render_message
from rulefilter.domain.types import FailureCode


class Rule(ABC):
    """Base class for all rules.

    Subclasses set ``name`` and ``code`` and implement :meth:`validate`
    and :meth:`sanitize`; the public operations are derived from those two.
    """

    name: ClassVar[str] = ""
    code: ClassVar[str] = ""

    def __init__(self, reference: Any = None, *, strip_whitespace: bool = True) -> None:
        self._reference = reference
        self._strip_whitespace = strip_whitespace

    @property
    def reference(self) -> Any:
        return self._reference

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """Return True when *value* satisfies the rule."""

    @abstractmethod
    def sanitize(self, value: Any) -> Any:
        """Return a corrected form of *value* that satisfies the rule."""

    def is_(self, value: Any) -> bool:
        return self.validate(value)

    def is_not(self, value: Any) -> bool:
        return not self.validate(value)

    def is_blank_or(self, value: Any) -> bool:
        if is_blank(value, strip_whitespace=self._strip_whitespace):
            return True
        return self.validate(value)

    def fix(self, value: Any) -> Any:
        return self.sanitize(value)

    def is_blank_or_fix(self, value: Any) -> Any:
        if is_blank(value, strip_whitespace=self._strip_whitespace):
            return None
        return self.sanitize(value)

    def params(self) -> dict[str, Any]:
        """Template parameters for this rule's failure message."""
        return {"reference": self._reference}

    def failure(
        self,
        value: Any,
        *,
        negated: bool = False,
        messages: Mapping[str, str] | None = None,
    ) -> Failure | None:
        """Return a :class:`Failure` if *value* fails the check, else None.

        The check is ``is_``, or ``is_not`` when *negated* is set. Both
        directions report the rule's code; only the message differs.
        """
        if bool(self.validate(value)) != negated:
            return None
        params = self.params()
        return Failure(
            code=str(self.code),
            message=render_message(self.code, params, negated=negated, overrides=messages),
            params=params,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._reference!r})"


class StrictEqualToValue(Rule):
    """The subject must be strictly equal to the reference value.

    Fixing forces the subject to the reference, so ``fix`` is idempotent
    and its result always passes ``is_``.

    Examples:
        >>> rule = StrictEqualToValue("abc")
        >>> rule.is_("abc"), rule.is_(0), rule.is_not(0)
        (True, False, True)
        >>> rule.fix("anything")
        'abc'
    """

    name = "strict_equal_to_value"
    code = FailureCode.STRICT_EQUAL_TO_VALUE

    def validate(self, value: Any) -> bool:
        return strict_equals(value, self._reference)

    def sanitize(self, value: Any) -> Any:
        return self._reference
