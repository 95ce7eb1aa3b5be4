"""Failure records and the human-readable message table.

Callers receive a :class:`Failure` carrying the machine-readable code;
the message is looked up from :data:`DEFAULT_MESSAGES` unless the
``[messages]`` config section overrides it. A failed ``is_not`` keeps the
rule's code but is worded from the ``<code>_NOT`` template.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from rulefilter.domain.types import FailureCode

NEGATED_SUFFIX = "_NOT"

DEFAULT_MESSAGES: dict[str, str] = {
    FailureCode.STRICT_EQUAL_TO_VALUE.value: "Value must be strictly equal to {reference!r}.",
    FailureCode.STRICT_EQUAL_TO_VALUE.value
    + NEGATED_SUFFIX: "Value must not be strictly equal to {reference!r}.",
}


class Failure(BaseModel):
    """One failed rule check."""

    model_config = {"frozen": True}

    code: str
    message: str
    params: dict[str, Any] = Field(default_factory=dict)


def message_key(code: str, *, negated: bool = False) -> str:
    """Key of the message template for *code*.

    >>> message_key("FILTER_STRICT_EQUAL_TO_VALUE", negated=True)
    'FILTER_STRICT_EQUAL_TO_VALUE_NOT'
    """
    return f"{code}{NEGATED_SUFFIX}" if negated else str(code)


def render_message(
    code: str,
    params: Mapping[str, Any] | None = None,
    *,
    negated: bool = False,
    overrides: Mapping[str, str] | None = None,
) -> str:
    """Render the message for *code*, falling back to the template key.

    Templates use :meth:`str.format` fields named after *params*. A template
    that references a missing field is returned unformatted.
    """
    key = message_key(code, negated=negated)
    template = (overrides or {}).get(key) or DEFAULT_MESSAGES.get(key)
    if template is None:
        return key
    try:
        return template.format(**dict(params or {}))
    except (KeyError, IndexError, ValueError):
        return template
