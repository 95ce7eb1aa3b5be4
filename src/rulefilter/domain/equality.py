"""Strict equality and blank detection.

Strict equality requires the same concrete type on both sides and equal
content, with no implicit coercion: ``1 != 1.0``, ``True != 1`` and
``"1" != 1``. Containers are compared element-wise with the same
strictness. Dict and set comparison ignores insertion order.
Self-referencing containers are supported.
"""

from __future__ import annotations

from typing import Any

_MISSING = object()


def strict_equals(left: Any, right: Any) -> bool:
    """Return True iff *left* and *right* match in type and content.

    Examples:
        >>> strict_equals("abc", "abc")
        True
        >>> strict_equals("1", 1)
        False
        >>> strict_equals([1, 2], [1, 2.0])
        False
    """
    return _strict_equals(left, right, set())


def _strict_equals(left: Any, right: Any, active: set[tuple[int, int]]) -> bool:
    if type(left) is not type(right):
        return False
    if not isinstance(left, (list, tuple, dict, set, frozenset)):
        return bool(left == right)
    if len(left) != len(right):
        return False

    # A pair already being compared further up the stack is a cycle.
    pair = (id(left), id(right))
    if pair in active:
        return True
    active.add(pair)
    try:
        if isinstance(left, dict):
            return _dicts_equal(left, right, active)
        if isinstance(left, (set, frozenset)):
            return _sets_equal(left, right, active)
        return all(_strict_equals(a, b, active) for a, b in zip(left, right, strict=True))
    finally:
        active.discard(pair)


def _dicts_equal(left: dict, right: dict, active: set[tuple[int, int]]) -> bool:
    right_keys = {key: key for key in right}
    for key, value in left.items():
        other_key = right_keys.get(key, _MISSING)
        if other_key is _MISSING or not _strict_equals(key, other_key, active):
            return False
        if not _strict_equals(value, right[other_key], active):
            return False
    return True


def _sets_equal(left: set | frozenset, right: set | frozenset, active: set[tuple[int, int]]) -> bool:
    right_items = {item: item for item in right}
    for item in left:
        other = right_items.get(item, _MISSING)
        if other is _MISSING or not _strict_equals(item, other, active):
            return False
    return True


def is_blank(value: Any, *, strip_whitespace: bool = True) -> bool:
    """Blank means ``None`` or an empty string.

    With *strip_whitespace* a whitespace-only string is blank as well.
    Every other value, including ``0``, ``False`` and ``[]``, is not blank.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return (value.strip() if strip_whitespace else value) == ""
    return False
