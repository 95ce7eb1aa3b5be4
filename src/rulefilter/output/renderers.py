"""Human-readable rendering of ServiceResult.

Successful predicate and fix results are shown as a status line followed
by ``key: value`` fields; :data:`_FIELDS` lists which fields each op shows
and which only appear with ``--verbose``. Values are printed as JSON
literals so they read the same way they are typed on the command line.
"""

from __future__ import annotations

import json
from functools import partial
from typing import TYPE_CHECKING, Any, NamedTuple

from rich.table import Table
from rich.text import Text

from rulefilter.output.console import render_to_text

if TYPE_CHECKING:
    from rich.console import Console

    from rulefilter.services.result import ServiceResult

_LITERAL_KEYS = frozenset({"value", "reference", "fixed"})


class _Field(NamedTuple):
    key: str
    style: str = ""
    verbose_only: bool = False


_PREDICATE_FIELDS = (
    _Field("rule", "rf.rule"),
    _Field("value", "rf.value"),
    _Field("reference", verbose_only=True),
    _Field("code", "rf.code", verbose_only=True),
)
_FIX_FIELDS = (
    _Field("rule", "rf.rule"),
    _Field("fixed", "rf.value"),
    _Field("changed"),
    _Field("value", verbose_only=True),
)
_FIELDS: dict[str, tuple[_Field, ...]] = {
    "is": _PREDICATE_FIELDS,
    "is_not": _PREDICATE_FIELDS,
    "is_blank_or": _PREDICATE_FIELDS,
    "fix": _FIX_FIELDS,
    "is_blank_or_fix": _FIX_FIELDS,
}


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* for a terminal."""
    if not result.ok:
        draw = partial(_draw_error, result, verbose=verbose)
    elif result.op == "list_rules":
        draw = partial(_draw_rules, result)
    else:
        draw = partial(_draw_fields, result, verbose=verbose)
    return render_to_text(draw).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line for ``--quiet``: the fixed value, rule names, or OK/FAIL."""
    if not result.ok:
        code = result.error.code if result.error else "ERROR"
        return f"FAIL: {result.op} {code}"
    if result.op in ("fix", "is_blank_or_fix"):
        return _literal(result.data.get("fixed"))
    if result.op == "list_rules":
        return "\n".join(item["name"] for item in result.data.get("items", []))
    return f"OK: {result.op}"


def _literal(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _display(key: str, value: Any) -> str:
    if key in _LITERAL_KEYS:
        return _literal(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=repr)
    return str(value)


def _print_field(console: Console, key: str, value: Any, *, style: str = "", indent: int = 2) -> None:
    console.print(Text.assemble((f"{' ' * indent}{key}: ", "rf.key"), (_display(key, value), style)))


def _draw_fields(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    console.print(Text("OK", style="rf.ok"), Text(f"  {result.op}", style="rf.op"))
    fields = _FIELDS.get(result.op)
    if fields is None:
        for key, value in result.data.items():
            _print_field(console, key, value)
        return
    for field in fields:
        if field.verbose_only and not verbose:
            continue
        _print_field(console, field.key, result.data.get(field.key), style=field.style)


def _draw_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    err = result.error
    console.print(
        Text("ERROR", style="rf.error"),
        Text(f"  {result.op}", style="rf.op"),
        Text(" - "),
        Text(err.message if err else "Unknown error"),
    )
    if err is None:
        return
    _print_field(console, "code", err.code, style="rf.code")
    if verbose and err.detail:
        console.print(Text("  detail:", style="rf.key"))
        for key, value in err.detail.items():
            _print_field(console, key, value, indent=4)


def _draw_rules(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No rules registered.")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Rule", style="rf.rule")
    table.add_column("Failure code", style="rf.code")
    for item in items:
        table.add_row(item["name"], item["code"])
    console.print(table)
