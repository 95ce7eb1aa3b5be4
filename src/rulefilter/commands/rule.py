"""Commands: apply a rule operation to a single value.

VALUE and --reference are read as JSON literals so types survive the
command line (``1`` is an int, ``'"1"'`` is a string). Text that is not
valid JSON is taken as a plain string; ``--raw`` skips JSON parsing.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click

from rulefilter.commands._base import RfCommand
from rulefilter.domain.types import RuleOp

if TYPE_CHECKING:
    from rulefilter.commands._context import AppContext


def parse_literal(text: str, *, raw: bool = False) -> Any:
    """Decode *text* as a JSON literal, falling back to the text itself."""
    if raw:
        return text
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _rule_arguments(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared RULE VALUE arguments and --reference/--raw options."""
    func = click.option(
        "--raw", is_flag=True, help="Treat VALUE and --reference as plain strings."
    )(func)
    func = click.option(
        "-r",
        "--reference",
        required=True,
        help="Reference value the rule compares against (JSON literal).",
    )(func)
    func = click.argument("value")(func)
    func = click.argument("rule_name", metavar="RULE")(func)
    return func


def _run(app: AppContext, op: RuleOp, rule_name: str, value: str, reference: str, raw: bool) -> None:
    app.emit(
        app.rule_service().apply(
            rule_name,
            op.value,
            parse_literal(value, raw=raw),
            reference=parse_literal(reference, raw=raw),
        )
    )


@click.command(
    "is",
    cls=RfCommand,
    examples="""\
  rulefilter is strict_equal_to_value '"abc"' --reference '"abc"'
  rulefilter is strict_equal_to_value 1 --reference '"1"'
  rulefilter is strict_equal_to_value abc --reference abc --raw""",
)
@_rule_arguments
@click.pass_obj
def is_(app: AppContext, rule_name: str, value: str, reference: str, raw: bool) -> None:
    """Pass when VALUE satisfies RULE."""
    _run(app, RuleOp.IS, rule_name, value, reference, raw)


@click.command(
    "is-not",
    cls=RfCommand,
    examples="""\
  rulefilter is-not strict_equal_to_value '"abc"' --reference 0""",
)
@_rule_arguments
@click.pass_obj
def is_not(app: AppContext, rule_name: str, value: str, reference: str, raw: bool) -> None:
    """Pass when VALUE does not satisfy RULE."""
    _run(app, RuleOp.IS_NOT, rule_name, value, reference, raw)


@click.command(
    "is-blank-or",
    cls=RfCommand,
    examples="""\
  rulefilter is-blank-or strict_equal_to_value null --reference 5
  rulefilter is-blank-or strict_equal_to_value '"  "' --reference 5""",
)
@_rule_arguments
@click.pass_obj
def is_blank_or(app: AppContext, rule_name: str, value: str, reference: str, raw: bool) -> None:
    """Pass when VALUE is blank or satisfies RULE."""
    _run(app, RuleOp.IS_BLANK_OR, rule_name, value, reference, raw)


@click.command(
    "fix",
    cls=RfCommand,
    examples="""\
  rulefilter fix strict_equal_to_value '"anything"' --reference '"abc"'
  rulefilter -q fix strict_equal_to_value 2 --reference 1""",
)
@_rule_arguments
@click.pass_obj
def fix(app: AppContext, rule_name: str, value: str, reference: str, raw: bool) -> None:
    """Print the corrected form of VALUE under RULE."""
    _run(app, RuleOp.FIX, rule_name, value, reference, raw)


@click.command(
    "is-blank-or-fix",
    cls=RfCommand,
    examples="""\
  rulefilter is-blank-or-fix strict_equal_to_value '""' --reference '"abc"'""",
)
@_rule_arguments
@click.pass_obj
def is_blank_or_fix(
    app: AppContext, rule_name: str, value: str, reference: str, raw: bool
) -> None:
    """Blank VALUE becomes null; anything else is fixed under RULE."""
    _run(app, RuleOp.IS_BLANK_OR_FIX, rule_name, value, reference, raw)
