"""Command: list registered rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rulefilter.commands._base import RfCommand

if TYPE_CHECKING:
    from rulefilter.commands._context import AppContext


@click.command(
    cls=RfCommand,
    examples="""\
  rulefilter rules
  rulefilter --json rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List registered rules and their failure codes."""
    app.emit(app.rule_service().list_rules())
