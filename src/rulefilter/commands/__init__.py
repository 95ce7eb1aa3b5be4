"""Subcommand modules for rulefilter.

Provides register_commands() which uses deferred imports to keep
``rulefilter --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the rule operation commands and the rules listing."""
    from rulefilter.commands.rule import fix, is_, is_blank_or, is_blank_or_fix, is_not
    from rulefilter.commands.rules import rules

    for command in (is_, is_not, is_blank_or, fix, is_blank_or_fix, rules):
        cli.add_command(command)
