"""Click base classes for rulefilter commands.

Both classes take an ``examples`` text. When it is set, an eager
``--examples`` flag prints it and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    examples: str | None

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class RfCommand(_ExamplesMixin, click.Command):
    """A command with optional ``--examples``."""


class RfGroup(_ExamplesMixin, click.Group):
    """The root group; ``@group.command`` builds :class:`RfCommand`."""

    command_class = RfCommand
