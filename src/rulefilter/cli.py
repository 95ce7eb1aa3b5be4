"""The ``rulefilter`` entry point.

Global flags are read here, merged with env vars and ``rulefilter.toml``
into :class:`RuleFilterSettings`, and handed to subcommands as an
:class:`AppContext`.
"""

from __future__ import annotations

import click

from rulefilter import __version__
from rulefilter.commands import register_commands
from rulefilter.commands._base import RfGroup
from rulefilter.commands._context import AppContext
from rulefilter.config.settings import RuleFilterSettings


@click.group(
    cls=RfGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    examples="""\
  rulefilter rules
  rulefilter is strict_equal_to_value 1 --reference 1
  rulefilter --json is-not strict_equal_to_value '"1"' --reference 1
  rulefilter -q fix strict_equal_to_value '"x"' --reference '"abc"'
  rulefilter -c ./ci/rulefilter.toml is-blank-or strict_equal_to_value null -r 5""",
)
@click.version_option(__version__, prog_name="rulefilter")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the essential line.")
@click.option("-v", "--verbose", is_flag=True, help="Show details and debug logs.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Read this file instead of searching for rulefilter.toml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """Check values against named rules and fix them."""
    ctx.obj = AppContext(RuleFilterSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
