"""AppContext: the object subcommands receive through ``@click.pass_obj``.

It owns the resolved settings, sets up logging once per invocation, loads
plugins on first use and writes results with the right stream and exit code.
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

import click

from rulefilter.config.logging import configure_logging
from rulefilter.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from rulefilter.config.settings import RuleFilterSettings
    from rulefilter.plugins.manager import PluginManager
    from rulefilter.services.result import ServiceResult
    from rulefilter.services.rule import RuleService


class AppContext:
    """Per-invocation state shared by all commands.

    Plugins are imported lazily so ``--help``, ``--version`` and
    ``--examples`` never run third-party plugin code.
    """

    def __init__(self, settings: RuleFilterSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @cached_property
    def plugins(self) -> PluginManager | None:
        """The loaded plugin manager, or None with ``[plugins] enabled = false``."""
        config = self.settings.plugins
        if not config.enabled:
            return None
        from rulefilter.plugins.manager import PluginManager

        manager = PluginManager()
        manager.discover_and_load(local_dir=Path(config.local_dir) if config.local_dir else None)
        return manager

    def rule_service(self) -> RuleService:
        from rulefilter.services.rule import RuleService

        return RuleService(self.settings, self.plugins)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits with 1.

        Warnings of a successful result are echoed to stderr, except in
        JSON mode where they are already part of the payload.
        """
        mode = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        text = format_result(result, settings=mode)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not mode.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
