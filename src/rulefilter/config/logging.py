"""Logging for rulefilter: stdlib loggers, rendered by structlog.

Modules log with ``logging.getLogger(__name__)``. Every record goes to
stderr, either as coloured console lines or, with ``--log-json``, as one
JSON object per line. Values bound through ``structlog.contextvars``
(``rule`` and ``op`` while a rule is applied) are added to each record.
"""

from __future__ import annotations

import logging.config
import sys

import structlog

LOGGER_NAME = "rulefilter"

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _render_chain(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """(Re)configure logging for one CLI invocation.

    Only the ``rulefilter`` logger drops to DEBUG with *verbose*; the root
    logger and third-party libraries stay at WARNING.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": _PRE_CHAIN,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        *_render_chain(log_json),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stderr,
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": {
                LOGGER_NAME: {"level": "DEBUG" if verbose else "WARNING"},
                "pluggy": {"level": "WARNING"},
            },
        }
    )
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
