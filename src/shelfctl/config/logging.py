"""Logging for shelfctl: structlog rendering on stderr.

stdout carries command output only, so every log record (structlog or
stdlib ``logging``) goes to a single stderr handler on the root logger.
``shelfctl.*`` loggers open up to DEBUG with ``--verbose``; everything
else stays at WARNING.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

_PACKAGE_LOGGER = "shelfctl"


def _pre_chain(*, log_json: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso" if log_json else "%H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_json:
        # ConsoleRenderer formats tracebacks itself.
        chain.append(structlog.processors.format_exc_info)
    return chain


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all logging through one structlog formatter on stderr.

    Safe to call more than once; each call replaces the previous handler.
    """
    pre_chain = _pre_chain(log_json=log_json)
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if log_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    logging.basicConfig(handlers=[handler], level=logging.WARNING, force=True)
    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
