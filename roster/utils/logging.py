# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging for the roster package using structlog.

Modules keep logging through ``logging.getLogger(__name__)`` with %-style
arguments. setup_logging() routes those records through a structlog
ProcessorFormatter, so they pick up context bound with log_context() and
render as JSON outside development, or as console lines in development.

Example:
    >>> from roster.utils.logging import setup_logging, log_context
    >>> setup_logging(get_settings())
    >>> with log_context(operation="bulk_transition", status="withdrawn"):
    ...     logger.info("Updated %d enrollments", 5)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from roster.core.config.settings import Settings

PACKAGE_LOGGER = "roster"


def setup_logging(settings: "Settings") -> None:
    """Attach a structlog-rendered handler to the package logger.

    Calling it again replaces the previous handler.

    Args:
        settings: Application settings containing log_level and debug flag.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_development or settings.debug:
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    # Request lines from the HTTP client stack are noise at INFO
    for logger_name in ["httpx", "httpcore"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


@contextmanager
def log_context(**kwargs: object) -> Iterator[None]:
    """Bind key-value pairs to every log line emitted inside the block.

    Previously bound values are restored on exit, so blocks nest.

    Args:
        **kwargs: Key-value pairs to bind to the logging context.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
