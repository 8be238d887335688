"""Structured logging setup for the AidMatch pipeline."""

import logging
from typing import Optional

import structlog

from aidmatch_agents.config import AidMatchConfig, LogFormat


def configure_logging(config: Optional[AidMatchConfig] = None) -> None:
    """Set up structlog with JSON or console rendering based on config."""
    config = config or AidMatchConfig()
    level = "DEBUG" if config.is_debug else config.log_level

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.log_format == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level),
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
