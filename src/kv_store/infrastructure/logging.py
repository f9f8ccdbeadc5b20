"""Structured logging for the key-value store."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from kv_store.infrastructure.config import ObservabilityConfig, get_config

SERVICE_NAME = "kv_store"


def add_service_name(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every entry with the emitting service."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(observability: ObservabilityConfig | None = None) -> None:
    """
    Configure structlog for the store.

    Args:
        observability: Level and renderer settings. Falls back to the
            global configuration when omitted.
    """
    if observability is None:
        observability = get_config().observability

    level = getattr(logging, observability.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if observability.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> Any:
    """
    Get a structlog logger, optionally bound to a component name.

    Args:
        name: Component name, bound as ``component``.
        **initial_context: Extra key/value pairs to bind.
    """
    logger = structlog.get_logger()
    if name:
        initial_context.setdefault("component", name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
