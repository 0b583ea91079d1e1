"""
Structured logging for the FitSM vocabulary service.

Modules log through structlog with snake_case event names and key/value
context.  On a terminal the output is coloured console text; elsewhere
(containers, CI) it is one ECS-compatible JSON object per line, ready for
Elasticsearch / Kibana.

Examples:
    >>> from fitsm.core.logging import configure_logging, get_logger
    >>> configure_logging(level="INFO", json_format=True, service="fitsm-api")
    >>> logger = get_logger(__name__)
    >>> logger.info("vocabulary_loaded", terms=80, edges=167)

Output (JSON format)::

    {
      "@timestamp": "2025-12-26T10:00:00Z",
      "log.level": "info",
      "service.name": "fitsm-api",
      "logger": "fitsm.vocabulary.repository",
      "event": "vocabulary_loaded",
      "terms": 80,
      "edges": 167
    }

Records are rendered by structlog and handed to the stdlib root logger, so
uvicorn's access and error records end up in the same stream.

Tags:
    logging, structlog, observability, ecs, json-logging, fitsm
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Set by configure_logging(); read by every record
_SERVICE_NAME = "fitsm"

# structlog key -> ECS field name
_ECS_FIELDS = {
    "timestamp": "@timestamp",
    "level": "log.level",
}


def _add_service_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _rename_to_ecs(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename structlog's default keys to their ECS equivalents."""
    for key, ecs_key in _ECS_FIELDS.items():
        if key in event_dict:
            event_dict[ecs_key] = event_dict.pop(key)
    return event_dict


def _processor_chain(*, json_format: bool, add_timestamp: bool) -> list[Processor]:
    chain: list[Processor] = []
    if add_timestamp:
        chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    chain += [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service_name,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        chain += [
            _rename_to_ecs,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        chain += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]
    return chain


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "fitsm",
    add_timestamp: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Minimum level name (``DEBUG``, ``INFO``, ``WARNING``, ``ERROR``).
        json_format: ``True`` for JSON lines, ``False`` for console output,
            ``None`` to pick JSON whenever stdout is not a terminal.
        service: Value of ``service.name`` on every record.
        add_timestamp: Stamp records with an ISO-8601 UTC time.
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    if json_format is None:
        json_format = not sys.stdout.isatty()

    structlog.configure(
        processors=_processor_chain(json_format=json_format, add_timestamp=add_timestamp),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)
    # basicConfig is a no-op once handlers exist (uvicorn, pytest)
    logging.getLogger().setLevel(numeric_level)


def get_logger(name: str | None = None) -> Any:
    """Structured logger, usually ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every record logged from this context.

    Example:
        bind_context(request_id="abc123")
        logger.info("term_resolved")  # carries request_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)
