"""Structured logging configuration using structlog.

JSON lines go to stdout so Cloud Logging can pick up ``severity`` and the
bound request context. Locally the console renderer is used instead.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "ecobreak-backend"


def add_severity(_: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Copy the log level into the field Cloud Logging reads."""
    level = event_dict.get("level", method_name)
    event_dict["severity"] = "WARNING" if level == "warn" else str(level).upper()
    return event_dict


def configure_logging(json_logs: bool = True, level: int = logging.INFO) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        json_logs: Render JSON lines when True, colored console output otherwise.
        level: Minimum level for both structlog and stdlib loggers.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors.extend(
            [
                add_severity,
                structlog.processors.CallsiteParameterAdder(
                    {structlog.processors.CallsiteParameter.MODULE}
                ),
                structlog.processors.JSONRenderer(ensure_ascii=False),
            ]
        )
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # firebase_admin, googleapiclient and uvicorn use stdlib logging
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Logger tagged with the service name and any extra context."""
    return structlog.get_logger(name).bind(service=SERVICE_NAME, **initial_context)


def bind_request_context(**context: Any) -> None:
    """Bind per-request values to every log line emitted while handling it.

    Values from the previous request are dropped first.

    Args:
        **context: Values such as method, path or client_type.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)
