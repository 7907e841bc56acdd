"""structlog configuration for changedesk.

Two output modes:
- Human (default): colored console output to stderr
- JSON (CHANGEDESK_LOG_JSON or production): structured JSON lines to stderr

Django owns the stdlib side through ``LOGGING``; :func:`build_logging_config`
returns that dict and :func:`configure_structlog` wires structlog into it.
"""

from __future__ import annotations

import sys
from typing import Any

import structlog

SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_structlog() -> None:
    """Route structlog events through the stdlib handlers Django configures."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_logging_config(*, log_json: bool, level: str = "INFO") -> dict[str, Any]:
    """Return a ``dictConfig`` mapping suitable for Django's ``LOGGING`` setting.

    Args:
        log_json: Use the JSON renderer instead of the console renderer.
        level: Level applied to the project loggers.
    """
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
                "foreign_pre_chain": SHARED_PROCESSORS,
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "structured",
            },
        },
        "root": {"handlers": ["stderr"], "level": "WARNING"},
        "loggers": {
            "django": {"level": "WARNING"},
            "core": {"level": level},
            "tickets": {"level": level},
            "devices": {"level": level},
        },
    }
