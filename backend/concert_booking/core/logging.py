"""
Structured logging for the reservation service.

Domain events (`reservation_created`, `reservation_rejected`, ...) come from
the store loggers under `concert_booking.services`; their level is set apart
from the root level so admission decisions can be traced without turning on
debug output everywhere else.
"""

import logging
import sys
from typing import Optional

import structlog
from concert_booking.core.config import Settings, get_settings

STORE_LOGGER = "concert_booking.services"


def wants_json(settings: Settings) -> bool:
    """JSON lines in production unless DEBUG asks for the console renderer."""
    return settings.ENVIRONMENT == "production" and not settings.DEBUG


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if wants_json(settings):
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.DEBUG)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ]
    ))

    root_logger = logging.getLogger()
    # Lifespan may run more than once per process (tests, reloads)
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(_level(settings.LOG_LEVEL))

    logging.getLogger(STORE_LOGGER).setLevel(_level(settings.STORE_LOG_LEVEL))
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
