"""
Structured logging setup.

Every log line is a structlog event dict. Request-scoped fields (request_id,
actor_id) are bound through ``structlog.contextvars`` by the HTTP middleware,
so anything logged while a request is being served carries them without the
caller passing them explicitly.
"""

import logging
import sys
from typing import Optional

import structlog

from src.config.settings import Settings, settings

# Libraries that are chatty at INFO and add nothing to dispatch logs
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncio", "httpx", "celery")


def _service_context(config: Settings):
    def add_service(logger, method_name, event_dict):
        event_dict.setdefault("service", config.APP_NAME)
        event_dict.setdefault("environment", config.ENVIRONMENT)
        return event_dict

    return add_service


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure structlog and the stdlib root logger from settings."""
    config = config or settings
    level = getattr(logging, config.LOG_LEVEL.upper())

    renderer = (
        structlog.processors.JSONRenderer()
        if config.ENVIRONMENT == "production"
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _service_context(config),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)
