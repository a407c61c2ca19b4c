"""Stdlib logging setup for libraries that do not go through Logfire."""

import logging

import logfire

from pickme.config import Settings

_NOISY_LOGGERS = ("sqlalchemy.engine", "asyncpg", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Route stdlib log records through Logfire.

    uvicorn, SQLAlchemy and asyncpg log via ``logging``. Their records are
    forwarded to Logfire so everything lands in the same console and trace
    backend.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,  # Override any existing configuration
    )

    # Chatty third-party loggers only matter when debugging
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if settings.debug else logging.WARNING)

    logging.getLogger("pickme").setLevel(level)

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
    )
