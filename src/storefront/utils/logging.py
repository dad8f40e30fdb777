"""Logging configuration for the storefront.

Structured logging through structlog, rendered on top of the standard library
handlers. The environment (PROTEAN_ENV, falling back to ENVIRONMENT) decides
the default level and whether records are rendered as JSON or for a console.

LOG_LEVEL overrides the level; LOG_DIR turns on rotating log files.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

LEVELS_BY_ENV = {
    "development": "DEBUG",
    "test": "WARNING",
    "staging": "INFO",
    "production": "INFO",
}
JSON_ENVS = frozenset({"staging", "production"})
QUIET_LOGGERS = ("protean", "httpx", "httpcore", "asyncio")

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


def current_env() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or "development").lower()


def log_level_for(env: str) -> str:
    return os.getenv("LOG_LEVEL", LEVELS_BY_ENV.get(env, "INFO")).upper()


def _rotating(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _handlers(level: str, log_dir: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating(path / "storefront.log", level))
        handlers.append(_rotating(path / "storefront_error.log", logging.ERROR))
    return handlers


def _renderer(env: str):
    if env in JSON_ENVS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_dir: str | None = None) -> None:
    """Route stdlib and structlog output through the same handlers."""
    env = current_env()
    level = log_level_for(env)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=_handlers(level, log_dir or os.getenv("LOG_DIR")),
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(env),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request(**values) -> None:
    """Attach values (request id, path) to every log line for the current request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)
