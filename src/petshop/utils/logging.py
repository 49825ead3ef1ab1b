"""Logging for the pet shop.

stdlib logging owns the handlers: stdout, plus a rotating ``<prefix>.log`` and
``<prefix>_error.log`` pair when a log directory is given. structlog feeds
them, rendering JSON lines in production and staging and a Rich-formatted
console view elsewhere. Request-scoped values (``request_id``, path) are
bound with ``add_context`` and merged into every line until cleared.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVS = ("production", "staging")
_NOISY_LOGGERS = ("asyncio", "protean", "sqlalchemy.engine", "uvicorn.access")

_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5


def current_env() -> str:
    return (os.getenv("PETSHOP_ENV") or os.getenv("PROTEAN_ENV") or "development").lower()


def log_level() -> str:
    """``LOG_LEVEL`` wins; otherwise the level follows the environment."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_env(), "INFO")).upper()


def _rotating(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _handlers(level: str, log_dir: str | None, prefix: str) -> list[logging.Handler]:
    stdout = logging.StreamHandler(sys.stdout)
    stdout.setLevel(level)
    handlers = [stdout]

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating(directory / f"{prefix}.log", level))
        handlers.append(_rotating(directory / f"{prefix}_error.log", logging.ERROR))
    return handlers


def _renderers() -> list:
    if current_env() in _JSON_ENVS:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
        )
    ]


def configure_logging(log_dir: str | None = "logs", log_file_prefix: str = "petshop") -> None:
    """Wire stdlib handlers and structlog processors. Safe to call more than once."""
    level = log_level()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _handlers(level, log_dir, log_file_prefix)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderers(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
