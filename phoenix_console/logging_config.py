"""Central logging configuration for the Phoenix console."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final

import structlog
from loguru import logger as loguru_logger
from structlog.contextvars import merge_contextvars

if TYPE_CHECKING:
    from loguru import Logger, Record

APP_ENV: Final[str] = os.getenv("APP_ENV", "development").lower()
IS_PRODUCTION: Final[bool] = APP_ENV in {"production", "prod", "staging"}
LOG_DIR: Final[Path] = Path(os.getenv("PHOENIX_LOG_DIR", Path(__file__).resolve().parents[1] / "logs"))
_initialized = False

_SENSITIVE_FIELDS: Final[set[str]] = {
    "password",
    "token",
    "api_key",
    "authorization",
    "secret",
    "credentials",
}


class InterceptHandler(logging.Handler):
    """Redirect Python logging records into Loguru for unified output."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = loguru_logger.level(record.levelname).name
        except ValueError:  # pragma: no cover - custom levels
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        loguru_logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _redact(record: "Record") -> bool:
    """Mask credentials (bearer tokens included) before anything is emitted."""

    extra = record["extra"]
    for field in _SENSITIVE_FIELDS.intersection(extra):
        extra[field] = "***REDACTED***"
    return True


def _console_format() -> str:
    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan> | "
        "{message} "
        "<dim>{extra}</dim>"
    )


def configure_logging() -> Logger:
    """Set up Loguru sinks and structlog processors once per process."""

    global _initialized
    if _initialized:
        return loguru_logger

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    loguru_logger.remove()
    loguru_logger.configure(extra={"component": "phoenix_console"})

    console_level = os.getenv("LOG_LEVEL", "DEBUG" if not IS_PRODUCTION else "INFO")
    file_level = os.getenv("FILE_LOG_LEVEL", "DEBUG")
    error_level = os.getenv("ERROR_LOG_LEVEL", "ERROR")
    diagnose_enabled = not IS_PRODUCTION

    # Console sink
    loguru_logger.add(  # type: ignore[call-overload]
        sys.stderr,
        level=console_level,
        format=_console_format(),
        colorize=True,
        filter=_redact,
        backtrace=True,
        diagnose=diagnose_enabled,
    )

    # JSON file sink
    loguru_logger.add(
        LOG_DIR / "phoenix_console.log",
        level=file_level,
        rotation="10 MB",
        retention="14 days",
        compression="zip",
        encoding="utf-8",
        serialize=True,
        filter=_redact,
        backtrace=True,
        diagnose=diagnose_enabled,
    )

    # Error file sink
    loguru_logger.add(
        LOG_DIR / "phoenix_console.error.log",
        level=error_level,
        rotation="5 MB",
        retention="30 days",
        compression="zip",
        encoding="utf-8",
        serialize=True,
        filter=_redact,
        backtrace=True,
        diagnose=diagnose_enabled,
    )

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(logging.DEBUG)

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(
                key_order=[
                    "timestamp",
                    "level",
                    "event",
                    "logger",
                    "service",
                    "endpoint",
                ]
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _initialized = True

    loguru_logger.bind(
        directory=str(LOG_DIR),
        level=console_level,
        app_env=APP_ENV,
    ).info("logging_initialized")

    return loguru_logger


def get_app_logger() -> Logger:
    """Return the configured Loguru logger."""

    return configure_logging()
