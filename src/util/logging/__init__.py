"""
Logging configuration module using Loguru.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Union

from loguru import logger

from .helpers import get_logger, log_error_with_context


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging messages toward Loguru.
    This captures logs from libraries using standard logging (httpx, celery).
    """

    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    log_to_file: bool = False,
):
    """
    Set up Loguru logging for the application.

    Args:
        log_level: Minimum log level to display
        json_logs: Whether to format logs as JSON
        log_to_file: Whether to save logs to file
    """
    logger.remove()

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    handlers: List[Dict[str, Union[str, bool, int]]] = [
        {
            "sink": sys.stderr,
            "level": log_level,
            "colorize": True,
            "backtrace": True,
            "diagnose": True,
            "format": (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            )
            if not json_logs
            else None,
            "serialize": json_logs,
        }
    ]

    if log_to_file:
        try:
            from src.settings import app_settings

            log_dir = Path(app_settings.data_dir) / "logs"
            log_dir.mkdir(parents=True, exist_ok=True)
        except (PermissionError, FileNotFoundError, ImportError):
            log_dir = (
                Path.home() / ".local" / "share" / "course-salesforce-sync" / "logs"
            )
            log_dir.mkdir(parents=True, exist_ok=True)
            logger.warning(
                f"Cannot write to data_dir/logs, using {log_dir} instead"
            )

        log_file = log_dir / "course-salesforce-sync.log"

        logger.info(f"Logging to file: {log_file}")

        handlers.append(
            {
                "sink": str(log_file),
                "level": log_level,
                "rotation": "10 MB",
                "retention": "1 week",
                "compression": "zip",
                "backtrace": True,
                "diagnose": True,
                "format": (
                    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                    "{level: <8} | "
                    "{name}:{function}:{line} | "
                    "{message}"
                )
                if not json_logs
                else None,
                "serialize": json_logs,
            }
        )

    for handler in handlers:
        if handler["format"] is None:
            handler.pop("format")
    logger.configure(handlers=handlers)

    # Route library loggers through Loguru
    for name in [
        "sentry_sdk",
        "sentry_sdk.errors",
        "sentry_sdk.integrations",
        "celery",
        "httpx",
    ]:
        logging.getLogger(name).handlers = [InterceptHandler()]

    for name, level in [
        ("httpcore", "WARNING"),
        ("httpx", "WARNING"),
    ]:
        logging.getLogger(name).setLevel(getattr(logging, level))

    return logger


__all__ = [
    "setup_logging",
    "InterceptHandler",
    "get_logger",
    "log_error_with_context",
]
