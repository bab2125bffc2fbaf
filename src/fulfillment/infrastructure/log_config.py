"""Logging configuration for the CLI process."""

import sys
from typing import Optional

from loguru import logger as loguru_logger

SERVICE_NAME = "b2b-fulfillment"


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
) -> None:
    """Configure loguru with standardized sinks.

    Args:
        log_level: Minimum level for every sink (default: INFO)
        log_file: Optional path to a rotating log file

    Every record carries the service name in ``extra["service"]``.
    """
    loguru_logger.remove()
    loguru_logger.configure(extra={"service": SERVICE_NAME})

    loguru_logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<magenta>{extra[service]}</magenta> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        loguru_logger.add(
            log_file,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[service]} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention="1 week",
            compression="gz",
        )
