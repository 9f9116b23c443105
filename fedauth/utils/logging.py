"""Logging configuration for fedauth.

This module provides centralized logging configuration.
Import `get_logger` to create loggers in other modules.
"""

import logging
import sys
from functools import lru_cache


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging for the application.

    This should be called once at application startup.
    Configures the root logger and quiets chatty client libraries.

    Args:
        level: Log level applied to the fedauth package loggers.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("fedauth").setLevel(level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("firebase_admin").setLevel(logging.WARNING)


@lru_cache(maxsize=None)
def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name.

    Uses caching to return the same logger instance for repeated calls.

    Args:
        name: The module name, typically __name__

    Returns:
        Configured logger instance

    Example:
        from fedauth.utils.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Provider lookup finished")
    """
    return logging.getLogger(name)
