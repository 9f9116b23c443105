"""Utility modules for fedauth."""

from fedauth.utils.logging import configure_logging, get_logger
from fedauth.utils.outcome import capture, capture_async, resolve

__all__ = ["capture", "capture_async", "configure_logging", "get_logger", "resolve"]
