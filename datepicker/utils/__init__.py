"""Shared utilities."""

from .logging import get_logger, setup_logging, setup_logging_from_settings

__all__ = ["get_logger", "setup_logging", "setup_logging_from_settings"]
