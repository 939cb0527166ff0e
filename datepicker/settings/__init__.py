"""
Date-picker configuration.

Public API:
    PickerConfig: Immutable configuration of one picker instance
    DateBounds: Exclusive minimum and maximum dates
    Role: Range side a picker publishes to
    DatePickerError: Base exception
    ConfigurationError: Invalid configuration
"""

from .exceptions import ConfigurationError, DatePickerError
from .models import DEFAULT_PLACEHOLDER, DateBounds, PickerConfig, Role

__all__ = [
    "DEFAULT_PLACEHOLDER",
    "ConfigurationError",
    "DateBounds",
    "DatePickerError",
    "PickerConfig",
    "Role",
]
