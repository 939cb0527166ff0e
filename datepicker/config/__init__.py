"""Application settings loaded from the environment and YAML files."""

from .settings import DatePickerSettings, LoggingSettings

__all__ = ["DatePickerSettings", "LoggingSettings"]
