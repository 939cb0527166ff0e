"""Errors raised while building a picker configuration.

Input handling never raises; only invalid configuration reaches the caller.
"""

from typing import Any, Optional


class DatePickerError(Exception):
    """Base error carrying a message and a details dict shown by ``str()``."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(DatePickerError):
    """Invalid bounds, first day of the week or settings value.

    Not a ValueError, so pydantic validators re-raise it unwrapped.

    Args:
        message: What is wrong
        field_name: Offending field, copied into details
        field_value: Offending value, copied into details as a string
        validation_errors: Messages collected from a pydantic ValidationError
        details: Extra context
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        validation_errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field_name = field_name
        self.field_value = field_value
        self.validation_errors = validation_errors or []

        error_details = dict(details or {})
        if field_name:
            error_details["field_name"] = field_name
        if field_value is not None:
            error_details["field_value"] = str(field_value)
        if self.validation_errors:
            error_details["validation_errors"] = self.validation_errors

        super().__init__(message, error_details)
