"""
Picker configuration models using Pydantic for validation and type safety.

A configuration is fixed for the lifetime of a picker instance, so every model
here is frozen. Validation failures raise ConfigurationError.
"""

import logging
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "e.g. 01/12/2026"


class Role(Enum):
    """Side of a date range a picker instance publishes to."""

    START = "start"
    END = "end"


class DateBounds(BaseModel):
    """Exclusive minimum and maximum dates.

    A date equal to either bound is disabled; see ``core.validation.is_selectable``.

    Attributes:
        min: Dates on or before this are disabled, None for no lower bound
        max: Dates on or after this are disabled, None for no upper bound
    """

    model_config = ConfigDict(frozen=True)

    min: Optional[date] = Field(default=None, description="Exclusive lower bound")
    max: Optional[date] = Field(default=None, description="Exclusive upper bound")

    @model_validator(mode="after")
    def validate_order(self) -> "DateBounds":
        """Reject a minimum that is not before the maximum.

        Raises:
            ConfigurationError: If min >= max
        """
        if self.min is not None and self.max is not None and self.min >= self.max:
            raise ConfigurationError(
                "Minimum date must be before maximum date",
                field_name="min",
                field_value=self.min,
                details={"max": str(self.max)},
            )
        return self


class PickerConfig(BaseModel):
    """Configuration of a single date-picker instance.

    Attributes:
        id: Instance identifier; contains "start-date" or "end-date" when the
            picker feeds one side of a search range
        label: Accessible label of the input
        placeholder: Placeholder shown in the empty input
        min_date: Exclusive lower bound, defaults to today
        max_date: Exclusive upper bound, optional
        start_day_of_week: First grid column, 0 for Monday through 6 for Sunday

    Example:
        >>> config = PickerConfig(id="search-start-date", label="From")
        >>> config.role
        <Role.START: 'start'>
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Instance identifier, used to derive the role")
    label: str = Field(default="", description="Accessible label")
    placeholder: str = Field(default=DEFAULT_PLACEHOLDER, description="Input placeholder")
    min_date: Optional[date] = Field(
        default_factory=date.today, description="Exclusive lower bound (defaults to today)"
    )
    max_date: Optional[date] = Field(default=None, description="Exclusive upper bound")
    start_day_of_week: int = Field(default=0, description="0 for Monday through 6 for Sunday")

    @field_validator("start_day_of_week")
    @classmethod
    def validate_start_day_of_week(cls, v: int) -> int:
        """Validate the first day of the week.

        Args:
            v: Day index to validate

        Returns:
            The validated day index

        Raises:
            ConfigurationError: If the index is outside 0-6
        """
        if not 0 <= v <= 6:
            raise ConfigurationError(
                "start_day_of_week must be between 0 (Monday) and 6 (Sunday)",
                field_name="start_day_of_week",
                field_value=v,
            )
        return v

    @model_validator(mode="after")
    def validate_date_range(self) -> "PickerConfig":
        """Validate that the bounds leave room for a selection.

        Raises:
            ConfigurationError: If min_date is not before max_date
        """
        if (
            self.min_date is not None
            and self.max_date is not None
            and self.min_date >= self.max_date
        ):
            raise ConfigurationError(
                "min_date must be before max_date",
                field_name="min_date",
                field_value=self.min_date,
                details={"max_date": str(self.max_date)},
            )
        return self

    @property
    def bounds(self) -> DateBounds:
        """Selectable range as exclusive bounds."""
        return DateBounds(min=self.min_date, max=self.max_date)

    @property
    def role(self) -> Optional[Role]:
        """Range side derived from the id; the start role wins if both match."""
        if "start-date" in self.id:
            return Role.START
        if "end-date" in self.id:
            return Role.END
        return None
