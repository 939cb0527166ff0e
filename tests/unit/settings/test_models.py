"""Unit tests for picker configuration models."""

from datetime import date

import pytest
from pydantic import ValidationError

from datepicker.settings.exceptions import ConfigurationError
from datepicker.settings.models import DEFAULT_PLACEHOLDER, DateBounds, PickerConfig, Role


class TestPickerConfig:
    """Test picker configuration defaults and validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = PickerConfig(id="datepicker")

        assert config.label == ""
        assert config.placeholder == DEFAULT_PLACEHOLDER
        assert isinstance(config.min_date, date)
        assert config.max_date is None
        assert config.start_day_of_week == 0

    def test_explicit_none_minimum(self) -> None:
        """Test that the lower bound can be removed."""
        assert PickerConfig(id="x", min_date=None).bounds == DateBounds()

    @pytest.mark.parametrize("start_day", [-1, 7])
    def test_invalid_start_day(self, start_day: int) -> None:
        """Test the day index range."""
        with pytest.raises(ConfigurationError) as exc_info:
            PickerConfig(id="x", start_day_of_week=start_day)

        assert exc_info.value.field_name == "start_day_of_week"

    @pytest.mark.parametrize(
        ("min_date", "max_date"),
        [(date(2026, 5, 1), date(2026, 5, 1)), (date(2026, 6, 1), date(2026, 5, 1))],
    )
    def test_minimum_must_precede_maximum(self, min_date: date, max_date: date) -> None:
        """Test bounds that leave no room."""
        with pytest.raises(ConfigurationError, match="min_date must be before max_date"):
            PickerConfig(id="x", min_date=min_date, max_date=max_date)

    def test_bounds(self) -> None:
        """Test the exclusive bounds view of the config."""
        config = PickerConfig(id="x", min_date=date(2026, 1, 1), max_date=date(2026, 2, 1))
        assert config.bounds == DateBounds(min=date(2026, 1, 1), max=date(2026, 2, 1))

    def test_config_is_frozen(self) -> None:
        """Test that a config cannot change after construction."""
        config = PickerConfig(id="x")
        with pytest.raises(ValidationError):
            config.label = "changed"  # type: ignore[misc]


class TestRole:
    """Test role derivation from the instance id."""

    @pytest.mark.parametrize(
        ("picker_id", "expected"),
        [
            ("search-start-date", Role.START),
            ("start-date", Role.START),
            ("trip-end-date", Role.END),
            ("start-date-end-date", Role.START),
            ("birthday", None),
            ("startdate", None),
        ],
    )
    def test_role_from_id(self, picker_id: str, expected) -> None:
        """Test substring matching, with the start role checked first."""
        assert PickerConfig(id=picker_id).role is expected


class TestDateBounds:
    """Test the bounds model."""

    def test_order_is_validated(self) -> None:
        """Test that min must be before max."""
        with pytest.raises(ConfigurationError):
            DateBounds(min=date(2026, 2, 1), max=date(2026, 1, 1))

    def test_open_ended(self) -> None:
        """Test bounds with one side unset."""
        assert DateBounds(max=date(2026, 1, 1)).min is None
