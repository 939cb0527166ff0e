"""Fixtures for display tests."""

from datetime import date

import pytest

from datepicker.display.view_model import MonthView, build_month_view
from datepicker.settings.models import PickerConfig
from datepicker.ui.state import NavigationState


@pytest.fixture
def march_config() -> PickerConfig:
    """Picker whose minimum falls inside March 2026."""
    return PickerConfig(id="search-end-date", label="To", min_date=date(2026, 3, 5))


@pytest.fixture
def march_state() -> NavigationState:
    """Open March 2026 with a focus and a selection."""
    return NavigationState(
        visible_year=2026,
        visible_month=3,
        is_open=True,
        focused_date=date(2026, 3, 15),
        selected_date=date(2026, 3, 10),
        selected_week_number=11,
        input_text="10/03/2026",
    )


@pytest.fixture
def march_view(march_state: NavigationState, march_config: PickerConfig) -> MonthView:
    return build_month_view(march_state, march_config, today=date(2026, 3, 20))
