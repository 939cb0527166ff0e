"""Unit tests for the navigation state value."""

from datetime import date

import pytest

from datepicker.settings.models import PickerConfig
from datepicker.ui.state import NavigationState


class TestNavigationState:
    """Test construction and copying of navigation state."""

    def test_initial_shows_minimum_month(self, bounded_config: PickerConfig) -> None:
        """Test that the initial month is the month of the minimum."""
        state = NavigationState.initial(bounded_config)

        assert state.visible == (2026, 1)
        assert not state.is_open
        assert state.focused_date is None
        assert state.selected_date is None
        assert state.input_text == ""

    def test_initial_without_minimum_shows_today(
        self, standalone_config: PickerConfig, today: date
    ) -> None:
        """Test that pickers without a minimum start on today's month."""
        assert NavigationState.initial(standalone_config, today).visible == (2026, 10)

    def test_evolve_returns_copy(self, open_state: NavigationState) -> None:
        """Test that evolve leaves the original untouched."""
        closed = open_state.evolve(is_open=False)

        assert open_state.is_open
        assert not closed.is_open
        assert closed.focused_date == open_state.focused_date

    def test_state_is_immutable(self, open_state: NavigationState) -> None:
        """Test that fields cannot be assigned."""
        with pytest.raises(AttributeError):
            open_state.is_open = False  # type: ignore[misc]

    def test_showing_moves_visible_month(self, open_state: NavigationState) -> None:
        """Test that showing follows the given date."""
        assert open_state.showing(date(2027, 2, 3)).visible == (2027, 2)

    def test_str(self, open_state: NavigationState) -> None:
        """Test the readable representation."""
        text = str(open_state)
        assert "open=True" in text
        assert "focused=2026-03-15" in text
        assert "visible=2026-03" in text
