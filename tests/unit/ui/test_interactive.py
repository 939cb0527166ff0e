"""Unit tests for the picker controller and the interactive terminal mode."""

from datetime import date
from typing import Optional
from unittest.mock import AsyncMock, Mock, patch

import pytest

from datepicker.display.view_model import MonthView
from datepicker.settings.models import PickerConfig, Role
from datepicker.ui.interactive import DatePicker, InMemorySearchContext, InteractiveController
from datepicker.ui.keyboard import NAVIGATION_KEYS, KeyboardHandler, KeyCode


@pytest.fixture
def focus() -> Mock:
    """Focus capability double."""
    return Mock()


@pytest.fixture
def search_context() -> InMemorySearchContext:
    return InMemorySearchContext()


@pytest.fixture
def picker(
    bounded_config: PickerConfig,
    focus: Mock,
    search_context: InMemorySearchContext,
    key_source,
    today: date,
) -> DatePicker:
    """Bounded start-date picker wired to test doubles."""
    return DatePicker(
        bounded_config,
        focus=focus,
        search_context=search_context,
        key_source=key_source,
        today=today,
    )


class TestDatePickerEffects:
    """Test that transitions drive the injected capabilities."""

    def test_open_moves_focus_and_acquires_keys(
        self, picker: DatePicker, focus: Mock, key_source
    ) -> None:
        """Test the effects of opening."""
        picker.toggle_open()

        focus.move_focus_to_cell.assert_called_once_with(2, 1, 2026)
        assert picker.keys_acquired
        assert set(key_source.callbacks) == set(NAVIGATION_KEYS)

    def test_commit_publishes_to_search_context(
        self, picker: DatePicker, search_context: InMemorySearchContext
    ) -> None:
        """Test that a committed date reaches the search context."""
        picker.toggle_open()
        picker.press_key(KeyCode.RIGHT_ARROW)
        picker.press_key(KeyCode.ENTER)

        assert picker.state.selected_date == date(2026, 1, 3)
        assert search_context.start_date == date(2026, 1, 3)
        assert search_context.end_date is None
        assert not picker.keys_acquired

    def test_cancel_publishes_none(
        self, picker: DatePicker, search_context: InMemorySearchContext
    ) -> None:
        """Test that cancelling clears the published date."""
        picker.type_text("05052026")
        picker.cancel()

        assert search_context.dates == {Role.START: None}
        assert picker.state.input_text == ""

    def test_keys_delivered_through_source(self, picker: DatePicker, key_source) -> None:
        """Test that the acquired key source drives navigation."""
        picker.toggle_open()
        key_source.press(KeyCode.DOWN_ARROW)

        assert picker.state.focused_date == date(2026, 1, 9)

        key_source.press(KeyCode.ESCAPE)
        assert not picker.state.is_open
        assert key_source.callbacks == {}

    def test_every_close_path_releases_keys(self, picker: DatePicker) -> None:
        """Test release on escape, toggle, confirm, cancel, commit and close."""
        closers = [
            lambda: picker.press_key(KeyCode.ESCAPE),
            picker.toggle_open,
            picker.confirm,
            picker.cancel,
            lambda: picker.press_key(KeyCode.ENTER),
            picker.close,
        ]
        for close in closers:
            picker.toggle_open()
            assert picker.keys_acquired
            close()
            assert not picker.keys_acquired

    def test_focus_errors_are_logged(self, picker: DatePicker, focus: Mock) -> None:
        """Test that a failing focus capability does not break the transition."""
        focus.move_focus_to_cell.side_effect = RuntimeError("detached")

        with patch("datepicker.ui.interactive.logger") as mock_logger:
            state = picker.toggle_open()

        assert state.is_open
        assert picker.keys_acquired
        mock_logger.exception.assert_called_once()

    def test_search_context_errors_are_logged(self, bounded_config: PickerConfig) -> None:
        """Test that a failing search context does not break the transition."""
        context = Mock()
        context.publish_role_date.side_effect = RuntimeError("gone")
        picker = DatePicker(bounded_config, search_context=context, today=date(2026, 1, 1))

        with patch("datepicker.ui.interactive.logger") as mock_logger:
            picker.type_text("10022026")

        assert picker.state.selected_date == date(2026, 2, 10)
        mock_logger.exception.assert_called_once()

    def test_without_capabilities(self, bounded_config: PickerConfig, today: date) -> None:
        """Test a picker with nothing injected."""
        picker = DatePicker(bounded_config, today=today)
        picker.toggle_open()
        picker.press_key(KeyCode.ENTER)

        assert picker.state.selected_date == date(2026, 1, 2)
        assert not picker.keys_acquired

    def test_context_manager_closes(self, picker: DatePicker) -> None:
        """Test leaving the with block."""
        with picker:
            picker.toggle_open()

        assert not picker.state.is_open
        assert not picker.keys_acquired


class TestDatePickerObservers:
    """Test change callbacks and the cached view."""

    def test_change_callback_called_on_change_only(self, picker: DatePicker) -> None:
        """Test notification of state changes."""
        callback = Mock()
        picker.add_change_callback(callback)

        picker.press_key(KeyCode.ENTER)  # closed, ignored
        picker.toggle_open()

        callback.assert_called_once_with(picker.state)

    def test_remove_change_callback(self, picker: DatePicker) -> None:
        """Test unregistering a callback."""
        callback = Mock()
        picker.add_change_callback(callback)
        picker.remove_change_callback(callback)
        picker.remove_change_callback(callback)

        picker.toggle_open()
        callback.assert_not_called()

    def test_failing_callback_does_not_stop_others(self, picker: DatePicker) -> None:
        """Test callback isolation."""
        failing = Mock(side_effect=RuntimeError("boom"))
        working = Mock()
        picker.add_change_callback(failing)
        picker.add_change_callback(working)

        picker.toggle_open()

        working.assert_called_once()

    def test_view_is_cached_per_state(self, picker: DatePicker) -> None:
        """Test that the view is rebuilt only after a change."""
        first = picker.view()
        assert isinstance(first, MonthView)
        assert picker.view() is first

        picker.toggle_open()
        assert picker.view() is not first
        assert picker.view().is_open

    def test_navigate_month_and_help(self, picker: DatePicker) -> None:
        """Test the header and help buttons."""
        picker.toggle_open()
        picker.navigate_month(1)
        picker.toggle_help()

        assert picker.state.visible == (2026, 2)
        assert picker.state.is_help_open

    def test_help_stays_hidden_while_closed(self, picker: DatePicker) -> None:
        """Test that the help button does nothing before the calendar opens."""
        picker.toggle_help()

        assert not picker.state.is_open
        assert not picker.state.is_help_open

    def test_click_cell(self, picker: DatePicker, search_context: InMemorySearchContext) -> None:
        """Test selecting with the pointer."""
        picker.toggle_open()
        picker.click_cell(date(2026, 1, 20))

        assert search_context.start_date == date(2026, 1, 20)


class TestInMemorySearchContext:
    """Test the in-memory search context."""

    def test_publish_and_read(self) -> None:
        """Test both roles."""
        context = InMemorySearchContext()
        context.publish_role_date(Role.START, date(2026, 1, 5))
        context.publish_role_date(Role.END, date(2026, 1, 9))

        assert context.start_date == date(2026, 1, 5)
        assert context.end_date == date(2026, 1, 9)


@pytest.fixture
def keyboard() -> Mock:
    """Keyboard handler double."""
    keyboard = Mock(spec=KeyboardHandler)
    keyboard.start_listening = AsyncMock()
    return keyboard


@pytest.fixture
def controller(bounded_config: PickerConfig, keyboard: Mock, today: date) -> InteractiveController:
    """Interactive controller with a mocked renderer and keyboard."""
    return InteractiveController(bounded_config, renderer=Mock(), keyboard=keyboard, today=today)


def type_keys(controller: InteractiveController, keys: str) -> None:
    for key in keys:
        controller._handle_raw_key(key)


class TestInteractiveController:
    """Test raw key handling and the run loop."""

    def test_registers_raw_handler(self, controller: InteractiveController, keyboard: Mock) -> None:
        """Test wiring to the keyboard."""
        keyboard.register_raw_key_handler.assert_called_once_with(controller._handle_raw_key)

    def test_digits_build_date(self, controller: InteractiveController) -> None:
        """Test typing a date digit by digit."""
        type_keys(controller, "0112")
        assert controller.picker.state.input_text == "01/12"

        type_keys(controller, "2026")
        assert controller.picker.state.selected_date == date(2026, 12, 1)
        assert controller.search_context.start_date == date(2026, 12, 1)

    def test_backspace_removes_last_digit(self, controller: InteractiveController) -> None:
        """Test editing the typed text."""
        type_keys(controller, "0112")
        controller._handle_raw_key("\x7f")

        assert controller.picker.state.input_text == "01/1"

    def test_button_keys(self, controller: InteractiveController) -> None:
        """Test open, month navigation, confirm and cancel keys."""
        picker = controller.picker

        controller._handle_raw_key("o")
        assert picker.state.is_open

        controller._handle_raw_key(">")
        assert picker.state.visible == (2026, 2)
        controller._handle_raw_key("<")
        assert picker.state.visible == (2026, 1)

        controller._handle_raw_key("k")
        assert not picker.state.is_open

        type_keys(controller, "05052026")
        controller._handle_raw_key("x")
        assert picker.state.selected_date is None

    def test_quit_key_stops(self, controller: InteractiveController, keyboard: Mock) -> None:
        """Test the quit key."""
        controller._handle_raw_key("q")

        keyboard.stop_listening.assert_called_once()
        assert not controller.is_running

    def test_state_change_redraws(self, controller: InteractiveController) -> None:
        """Test that every change is rendered."""
        controller._handle_raw_key("o")

        controller.renderer.display.assert_called_once_with(controller.picker.view())

    @pytest.mark.asyncio
    async def test_start_returns_selection(
        self, controller: InteractiveController, keyboard: Mock
    ) -> None:
        """Test a run with an initial date."""
        selected: Optional[date] = await controller.start(date(2026, 6, 1))

        assert selected == date(2026, 6, 1)
        keyboard.start_listening.assert_awaited_once()
        assert not controller.picker.state.is_open
        assert not controller.is_running

    @pytest.mark.asyncio
    async def test_start_without_selection(self, controller: InteractiveController) -> None:
        """Test a run that ends with nothing selected."""
        assert await controller.start() is None
        controller.renderer.display.assert_called()
