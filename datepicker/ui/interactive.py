"""Picker controller and the interactive terminal mode built on it."""

import asyncio
import contextlib
import logging
from datetime import date
from typing import Any, Callable, Optional, Protocol

from ..core.calendar_math import format_date
from ..display.console_renderer import ConsoleRenderer
from ..display.view_model import MonthView, build_month_view
from ..settings.models import PickerConfig, Role
from .events import (
    AcquireKeyEvents,
    Cancel,
    CellClicked,
    Close,
    Confirm,
    Effect,
    Event,
    KeyPressed,
    MoveFocus,
    NavigateMonth,
    PublishRoleDate,
    ReleaseKeyEvents,
    TextChanged,
    ToggleHelp,
    ToggleOpen,
)
from .keyboard import KeyboardHandler, KeyCode, KeyEventSource, KeySubscription
from .navigation import transition
from .state import NavigationState

logger = logging.getLogger(__name__)


class FocusCapability(Protocol):
    """Moves UI focus to the cell identified by (day, month, year)."""

    def move_focus_to_cell(self, day: int, month: int, year: int) -> None: ...


class SearchContext(Protocol):
    """Shared search parameters a picker publishes its selection to."""

    def publish_role_date(self, role: Role, value: Optional[date]) -> None: ...


class InMemorySearchContext:
    """Search context that keeps the published range dates in a dict."""

    def __init__(self) -> None:
        self.dates: dict[Role, Optional[date]] = {}

    def publish_role_date(self, role: Role, value: Optional[date]) -> None:
        self.dates[role] = value
        logger.info(f"Search {role.value} date set to {value}")

    @property
    def start_date(self) -> Optional[date]:
        return self.dates.get(Role.START)

    @property
    def end_date(self) -> Optional[date]:
        return self.dates.get(Role.END)


class DatePicker:
    """Owns one picker's navigation state and runs the effects of each transition.

    Events are applied one at a time: the state is replaced and every effect
    has run before ``dispatch`` returns. Failures inside the injected focus or
    search-context capabilities are logged and never reach the caller.

    Args:
        config: Picker configuration
        focus: Optional focus capability for the rendered grid
        search_context: Optional shared search context, written to when the
            instance has a role
        key_source: Optional key event source; key delivery is held only
            while the calendar is open
        today: Fixed reference date, defaults to date.today() on every event
    """

    def __init__(
        self,
        config: PickerConfig,
        focus: Optional[FocusCapability] = None,
        search_context: Optional[SearchContext] = None,
        key_source: Optional[KeyEventSource] = None,
        today: Optional[date] = None,
    ) -> None:
        self.config = config
        self.focus = focus
        self.search_context = search_context
        self._today = today
        self._state = NavigationState.initial(config, today)
        self._view: Optional[MonthView] = None
        self._change_callbacks: list[Callable[[NavigationState], None]] = []
        self._subscription = (
            KeySubscription(key_source, self.press_key) if key_source is not None else None
        )

        logger.debug(f"Date picker {config.id!r} initialized: {self._state}")

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def today(self) -> date:
        return self._today or date.today()

    @property
    def keys_acquired(self) -> bool:
        """Check if the picker currently receives key events."""
        return self._subscription is not None and self._subscription.active

    def add_change_callback(self, callback: Callable[[NavigationState], None]) -> None:
        """Add callback to be called when the state changes.

        Args:
            callback: Function called with the new state
        """
        self._change_callbacks.append(callback)

    def remove_change_callback(self, callback: Callable[[NavigationState], None]) -> None:
        """Remove a state change callback.

        Args:
            callback: Callback function to remove
        """
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)

    def dispatch(self, event: Event) -> NavigationState:
        """Apply one event and run its effects in order.

        Args:
            event: Event to apply

        Returns:
            The new state
        """
        result = transition(self._state, event, self.config, self.today)
        changed = result.state != self._state
        self._state = result.state
        if changed:
            self._view = None

        for effect in result.effects:
            self._run_effect(effect)

        if changed:
            self._notify_change()
        return self._state

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, MoveFocus):
            if self.focus is None:
                return
            try:
                self.focus.move_focus_to_cell(effect.day, effect.month, effect.year)
            except Exception:
                logger.exception(f"Failed to move focus to {effect}")
        elif isinstance(effect, PublishRoleDate):
            if self.search_context is None:
                return
            try:
                self.search_context.publish_role_date(effect.role, effect.date)
            except Exception:
                logger.exception(f"Failed to publish {effect.role.value} date")
        elif isinstance(effect, AcquireKeyEvents):
            if self._subscription is not None:
                self._subscription.acquire()
        elif isinstance(effect, ReleaseKeyEvents):
            if self._subscription is not None:
                self._subscription.release()

    def _notify_change(self) -> None:
        """Notify all change callbacks of the new state."""
        for callback in self._change_callbacks:
            try:
                callback(self._state)
            except Exception:
                logger.exception("Error in state change callback")

    def view(self) -> MonthView:
        """Get the month view for the current state, built once per state change."""
        if self._view is None:
            self._view = build_month_view(self._state, self.config, self.today)
        return self._view

    # Convenience wrappers around dispatch

    def toggle_open(self) -> NavigationState:
        return self.dispatch(ToggleOpen())

    def press_key(self, key: KeyCode) -> NavigationState:
        return self.dispatch(KeyPressed(key))

    def type_text(self, raw: str) -> NavigationState:
        return self.dispatch(TextChanged(raw))

    def click_cell(self, d: date) -> NavigationState:
        return self.dispatch(CellClicked(d))

    def navigate_month(self, delta: int) -> NavigationState:
        return self.dispatch(NavigateMonth(delta))

    def toggle_help(self) -> NavigationState:
        return self.dispatch(ToggleHelp())

    def cancel(self) -> NavigationState:
        return self.dispatch(Cancel())

    def confirm(self) -> NavigationState:
        return self.dispatch(Confirm())

    def close(self, discard_focus: bool = False) -> NavigationState:
        return self.dispatch(Close(discard_focus=discard_focus))

    def __enter__(self) -> "DatePicker":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
        if self._subscription is not None:
            self._subscription.release()


# Raw keys understood by the terminal mode while navigation keys are not held
_BACKSPACE_KEYS = ("\x7f", "\x08")
_QUIT_KEYS = ("q", "Q")
_OPEN_KEYS = ("o", "O", "\t")
_CANCEL_KEYS = ("x", "X")
_CONFIRM_KEYS = ("k", "K")
_MONTH_KEYS = {"<": -1, ",": -1, ">": 1, ".": 1}


class InteractiveController:
    """Drives one date picker from the terminal keyboard."""

    def __init__(
        self,
        config: PickerConfig,
        renderer: Optional[ConsoleRenderer] = None,
        search_context: Optional[SearchContext] = None,
        keyboard: Optional[KeyboardHandler] = None,
        today: Optional[date] = None,
    ) -> None:
        """Initialize interactive controller.

        Args:
            config: Configuration of the picker to drive
            renderer: Console renderer, a default one is created if omitted
            search_context: Context receiving published dates, defaults to an in-memory one
            keyboard: Keyboard handler, a default one is created if omitted
            today: Fixed reference date, mainly for tests
        """
        self.renderer = renderer or ConsoleRenderer()
        self.keyboard = keyboard or KeyboardHandler()
        self.search_context = search_context or InMemorySearchContext()
        self.picker = DatePicker(
            config,
            search_context=self.search_context,
            key_source=self.keyboard,
            today=today,
        )

        self._running = False
        self._last_display_update: Optional[str] = None

        self.keyboard.register_raw_key_handler(self._handle_raw_key)
        self.picker.add_change_callback(self._on_state_changed)

        logger.info("Interactive controller initialized")

    def _handle_raw_key(self, key_data: str) -> None:
        """Handle keys that are not navigation keys: digits, editing and buttons.

        Args:
            key_data: Raw key data from the terminal
        """
        if key_data in _QUIT_KEYS:
            logger.info("User requested exit from interactive mode")
            self.stop()
        elif key_data.isdigit():
            self.picker.type_text(self.picker.state.input_text + key_data)
        elif key_data in _BACKSPACE_KEYS:
            self.picker.type_text(self.picker.state.input_text.replace("/", "")[:-1])
        elif key_data in _OPEN_KEYS:
            self.picker.toggle_open()
        elif key_data in _CANCEL_KEYS:
            self.picker.cancel()
        elif key_data in _CONFIRM_KEYS:
            self.picker.confirm()
        elif key_data in _MONTH_KEYS:
            self.picker.navigate_month(_MONTH_KEYS[key_data])
        else:
            logger.debug(f"Ignored key: {key_data!r}")

    def _on_state_changed(self, state: NavigationState) -> None:
        logger.debug(f"State changed: {state}")
        self.update_display()

    def update_display(self) -> None:
        """Redraw the picker."""
        self._last_display_update = self.renderer.display(self.picker.view())

    async def start(self, initial_date: Optional[date] = None) -> Optional[date]:
        """Run interactive mode until the user quits.

        Args:
            initial_date: Optional date typed into the input before starting

        Returns:
            The selected date when the user quit, if any
        """
        if self._running:
            logger.warning("Interactive controller already running")
            return self.picker.state.selected_date

        self._running = True
        logger.info("Starting interactive date picker")

        try:
            if initial_date:
                self.picker.type_text(format_date(initial_date))
            self.update_display()

            keyboard_task = asyncio.create_task(self.keyboard.start_listening())
            with contextlib.suppress(asyncio.CancelledError):
                await keyboard_task

        except Exception:
            logger.exception("Error in interactive mode")
        finally:
            self._running = False
            self.picker.close()
            logger.info("Interactive mode stopped")

        return self.picker.state.selected_date

    def stop(self) -> None:
        """Stop interactive mode."""
        self._running = False
        self.keyboard.stop_listening()
        logger.debug("Interactive controller stop requested")

    @property
    def is_running(self) -> bool:
        """Check if interactive controller is running."""
        return self._running
