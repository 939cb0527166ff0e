"""Shared fixtures for date picker tests."""

import logging
from datetime import date
from typing import Any, Callable

import pytest

from datepicker.settings.models import PickerConfig
from datepicker.ui.keyboard import KeyCode
from datepicker.ui.state import NavigationState

# Fixed reference date so tests never depend on the wall clock
TODAY = date(2026, 10, 18)


class FakeKeySource:
    """In-memory key event source that records registrations."""

    def __init__(self) -> None:
        self.callbacks: dict[KeyCode, Callable[[], Any]] = {}
        self.unregistered: list[KeyCode] = []

    def register_key_handler(self, key_code: KeyCode, callback: Callable[[], Any]) -> None:
        self.callbacks[key_code] = callback

    def unregister_key_handler(self, key_code: KeyCode) -> None:
        self.callbacks.pop(key_code, None)
        self.unregistered.append(key_code)

    def press(self, key_code: KeyCode) -> None:
        """Deliver a key the way the terminal keyboard handler does."""
        callback = self.callbacks.get(key_code)
        if callback is not None:
            callback()


@pytest.fixture
def today() -> date:
    """Reference date used as "today"."""
    return TODAY


@pytest.fixture
def bounded_config() -> PickerConfig:
    """Start-of-range picker limited to 2026 (both bounds exclusive)."""
    return PickerConfig(
        id="search-start-date",
        label="From",
        min_date=date(2026, 1, 1),
        max_date=date(2026, 12, 31),
    )


@pytest.fixture
def standalone_config() -> PickerConfig:
    """Picker with no role and no bounds."""
    return PickerConfig(id="birthday", label="Birthday", min_date=None)


@pytest.fixture
def closed_state(bounded_config: PickerConfig) -> NavigationState:
    """Initial state of the bounded picker."""
    return NavigationState.initial(bounded_config)


@pytest.fixture
def open_state() -> NavigationState:
    """Open calendar focused on 15 March 2026."""
    return NavigationState(
        visible_year=2026,
        visible_month=3,
        is_open=True,
        focused_date=date(2026, 3, 15),
    )


@pytest.fixture
def key_source() -> FakeKeySource:
    """Key event source recording registrations."""
    return FakeKeySource()


@pytest.fixture
def reset_datepicker_logger():
    """Remove handlers installed on the package logger by a test."""
    logger = logging.getLogger("datepicker")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)
