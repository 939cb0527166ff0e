"""Input events consumed by the state machine and effects it asks the caller to run."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from ..settings.models import Role
from .keyboard import KeyCode
from .state import NavigationState


# Events


@dataclass(frozen=True)
class ToggleOpen:
    """Trigger button or input clicked."""


@dataclass(frozen=True)
class Close:
    """Popup closed from outside (focus left the widget, widget unmounted)."""

    discard_focus: bool = False


@dataclass(frozen=True)
class KeyPressed:
    key: KeyCode


@dataclass(frozen=True)
class TextChanged:
    """New raw content of the input field."""

    raw: str


@dataclass(frozen=True)
class CellClicked:
    date: date


@dataclass(frozen=True)
class NavigateMonth:
    """Previous/next month header button, delta is -1 or +1."""

    delta: int


@dataclass(frozen=True)
class ToggleHelp:
    """Keyboard shortcuts button clicked."""


@dataclass(frozen=True)
class Cancel:
    """Cancel button: drop the selection and close."""


@dataclass(frozen=True)
class Confirm:
    """OK button: close, keeping the selection."""


Event = Union[
    ToggleOpen,
    Close,
    KeyPressed,
    TextChanged,
    CellClicked,
    NavigateMonth,
    ToggleHelp,
    Cancel,
    Confirm,
]


# Effects


@dataclass(frozen=True)
class MoveFocus:
    """Move UI focus to the cell identified by (day, month, year)."""

    day: int
    month: int
    year: int

    @classmethod
    def to(cls, d: date) -> "MoveFocus":
        return cls(day=d.day, month=d.month, year=d.year)


@dataclass(frozen=True)
class PublishRoleDate:
    """Write the date (or None) to the shared search context under ``role``."""

    role: Role
    date: Optional[date]


@dataclass(frozen=True)
class AcquireKeyEvents:
    pass


@dataclass(frozen=True)
class ReleaseKeyEvents:
    pass


Effect = Union[MoveFocus, PublishRoleDate, AcquireKeyEvents, ReleaseKeyEvents]


@dataclass(frozen=True)
class Transition:
    """Result of applying one event: the next state and the effects to run, in order."""

    state: NavigationState
    effects: tuple[Effect, ...] = field(default_factory=tuple)


def closing_effects(state: NavigationState) -> list[Effect]:
    """Effects needed when ``state`` transitions to closed."""
    return [ReleaseKeyEvents()] if state.is_open else []
