"""Navigation state machine for the date picker.

``transition`` is a pure function: it takes the current state, one event and
the picker configuration and returns the next state together with the side
effects (focus moves, search-context writes, key subscription changes) the
caller must run. Rejected input leaves the state untouched and never raises.
"""

import logging
from datetime import date
from typing import Callable, Optional

from ..core.calendar_math import (
    first_day_of_month,
    last_day_of_month,
    shift_by_days,
    shift_by_months,
    shift_year_month,
)
from ..core.validation import can_show_next_month, can_show_previous_month, is_selectable
from ..settings.models import PickerConfig
from .events import (
    AcquireKeyEvents,
    Cancel,
    CellClicked,
    Close,
    Confirm,
    Event,
    KeyPressed,
    MoveFocus,
    NavigateMonth,
    TextChanged,
    ToggleHelp,
    ToggleOpen,
    Transition,
    closing_effects,
)
from .keyboard import KeyCode
from .selection import apply_typed_text, clear_selection, commit_selection
from .state import NavigationState

logger = logging.getLogger(__name__)

# Candidate date for each movement key, computed from the base date
_MOVES: dict[KeyCode, Callable[[date], date]] = {
    KeyCode.RIGHT_ARROW: lambda d: shift_by_days(d, 1),
    KeyCode.LEFT_ARROW: lambda d: shift_by_days(d, -1),
    KeyCode.DOWN_ARROW: lambda d: shift_by_days(d, 7),
    KeyCode.UP_ARROW: lambda d: shift_by_days(d, -7),
    KeyCode.PAGE_UP: lambda d: shift_by_months(d, -1),
    KeyCode.PAGE_DOWN: lambda d: shift_by_months(d, 1),
    KeyCode.HOME: first_day_of_month,
    KeyCode.END: last_day_of_month,
}

# Page keys move the visible month even when the candidate is rejected
_PAGE_DELTAS = {KeyCode.PAGE_UP: -1, KeyCode.PAGE_DOWN: 1}


def default_focus(config: PickerConfig, today: date) -> date:
    """Date focused when the calendar opens with nothing focused or selected."""
    return shift_by_days(config.min_date or today, 1)


def transition(
    state: NavigationState,
    event: Event,
    config: PickerConfig,
    today: Optional[date] = None,
) -> Transition:
    """Apply one event to the navigation state.

    Args:
        state: Current state
        event: Event to apply
        config: Picker configuration
        today: Reference date for instances without a minimum, defaults to date.today()

    Returns:
        Next state and the effects to run, in order
    """
    today = today or date.today()

    if isinstance(event, ToggleOpen):
        return close(state) if state.is_open else open_calendar(state, config, today)
    if isinstance(event, Close):
        return close(state, discard_focus=event.discard_focus)
    if isinstance(event, KeyPressed):
        return handle_key(state, event.key, config, today)
    if isinstance(event, TextChanged):
        return apply_typed_text(state, event.raw, config)
    if isinstance(event, CellClicked):
        if not is_selectable(event.date, config.bounds):
            logger.debug(f"Ignored click on disabled date {event.date}")
            return Transition(state)
        return commit_selection(state, event.date, config.role)
    if isinstance(event, NavigateMonth):
        return navigate_month(state, event.delta, config)
    if isinstance(event, ToggleHelp):
        return toggle_help(state)
    if isinstance(event, Cancel):
        return clear_selection(state, config.role)
    if isinstance(event, Confirm):
        return close(state)

    logger.warning(f"Unhandled event: {event!r}")
    return Transition(state)


def open_calendar(state: NavigationState, config: PickerConfig, today: date) -> Transition:
    """Open the popup and place the focus.

    Focus goes to the previously focused date, else the selection, else the
    day after the minimum. The visible month always follows the focus.
    """
    if state.is_open:
        return Transition(state)

    focus = state.focused_date or state.selected_date or default_focus(config, today)
    new_state = state.showing(focus).evolve(is_open=True, focused_date=focus)

    logger.debug(f"Opened calendar focused on {focus}")
    return Transition(new_state, (AcquireKeyEvents(), MoveFocus.to(focus)))


def close(state: NavigationState, discard_focus: bool = False) -> Transition:
    """Close the popup, keeping the selection."""
    if not state.is_open:
        return Transition(state)

    changes: dict = {"is_open": False, "is_help_open": False}
    if discard_focus:
        changes["focused_date"] = None

    logger.debug(f"Closed calendar (discard_focus={discard_focus})")
    return Transition(state.evolve(**changes), tuple(closing_effects(state)))


def handle_key(
    state: NavigationState, key: KeyCode, config: PickerConfig, today: date
) -> Transition:
    """Translate a key press into a focus, selection or visibility change.

    Keys are only handled while the popup is open. Movement keys compute a
    candidate from the focused date (or the minimum when nothing is focused)
    and accept it only if it is selectable, so focus stops at the range
    boundary.

    Args:
        state: Current state
        key: Key pressed
        config: Picker configuration
        today: Fallback base date for instances without a minimum

    Returns:
        Next state and effects
    """
    if not state.is_open:
        return Transition(state)

    bounds = config.bounds
    base = state.focused_date or bounds.min or today

    if key in (KeyCode.ENTER, KeyCode.SPACE):
        if is_selectable(base, bounds):
            return commit_selection(state, base, config.role)
        logger.debug(f"Ignored selection of disabled date {base}")
        return Transition(state)
    if key is KeyCode.ESCAPE:
        return close(state, discard_focus=True)
    if key is KeyCode.QUESTION_MARK:
        return toggle_help(state)

    move = _MOVES.get(key)
    if move is None:
        return Transition(state)

    if key in _PAGE_DELTAS:
        year, month = shift_year_month(state.visible_year, state.visible_month, _PAGE_DELTAS[key])
        state = state.evolve(visible_year=year, visible_month=month)

    candidate = move(base)
    if not is_selectable(candidate, bounds):
        logger.debug(f"Focus stays on {state.focused_date}: {candidate} is disabled")
        return Transition(state)

    return move_focus(state, candidate)


def move_focus(state: NavigationState, d: date) -> Transition:
    """Focus ``d`` and bring its month into view."""
    new_state = state.showing(d).evolve(focused_date=d)
    if new_state.visible != state.visible:
        year, month = new_state.visible
        logger.debug(f"Visible month moved to {year}-{month:02d}")

    if d == state.focused_date:
        return Transition(new_state)
    return Transition(new_state, (MoveFocus.to(d),))


def toggle_help(state: NavigationState) -> Transition:
    """Show or hide the keyboard shortcuts panel; the panel only exists while open."""
    if not state.is_open:
        return Transition(state)
    return Transition(state.evolve(is_help_open=not state.is_help_open))


def navigate_month(state: NavigationState, delta: int, config: PickerConfig) -> Transition:
    """Show the previous or next month from the header buttons.

    Ignored while closed, and when the corresponding button is disabled
    because the whole month lies outside the range.
    """
    if not state.is_open or delta == 0:
        return Transition(state)

    year, month = state.visible
    allowed = (
        can_show_previous_month(year, month, config.bounds)
        if delta < 0
        else can_show_next_month(year, month, config.bounds)
    )
    if not allowed:
        logger.debug(f"Month navigation by {delta} blocked at {year}-{month:02d}")
        return Transition(state)

    year, month = shift_year_month(year, month, 1 if delta > 0 else -1)
    return Transition(state.evolve(visible_year=year, visible_month=month))
