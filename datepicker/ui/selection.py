"""Applying, typing and clearing a picker's selection."""

import logging
from datetime import date
from typing import Optional

from ..core.calendar_math import format_date, iso_week_number
from ..core.text_parser import parse_input
from ..core.validation import is_selectable
from ..settings.models import PickerConfig, Role
from .events import (
    AcquireKeyEvents,
    Effect,
    MoveFocus,
    PublishRoleDate,
    Transition,
    closing_effects,
)
from .state import NavigationState

logger = logging.getLogger(__name__)


def commit_selection(state: NavigationState, d: date, role: Optional[Role]) -> Transition:
    """Commit ``d`` as the selection and close the calendar.

    The caller has already checked that ``d`` is selectable. Publishes the
    date under ``role`` when the instance has one; standalone pickers publish
    nothing.

    Args:
        state: Current state
        d: Date to select
        role: Range side of the instance, or None

    Returns:
        Closed state holding the selection, with its effects
    """
    effects = closing_effects(state)
    if role is not None:
        effects.append(PublishRoleDate(role, d))

    new_state = state.showing(d).evolve(
        selected_date=d,
        selected_week_number=iso_week_number(d),
        input_text=format_date(d),
        focused_date=d,
        is_open=False,
        is_help_open=False,
    )
    logger.debug(f"Committed selection {d} (week {new_state.selected_week_number}, role={role})")
    return Transition(new_state, tuple(effects))


def clear_selection(state: NavigationState, role: Optional[Role]) -> Transition:
    """Drop the selection, its week number and the input text, then close.

    Publishes None under ``role`` so the search context forgets the date too.
    """
    effects = closing_effects(state)
    if role is not None:
        effects.append(PublishRoleDate(role, None))

    new_state = state.evolve(
        selected_date=None,
        selected_week_number=None,
        input_text="",
        is_open=False,
        is_help_open=False,
    )
    logger.debug(f"Cleared selection (role={role})")
    return Transition(new_state, tuple(effects))


def apply_typed_text(state: NavigationState, raw: str, config: PickerConfig) -> Transition:
    """Mask typed text and select the date it names, if any.

    Incomplete, calendar-invalid or out-of-range text only updates the input
    text. A resolved date becomes the selection and the focused date, the
    calendar opens on its month and the date is published under the role.

    Args:
        state: Current state
        raw: Raw content of the input field
        config: Picker configuration

    Returns:
        Next state with its effects
    """
    text, typed = parse_input(raw)
    state = state.evolve(input_text=text)

    if typed is None:
        return Transition(state)
    if not is_selectable(typed, config.bounds):
        logger.debug(f"Typed date {typed} is outside the selectable range")
        return Transition(state)

    effects: list[Effect] = []
    if config.role is not None:
        effects.append(PublishRoleDate(config.role, typed))
    if not state.is_open:
        effects.append(AcquireKeyEvents())
    effects.append(MoveFocus.to(typed))

    new_state = state.showing(typed).evolve(
        selected_date=typed,
        selected_week_number=iso_week_number(typed),
        focused_date=typed,
        is_open=True,
    )
    logger.debug(f"Typed selection {typed}")
    return Transition(new_state, tuple(effects))
