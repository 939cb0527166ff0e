"""Navigation state machine, keyboard input and selection handling.

The picker controller lives in ``datepicker.ui.interactive``; it is not
re-exported here because it depends on the display package, which in turn
reads the state types defined in this one.
"""

from .events import Effect, Event, Transition
from .keyboard import KeyboardHandler, KeyCode, KeySubscription
from .navigation import transition
from .state import NavigationState

__all__ = [
    "Effect",
    "Event",
    "KeyCode",
    "KeySubscription",
    "KeyboardHandler",
    "NavigationState",
    "Transition",
    "transition",
]
