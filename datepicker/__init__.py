"""Date picker - accessible calendar navigation and date selection engine.

Builds month grids with ISO week numbers, validates dates against exclusive
bounds, parses masked DD/MM/YYYY text and translates keyboard input into
focus and selection changes.
"""

__version__ = "1.0.0"
__author__ = "Date Picker Team"
__description__ = "Accessible date picker with keyboard navigation and masked text entry"

from .settings.exceptions import ConfigurationError, DatePickerError
from .settings.models import DateBounds, PickerConfig, Role
from .ui.interactive import DatePicker, InMemorySearchContext

__all__ = [
    "ConfigurationError",
    "DateBounds",
    "DatePicker",
    "DatePickerError",
    "InMemorySearchContext",
    "PickerConfig",
    "Role",
    "__author__",
    "__description__",
    "__version__",
]
