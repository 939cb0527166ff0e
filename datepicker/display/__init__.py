"""Month view model and text rendering."""

from .console_renderer import ConsoleRenderer
from .view_model import MonthView, RenderedCell, build_month_view, cell_id

__all__ = ["ConsoleRenderer", "MonthView", "RenderedCell", "build_month_view", "cell_id"]
