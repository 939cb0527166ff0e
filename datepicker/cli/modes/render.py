"""One-shot render mode: print the open calendar and exit."""

from typing import Any

from ...core.calendar_math import format_date
from ...display.console_renderer import ConsoleRenderer
from ...settings.exceptions import DatePickerError
from ...ui.interactive import DatePicker
from ...utils.logging import setup_logging_from_settings
from ..config import load_settings


def run_render_mode(args: Any) -> int:
    """Print the picker opened on its default focus, or on ``--date`` when given.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        settings = load_settings(args)
        setup_logging_from_settings(settings)
        config = settings.to_picker_config()
    except DatePickerError as e:
        print(f"Configuration error: {e}")
        return 1

    picker = DatePicker(config)
    initial_date = getattr(args, "initial_date", None)
    if initial_date is not None:
        picker.type_text(format_date(initial_date))
    if not picker.state.is_open:
        picker.toggle_open()
    if getattr(args, "help_panel", False):
        picker.toggle_help()

    renderer = ConsoleRenderer(width=settings.display_width, show_legend=settings.show_legend)
    print(renderer.render(picker.view()))
    return 0


__all__ = ["run_render_mode"]
