"""Interactive mode handler for the date picker CLI."""

from typing import Any

from ...display.console_renderer import ConsoleRenderer
from ...settings.exceptions import DatePickerError
from ...ui.interactive import InteractiveController
from ...utils.logging import setup_logging_from_settings
from ..config import load_settings


async def run_interactive_mode(args: Any) -> int:
    """Run one date picker driven by the terminal keyboard.

    Prints the selected date in ISO format on exit.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        settings = load_settings(args)
        setup_logging_from_settings(settings)

        config = settings.to_picker_config()
        renderer = ConsoleRenderer(width=settings.display_width, show_legend=settings.show_legend)
        interactive = InteractiveController(config, renderer=renderer)

        print("Starting interactive date picker...")
        print("Type a date as digits, 'o' to open the calendar, 'q' to quit")

        selected = await interactive.start(getattr(args, "initial_date", None))

        if selected is not None:
            print(selected.isoformat())
        return 0

    except KeyboardInterrupt:
        print("\nInteractive mode interrupted")
        return 0
    except DatePickerError as e:
        print(f"Configuration error: {e}")
        return 1


__all__ = ["run_interactive_mode"]
