"""CLI module for the date picker.

Provides argument parsing, settings overrides and mode execution.
"""

from typing import Optional

from .config import apply_cli_overrides, load_settings
from .modes import run_interactive_mode, run_render_mode
from .parser import create_parser, parse_date, parse_start_day


async def main_entry(argv: Optional[list[str]] = None) -> int:
    """Main entry point with argument parsing.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:]

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.render:
        return run_render_mode(args)
    return await run_interactive_mode(args)


__all__ = [
    "apply_cli_overrides",
    "create_parser",
    "load_settings",
    "main_entry",
    "parse_date",
    "parse_start_day",
    "run_interactive_mode",
    "run_render_mode",
]
