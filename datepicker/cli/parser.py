"""Command-line argument parsing for the date picker.

This module handles all command-line argument parsing functionality,
including setup of argument groups, validation, and parsing logic.
"""

import argparse
from datetime import date, datetime
from pathlib import Path

from .. import __version__
from ..core.calendar_math import DAY_LABELS

LOG_LEVELS = ["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser.

    Returns:
        Configured ArgumentParser instance

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["--min-date", "2026-01-01", "--render"])
        >>> args.min_date
        datetime.date(2026, 1, 1)
    """
    parser = argparse.ArgumentParser(
        prog="datepicker",
        description="Accessible date picker with keyboard navigation and masked text entry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Pick a date interactively (minimum: today)
  %(prog)s --min-date 2026-01-01 --max-date 2026-12-31
  %(prog)s --id search-start-date --label From
  %(prog)s --start-day sunday --date 2026-12-01 --render
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version information",
    )

    parser.add_argument(
        "--config", type=Path, dest="config_file", help="YAML configuration file to load"
    )

    parser.add_argument(
        "--render",
        action="store_true",
        help="Print the calendar once and exit instead of running interactively",
    )

    # Picker arguments
    picker_group = parser.add_argument_group("picker", "Picker configuration options")

    picker_group.add_argument(
        "--id", dest="picker_id", help="Picker id (role from 'start-date'/'end-date')"
    )
    picker_group.add_argument("--label", help="Accessible label of the input")
    picker_group.add_argument("--placeholder", help="Placeholder shown in the empty input")
    picker_group.add_argument(
        "--min-date", type=parse_date, help="Exclusive lower bound, YYYY-MM-DD (default: today)"
    )
    picker_group.add_argument(
        "--no-min-date", action="store_true", help="Allow dates before today (no lower bound)"
    )
    picker_group.add_argument(
        "--max-date", type=parse_date, help="Exclusive upper bound, YYYY-MM-DD"
    )
    picker_group.add_argument(
        "--start-day",
        type=parse_start_day,
        dest="start_day_of_week",
        help="First day of the week: a name (monday) or 0-6 with 0 for Monday",
    )
    picker_group.add_argument(
        "--date",
        type=parse_date,
        dest="initial_date",
        help="Date typed into the input before starting, YYYY-MM-DD",
    )
    picker_group.add_argument(
        "--help-panel", action="store_true", help="Show the keyboard shortcuts panel (render mode)"
    )

    # Display arguments
    display_group = parser.add_argument_group("display", "Display options")
    display_group.add_argument(
        "--width", type=int, dest="display_width", help="Console display width"
    )
    display_group.add_argument(
        "--no-legend", action="store_true", help="Hide the cell marker legend"
    )

    # Logging arguments
    logging_group = parser.add_argument_group("logging", "Logging configuration options")

    logging_group.add_argument(
        "--log-level", choices=LOG_LEVELS, help="Set both console and file log levels"
    )
    logging_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    logging_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show errors on console (sets console level to ERROR)",
    )
    logging_group.add_argument(
        "--log-dir", type=Path, help="Write log files to this directory"
    )
    logging_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console output"
    )

    return parser


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format for command-line arguments.

    Args:
        date_str: Date string to parse

    Returns:
        Parsed date

    Raises:
        argparse.ArgumentTypeError: If date format is invalid

    Example:
        >>> parse_date("2026-12-01")
        datetime.date(2026, 12, 1)
    """
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as err:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: {date_str}. Expected format: YYYY-MM-DD"
        ) from err


def parse_start_day(value: str) -> int:
    """Parse a first-day-of-week argument given as a day name, prefix or number.

    Args:
        value: "monday", "sun", "6", ...

    Returns:
        Day index, 0 for Monday through 6 for Sunday

    Raises:
        argparse.ArgumentTypeError: If the value names no day
    """
    if value.isdigit():
        day = int(value)
        if 0 <= day <= 6:
            return day
    else:
        name = value.lower()
        matches = [
            index for index, label in enumerate(DAY_LABELS) if label.lower().startswith(name)
        ]
        if len(name) >= 2 and len(matches) == 1:
            return matches[0]

    raise argparse.ArgumentTypeError(
        f"Invalid start day: {value}. Use a day name or 0-6 (0 is Monday)"
    )
