"""Settings loading and command-line overrides for the date picker CLI."""

import logging
from typing import Any

from ..config.settings import DatePickerSettings
from ..utils.logging import apply_command_line_overrides

logger = logging.getLogger(__name__)

# argparse destination -> settings field, applied when the flag was given
PICKER_OVERRIDES = (
    "picker_id",
    "label",
    "placeholder",
    "min_date",
    "max_date",
    "start_day_of_week",
    "display_width",
)


def load_settings(args: Any) -> DatePickerSettings:
    """Load settings from defaults, YAML and the environment, then apply CLI flags.

    Args:
        args: Parsed command line arguments

    Returns:
        Settings with every override applied

    Raises:
        ConfigurationError: If a setting or flag holds an invalid value
    """
    config_file = getattr(args, "config_file", None)
    settings = DatePickerSettings(config_file=config_file) if config_file else DatePickerSettings()

    settings = apply_command_line_overrides(settings, args)
    return apply_cli_overrides(settings, args)


def apply_cli_overrides(settings: DatePickerSettings, args: Any) -> DatePickerSettings:
    """Apply picker and display flags to settings.

    Priority: Command-line > Environment > YAML > Defaults.

    Args:
        settings: Current settings object
        args: Parsed command line arguments

    Returns:
        Updated settings object
    """
    for field_name in PICKER_OVERRIDES:
        value = getattr(args, field_name, None)
        if value is not None:
            setattr(settings, field_name, value)
            logger.debug(f"CLI override: {field_name}={value!r}")

    if getattr(args, "no_min_date", False):
        settings.no_min_date = True
    if getattr(args, "no_legend", False):
        settings.show_legend = False

    return settings
