"""Logging configuration and setup utilities."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..config.settings import DatePickerSettings

# Custom log level between INFO(20) and DEBUG(10)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

LOGGER_NAMESPACE = "datepicker"

MAX_LOG_BYTES = 10 * 1024 * 1024  # 10MB

THIRD_PARTY_LOGGERS = ("asyncio", "pydantic")


def verbose(self: logging.Logger, message: Any, *args: Any, **kwargs: Any) -> None:
    """Log at VERBOSE level: more detail than INFO, less than DEBUG.

    Example:
        >>> logger = logging.getLogger(__name__)
        >>> logger.verbose("Focus moved to %s", focused_date)
    """
    if self.isEnabledFor(VERBOSE):
        self._log(VERBOSE, message, args, **kwargs)


# Add verbose method to all Logger instances
logging.Logger.verbose = verbose  # type: ignore[attr-defined]


def get_log_level(level_name: str) -> int:
    """Get numeric log level from string name, including custom VERBOSE level.

    Args:
        level_name: Log level name (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Numeric log level value

    Raises:
        AttributeError: If level name is not recognized

    Example:
        >>> get_log_level("verbose")
        15
    """
    level_name = level_name.upper()
    if level_name == "VERBOSE":
        return VERBOSE
    level = getattr(logging, level_name)
    if not isinstance(level, int):
        raise AttributeError(f"Not a log level: {level_name}")
    return level


class AutoColoredFormatter(logging.Formatter):
    """Formatter that auto-detects terminal color support."""

    # Color schemes for different terminal types
    COLORS = {
        "ERROR": {"truecolor": "\033[91m", "basic": "\033[31m", "none": ""},
        "INFO": {"truecolor": "\033[94m", "basic": "\033[34m", "none": ""},
        "VERBOSE": {"truecolor": "\033[92m", "basic": "\033[32m", "none": ""},
        "WARNING": {"truecolor": "\033[93m", "basic": "\033[33m", "none": ""},
        "DEBUG": {"truecolor": "\033[95m", "basic": "\033[35m", "none": ""},
        "CRITICAL": {"truecolor": "\033[91m\033[1m", "basic": "\033[31m\033[1m", "none": ""},
        "RESET": {"truecolor": "\033[0m", "basic": "\033[0m", "none": ""},
    }

    def __init__(self, *args: Any, enable_colors: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.enable_colors = enable_colors
        self.color_mode = self._detect_color_support() if enable_colors else "none"

    def _detect_color_support(self) -> str:
        """Auto-detect terminal color capabilities."""
        if not hasattr(sys.stderr, "isatty") or not sys.stderr.isatty():
            return "none"

        term = os.environ.get("TERM", "").lower()
        colorterm = os.environ.get("COLORTERM", "").lower()

        if term == "dumb":
            return "none"
        if colorterm in ("truecolor", "24bit") or "256color" in term:
            return "truecolor"
        if term and "color" in term:
            return "basic"

        # Windows Terminal detection
        if os.name == "nt" and "WT_SESSION" in os.environ:
            return "truecolor"

        return "none"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors if supported."""
        formatted = super().format(record)

        if self.color_mode == "none":
            return formatted

        level_name = record.levelname
        if level_name in self.COLORS:
            color_start = self.COLORS[level_name][self.color_mode]
            color_end = self.COLORS["RESET"][self.color_mode]
            formatted = formatted.replace(level_name, f"{color_start}{level_name}{color_end}", 1)

        return formatted


def _file_formatter(include_function_names: bool = True) -> logging.Formatter:
    if include_function_names:
        file_format = (
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        )
    else:
        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    return logging.Formatter(file_format, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_colors: bool = True,
) -> logging.Logger:
    """Set up application logging with console and optional file output.

    Args:
        log_level: Logging level (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name
        log_dir: Optional log directory path
        enable_colors: Color the level names when the terminal supports it

    Returns:
        Configured logger instance
    """
    try:
        numeric_level = get_log_level(log_level)
    except AttributeError:
        numeric_level = logging.INFO

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(logging.DEBUG if log_file else numeric_level)

    # Clear any existing handlers
    logger.handlers.clear()

    console_formatter = AutoColoredFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        enable_colors=enable_colors,
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        if log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            log_path = log_dir / log_file
        else:
            log_path = Path(log_file)

        # Use rotating file handler to prevent large log files
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=MAX_LOG_BYTES, backupCount=5, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)  # File logs everything
        file_handler.setFormatter(_file_formatter())
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_path}")

    for lib in THIRD_PARTY_LOGGERS:
        logging.getLogger(lib).setLevel(logging.WARNING)

    logger.debug(f"Logging initialized at {log_level} level")
    return logger


def setup_logging_from_settings(settings: "DatePickerSettings") -> logging.Logger:
    """Set up logging from the ``logging`` section of the application settings.

    Args:
        settings: Application settings

    Returns:
        Configured logger instance
    """
    config = settings.logging

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(logging.DEBUG)  # Allow all levels, handlers will filter
    logger.handlers.clear()

    if config.console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(get_log_level(config.console_level))
        console_handler.setFormatter(
            AutoColoredFormatter(
                "%(asctime)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
                enable_colors=config.console_colors,
            )
        )
        logger.addHandler(console_handler)

    if config.file_enabled:
        log_dir = settings.log_dir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{config.file_prefix}.log"

        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=MAX_LOG_BYTES, backupCount=config.max_log_files, encoding="utf-8"
        )
        file_handler.setLevel(get_log_level(config.file_level))
        file_handler.setFormatter(_file_formatter(config.include_function_names))
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_path}")

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    third_party_level = get_log_level(config.third_party_level)
    for lib in THIRD_PARTY_LOGGERS:
        logging.getLogger(lib).setLevel(third_party_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the datepicker namespace.

    Args:
        name: Logger name, typically the module's __name__ value

    Returns:
        Logger under ``datepicker.``

    Example:
        >>> get_logger("ui.navigation").name
        'datepicker.ui.navigation'
    """
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def apply_command_line_overrides(
    settings: "DatePickerSettings", args: Any
) -> "DatePickerSettings":
    """Apply command-line argument overrides to logging settings.

    Priority: Command-line > Environment > YAML > Defaults. Modifies the
    settings object in-place and returns it for convenience.

    Args:
        settings: Current settings object to modify
        args: Parsed command-line arguments from argparse

    Returns:
        Settings object with command-line overrides applied
    """
    if getattr(args, "log_level", None):
        settings.logging.console_level = args.log_level
        settings.logging.file_level = args.log_level

    if getattr(args, "verbose", False):
        settings.logging.console_level = "VERBOSE"
        settings.logging.file_level = "VERBOSE"

    if getattr(args, "quiet", False):
        settings.logging.console_level = "ERROR"

    if getattr(args, "log_dir", None):
        settings.logging.file_directory = str(args.log_dir)
        settings.logging.file_enabled = True

    if getattr(args, "no_log_colors", False):
        settings.logging.console_colors = False

    return settings
