"""Settings management using Pydantic for type validation and configuration."""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..settings.exceptions import ConfigurationError
from ..settings.models import DEFAULT_PLACEHOLDER, PickerConfig
from ..utils.logging import get_log_level

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.yaml"
LOCAL_CONFIG_FILE_NAME = "datepicker.yaml"

# YAML section -> {YAML key: settings field}
YAML_SECTIONS: dict[str, dict[str, str]] = {
    "picker": {
        "id": "picker_id",
        "label": "label",
        "placeholder": "placeholder",
        "min_date": "min_date",
        "no_min_date": "no_min_date",
        "max_date": "max_date",
        "start_day_of_week": "start_day_of_week",
    },
    "display": {
        "width": "display_width",
        "show_legend": "show_legend",
    },
}


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    model_config = ConfigDict(validate_assignment=True)

    # Console Logging
    console_enabled: bool = Field(default=True, description="Enable console logging")
    console_level: str = Field(
        default="WARNING",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )

    # File Logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_level: str = Field(
        default="DEBUG",
        description="File log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    file_directory: Optional[str] = Field(
        default=None, description="Custom log directory (defaults to data_dir/logs)"
    )
    file_prefix: str = Field(default="datepicker", description="Log file prefix")
    max_log_files: int = Field(default=5, description="Maximum number of rotated log files to keep")
    include_function_names: bool = Field(
        default=True, description="Include function names and line numbers in file logs"
    )

    # Third-party Libraries
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )

    @field_validator("console_level", "file_level", "third_party_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize a log level name and reject unknown ones.

        Raises:
            ConfigurationError: If the level name is not recognized
        """
        level = v.upper()
        try:
            get_log_level(level)
        except AttributeError:
            raise ConfigurationError(
                f"Unknown log level: {v}", field_name="log_level", field_value=v
            ) from None
        return level


class DatePickerSettings(BaseSettings):
    """Application settings with environment variable support.

    Priority: constructor arguments and environment variables, then the YAML
    file, then defaults. Command-line flags are applied on top by the CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="DATEPICKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )

    # Picker Configuration
    picker_id: str = Field(default="datepicker", description="Picker id, used to derive the role")
    label: str = Field(default="Date", description="Accessible label of the input")
    placeholder: str = Field(default=DEFAULT_PLACEHOLDER, description="Input placeholder")
    min_date: Optional[date] = Field(
        default=None, description="Exclusive lower bound (unset means today)"
    )
    no_min_date: bool = Field(default=False, description="Disable the lower bound entirely")
    max_date: Optional[date] = Field(default=None, description="Exclusive upper bound")
    start_day_of_week: int = Field(default=0, description="0 for Monday through 6 for Sunday")

    # Display Settings
    display_width: int = Field(default=40, description="Console display width")
    show_legend: bool = Field(default=True, description="Show the cell marker legend")

    # File Paths
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "datepicker")
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".local" / "share" / "datepicker")
    config_file: Optional[Path] = Field(
        default=None, description="Explicit YAML config file, overrides the search path"
    )

    # Logging Configuration
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    def __init__(self, **kwargs: Any) -> None:
        try:
            super().__init__(**kwargs)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid settings",
                validation_errors=[
                    f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                    for error in e.errors()
                ],
            ) from e
        self._load_yaml_config()

    @field_validator("start_day_of_week")
    @classmethod
    def validate_start_day_of_week(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ConfigurationError(
                "start_day_of_week must be between 0 (Monday) and 6 (Sunday)",
                field_name="start_day_of_week",
                field_value=v,
            )
        return v

    def _find_config_file(self) -> Optional[Path]:
        """Find config file, checking the working directory first, then the user config dir."""
        if self.config_file is not None:
            return self.config_file

        local_config = Path.cwd() / LOCAL_CONFIG_FILE_NAME
        if local_config.exists():
            return local_config

        user_config = self.config_dir / CONFIG_FILE_NAME
        if user_config.exists():
            return user_config

        return None

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists.

        Values already set from the environment or constructor are kept.
        Unreadable files are logged and skipped; invalid values raise.

        Raises:
            ConfigurationError: If the file holds a value that fails validation
        """
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            # Don't fail if YAML loading fails, just continue with defaults/env vars
            logger.warning(f"Could not load YAML config from {config_file}: {e}")
            return

        if not config_data:
            return
        if not isinstance(config_data, dict):
            logger.warning(f"Ignoring YAML config {config_file}: top level is not a mapping")
            return

        for section, fields in YAML_SECTIONS.items():
            section_data = config_data.get(section) or {}
            for key, value in section_data.items():
                if key not in fields:
                    logger.warning(f"Unknown setting '{section}.{key}' in {config_file}")
                    continue
                self._apply_yaml_value(self, fields[key], value)

        for key, value in (config_data.get("logging") or {}).items():
            if key not in LoggingSettings.model_fields:
                logger.warning(f"Unknown setting 'logging.{key}' in {config_file}")
                continue
            self._apply_yaml_value(self.logging, key, value)

        logger.debug(f"Loaded YAML config from {config_file}")

    @staticmethod
    def _apply_yaml_value(target: BaseModel, field_name: str, value: Any) -> None:
        if field_name in target.model_fields_set:
            return
        try:
            setattr(target, field_name, value)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid value for {field_name} in config file",
                field_name=field_name,
                field_value=value,
                validation_errors=[error["msg"] for error in e.errors()],
            ) from e

    @property
    def log_dir(self) -> Path:
        """Directory for log files."""
        if self.logging.file_directory:
            return Path(self.logging.file_directory)
        return self.data_dir / "logs"

    def to_picker_config(self, today: Optional[date] = None) -> PickerConfig:
        """Build the configuration of the picker instance these settings describe.

        Args:
            today: Reference date for the default lower bound, defaults to date.today()

        Returns:
            Validated picker configuration

        Raises:
            ConfigurationError: If the bounds leave no selectable date
        """
        if self.no_min_date:
            min_date = None
        else:
            min_date = self.min_date or today or date.today()

        return PickerConfig(
            id=self.picker_id,
            label=self.label,
            placeholder=self.placeholder,
            min_date=min_date,
            max_date=self.max_date,
            start_day_of_week=self.start_day_of_week,
        )
