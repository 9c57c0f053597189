# File: vehicle_parking/infrastructure/config.py
"""
Startup configuration for the Vehicle Parking System

Settings come from built-in defaults, an optional YAML file and command-line
overrides, in that order. Everything is validated once at startup; the
running application never re-reads configuration.
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from decimal import Decimal
import logging

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.exceptions import ConfigurationError
from ..domain.models import (
    Money, is_hex_color,
    DEFAULT_CURRENCY, DEFAULT_RATE_PER_HOUR, DEFAULT_VEHICLE_COLOR
)


logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ParkingSettings(BaseModel):
    """Validated application settings"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Lot
    max_slots: int = Field(default=10, ge=1, le=200, description="Capacity of the lot, one canvas per slot")
    rate_per_hour: Decimal = Field(default=DEFAULT_RATE_PER_HOUR, ge=0, description="Billing rate per started hour")
    currency: str = Field(default=DEFAULT_CURRENCY, min_length=3, max_length=3)

    # Display
    fallback_color: str = DEFAULT_VEHICLE_COLOR
    available_color: str = "#28a745"
    slot_grid_columns: int = Field(default=5, ge=1)
    clock_interval_ms: int = Field(default=1000, ge=100)
    clock_format: str = "%Y-%m-%d %H:%M:%S"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    window_title: str = "Vehicle Parking System"
    window_width: int = Field(default=800, ge=400)
    window_height: int = Field(default=600, ge=300)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/parking_app.log"

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, v: str) -> str:
        return v.upper()

    @field_validator("fallback_color", "available_color")
    @classmethod
    def _hex_color(cls, v: str) -> str:
        if not is_hex_color(v):
            raise ValueError(f"Color must be a #rrggbb string: {v}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def rate(self) -> Money:
        return Money(self.rate_per_hour, self.currency)


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML mapping of settings"""
    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return data


def load_settings(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None
) -> ParkingSettings:
    """
    Build settings from defaults, an optional YAML file and overrides

    Overrides whose value is ``None`` are ignored so unset command-line
    options do not mask the file.
    """
    values: Dict[str, Any] = {}
    if path is not None:
        values.update(read_config_file(path))
        logger.info(f"Loaded configuration from {path}")

    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ParkingSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
