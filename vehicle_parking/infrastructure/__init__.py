"""Infrastructure: startup configuration."""

from .config import ParkingSettings, load_settings, read_config_file

__all__ = ["ParkingSettings", "load_settings", "read_config_file"]
