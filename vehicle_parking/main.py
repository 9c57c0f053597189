# File: vehicle_parking/main.py
"""
Main application entry point for the Vehicle Parking System
"""

from pathlib import Path
from typing import List, Optional
import argparse
import logging
import sys

from .domain.exceptions import ConfigurationError
from .infrastructure.config import ParkingSettings, load_settings, LOG_LEVELS


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Setup application logging configuration"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger("vehicle_parking")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vehicle-parking",
        description="Desktop parking lot tracker with hourly billing"
    )
    parser.add_argument('--config', help='YAML settings file')
    parser.add_argument('--max-slots', type=int, help='Number of parking slots')
    parser.add_argument('--rate', help='Fee per started hour, e.g. 20.00')
    parser.add_argument('--log-level', choices=LOG_LEVELS, type=str.upper, help='Logging level')
    parser.add_argument('--log-file', help='Log file path')
    return parser


def settings_from_args(args: argparse.Namespace) -> ParkingSettings:
    return load_settings(
        args.config,
        overrides={
            "max_slots": args.max_slots,
            "rate_per_hour": args.rate,
            "log_level": args.log_level,
            "log_file": args.log_file
        }
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logger = setup_logging(settings.log_level, settings.log_file)
    logger.info("Starting Vehicle Parking System...")

    try:
        # Imported here so the CLI can report config errors without a display
        from .presentation.parking_gui import ParkingManagementApp

        app = ParkingManagementApp(settings)
        app.run()
    except Exception as e:
        logger.exception(f"Fatal error in main: {e}")
        return 1

    logger.info("Application stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
