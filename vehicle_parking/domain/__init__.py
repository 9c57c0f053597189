"""Parking domain: vehicle records, fee rules and the parking registry."""

from .models import (
    Money, VehicleRecord, ExitReceipt, ParkingFeeCalculator,
    DomainEvent, VehicleParkedEvent, VehicleLeftEvent,
    DEFAULT_CURRENCY, DEFAULT_RATE_PER_HOUR, DEFAULT_VEHICLE_COLOR
)
from .exceptions import (
    ParkingError, VehicleValidationError, ParkingLotFullError,
    DuplicateVehicleError, VehicleNotFoundError, ConfigurationError
)
from .aggregates import ParkingRegistry, DEFAULT_MAX_SLOTS

__all__ = [
    "Money", "VehicleRecord", "ExitReceipt", "ParkingFeeCalculator",
    "DomainEvent", "VehicleParkedEvent", "VehicleLeftEvent",
    "DEFAULT_CURRENCY", "DEFAULT_RATE_PER_HOUR", "DEFAULT_VEHICLE_COLOR",
    "ParkingError", "VehicleValidationError", "ParkingLotFullError",
    "DuplicateVehicleError", "VehicleNotFoundError", "ConfigurationError",
    "ParkingRegistry", "DEFAULT_MAX_SLOTS",
]
