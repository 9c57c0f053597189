# File: vehicle_parking/domain/exceptions.py
"""
Exceptions raised by the parking domain.

Every ``ParkingError`` aborts only the current command and leaves the
registry unchanged. The message is what the operator sees.
"""


class ParkingError(Exception):
    """Base exception for parking errors"""
    pass


class VehicleValidationError(ParkingError):
    """A required input was empty after trimming"""
    pass


class ParkingLotFullError(ParkingError):
    """Every slot is taken"""
    pass


class DuplicateVehicleError(ParkingError):
    """The license plate is already parked"""
    pass


class VehicleNotFoundError(ParkingError):
    """The license plate is not parked"""
    pass


class ConfigurationError(Exception):
    """Startup configuration could not be read or validated"""
    pass
