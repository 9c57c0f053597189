"""Application layer: use cases and display DTOs."""

from .parking_service import ParkingService
from .dtos import (
    VehicleRowDTO, SlotStateDTO, LotStatusDTO, ParkingBoardDTO,
    ParkingAllocationDTO, ParkingExitDTO
)

__all__ = [
    "ParkingService",
    "VehicleRowDTO", "SlotStateDTO", "LotStatusDTO", "ParkingBoardDTO",
    "ParkingAllocationDTO", "ParkingExitDTO",
]
