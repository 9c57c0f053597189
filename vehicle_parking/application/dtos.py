# File: vehicle_parking/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Vehicle Parking System

Output DTOs carry display-ready data from the application service to the
presentation layer, so the view never touches domain objects.

DTO Principles:
- Immutable (frozen models)
- No business logic, only data
- Validated on construction
"""

from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# BASE DTO CLASS
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO: frozen, validated pydantic model"""

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        populate_by_name=True
    )


# ============================================================================
# DISPLAY DTOs
# ============================================================================

class VehicleRowDTO(BaseDTO):
    """One row of the parked-vehicles table"""
    ordinal: int = Field(ge=1, description="1-based slot number")
    license_plate: str
    brand: str
    model: str
    entry_time: datetime
    entry_time_display: str
    color: str

    def as_row(self) -> tuple:
        """Values in table column order"""
        return (
            self.ordinal,
            self.license_plate,
            self.brand,
            self.model,
            self.entry_time_display
        )


class SlotStateDTO(BaseDTO):
    """One cell of the slot grid"""
    number: int = Field(ge=1)
    is_occupied: bool
    color: str
    label: str
    license_plate: Optional[str] = None


class LotStatusDTO(BaseDTO):
    """Capacity summary"""
    capacity: int = Field(ge=1)
    occupied: int = Field(ge=0)
    available: int = Field(ge=0)
    occupancy_rate: float = Field(ge=0.0, le=1.0)

    @property
    def summary(self) -> str:
        return f"Available Slots: {self.available}"


class ParkingBoardDTO(BaseDTO):
    """Table rows, slot grid and summary built from one registry snapshot"""
    rows: List[VehicleRowDTO]
    slots: List[SlotStateDTO]
    status: LotStatusDTO


# ============================================================================
# RESULT DTOs
# ============================================================================

class ParkingAllocationDTO(BaseDTO):
    """Result of parking a vehicle"""
    license_plate: str
    ordinal: int = Field(ge=1)
    entry_time: datetime
    color: str
    available_slots: int = Field(ge=0)


class ParkingExitDTO(BaseDTO):
    """Result of a vehicle leaving"""
    license_plate: str
    brand: str
    model: str
    entry_time: datetime
    exit_time: datetime
    duration_minutes: int = Field(ge=0)
    billable_hours: int = Field(ge=0)
    fee_amount: Decimal = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)
    available_slots: int = Field(ge=0)

    @property
    def fee_display(self) -> str:
        return f"{self.currency} {self.fee_amount:.2f}"

    @property
    def duration_display(self) -> str:
        hours, minutes = divmod(self.duration_minutes, 60)
        return f"{hours}h {minutes:02d}m"

    @property
    def message(self) -> str:
        return f"Vehicle removed. Total charge: {self.fee_display}"
