# File: vehicle_parking/domain/models.py
"""
Domain Models for the Vehicle Parking System

This module contains:
1. Value Objects: Money and the immutable VehicleRecord snapshot
2. Domain Services: ParkingFeeCalculator
3. Domain Events: raised by the parking registry on entry and exit

Nothing in here knows about tkinter or any other presentation concern.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Optional
from datetime import datetime, timedelta, timezone
from decimal import Decimal
import math
import re
import uuid


DEFAULT_CURRENCY = "PHP"
DEFAULT_VEHICLE_COLOR = "#000000"
DEFAULT_RATE_PER_HOUR = Decimal('20.00')

_HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')


def is_hex_color(value: str) -> bool:
    """Check for a ``#rrggbb`` color string"""
    return bool(value) and bool(_HEX_COLOR.match(value))


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)
class Money:
    """
    Value Object: Monetary amount with currency
    Provides arithmetic operations with validation
    """
    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if self.amount < Decimal('0'):
            raise ValueError("Money amount cannot be negative")

        if len(self.currency) != 3:
            raise ValueError(f"Currency must be 3-letter code: {self.currency}")

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money amounts (same currency only)"""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} to {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, multiplier) -> 'Money':
        """Multiply money by a non-negative number"""
        multiplier = Decimal(str(multiplier))
        if multiplier < Decimal('0'):
            raise ValueError("Multiplier cannot be negative")
        return Money(self.amount * multiplier, self.currency)

    def format(self) -> str:
        """Format money for display, e.g. ``PHP 40.00``"""
        return f"{self.currency} {self.amount:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": float(self.amount),
            "currency": self.currency
        }

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class VehicleRecord:
    """
    Value Object: snapshot of one parked vehicle

    Created once when the vehicle enters and discarded when it leaves.
    The license plate is the identity inside the registry.
    """
    license_plate: str
    brand: str
    model: str
    entry_time: datetime
    color: str = DEFAULT_VEHICLE_COLOR

    def __post_init__(self):
        for name in ('license_plate', 'brand', 'model'):
            value = (getattr(self, name) or "").strip()
            if not value:
                raise ValueError(f"{name.replace('_', ' ').capitalize()} cannot be empty")
            object.__setattr__(self, name, value)

        if not is_hex_color(self.color):
            raise ValueError(f"Color must be a #rrggbb string: {self.color}")

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"

    def parked_for(self, now: datetime) -> timedelta:
        """Elapsed time since entry"""
        return now - self.entry_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "license_plate": self.license_plate,
            "brand": self.brand,
            "model": self.model,
            "entry_time": self.entry_time.isoformat(),
            "color": self.color
        }

    def __str__(self) -> str:
        return f"{self.license_plate} ({self.display_name})"


@dataclass(frozen=True)
class ExitReceipt:
    """Value Object: outcome of a vehicle leaving the lot"""
    vehicle: VehicleRecord
    exit_time: datetime
    duration: timedelta
    billable_hours: int
    fee: Money

    @property
    def duration_minutes(self) -> int:
        """Whole elapsed minutes"""
        return int(self.duration.total_seconds() // 60)


# ============================================================================
# DOMAIN SERVICES
# ============================================================================

class ParkingFeeCalculator:
    """
    Domain Service: Calculates parking fees

    Whole elapsed minutes are rounded up to full hours and billed at a flat
    hourly rate. A stay shorter than one minute bills nothing; one minute
    bills a full hour. An exit stamped before the entry (wall clock stepped
    back) counts as a zero-length stay.
    """

    @staticmethod
    def elapsed(entry_time: datetime, exit_time: datetime) -> timedelta:
        """Length of the stay, never negative"""
        return max(exit_time - entry_time, timedelta(0))

    @staticmethod
    def billable_hours(entry_time: datetime, exit_time: datetime) -> int:
        elapsed = ParkingFeeCalculator.elapsed(entry_time, exit_time)
        minutes = int(elapsed.total_seconds() // 60)
        return math.ceil(minutes / 60)

    @staticmethod
    def calculate_fee(
        entry_time: datetime,
        exit_time: datetime,
        rate_per_hour: Money
    ) -> Money:
        """
        Calculate the fee for a stay between ``entry_time`` and ``exit_time``

        Returns: ``ceil(minutes / 60) * rate_per_hour``
        """
        hours = ParkingFeeCalculator.billable_hours(entry_time, exit_time)
        return rate_per_hour * hours


# ============================================================================
# DOMAIN EVENTS
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the domain
    """

    def __init__(self, timestamp: Optional[datetime] = None):
        self.event_id = str(uuid.uuid4())
        self.timestamp = timestamp or datetime.now(timezone.utc)

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for logging"""
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class VehicleParkedEvent(DomainEvent):
    """Event raised when a vehicle is parked"""

    def __init__(self, license_plate: str, ordinal: int, entry_time: datetime):
        super().__init__(entry_time)
        self.license_plate = license_plate
        self.ordinal = ordinal
        self.entry_time = entry_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "vehicle.parked",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "data": {
                "license_plate": self.license_plate,
                "ordinal": self.ordinal
            }
        }


class VehicleLeftEvent(DomainEvent):
    """Event raised when a vehicle leaves"""

    def __init__(self, receipt: ExitReceipt):
        super().__init__(receipt.exit_time)
        self.license_plate = receipt.vehicle.license_plate
        self.duration_minutes = receipt.duration_minutes
        self.fee = receipt.fee

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "vehicle.left",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "data": {
                "license_plate": self.license_plate,
                "duration_minutes": self.duration_minutes,
                "fee": self.fee.to_dict()
            }
        }
