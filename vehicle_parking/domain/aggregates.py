# File: vehicle_parking/domain/aggregates.py
"""
Aggregate Root for the Vehicle Parking System

ParkingRegistry is the authoritative in-memory collection of parked vehicles.

Key Concepts:
- The registry enforces capacity and plate uniqueness
- Vehicle records are reached only through the registry
- Domain events are raised for entry and exit
- Slot numbers are positions in insertion order, never stored
"""

from typing import Callable, Dict, List, Optional, Tuple
from datetime import datetime, timezone
import logging

from .models import (
    VehicleRecord, ExitReceipt, Money, ParkingFeeCalculator,
    DomainEvent, VehicleParkedEvent, VehicleLeftEvent,
    DEFAULT_RATE_PER_HOUR, DEFAULT_VEHICLE_COLOR
)
from .exceptions import (
    VehicleValidationError, ParkingLotFullError,
    DuplicateVehicleError, VehicleNotFoundError
)


DEFAULT_MAX_SLOTS = 10

MISSING_FIELDS_MESSAGE = "All fields (License Plate, Brand, Model) are required."
LOT_FULL_MESSAGE = "Parking lot is full."
ALREADY_PARKED_MESSAGE = "Vehicle is already parked."
EMPTY_PLATE_MESSAGE = "License plate cannot be empty."
NOT_FOUND_MESSAGE = "Vehicle not found."


def utc_now() -> datetime:
    """Timezone-aware current time; converted to local time only for display"""
    return datetime.now(timezone.utc)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class ParkingRegistry:
    """
    Aggregate Root: the set of vehicles currently in the lot

    Invariants:
    - ``len(registry) <= max_slots``
    - a license plate appears at most once
    - a failed add or remove never mutates the registry
    """

    def __init__(
        self,
        max_slots: int = DEFAULT_MAX_SLOTS,
        rate_per_hour: Optional[Money] = None,
        clock: Callable[[], datetime] = utc_now,
        fee_calculator: Optional[ParkingFeeCalculator] = None,
        fallback_color: str = DEFAULT_VEHICLE_COLOR
    ):
        if max_slots < 1:
            raise ValueError(f"Parking lot needs at least one slot, got: {max_slots}")

        self.max_slots = max_slots
        self.rate_per_hour = rate_per_hour or Money(DEFAULT_RATE_PER_HOUR)
        self.fallback_color = fallback_color
        self._clock = clock
        self._fee_calculator = fee_calculator or ParkingFeeCalculator()

        # Insertion order is the slot order
        self._vehicles: Dict[str, VehicleRecord] = {}
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def validate_entry(self, license_plate: str, brand: str, model: str) -> Tuple[str, str, str]:
        """
        Check that a vehicle could be parked right now

        Returns the trimmed ``(license_plate, brand, model)``.
        Raises VehicleValidationError, ParkingLotFullError or
        DuplicateVehicleError, checked in that order.
        """
        plate, brand, model = _clean(license_plate), _clean(brand), _clean(model)

        if not plate or not brand or not model:
            raise VehicleValidationError(MISSING_FIELDS_MESSAGE)

        if self.is_full:
            raise ParkingLotFullError(LOT_FULL_MESSAGE)

        if plate in self._vehicles:
            raise DuplicateVehicleError(ALREADY_PARKED_MESSAGE)

        return plate, brand, model

    def add_vehicle(
        self,
        license_plate: str,
        brand: str,
        model: str,
        color: Optional[str] = None
    ) -> int:
        """
        Park a vehicle and return its 1-based slot ordinal
        """
        plate, brand, model = self.validate_entry(license_plate, brand, model)

        record = VehicleRecord(
            license_plate=plate,
            brand=brand,
            model=model,
            entry_time=self._clock(),
            color=color or self.fallback_color
        )
        self._vehicles[plate] = record

        ordinal = len(self._vehicles)
        self._changes.append(VehicleParkedEvent(plate, ordinal, record.entry_time))
        self._logger.debug(f"Parked {record} in slot {ordinal}")
        return ordinal

    def remove_vehicle(self, license_plate: str) -> ExitReceipt:
        """
        Release a vehicle and bill its stay

        Vehicles behind it move up one ordinal.
        """
        plate = _clean(license_plate)
        if not plate:
            raise VehicleValidationError(EMPTY_PLATE_MESSAGE)

        if plate not in self._vehicles:
            raise VehicleNotFoundError(NOT_FOUND_MESSAGE)

        exit_time = self._clock()
        vehicle = self._vehicles[plate]
        hours = self._fee_calculator.billable_hours(vehicle.entry_time, exit_time)
        fee = self._fee_calculator.calculate_fee(vehicle.entry_time, exit_time, self.rate_per_hour)

        del self._vehicles[plate]

        receipt = ExitReceipt(
            vehicle=vehicle,
            exit_time=exit_time,
            duration=self._fee_calculator.elapsed(vehicle.entry_time, exit_time),
            billable_hours=hours,
            fee=fee
        )
        self._changes.append(VehicleLeftEvent(receipt))
        self._logger.debug(f"Released {vehicle}, fee {fee}")
        return receipt

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def available_slots(self) -> int:
        return self.max_slots - len(self._vehicles)

    @property
    def is_full(self) -> bool:
        return len(self._vehicles) >= self.max_slots

    def occupancy_rate(self) -> float:
        return len(self._vehicles) / self.max_slots

    def snapshot(self) -> Tuple[VehicleRecord, ...]:
        """Parked vehicles in slot order"""
        return tuple(self._vehicles.values())

    def find(self, license_plate: str) -> Optional[VehicleRecord]:
        return self._vehicles.get(_clean(license_plate))

    def ordinal_of(self, license_plate: str) -> Optional[int]:
        plate = _clean(license_plate)
        for ordinal, key in enumerate(self._vehicles, start=1):
            if key == plate:
                return ordinal
        return None

    # ------------------------------------------------------------------
    # Domain events
    # ------------------------------------------------------------------

    def clear_events(self) -> List[DomainEvent]:
        """Clear and return all domain events"""
        events = self._changes.copy()
        self._changes.clear()
        return events

    @property
    def has_changes(self) -> bool:
        return len(self._changes) > 0

    def __len__(self) -> int:
        return len(self._vehicles)

    def __contains__(self, license_plate: object) -> bool:
        return isinstance(license_plate, str) and _clean(license_plate) in self._vehicles

    def __repr__(self) -> str:
        return f"ParkingRegistry(occupied={len(self)}, max_slots={self.max_slots})"
