# File: vehicle_parking/application/parking_service.py
"""
Parking Management Application Service

Orchestrates the parking registry for the presentation layer.

Responsibilities:
1. Execute the entry and exit use cases
2. Translate domain objects into display DTOs
3. Log every state change and the domain events behind it

Domain errors (``ParkingError`` subclasses) propagate unchanged so the
caller can show them to the operator.
"""

from typing import List, Optional
import logging

from ..domain.aggregates import ParkingRegistry
from ..domain.models import VehicleRecord
from .dtos import (
    VehicleRowDTO, SlotStateDTO, LotStatusDTO, ParkingBoardDTO,
    ParkingAllocationDTO, ParkingExitDTO
)


DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_AVAILABLE_COLOR = "#28a745"

OCCUPIED_LABEL = "Occupied"


class ParkingService:
    """
    Application service for the parking lot

    Use cases:
    1. Vehicle entry (check, then park)
    2. Vehicle exit with fee
    3. Lookup by license plate
    4. Board snapshot for the table, slot grid and summary
    """

    def __init__(
        self,
        registry: ParkingRegistry,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
        available_color: str = DEFAULT_AVAILABLE_COLOR
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.registry = registry
        self.timestamp_format = timestamp_format
        self.available_color = available_color

        self.logger.info(
            f"ParkingService initialized: {registry.max_slots} slots at "
            f"{registry.rate_per_hour.format()} per hour"
        )

    @property
    def fallback_color(self) -> str:
        return self.registry.fallback_color

    # ------------------------------------------------------------------
    # Use cases
    # ------------------------------------------------------------------

    def check_entry(self, license_plate: str, brand: str, model: str) -> None:
        """
        Raise the error a park attempt would raise, without parking
        """
        self.registry.validate_entry(license_plate, brand, model)

    def park_vehicle(
        self,
        license_plate: str,
        brand: str,
        model: str,
        color: Optional[str] = None
    ) -> ParkingAllocationDTO:
        """
        Park a vehicle

        Use Case: Vehicle Entry
        1. Validate inputs, capacity and uniqueness
        2. Record the entry time
        3. Return the allocated slot ordinal
        """
        self.logger.info(f"Processing parking request for {license_plate.strip()}")

        ordinal = self.registry.add_vehicle(license_plate, brand, model, color)
        vehicle = self.registry.snapshot()[ordinal - 1]
        self._publish_events()

        return ParkingAllocationDTO(
            license_plate=vehicle.license_plate,
            ordinal=ordinal,
            entry_time=vehicle.entry_time,
            color=vehicle.color,
            available_slots=self.registry.available_slots()
        )

    def exit_vehicle(self, license_plate: str) -> ParkingExitDTO:
        """
        Release a vehicle and compute its fee

        Use Case: Vehicle Exit
        1. Look up the vehicle
        2. Bill the stay in started hours
        3. Free the slot; later vehicles move up
        """
        self.logger.info(f"Processing exit request for {license_plate.strip()}")

        receipt = self.registry.remove_vehicle(license_plate)
        self._publish_events()

        vehicle = receipt.vehicle
        return ParkingExitDTO(
            license_plate=vehicle.license_plate,
            brand=vehicle.brand,
            model=vehicle.model,
            entry_time=vehicle.entry_time,
            exit_time=receipt.exit_time,
            duration_minutes=receipt.duration_minutes,
            billable_hours=receipt.billable_hours,
            fee_amount=receipt.fee.amount,
            currency=receipt.fee.currency,
            available_slots=self.registry.available_slots()
        )

    def find_vehicle(self, license_plate: str) -> Optional[VehicleRowDTO]:
        """Find the current slot of a parked vehicle"""
        vehicle = self.registry.find(license_plate)
        if vehicle is None:
            return None
        return self._to_row(self.registry.ordinal_of(vehicle.license_plate), vehicle)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_vehicles(self) -> List[VehicleRowDTO]:
        return self._rows(self.registry.snapshot())

    def slot_states(self) -> List[SlotStateDTO]:
        return self._slots(self.registry.snapshot())

    def lot_status(self) -> LotStatusDTO:
        occupied = len(self.registry)
        return LotStatusDTO(
            capacity=self.registry.max_slots,
            occupied=occupied,
            available=self.registry.available_slots(),
            occupancy_rate=self.registry.occupancy_rate()
        )

    def board(self) -> ParkingBoardDTO:
        """Everything the window shows, from a single snapshot"""
        vehicles = self.registry.snapshot()
        return ParkingBoardDTO(
            rows=self._rows(vehicles),
            slots=self._slots(vehicles),
            status=self.lot_status()
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _rows(self, vehicles) -> List[VehicleRowDTO]:
        return [self._to_row(ordinal, vehicle) for ordinal, vehicle in enumerate(vehicles, start=1)]

    def _slots(self, vehicles) -> List[SlotStateDTO]:
        slots = []
        for index in range(self.registry.max_slots):
            number = index + 1
            if index < len(vehicles):
                vehicle = vehicles[index]
                slots.append(SlotStateDTO(
                    number=number,
                    is_occupied=True,
                    color=vehicle.color,
                    label=OCCUPIED_LABEL,
                    license_plate=vehicle.license_plate
                ))
            else:
                slots.append(SlotStateDTO(
                    number=number,
                    is_occupied=False,
                    color=self.available_color,
                    label=f"Slot {number}"
                ))
        return slots

    def _to_row(self, ordinal: int, vehicle: VehicleRecord) -> VehicleRowDTO:
        return VehicleRowDTO(
            ordinal=ordinal,
            license_plate=vehicle.license_plate,
            brand=vehicle.brand,
            model=vehicle.model,
            entry_time=vehicle.entry_time,
            entry_time_display=vehicle.entry_time.astimezone().strftime(self.timestamp_format),
            color=vehicle.color
        )

    def _publish_events(self) -> None:
        for event in self.registry.clear_events():
            self.logger.info(f"Domain Event: {event.__class__.__name__} {event.to_dict()['data']}")
