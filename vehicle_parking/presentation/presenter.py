# File: vehicle_parking/presentation/presenter.py
"""
Presenter and clock for the parking window (MVP pattern)

The presenter reads the form, calls the ParkingService and pushes DTOs back
to the view. Modal interaction goes through a dialog provider. Neither
collaborator is tied to tkinter here, so this module is importable and
testable without a display.
"""

from typing import Callable, List, Optional, Protocol, Tuple
from datetime import datetime
import logging

from ..application.dtos import LotStatusDTO, SlotStateDTO, VehicleRowDTO
from ..application.parking_service import ParkingService
from ..domain.aggregates import EMPTY_PLATE_MESSAGE, NOT_FOUND_MESSAGE
from ..domain.exceptions import ParkingError


ERROR_TITLE = "Error"
SYSTEM_ERROR_TITLE = "System Error"
COLOR_PROMPT_TITLE = "Choose Car Color"
REMOVED_TITLE = "Vehicle Removed"
FOUND_TITLE = "Vehicle Found"

CLOCK_PREFIX = "Current Date & Time: "


class ParkingViewProtocol(Protocol):
    """What the presenter needs from the window"""

    def get_vehicle_input(self) -> Tuple[str, str, str]: ...

    def clear_inputs(self) -> None: ...

    def show_vehicles(self, rows: List[VehicleRowDTO]) -> None: ...

    def show_slots(self, slots: List[SlotStateDTO]) -> None: ...

    def show_status(self, status: LotStatusDTO) -> None: ...


class DialogProvider(Protocol):
    """Blocking operator dialogs"""

    def show_error(self, title: str, message: str) -> None: ...

    def show_info(self, title: str, message: str) -> None: ...

    def ask_color(self, title: str, initial: str) -> Optional[str]: ...


class ParkingPresenter:
    """
    Handles the Add, Remove and Find commands

    Every command is one transaction: it either completes and refreshes the
    whole board, or shows a single error and changes nothing.
    """

    def __init__(self, service: ParkingService, view: ParkingViewProtocol, dialogs: DialogProvider):
        self.service = service
        self.view = view
        self.dialogs = dialogs
        self.logger = logging.getLogger(self.__class__.__name__)

    def add_vehicle(self) -> bool:
        """Handle parking a vehicle from the form"""
        plate, brand, model = (value.strip() for value in self.view.get_vehicle_input())

        try:
            self.service.check_entry(plate, brand, model)
        except ParkingError as e:
            self._show_parking_error("add", e)
            return False

        color = self.dialogs.ask_color(COLOR_PROMPT_TITLE, self.service.fallback_color)
        if not color:
            color = self.service.fallback_color

        try:
            allocation = self.service.park_vehicle(plate, brand, model, color)
        except ParkingError as e:
            self._show_parking_error("add", e)
            return False
        except Exception as e:
            self._show_system_error("park vehicle", e)
            return False

        self.logger.info(f"Vehicle {allocation.license_plate} parked in slot {allocation.ordinal}")
        self.view.clear_inputs()
        self.refresh()
        return True

    def remove_vehicle(self) -> bool:
        """Handle a vehicle leaving, showing its fee"""
        plate, _, _ = self.view.get_vehicle_input()

        try:
            result = self.service.exit_vehicle(plate.strip())
        except ParkingError as e:
            self._show_parking_error("remove", e)
            return False
        except Exception as e:
            self._show_system_error("remove vehicle", e)
            return False

        self.logger.info(f"Vehicle {result.license_plate} left after {result.duration_display}, charged {result.fee_display}")
        self.dialogs.show_info(
            REMOVED_TITLE,
            f"{result.message}\nDuration: {result.duration_display} ({result.billable_hours} billable hour(s))"
        )
        self.view.clear_inputs()
        self.refresh()
        return True

    def find_vehicle(self) -> bool:
        """Show where a license plate is parked"""
        plate, _, _ = self.view.get_vehicle_input()
        plate = plate.strip()

        if not plate:
            self.dialogs.show_error(ERROR_TITLE, EMPTY_PLATE_MESSAGE)
            return False

        row = self.service.find_vehicle(plate)
        if row is None:
            self.dialogs.show_error(ERROR_TITLE, NOT_FOUND_MESSAGE)
            return False

        self.dialogs.show_info(
            FOUND_TITLE,
            f"{row.license_plate} ({row.brand} {row.model}) is in slot {row.ordinal}\n"
            f"Entry time: {row.entry_time_display}"
        )
        return True

    def refresh(self) -> None:
        """Redraw table, slot grid and summary from one snapshot"""
        board = self.service.board()
        self.view.show_vehicles(board.rows)
        self.view.show_slots(board.slots)
        self.view.show_status(board.status)

    def _show_parking_error(self, action: str, error: ParkingError) -> None:
        self.logger.warning(f"Cannot {action} vehicle: {error}")
        self.dialogs.show_error(ERROR_TITLE, str(error))

    def _show_system_error(self, action: str, error: Exception) -> None:
        self.logger.exception(f"Error trying to {action}")
        self.dialogs.show_error(SYSTEM_ERROR_TITLE, f"Failed to {action}: {error}")


class ClockTicker:
    """
    Periodically writes the current date and time to a display callback

    ``scheduler`` is anything with Tk's ``after``/``after_cancel`` pair,
    normally the root window, so ticks run on the event loop thread.
    """

    def __init__(
        self,
        scheduler,
        display: Callable[[str], None],
        interval_ms: int = 1000,
        time_format: str = "%Y-%m-%d %H:%M:%S",
        clock: Callable[[], datetime] = datetime.now
    ):
        if interval_ms <= 0:
            raise ValueError("Clock interval must be positive")

        self.scheduler = scheduler
        self.display = display
        self.interval_ms = interval_ms
        self.time_format = time_format
        self._clock = clock
        self._job = None

    @property
    def is_running(self) -> bool:
        return self._job is not None

    def format_now(self) -> str:
        return CLOCK_PREFIX + self._clock().strftime(self.time_format)

    def start(self) -> None:
        if self.is_running:
            return
        self._tick()

    def stop(self) -> None:
        if self._job is not None:
            self.scheduler.after_cancel(self._job)
            self._job = None

    def _tick(self) -> None:
        self.display(self.format_now())
        self._job = self.scheduler.after(self.interval_ms, self._tick)
