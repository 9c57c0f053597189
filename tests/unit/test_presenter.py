"""
ParkingPresenter unit tests

The service is mocked; the view and dialogs are Mocks, so no display is needed.
"""

import unittest
from unittest.mock import Mock, call

from vehicle_parking.application.dtos import ParkingBoardDTO, LotStatusDTO
from vehicle_parking.domain.exceptions import (
    VehicleValidationError, ParkingLotFullError, VehicleNotFoundError
)
from vehicle_parking.presentation.presenter import (
    ParkingPresenter, ERROR_TITLE, SYSTEM_ERROR_TITLE, COLOR_PROMPT_TITLE, REMOVED_TITLE
)


def empty_board():
    return ParkingBoardDTO(
        rows=[],
        slots=[],
        status=LotStatusDTO(capacity=10, occupied=0, available=10, occupancy_rate=0.0)
    )


class PresenterTestBase(unittest.TestCase):

    def setUp(self):
        self.service = Mock()
        self.service.fallback_color = "#000000"
        self.service.board.return_value = empty_board()

        self.view = Mock()
        self.view.get_vehicle_input.return_value = ("  ABC123 ", " Toyota ", " Corolla ")

        self.dialogs = Mock()
        self.dialogs.ask_color.return_value = "#ff0000"

        self.presenter = ParkingPresenter(self.service, self.view, self.dialogs)


class TestAddVehicle(PresenterTestBase):

    def test_successful_add(self):
        self.assertTrue(self.presenter.add_vehicle())

        self.service.check_entry.assert_called_once_with("ABC123", "Toyota", "Corolla")
        self.dialogs.ask_color.assert_called_once_with(COLOR_PROMPT_TITLE, "#000000")
        self.service.park_vehicle.assert_called_once_with("ABC123", "Toyota", "Corolla", "#ff0000")
        self.view.clear_inputs.assert_called_once()
        self.view.show_vehicles.assert_called_once_with([])
        self.view.show_slots.assert_called_once_with([])
        self.view.show_status.assert_called_once()
        self.dialogs.show_error.assert_not_called()

    def test_cancelled_color_prompt_uses_fallback(self):
        self.dialogs.ask_color.return_value = None
        self.presenter.add_vehicle()
        self.service.park_vehicle.assert_called_once_with("ABC123", "Toyota", "Corolla", "#000000")

    def test_validation_error_stops_before_color_prompt(self):
        self.service.check_entry.side_effect = VehicleValidationError(
            "All fields (License Plate, Brand, Model) are required.")

        self.assertFalse(self.presenter.add_vehicle())

        self.dialogs.show_error.assert_called_once_with(
            ERROR_TITLE, "All fields (License Plate, Brand, Model) are required.")
        self.dialogs.ask_color.assert_not_called()
        self.service.park_vehicle.assert_not_called()
        self.view.clear_inputs.assert_not_called()
        self.service.board.assert_not_called()

    def test_full_lot_error(self):
        self.service.check_entry.side_effect = ParkingLotFullError("Parking lot is full.")
        self.presenter.add_vehicle()
        self.dialogs.show_error.assert_called_once_with(ERROR_TITLE, "Parking lot is full.")

    def test_unexpected_error_is_reported(self):
        self.service.park_vehicle.side_effect = RuntimeError("boom")

        self.assertFalse(self.presenter.add_vehicle())

        title, message = self.dialogs.show_error.call_args[0]
        self.assertEqual(title, SYSTEM_ERROR_TITLE)
        self.assertIn("boom", message)
        self.view.clear_inputs.assert_not_called()


class TestRemoveVehicle(PresenterTestBase):

    def setUp(self):
        super().setUp()
        result = Mock()
        result.license_plate = "ABC123"
        result.message = "Vehicle removed. Total charge: PHP 40.00"
        result.duration_display = "1h 01m"
        result.fee_display = "PHP 40.00"
        result.billable_hours = 2
        self.service.exit_vehicle.return_value = result

    def test_successful_remove_shows_fee(self):
        self.assertTrue(self.presenter.remove_vehicle())

        self.service.exit_vehicle.assert_called_once_with("ABC123")
        title, message = self.dialogs.show_info.call_args[0]
        self.assertEqual(title, REMOVED_TITLE)
        self.assertIn("Vehicle removed. Total charge: PHP 40.00", message)
        self.assertIn("2 billable hour(s)", message)
        self.view.clear_inputs.assert_called_once()
        self.service.board.assert_called_once()

    def test_fee_shown_before_refresh(self):
        manager = Mock()
        manager.attach_mock(self.dialogs.show_info, "show_info")
        manager.attach_mock(self.view.show_vehicles, "show_vehicles")

        self.presenter.remove_vehicle()

        names = [c[0] for c in manager.mock_calls]
        self.assertEqual(names, ["show_info", "show_vehicles"])

    def test_not_found(self):
        self.service.exit_vehicle.side_effect = VehicleNotFoundError("Vehicle not found.")

        self.assertFalse(self.presenter.remove_vehicle())

        self.dialogs.show_error.assert_called_once_with(ERROR_TITLE, "Vehicle not found.")
        self.dialogs.show_info.assert_not_called()
        self.view.clear_inputs.assert_not_called()

    def test_empty_plate(self):
        self.view.get_vehicle_input.return_value = ("   ", "", "")
        self.service.exit_vehicle.side_effect = VehicleValidationError("License plate cannot be empty.")

        self.presenter.remove_vehicle()

        self.service.exit_vehicle.assert_called_once_with("")
        self.dialogs.show_error.assert_called_once_with(ERROR_TITLE, "License plate cannot be empty.")


class TestFindVehicle(PresenterTestBase):

    def test_found(self):
        row = Mock(license_plate="ABC123", brand="Toyota", model="Corolla", ordinal=3,
                   entry_time_display="2024-01-15 08:00:00")
        self.service.find_vehicle.return_value = row

        self.assertTrue(self.presenter.find_vehicle())

        message = self.dialogs.show_info.call_args[0][1]
        self.assertIn("slot 3", message)
        self.assertIn("2024-01-15 08:00:00", message)

    def test_not_found(self):
        self.service.find_vehicle.return_value = None
        self.assertFalse(self.presenter.find_vehicle())
        self.dialogs.show_error.assert_called_once_with(ERROR_TITLE, "Vehicle not found.")

    def test_empty_plate(self):
        self.view.get_vehicle_input.return_value = ("", "", "")
        self.assertFalse(self.presenter.find_vehicle())
        self.service.find_vehicle.assert_not_called()
        self.dialogs.show_error.assert_called_once_with(ERROR_TITLE, "License plate cannot be empty.")


class TestRefresh(PresenterTestBase):

    def test_refresh_uses_one_board(self):
        board = empty_board()
        self.service.board.return_value = board

        self.presenter.refresh()

        self.service.board.assert_called_once_with()
        self.assertEqual(self.view.method_calls, [
            call.show_vehicles(board.rows),
            call.show_slots(board.slots),
            call.show_status(board.status),
        ])


if __name__ == "__main__":
    unittest.main(verbosity=2)
