#!/usr/bin/env python3
"""
Integration Tests for Critical Scenarios

Presenter, service and registry are wired together for real; only the
window and its dialogs are mocked, so these run without a display.
"""

import unittest
from decimal import Decimal
from unittest.mock import Mock

from vehicle_parking.application.parking_service import ParkingService
from vehicle_parking.domain.aggregates import ParkingRegistry
from vehicle_parking.domain.models import Money
from vehicle_parking.presentation.presenter import ParkingPresenter, ERROR_TITLE, REMOVED_TITLE

from tests.helpers import FakeClock


class ParkingLotTestCase(unittest.TestCase):
    """Small lot with a scripted operator"""

    CAPACITY = 2

    def setUp(self):
        self.clock = FakeClock()
        self.registry = ParkingRegistry(
            max_slots=self.CAPACITY,
            rate_per_hour=Money(Decimal('20.00'), "PHP"),
            clock=self.clock
        )
        self.service = ParkingService(self.registry)

        self.view = Mock()
        self.dialogs = Mock()
        self.dialogs.ask_color.return_value = "#3366cc"
        self.presenter = ParkingPresenter(self.service, self.view, self.dialogs)

    def type_in(self, plate, brand="", model=""):
        self.view.get_vehicle_input.return_value = (plate, brand, model)

    def add(self, plate, brand, model):
        self.type_in(plate, brand, model)
        return self.presenter.add_vehicle()

    def remove(self, plate):
        self.type_in(plate)
        return self.presenter.remove_vehicle()

    def last_board(self):
        rows = self.view.show_vehicles.call_args[0][0]
        slots = self.view.show_slots.call_args[0][0]
        status = self.view.show_status.call_args[0][0]
        return rows, slots, status


class TestCapacityTwoScenario(ParkingLotTestCase):
    """Fill a two-slot lot, overflow it, then free a slot"""

    def test_full_cycle(self):
        # First vehicle
        self.assertTrue(self.add("ABC123", "Toyota", "Corolla"))
        rows, slots, status = self.last_board()
        self.assertEqual([(r.ordinal, r.license_plate) for r in rows], [(1, "ABC123")])
        self.assertEqual(status.available, 1)
        self.assertEqual(slots[0].color, "#3366cc")

        # Second vehicle fills the lot
        self.clock.advance(minutes=15)
        self.assertTrue(self.add("XYZ789", "Honda", "Civic"))
        rows, slots, status = self.last_board()
        self.assertEqual([(r.ordinal, r.license_plate) for r in rows], [(1, "ABC123"), (2, "XYZ789")])
        self.assertEqual(status.available, 0)
        self.assertTrue(all(slot.is_occupied for slot in slots))

        # Third vehicle is refused without a color prompt
        self.dialogs.ask_color.reset_mock()
        self.assertFalse(self.add("DEF456", "Ford", "Focus"))
        self.dialogs.show_error.assert_called_once_with(ERROR_TITLE, "Parking lot is full.")
        self.dialogs.ask_color.assert_not_called()
        self.assertEqual(self.registry.available_slots(), 0)
        self.assertNotIn("DEF456", self.registry)

        # First vehicle leaves after 1h 30m
        self.clock.advance(minutes=75)
        self.assertTrue(self.remove("ABC123"))
        title, message = self.dialogs.show_info.call_args[0]
        self.assertEqual(title, REMOVED_TITLE)
        self.assertIn("Vehicle removed. Total charge: PHP 40.00", message)

        rows, slots, status = self.last_board()
        self.assertEqual([(r.ordinal, r.license_plate) for r in rows], [(1, "XYZ789")])
        self.assertEqual(status.available, 1)
        self.assertEqual(slots[0].license_plate, "XYZ789")
        self.assertFalse(slots[1].is_occupied)


class TestOperatorMistakes(ParkingLotTestCase):

    def test_duplicate_plate(self):
        self.add("ABC123", "Toyota", "Corolla")
        self.assertFalse(self.add("ABC123", "Honda", "Civic"))
        self.dialogs.show_error.assert_called_once_with(ERROR_TITLE, "Vehicle is already parked.")
        self.assertEqual(self.registry.find("ABC123").brand, "Toyota")

    def test_missing_fields(self):
        self.assertFalse(self.add("ABC123", "", "Corolla"))
        self.dialogs.show_error.assert_called_once_with(
            ERROR_TITLE, "All fields (License Plate, Brand, Model) are required.")
        self.assertEqual(len(self.registry), 0)

    def test_remove_unknown_plate(self):
        self.add("ABC123", "Toyota", "Corolla")
        self.view.reset_mock()

        self.assertFalse(self.remove("ZZZ999"))

        self.dialogs.show_error.assert_called_once_with(ERROR_TITLE, "Vehicle not found.")
        self.view.show_vehicles.assert_not_called()
        self.assertEqual(len(self.registry), 1)

    def test_cancelled_color_uses_black(self):
        self.dialogs.ask_color.return_value = None
        self.add("ABC123", "Toyota", "Corolla")
        self.assertEqual(self.registry.find("ABC123").color, "#000000")

    def test_immediate_exit_is_free(self):
        self.add("ABC123", "Toyota", "Corolla")
        self.remove("ABC123")
        self.assertIn("PHP 0.00", self.dialogs.show_info.call_args[0][1])

    def test_find_after_renumbering(self):
        self.add("ABC123", "Toyota", "Corolla")
        self.add("XYZ789", "Honda", "Civic")
        self.remove("ABC123")

        self.type_in("XYZ789")
        self.assertTrue(self.presenter.find_vehicle())
        self.assertIn("is in slot 1", self.dialogs.show_info.call_args[0][1])


if __name__ == "__main__":
    unittest.main(verbosity=2)
