"""
Integration tests for the Vehicle Parking System

These wire the real registry, service and presenter together and replace
only the window and the dialogs with mocks, so no display is required.
"""
