"""Presentation layer.

``presenter`` has no toolkit dependency; ``parking_gui`` holds the tkinter
window and is imported only when the application starts.
"""

from .presenter import ParkingPresenter, ClockTicker, DialogProvider, ParkingViewProtocol

__all__ = ["ParkingPresenter", "ClockTicker", "DialogProvider", "ParkingViewProtocol"]
