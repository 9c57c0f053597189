"""Vehicle Parking System: in-memory parking lot tracker with a Tkinter front end."""

__version__ = "1.0.0"
