# File: vehicle_parking/presentation/parking_gui.py
"""
Vehicle Parking System GUI

Single-window Tkinter front end:
1. Parked vehicles table
2. Live slot grid colored by each vehicle's chosen color
3. Entry form with Add / Remove / Find commands
4. Available-slots summary and a running clock
5. Activity log mirroring application log records

Architecture:
- MVP Pattern: ParkingView is passive, ParkingPresenter holds the logic
- Dialogs are wrapped in TkDialogs so the presenter never imports tkinter
- The clock ticks on the Tk event loop through ``after``
"""

import tkinter as tk
from tkinter import ttk, messagebox, colorchooser
from typing import List, Optional, Any, Callable, Tuple
import logging

from ..application.dtos import LotStatusDTO, SlotStateDTO, VehicleRowDTO
from ..application.parking_service import ParkingService
from ..domain.aggregates import ParkingRegistry
from ..domain.models import ParkingFeeCalculator
from ..infrastructure.config import ParkingSettings
from .presenter import ParkingPresenter, ClockTicker


# ============================================================================
# CONSTANTS
# ============================================================================

class AppConfig:
    """Look and feel"""
    COLORS = {
        "bg": "#f0f0f0",
        "border": "#000000"
    }

    FONTS = {
        "title": ("Arial", 24, "bold"),
        "clock": ("Arial", 14),
        "slot": ("Segoe UI", 10, "bold"),
        "marker": ("Segoe UI", 16),
        "body": ("Segoe UI", 10),
        "monospace": ("Consolas", 9)
    }

    TABLE_COLUMNS = (
        ("ordinal", "Slot #", 60),
        ("license_plate", "License Plate", 120),
        ("brand", "Brand", 110),
        ("model", "Model", 110),
        ("entry_time", "Entry Time", 160),
    )

    CAR_MARKER = "\U0001F697"
    SLOT_SIZE = 70


def text_color_for(background: str) -> str:
    """Black or white, whichever reads better on ``background``"""
    try:
        r, g, b = (int(background[i:i + 2], 16) for i in (1, 3, 5))
    except (ValueError, TypeError):
        return "black"
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return "black" if luminance > 150 else "white"


# ============================================================================
# CUSTOM WIDGETS
# ============================================================================

class ParkingSlotWidget(tk.Canvas):
    """Visual representation of a parking slot"""

    def __init__(self, parent, slot: SlotStateDTO, size: int = AppConfig.SLOT_SIZE, **kwargs):
        super().__init__(
            parent,
            width=size,
            height=size,
            highlightthickness=1,
            highlightbackground=AppConfig.COLORS["border"],
            **kwargs
        )
        self.slot = slot
        self.size = size
        self._draw_slot()

    def _draw_slot(self):
        """Draw the parking slot"""
        self.delete("all")

        padding = 2
        self.create_rectangle(
            padding, padding,
            self.size - padding, self.size - padding,
            fill=self.slot.color,
            outline="",
            tags="background"
        )

        fg = text_color_for(self.slot.color)
        if self.slot.is_occupied:
            self.create_text(
                self.size // 2,
                self.size // 2 - 12,
                text=AppConfig.CAR_MARKER,
                fill=fg,
                font=AppConfig.FONTS["marker"],
                tags="marker"
            )
            label_y = self.size // 2 + 12
        else:
            label_y = self.size // 2

        self.create_text(
            self.size // 2,
            label_y,
            text=self.slot.label,
            fill=fg,
            font=AppConfig.FONTS["slot"],
            tags="text"
        )

    @property
    def has_marker(self) -> bool:
        return bool(self.find_withtag("marker"))

    def update_slot(self, slot: SlotStateDTO):
        """Update slot data and redraw"""
        self.slot = slot
        self._draw_slot()


class SlotGrid(ttk.Frame):
    """Fixed grid of ParkingSlotWidgets, redrawn in full on every change"""

    def __init__(self, parent, columns: int = 5, **kwargs):
        super().__init__(parent, **kwargs)
        self.columns = max(1, columns)
        self.widgets: List[ParkingSlotWidget] = []

    def show(self, slots: List[SlotStateDTO]):
        if len(slots) != len(self.widgets):
            self._rebuild(slots)
            return

        for widget, slot in zip(self.widgets, slots):
            widget.update_slot(slot)

    def _rebuild(self, slots: List[SlotStateDTO]):
        for widget in self.widgets:
            widget.destroy()

        self.widgets = []
        for index, slot in enumerate(slots):
            widget = ParkingSlotWidget(self, slot)
            widget.grid(row=index // self.columns, column=index % self.columns, padx=5, pady=5)
            self.widgets.append(widget)


class TextWidgetHandler(logging.Handler):
    """Logging handler that appends records to a read-only Text widget"""

    def __init__(self, text_widget: tk.Text, level=logging.INFO):
        super().__init__(level)
        self.text_widget = text_widget
        self.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s', '%H:%M:%S'))

    def emit(self, record):
        try:
            message = self.format(record)
            self.text_widget.config(state=tk.NORMAL)
            self.text_widget.insert(tk.END, f"{message}\n")
            self.text_widget.see(tk.END)
            self.text_widget.config(state=tk.DISABLED)
        except tk.TclError:
            # Widget already destroyed during shutdown
            pass
        except Exception:
            self.handleError(record)


class TkDialogs:
    """Blocking dialogs backed by tkinter.messagebox and colorchooser"""

    def __init__(self, parent):
        self.parent = parent

    def show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self.parent)

    def show_info(self, title: str, message: str) -> None:
        messagebox.showinfo(title, message, parent=self.parent)

    def ask_color(self, title: str, initial: str) -> Optional[str]:
        _, hex_color = colorchooser.askcolor(color=initial, title=title, parent=self.parent)
        return hex_color


# ============================================================================
# VIEW
# ============================================================================

class ParkingView(ttk.Frame):
    """Passive view: widgets plus the methods the presenter calls"""

    def __init__(self, parent, settings: ParkingSettings, **kwargs):
        super().__init__(parent, padding="10", **kwargs)
        self.settings = settings

        self.license_plate_var = tk.StringVar()
        self.brand_var = tk.StringVar()
        self.model_var = tk.StringVar()
        self.clock_var = tk.StringVar()
        self.summary_var = tk.StringVar()

        self.on_add: Optional[Callable[[], Any]] = None
        self.on_remove: Optional[Callable[[], Any]] = None
        self.on_find: Optional[Callable[[], Any]] = None

        self._setup_ui()

    def _setup_ui(self):
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        # Header
        header = ttk.Frame(self)
        header.grid(row=0, column=0, columnspan=2, sticky=(tk.W, tk.E), pady=(0, 10))
        header.columnconfigure(0, weight=1)

        ttk.Label(
            header,
            text=self.settings.window_title,
            font=AppConfig.FONTS["title"],
            anchor=tk.CENTER
        ).grid(row=0, column=0, sticky=(tk.W, tk.E))

        self.clock_label = ttk.Label(
            header,
            textvariable=self.clock_var,
            font=AppConfig.FONTS["clock"],
            anchor=tk.E
        )
        self.clock_label.grid(row=1, column=0, sticky=(tk.W, tk.E))

        # Table
        table_frame = ttk.Frame(self)
        table_frame.grid(row=1, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))
        table_frame.rowconfigure(0, weight=1)
        table_frame.columnconfigure(0, weight=1)

        columns = tuple(key for key, _, _ in AppConfig.TABLE_COLUMNS)
        self.vehicle_tree = ttk.Treeview(table_frame, columns=columns, show='headings', height=12)
        for key, heading, width in AppConfig.TABLE_COLUMNS:
            self.vehicle_tree.heading(key, text=heading)
            self.vehicle_tree.column(key, width=width, anchor=tk.CENTER)

        scrollbar = ttk.Scrollbar(table_frame, orient=tk.VERTICAL, command=self.vehicle_tree.yview)
        self.vehicle_tree.configure(yscrollcommand=scrollbar.set)
        self.vehicle_tree.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))
        scrollbar.grid(row=0, column=1, sticky=(tk.N, tk.S))

        # Slot grid
        slot_frame = ttk.LabelFrame(self, text="Parking Slots", padding="5")
        slot_frame.grid(row=1, column=1, padx=(10, 0), sticky=(tk.N, tk.S))
        self.slot_grid = SlotGrid(slot_frame, columns=self.settings.slot_grid_columns)
        self.slot_grid.grid(row=0, column=0)

        # Form
        form = ttk.Frame(self)
        form.grid(row=2, column=0, columnspan=2, pady=10)

        fields = (
            ("License Plate: ", self.license_plate_var),
            ("Car Brand: ", self.brand_var),
            ("Car Model: ", self.model_var),
        )
        for column, (text, variable) in enumerate(fields):
            ttk.Label(form, text=text, font=AppConfig.FONTS["body"]).grid(row=0, column=column * 2, padx=(5, 2))
            ttk.Entry(form, textvariable=variable, width=15).grid(row=0, column=column * 2 + 1, padx=(0, 5))

        buttons = ttk.Frame(self)
        buttons.grid(row=3, column=0, columnspan=2)
        ttk.Button(buttons, text="Add Vehicle", command=lambda: self._fire(self.on_add)).grid(row=0, column=0, padx=5)
        ttk.Button(buttons, text="Remove Vehicle", command=lambda: self._fire(self.on_remove)).grid(row=0, column=1, padx=5)
        ttk.Button(buttons, text="Find Vehicle", command=lambda: self._fire(self.on_find)).grid(row=0, column=2, padx=5)

        # Summary
        ttk.Label(self, textvariable=self.summary_var, font=AppConfig.FONTS["body"]).grid(
            row=4, column=0, columnspan=2, pady=(10, 0))

        # Activity log
        log_frame = ttk.LabelFrame(self, text="Activity Log", padding="5")
        log_frame.grid(row=5, column=0, columnspan=2, pady=(10, 0), sticky=(tk.W, tk.E))
        log_frame.columnconfigure(0, weight=1)

        self.log_text = tk.Text(log_frame, height=5, state=tk.DISABLED, font=AppConfig.FONTS["monospace"])
        self.log_text.grid(row=0, column=0, sticky=(tk.W, tk.E))
        log_scroll = ttk.Scrollbar(log_frame, orient=tk.VERTICAL, command=self.log_text.yview)
        self.log_text.configure(yscrollcommand=log_scroll.set)
        log_scroll.grid(row=0, column=1, sticky=(tk.N, tk.S))

    @staticmethod
    def _fire(callback: Optional[Callable[[], Any]]):
        if callback is not None:
            callback()

    # ------------------------------------------------------------------
    # Presenter interface
    # ------------------------------------------------------------------

    def get_vehicle_input(self) -> Tuple[str, str, str]:
        return (
            self.license_plate_var.get(),
            self.brand_var.get(),
            self.model_var.get()
        )

    def clear_inputs(self) -> None:
        self.license_plate_var.set("")
        self.brand_var.set("")
        self.model_var.set("")

    def show_vehicles(self, rows: List[VehicleRowDTO]) -> None:
        self.vehicle_tree.delete(*self.vehicle_tree.get_children())
        for row in rows:
            self.vehicle_tree.insert("", tk.END, iid=row.license_plate, values=row.as_row())

    def show_slots(self, slots: List[SlotStateDTO]) -> None:
        self.slot_grid.show(slots)

    def show_status(self, status: LotStatusDTO) -> None:
        self.summary_var.set(f"{status.summary}  |  Occupancy: {status.occupancy_rate:.0%}")

    def show_clock(self, text: str) -> None:
        self.clock_var.set(text)


# ============================================================================
# APPLICATION
# ============================================================================

class ParkingManagementApp:
    """Builds the window and wires registry, service, view and presenter"""

    def __init__(self, settings: Optional[ParkingSettings] = None):
        self.settings = settings or ParkingSettings()
        self.logger = logging.getLogger(self.__class__.__name__)

        # Dependency injection: one registry owned by this application
        self.registry = ParkingRegistry(
            max_slots=self.settings.max_slots,
            rate_per_hour=self.settings.rate,
            fee_calculator=ParkingFeeCalculator(),
            fallback_color=self.settings.fallback_color
        )
        self.service = ParkingService(
            self.registry,
            timestamp_format=self.settings.timestamp_format,
            available_color=self.settings.available_color
        )

        self.root = tk.Tk()
        self.root.title(self.settings.window_title)
        self.root.geometry(f"{self.settings.window_width}x{self.settings.window_height}")
        self.root.configure(bg=AppConfig.COLORS["bg"])
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)
        self.root.protocol("WM_DELETE_WINDOW", self.on_closing)

        self.view = ParkingView(self.root, self.settings)
        self.view.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))

        self.log_handler = TextWidgetHandler(self.view.log_text)
        logging.getLogger().addHandler(self.log_handler)

        self.presenter = ParkingPresenter(self.service, self.view, TkDialogs(self.root))
        self.view.on_add = self.presenter.add_vehicle
        self.view.on_remove = self.presenter.remove_vehicle
        self.view.on_find = self.presenter.find_vehicle

        self.ticker = ClockTicker(
            self.root,
            self.view.show_clock,
            interval_ms=self.settings.clock_interval_ms,
            time_format=self.settings.clock_format
        )

        self.presenter.refresh()
        self.logger.info("GUI setup completed")

    def on_closing(self):
        """Stop the clock and close the window"""
        self.logger.info("Application shutting down...")
        self.ticker.stop()
        logging.getLogger().removeHandler(self.log_handler)
        self.root.destroy()

    def run(self):
        """Run the application"""
        self.logger.info("Application starting...")
        self.ticker.start()
        self.root.mainloop()
