"""
Configuration & Global Constants
================================
This module serves as the central registry for the wheel's global constants
and documented defaults.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (capture windows, speed limits,
   drawing offsets) from being scattered throughout the model and the UI.
2. Defaults: `WheelConfig` and `Item` fall back to these values when a
   property is absent from the input.

Exports:
    ARC_ADJUST (float): Offset that turns a north-zero angle into a drawing-surface angle.
    BASE_CANVAS_SIZE (float): Reference surface size used to scale widths.
    DRAG_CAPTURE_PERIOD_MS (float): Window of drag motion used for the release velocity.
"""
from enum import StrEnum


class AlignText(StrEnum):
    """Horizontal alignment of item labels."""
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


# Drawing surfaces start arcs at 3 o'clock, the wheel measures from north.
ARC_ADJUST: float = -90.0

BASE_CANVAS_SIZE: float = 500.0

DRAG_CAPTURE_PERIOD_MS: float = 250.0
DEBUG_DRAG_HISTORY_MAX: int = 40

# Decimal places kept before wrapping angles into [0, 360)
FLOAT_PRECISION: int = 9

# Wheel defaults
DEFAULT_ROTATION: float = 0.0
DEFAULT_ROTATION_RESISTANCE: float = -35.0  # deg/s^2
DEFAULT_ROTATION_SPEED_MAX: float = 300.0  # deg/s
DEFAULT_POINTER_ANGLE: float = 0.0
DEFAULT_RADIUS: float = 0.95
DEFAULT_PIXEL_RATIO: float = 0.0  # 0 means "use the device ratio"

DEFAULT_BORDER_COLOR: str = "#000"
DEFAULT_BORDER_WIDTH: float = 1.0
DEFAULT_LINE_COLOR: str = "#000"
DEFAULT_LINE_WIDTH: float = 1.0
DEFAULT_ITEM_BACKGROUND_COLORS: tuple[str, ...] = ("#fff",)
DEFAULT_ITEM_LABEL_COLORS: tuple[str, ...] = ("#000",)
DEFAULT_ITEM_LABEL_FONT: str = "sans-serif"
DEFAULT_ITEM_LABEL_ALIGN: AlignText = AlignText.RIGHT
DEFAULT_ITEM_LABEL_RADIUS: float = 0.85
DEFAULT_ITEM_LABEL_RADIUS_MAX: float = 0.2
DEFAULT_ITEM_LABEL_ROTATION: float = 0.0

# Item defaults
DEFAULT_ITEM_WEIGHT: float = 1.0
DEFAULT_ITEM_LABEL: str = ""

# Debug drawing
DEBUG_POINTER_LINE_COLOR: str = "#ff00ff"
DEBUG_DRAG_EVENT_HUE: int = 200
