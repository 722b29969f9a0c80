"""
Angle Arithmetic
================
Pure helpers for angles measured in degrees, clockwise, with 0° at north.

Why is this file needed?
------------------------
1. Wrap-around: Rotations are unbounded, but slice tests and pointer
   positions live in [0, 360). Every conversion goes through `normalize`.
2. Drift: Repeated float additions push sums like 359.99999999999994 or
   360.00000000000006 around. Rounding to a fixed precision before the
   modulo keeps such values from landing on the wrong side of 0°.
"""
from __future__ import annotations

import math

from prizewheel.config import FLOAT_PRECISION


def deg2rad(degrees: float) -> float:
    return degrees * math.pi / 180


def fix_float(f: float, precision: int = FLOAT_PRECISION) -> float:
    """Round `f` to `precision` decimal places."""
    return round(f, precision)


def normalize(angle: float) -> float:
    """
    Reduce an angle into [0, 360).

    Args:
        angle: Any angle in degrees (may be negative or exceed a full turn).

    Returns:
        The equivalent angle in [0, 360).
    """
    result = fix_float(angle) % 360
    if result >= 360:
        result = 0.0
    # Avoid handing out -0.0
    return result + 0.0


def add_angle(a: float, b: float) -> float:
    """Sum of two angles, normalized into [0, 360)."""
    return normalize(a + b)


def diff_angle(a: float, b: float) -> float:
    """
    Shortest signed difference from `a` to `b`, in (-180, 180].

    Shifting `b` to 180° turns the wrap-around problem into a plain
    subtraction, so `add_angle(a, diff_angle(a, b)) == normalize(b)`.
    """
    offset_from_180 = 180 - b
    a_with_offset = add_angle(a, offset_from_180)
    return 180 - a_with_offset


def is_between(angle: float, start: float, end: float) -> bool:
    """
    Half-open membership test [start, end) on a circle.

    When `start < end` the arc is a normal interval, otherwise it wraps
    through 0°. All three angles are expected in [0, 360).
    """
    if start < end:
        return start <= angle < end
    return start <= angle or angle < end


def rotation_for_target(current_rotation: float, target_angle: float, direction: int = 1) -> float:
    """
    Calculate the rotation that brings the relative angle `target_angle` to 0°.

    Args:
        current_rotation: Current (unbounded) rotation of the wheel.
        target_angle: Angle relative to the unrotated wheel that should end up at 0°.
        direction: 1 to get there clockwise, -1 anti-clockwise.

    Returns:
        The new rotation, i.e. `current_rotation` plus less than one turn in `direction`.
    """
    if direction not in (1, -1):
        raise ValueError(f"direction must be 1 or -1, got {direction!r}")

    angle = ((current_rotation % 360) + target_angle) % 360

    # Float sums occasionally come out a hair above 360 (or below 0)
    angle = fix_float(angle)

    if direction == 1:
        delta = (360 - angle) % 360
    else:
        delta = -((360 + angle) % 360)

    return current_rotation + delta
