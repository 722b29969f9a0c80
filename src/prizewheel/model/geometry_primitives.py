"""
Geometric Primitives for the wheel surface.
"""
from __future__ import annotations
from dataclasses import dataclass
import math

from prizewheel.model.angles import is_between, normalize


@dataclass(frozen=True)
class Point:
    """A point on the drawing surface (x right, y down)."""
    x: float
    y: float

    def angle_from(self, origin: Point) -> float:
        """
        Angle of this point seen from `origin`, in degrees.

        0° is north (towards smaller y) and angles grow clockwise, matching
        the way slices are laid out.
        """
        theta = math.degrees(math.atan2(self.y - origin.y, self.x - origin.x))
        if theta < 0:
            theta += 360
        return (theta + 90) % 360

    def is_in_circle(self, center: Point, radius: float) -> bool:
        distance_squared = (self.x - center.x) ** 2 + (self.y - center.y) ** 2
        return distance_squared <= radius ** 2


@dataclass(frozen=True)
class SliceRange:
    """
    Angular extent [start, end) of one slice, in degrees.

    Values are unbounded (they carry the wheel rotation); use `contains` for
    membership tests on the circle.
    """
    start: float
    end: float

    @property
    def extent(self) -> float:
        return self.end - self.start

    @property
    def center(self) -> float:
        return self.start + self.extent / 2

    def contains(self, angle: float) -> bool:
        return is_between(normalize(angle), normalize(self.start), normalize(self.end))
