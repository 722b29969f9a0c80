from __future__ import annotations

import math
import os

import pytest

from prizewheel.model.geometry_primitives import Point


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def tick(self, ms: float) -> float:
        self.now += ms
        return self.now


def point_at(angle: float, center: Point = Point(100.0, 100.0), radius: float = 50.0) -> Point:
    """Surface point at `angle` degrees (0 north, clockwise) around `center`."""
    rad = math.radians(angle)
    return Point(center.x + radius * math.sin(rad), center.y - radius * math.cos(rad))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000.0)


@pytest.fixture(scope="session")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
