"""Easing functions mapping normalized time [0, 1] to normalized progress [0, 1]."""
from __future__ import annotations

import math
from typing import Callable

EasingFunction = Callable[[float], float]


def ease_sin_out(t: float) -> float:
    """Sinusoidal ease-out: fast start, gentle landing."""
    return math.sin(t * math.pi / 2)


def ease_out_cubic(t: float) -> float:
    """Easing function for smooth deceleration."""
    return 1 - (1 - t) ** 3


def linear(t: float) -> float:
    return t


DEFAULT_EASING: EasingFunction = ease_sin_out
