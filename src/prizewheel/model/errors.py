"""Error taxonomy of the wheel model."""
from __future__ import annotations

import math
from numbers import Real
from typing import Any


class WheelError(Exception):
    """Base class for every error raised by the wheel model."""


class WheelInputError(WheelError, ValueError):
    """A property or argument was given a value of the wrong type or range."""


class ItemNotFoundError(WheelError, IndexError):
    """An item or item index is not part of the wheel."""


def is_number(value: Any) -> bool:
    """True for real, finite numbers. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integers too large for a float
        return False


def require_number(name: str, value: Any) -> float:
    if not is_number(value):
        raise WheelInputError(f"{name} must be a number, got {value!r}")
    return float(value)
