"""
Slice Layout
============
Partitions the wheel into weighted angular slices.

Why is this file needed?
------------------------
Every rotation change re-lays out the slices to find out which one the
pointer indicates. The layout must cover exactly one turn: adjacent slices
share their boundary value and the last slice is closed onto the first one
plus 360°, so no pointer angle can fall into a float-sized gap.
"""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from prizewheel.model.geometry_primitives import SliceRange

logger = logging.getLogger(__name__)


def compute_slice_ranges(weights: Sequence[float], base_rotation: float = 0.0) -> list[SliceRange]:
    """
    Convert item weights into ordered, contiguous angle ranges.

    Args:
        weights: Positive weight per item, in item order.
        base_rotation: Angle at which the first slice starts.

    Returns:
        One SliceRange per weight. The last range ends exactly 360° after the
        first one starts. Empty input gives an empty list.

    Raises:
        ValueError: If any weight is not positive.
    """
    if len(weights) == 0:
        return []

    w = np.asarray(weights, dtype=np.float64)
    if np.any(~np.isfinite(w)) or np.any(w <= 0.0):
        raise ValueError(f"Slice weights must be positive numbers, got {list(weights)}")

    total_weight = float(w.sum())
    extents = w * (360.0 / total_weight)

    # n + 1 shared boundaries: slice i spans [boundaries[i], boundaries[i + 1])
    boundaries = np.empty(len(w) + 1, dtype=np.float64)
    boundaries[0] = base_rotation
    boundaries[1:] = base_rotation + np.cumsum(extents)

    if len(w) > 1:
        boundaries[-1] = boundaries[0] + 360.0

    return [
        SliceRange(start=float(start), end=float(end))
        for start, end in zip(boundaries[:-1], boundaries[1:])
    ]


def slice_centers(ranges: Sequence[SliceRange]) -> list[float]:
    """Center angle of each range, in the same order."""
    return [r.center for r in ranges]
