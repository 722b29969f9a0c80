"""Resolves which slice the pointer indicates and reports changes."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from prizewheel.model.geometry_primitives import SliceRange

logger = logging.getLogger(__name__)


def resolve_index(pointer_angle: float, ranges: Sequence[SliceRange], previous_index: int = -1) -> int:
    """
    Index of the first range containing `pointer_angle`.

    Returns -1 when there are no ranges, and `previous_index` in the
    (degenerate) case that no range matches.
    """
    if not ranges:
        return -1
    for i, r in enumerate(ranges):
        if r.contains(pointer_angle):
            return i
    return previous_index


class IndexResolver:
    """
    Tracks the current index across layouts.

    `on_change` is called with the new index whenever it differs from the
    previous one, unless `suppress_notifications` is set (used while a wheel
    is being constructed).
    """

    def __init__(self, on_change: Optional[Callable[[int], None]] = None) -> None:
        self.current_index = -1
        self.on_change = on_change
        self.suppress_notifications = False

    def update(self, pointer_angle: float, ranges: Sequence[SliceRange]) -> bool:
        """Resolve the index for a new layout. Returns True if it changed."""
        index = resolve_index(pointer_angle, ranges, self.current_index)
        if index == self.current_index:
            return False

        self.current_index = index
        logger.debug(f"Current index changed to {index}")
        if not self.suppress_notifications and self.on_change is not None:
            self.on_change(index)
        return True
