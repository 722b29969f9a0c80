"""
Drag Interaction
================
Turns pointer positions into wheel rotation and, on release, into a spin.

Why is this file needed?
------------------------
1. Direct tracking: While dragging, the wheel follows the pointer 1:1. Each
   move rotates the wheel by the angle swept around the center since the
   previous move, with no animation in between.
2. Throwing: On release, the motion of the last capture window (250 ms) is
   extrapolated into an angular velocity and handed to the spin engine.
   Older motion is discarded by timestamp, so a slow drag followed by a
   pause releases without spinning.

Classes:
    DragEvent: One recorded pointer position.
    DragHistory: Newest-first list of DragEvents.
    DragController: The start/move/end state machine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterator, Optional

from prizewheel.config import DRAG_CAPTURE_PERIOD_MS
from prizewheel.model.angles import diff_angle
from prizewheel.model.geometry_primitives import Point
from prizewheel.model.spin import Clock, SpinEngine, monotonic_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragEvent:
    distance: float  # degrees swept since the previous event
    point: Point
    now: float  # ms


@dataclass
class DragHistory:
    """
    Recorded drag events, newest first.

    `max_events` only bounds memory for debug drawing; the release velocity
    never depends on it because stale events are excluded by time.
    """
    max_events: Optional[int] = None
    events: list[DragEvent] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[DragEvent]:
        return iter(self.events)

    @property
    def latest(self) -> Optional[DragEvent]:
        return self.events[0] if self.events else None

    def reset(self, event: DragEvent) -> None:
        self.events = [event]

    def clear(self) -> None:
        self.events = []

    def push(self, event: DragEvent) -> None:
        self.events.insert(0, event)
        if self.max_events is not None and len(self.events) > self.max_events:
            self.events.pop()

    def recent_distance(self, now: float, capture_period: float) -> float:
        """
        Sum the distance of events within `capture_period` of `now`.

        The history is truncated at the first event that is too old.
        """
        distance = 0.0
        for i, event in enumerate(self.events):
            if now - event.now > capture_period:
                del self.events[i:]
                break
            distance += event.distance
        return distance


class DragController:
    """
    Converts pointer positions (surface coordinates) into rotation.

    Args:
        engine: The spin engine whose rotation is dragged.
        center: Center of the wheel on the surface.
        clock: Millisecond clock used to timestamp events.
        capture_period: Window of motion (ms) used for the release velocity.
        max_events: Optional cap on the stored history (debug drawing only).
    """

    def __init__(
        self,
        engine: SpinEngine,
        center: Point = Point(0.0, 0.0),
        clock: Optional[Clock] = None,
        capture_period: float = DRAG_CAPTURE_PERIOD_MS,
        max_events: Optional[int] = None,
    ) -> None:
        if capture_period <= 0:
            raise ValueError(f"capture_period must be positive, got {capture_period}")
        self.engine = engine
        self.center = center
        self.clock: Clock = clock or monotonic_ms
        self.capture_period = float(capture_period)
        self.history = DragHistory(max_events=max_events)
        self.is_dragging = False

    def angle_of(self, point: Point) -> float:
        return point.angle_from(self.center)

    def drag_start(self, point: Point) -> None:
        """Grab the wheel at `point`, interrupting any spin."""
        self.engine.stop()
        self.is_dragging = True
        self.history.reset(DragEvent(distance=0.0, point=point, now=self.clock()))

    def drag_move(self, point: Point) -> float:
        """
        Rotate the wheel by the angle swept from the previous point to `point`.

        Returns:
            The applied rotation delta in degrees (0.0 when not dragging).
        """
        last = self.history.latest
        if not self.is_dragging or last is None:
            logger.debug("Ignoring drag move outside of a drag")
            return 0.0

        delta = diff_angle(self.angle_of(last.point), self.angle_of(point))
        self.history.push(DragEvent(distance=delta, point=point, now=self.clock()))
        self.engine.rotate_by(delta)
        return delta

    def drag_end(self) -> float:
        """
        Release the wheel.

        Returns:
            The speed (deg/s) of the spin started from the recent motion, or
            0.0 when the wheel was released without recent motion.
        """
        if not self.is_dragging:
            return 0.0
        self.is_dragging = False
        now = self.clock()

        distance = self.history.recent_distance(now, self.capture_period)
        if distance == 0:
            logger.debug("Drag released without recent motion")
            return 0.0

        speed = distance * (1000 / self.capture_period)
        logger.debug(f"Drag released: {distance:.2f} deg in the last {self.capture_period:.0f} ms")
        return self.engine.begin_velocity_spin(speed, now=now)
