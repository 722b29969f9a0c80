"""
Spin Engine
===========
Owns the wheel rotation and the two animation modes that drive it.

Why is this file needed?
------------------------
1. One owner: The rotation is a single float. Animation, dragging and
   configuration all change it through this object, so every change reaches
   the `on_rotation_change` hook.
2. Exclusive sessions: A free spin slowing down under resistance
   (`VelocityDecay`) and a timed, eased spin to a target (`TimedEase`) never
   overlap. Starting either one replaces whatever was running.
3. Pull-based timing: The engine never schedules anything. A frame scheduler
   calls `advance(now)` with a millisecond timestamp, so tests can feed
   synthetic time.

Classes:
    Idle, VelocityDecay, TimedEase: The session states.
    SpinEngine: The state machine.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import time
from typing import Callable, Optional, Union

from prizewheel.config import DEFAULT_ROTATION_RESISTANCE, DEFAULT_ROTATION_SPEED_MAX
from prizewheel.model.easing import DEFAULT_EASING, EasingFunction

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.perf_counter() * 1000.0


@dataclass(frozen=True)
class Idle:
    """No session: the wheel only moves when dragged or set directly."""


@dataclass
class VelocityDecay:
    """Free spin at `speed` deg/s, slowed by the rotation resistance every tick."""
    speed: float
    direction: int
    last_tick_time: float


@dataclass(frozen=True)
class TimedEase:
    """Spin from `start_rotation` to `end_rotation` between `start_time` and `end_time`."""
    start_rotation: float
    end_rotation: float
    start_time: float
    end_time: float
    easing: EasingFunction

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def progress(self, now: float) -> float:
        """Normalized time in [0, 1]; frames may arrive before the start time."""
        if self.duration <= 0:
            return 0.0
        t = (now - self.start_time) / self.duration
        return min(max(t, 0.0), 1.0)


SpinSession = Union[Idle, VelocityDecay, TimedEase]

IDLE = Idle()


def limit_speed(speed: float, maximum: float) -> float:
    """Clamp `speed` into [-maximum, maximum]. `maximum` is never negative."""
    return max(min(speed, maximum), -maximum)


class SpinEngine:
    """
    Rotation state plus the active spin session.

    Args:
        rotation: Initial rotation in degrees (unbounded).
        rotation_resistance: Deceleration in deg/s^2; must be negative.
        rotation_speed_max: Largest allowed |speed| in deg/s.
        clock: Returns "now" in milliseconds when a session starts.
        on_rotation_change: Called with the new rotation after every change.
        on_rest: Called once when a session completes on its own.
    """

    def __init__(
        self,
        rotation: float = 0.0,
        rotation_resistance: float = DEFAULT_ROTATION_RESISTANCE,
        rotation_speed_max: float = DEFAULT_ROTATION_SPEED_MAX,
        clock: Optional[Clock] = None,
        on_rotation_change: Optional[Callable[[float], None]] = None,
        on_rest: Optional[Callable[[], None]] = None,
    ) -> None:
        if rotation_resistance >= 0:
            raise ValueError(f"rotation_resistance must be negative, got {rotation_resistance}")
        if rotation_speed_max < 0:
            raise ValueError(f"rotation_speed_max must be >= 0, got {rotation_speed_max}")

        self._rotation = float(rotation)
        self.rotation_resistance = float(rotation_resistance)
        self.rotation_speed_max = float(rotation_speed_max)
        self.clock: Clock = clock or monotonic_ms
        self.on_rotation_change = on_rotation_change
        self.on_rest = on_rest
        self._session: SpinSession = IDLE

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def session(self) -> SpinSession:
        return self._session

    @property
    def is_active(self) -> bool:
        return not isinstance(self._session, Idle)

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def rotation_speed(self) -> float:
        if isinstance(self._session, VelocityDecay):
            return self._session.speed
        return 0.0

    def set_rotation(self, rotation: float) -> None:
        self._rotation = float(rotation)
        if self.on_rotation_change is not None:
            self.on_rotation_change(self._rotation)

    def rotate_by(self, delta: float) -> None:
        self.set_rotation(self._rotation + delta)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def stop(self) -> None:
        """Cancel any session immediately. Raises no rest notification."""
        if self.is_active:
            logger.debug(f"Stopping {type(self._session).__name__} session at rotation {self._rotation:.3f}")
        self._session = IDLE

    def begin_velocity_spin(self, initial_speed: float, now: Optional[float] = None) -> float:
        """
        Start a free spin. Positive speeds spin clockwise.

        Returns:
            The speed actually used after clamping to `rotation_speed_max`.
            A clamped speed of 0 leaves the engine idle.
        """
        self.stop()

        speed = limit_speed(float(initial_speed), self.rotation_speed_max)
        if speed == 0:
            return 0.0

        direction = 1 if speed >= 0 else -1
        tick = self.clock() if now is None else now
        self._session = VelocityDecay(speed=speed, direction=direction, last_tick_time=tick)
        logger.debug(f"Velocity spin started: speed={speed:.2f} deg/s, direction={direction}")
        return speed

    def begin_eased_spin(
        self,
        target_rotation: float,
        duration: float,
        easing: Optional[EasingFunction] = None,
        now: Optional[float] = None,
    ) -> None:
        """Animate from the current rotation to `target_rotation` over `duration` ms."""
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")

        self.stop()

        start = self.clock() if now is None else now
        self._session = TimedEase(
            start_rotation=self._rotation,
            end_rotation=float(target_rotation),
            start_time=start,
            end_time=start + duration,
            easing=easing or DEFAULT_EASING,
        )
        logger.debug(f"Eased spin started: {self._rotation:.3f} -> {target_rotation:.3f} over {duration} ms")

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------
    def advance(self, now: float) -> None:
        """Move the rotation forward to time `now` (milliseconds)."""
        match self._session:
            case VelocityDecay() as session:
                self._advance_velocity(session, now)
            case TimedEase() as session:
                self._advance_ease(session, now)
            case _:
                return

    def _advance_velocity(self, session: VelocityDecay, now: float) -> None:
        elapsed = now - session.last_tick_time
        if elapsed <= 0:
            return

        seconds = elapsed / 1000
        step = math.fmod(session.speed * seconds, 360)
        new_speed = session.speed + self.rotation_resistance * seconds * session.direction

        # Stop at zero instead of spinning back the other way next frame
        if (session.direction == 1 and new_speed < 0) or (session.direction == -1 and new_speed >= 0):
            new_speed = 0.0

        session.speed = new_speed
        session.last_tick_time = now

        if new_speed == 0:
            self._session = IDLE
            self.rotate_by(step)
            self._finish()
        else:
            self.rotate_by(step)

    def _advance_ease(self, session: TimedEase, now: float) -> None:
        if now >= session.end_time:
            self._session = IDLE
            self.set_rotation(session.end_rotation)
            self._finish()
            return

        t = session.progress(now)
        distance = session.end_rotation - session.start_rotation
        self.set_rotation(session.start_rotation + distance * session.easing(t))

    def _finish(self) -> None:
        logger.debug(f"Spin came to rest at rotation {self._rotation:.3f}")
        if self.on_rest is not None:
            self.on_rest()
