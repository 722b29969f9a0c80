"""
Wheel (Aggregate)
=================
This module defines the object the rest of the application talks to.

Why is this file needed?
------------------------
1. Ownership: It owns the configuration, the items, the spin engine, the
   drag controller and the index resolver of one wheel. Nothing is shared
   between wheels.
2. Recomputation: Items are passive data. Whenever the rotation, the items
   or the pointer change, the wheel re-lays out the slices and re-resolves
   the current index itself.
3. Public API: `spin`, `spin_to`, `spin_to_item`, `stop`, `advance` and the
   drag entry points, plus the `on_spin` / `on_rest` /
   `on_current_index_change` notifications.

Classes:
    Wheel: The aggregate.
"""
from __future__ import annotations

import copy
import logging
from numbers import Integral
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np

from prizewheel.config import BASE_CANVAS_SIZE, DEBUG_DRAG_HISTORY_MAX
from prizewheel.model.angles import rotation_for_target
from prizewheel.model.drag import DragController, DragEvent
from prizewheel.model.easing import EasingFunction
from prizewheel.model.errors import ItemNotFoundError, WheelInputError, is_number, require_number
from prizewheel.model.events import CurrentIndexChangeEvent, RestEvent, SpinEvent, SpinMethod
from prizewheel.model.geometry_primitives import Point, SliceRange
from prizewheel.model.index_resolver import IndexResolver
from prizewheel.model.items import Item
from prizewheel.model.layout import compute_slice_ranges
from prizewheel.model.spin import Clock, SpinEngine, monotonic_ms
from prizewheel.model.wheel_config import WheelConfig

logger = logging.getLogger(__name__)

PointLike = Union[Point, Sequence[float]]


def _as_point(point: PointLike) -> Point:
    if isinstance(point, Point):
        return point
    if isinstance(point, (list, tuple)) and len(point) == 2 and all(is_number(v) for v in point):
        return Point(float(point[0]), float(point[1]))
    raise WheelInputError(f"point must be a Point or an (x, y) pair, got {point!r}")


class Wheel:
    """
    A weighted prize wheel.

    Args:
        config: Complete, validated configuration. Defaults to an empty wheel.
        clock: Millisecond clock used to timestamp spins and drags.
        rng: NumPy random generator used for random landing angles.
    """

    def __init__(
        self,
        config: Optional[WheelConfig] = None,
        *,
        clock: Optional[Clock] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if config is not None and not isinstance(config, WheelConfig):
            raise WheelInputError(f"config must be a WheelConfig or None, got {config!r}")

        self._config = config or WheelConfig()
        self.clock: Clock = clock or monotonic_ms
        self.rng = rng if rng is not None else np.random.default_rng()

        # The very first layout must not notify anyone
        self._resolver = IndexResolver(on_change=self._raise_current_index_change)
        self._resolver.suppress_notifications = True

        self._engine = SpinEngine(
            rotation=self._config.rotation,
            rotation_resistance=self._config.rotation_resistance,
            rotation_speed_max=self._config.rotation_speed_max,
            clock=self.clock,
            on_rotation_change=self._on_rotation_change,
            on_rest=self._raise_rest,
        )
        self._drag = DragController(
            self._engine,
            clock=self.clock,
            max_events=DEBUG_DRAG_HISTORY_MAX if self._config.debug else None,
        )

        self._surface_size: tuple[float, float] = (BASE_CANVAS_SIZE, BASE_CANVAS_SIZE)
        self._size = BASE_CANVAS_SIZE
        self._center = Point(BASE_CANVAS_SIZE / 2, BASE_CANVAS_SIZE / 2)
        self._actual_radius = BASE_CANVAS_SIZE / 2 * self._config.radius
        self.resize(*self._surface_size)

        self.refresh_current_index()
        self._resolver.suppress_notifications = False
        logger.debug(f"Wheel created with {len(self.items)} items")

    @classmethod
    def from_dict(cls, props: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Wheel:
        """Build a wheel from a property mapping (see `WheelConfig.from_dict`)."""
        return cls(WheelConfig.from_dict(props), **kwargs)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def config(self) -> WheelConfig:
        """
        The configuration, with `rotation` reflecting the live rotation.

        The stored config is already valid, so the copy skips revalidation.
        """
        live = copy.copy(self._config)
        object.__setattr__(live, "rotation", self.rotation)
        return live

    def configure(self, **changes: Any) -> None:
        """
        Change one or more properties.

        The whole configuration is revalidated first; on error nothing changes.
        """
        new_config = self._config.replace(**changes)
        self._config = new_config

        self._engine.rotation_resistance = new_config.rotation_resistance
        self._engine.rotation_speed_max = new_config.rotation_speed_max

        if "debug" in changes:
            self._drag.history.max_events = DEBUG_DRAG_HISTORY_MAX if new_config.debug else None
        if "radius" in changes or "offset" in changes:
            self.resize(*self._surface_size)
        if "pixel_ratio" in changes:
            self._drag.history.clear()

        if "rotation" in changes:
            # Refreshes the current index through the rotation hook
            self._engine.set_rotation(new_config.rotation)
        else:
            self.refresh_current_index()

    @property
    def items(self) -> tuple[Item, ...]:
        return self._config.items

    @items.setter
    def items(self, value: Sequence[Union[Item, Mapping[str, Any]]]) -> None:
        self.configure(items=value)

    @property
    def rotation(self) -> float:
        return self._engine.rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._engine.set_rotation(require_number("rotation", value))

    @property
    def rotation_speed(self) -> float:
        return self._engine.rotation_speed

    @property
    def pointer_angle(self) -> float:
        return self._config.pointer_angle

    @property
    def is_interactive(self) -> bool:
        return self._config.is_interactive

    @property
    def is_animating(self) -> bool:
        """True while a spin session is running and frames are needed."""
        return self._engine.is_active

    @property
    def is_dragging(self) -> bool:
        return self._drag.is_dragging

    @property
    def drag_events(self) -> tuple[DragEvent, ...]:
        return tuple(self._drag.history)

    @property
    def engine(self) -> SpinEngine:
        return self._engine

    # ------------------------------------------------------------------
    # Surface geometry
    # ------------------------------------------------------------------
    @property
    def center(self) -> Point:
        return self._center

    @property
    def actual_radius(self) -> float:
        return self._actual_radius

    @property
    def size(self) -> float:
        return self._size

    def resize(self, width: float, height: float) -> None:
        """
        Fit the wheel inside a drawing surface of `width` x `height` pixels.

        Recomputes the center (shifted by `offset`) and the actual radius.
        """
        w = require_number("width", width)
        h = require_number("height", height)
        if w <= 0 or h <= 0:
            raise WheelInputError(f"Surface size must be positive, got {w} x {h}")

        offset_w, offset_h = self._config.offset
        min_size = min(w, h)
        wheel_w = min_size - min_size * offset_w
        wheel_h = min_size - min_size * offset_h
        scale = min(w / wheel_w, h / wheel_h)
        self._surface_size = (w, h)
        self._size = max(wheel_w * scale, wheel_h * scale)
        self._center = Point(w / 2 + w * offset_w, h / 2 + h * offset_h)
        self._actual_radius = (self._size / 2) * self._config.radius
        self._drag.center = self._center

    def get_scaled_number(self, n: float) -> float:
        """Scale a size given for the base canvas to the current surface."""
        return (n / BASE_CANVAS_SIZE) * self._size

    def get_actual_pixel_ratio(self, device_pixel_ratio: float = 1.0) -> float:
        return self._config.pixel_ratio if self._config.pixel_ratio != 0 else device_pixel_ratio

    def hit_test(self, point: PointLike) -> bool:
        """True if `point` (surface coordinates) lies on the wheel."""
        return _as_point(point).is_in_circle(self._center, self._actual_radius)

    def get_angle_from_center(self, point: PointLike) -> float:
        return _as_point(point).angle_from(self._center)

    # ------------------------------------------------------------------
    # Slices & items
    # ------------------------------------------------------------------
    def get_item_angles(self, rotation: float = 0.0) -> list[SliceRange]:
        """Slice ranges of all items, laid out from `rotation`."""
        return compute_slice_ranges(self._config.weights, rotation)

    def get_current_index(self) -> int:
        return self._resolver.current_index

    @property
    def current_item(self) -> Optional[Item]:
        index = self.get_current_index()
        return self.items[index] if index >= 0 else None

    def refresh_current_index(self) -> bool:
        """Re-resolve the current index for the live rotation. Returns True if it changed."""
        return self._resolver.update(self.pointer_angle, self.get_item_angles(self.rotation))

    def get_item_index(self, item: Item) -> int:
        """Index of this exact item object in the wheel."""
        for i, candidate in enumerate(self.items):
            if candidate is item:
                return i
        raise ItemNotFoundError(f"Item {item!r} not found in wheel")

    def get_start_angle(self, index: int) -> float:
        return self._item_range(index).start

    def get_end_angle(self, index: int) -> float:
        return self._item_range(index).end

    def get_center_angle(self, index: int) -> float:
        return self._item_range(index).center

    def get_random_angle(self, index: int) -> float:
        """A uniformly random angle within the item's (unrotated) slice."""
        r = self._item_range(index)
        return float(self.rng.uniform(r.start, r.end))

    def _item_range(self, index: int) -> SliceRange:
        if isinstance(index, bool) or not isinstance(index, Integral):
            raise WheelInputError(f"item index must be an integer, got {index!r}")
        if not 0 <= index < len(self.items):
            raise ItemNotFoundError(f"Item index {index} out of range for {len(self.items)} items")
        return self.get_item_angles()[index]

    # ------------------------------------------------------------------
    # Spinning
    # ------------------------------------------------------------------
    def spin(self, rotation_speed: float = 0.0) -> None:
        """Spin freely at `rotation_speed` deg/s; negative spins anti-clockwise."""
        speed = require_number("rotation_speed", rotation_speed)
        self._drag.history.clear()
        self._begin_spin(speed, SpinMethod.SPIN)

    def spin_to(self, rotation: float = 0.0, duration: float = 0.0,
                easing: Optional[EasingFunction] = None) -> None:
        """Animate to `rotation` degrees over `duration` ms."""
        target = require_number("rotation", rotation)
        duration = self._require_duration(duration)
        self._require_easing(easing)

        self._drag.history.clear()
        self._engine.begin_eased_spin(target, duration, easing)
        self._raise_spin(SpinEvent(method=SpinMethod.SPIN_TO, target_rotation=target, duration=duration))

    def spin_to_item(
        self,
        item_index: int,
        duration: float = 0.0,
        spin_to_center: bool = True,
        revolutions: float = 1,
        direction: int = 1,
        easing: Optional[EasingFunction] = None,
    ) -> None:
        """
        Animate so that the item at `item_index` ends under the pointer.

        Args:
            item_index: Index of the target item.
            duration: Animation length in ms.
            spin_to_center: Land on the slice center, or on a random angle within it.
            revolutions: Full turns to add before landing.
            direction: 1 clockwise, -1 anti-clockwise.
            easing: Easing function; sinusoidal ease-out by default.
        """
        self._item_range(item_index)
        duration = self._require_duration(duration)
        revolutions = require_number("revolutions", revolutions)
        if direction not in (1, -1) or isinstance(direction, bool):
            raise WheelInputError(f"direction must be 1 or -1, got {direction!r}")
        if not isinstance(spin_to_center, bool):
            raise WheelInputError(f"spin_to_center must be a boolean, got {spin_to_center!r}")
        self._require_easing(easing)

        self._engine.stop()
        self._drag.history.clear()

        if spin_to_center:
            item_angle = self.get_center_angle(item_index)
        else:
            item_angle = self.get_random_angle(item_index)

        new_rotation = rotation_for_target(self.rotation, item_angle - self.pointer_angle, direction)
        new_rotation += revolutions * 360 * direction

        self._engine.begin_eased_spin(new_rotation, duration, easing)
        self._raise_spin(SpinEvent(
            method=SpinMethod.SPIN_TO_ITEM,
            target_item_index=item_index,
            target_rotation=new_rotation,
            duration=duration,
        ))

    def stop(self) -> None:
        """Immediately stop any spin, whichever way it was started."""
        self._engine.stop()

    def advance(self, now: float) -> None:
        """Per-frame update. `now` is a millisecond timestamp from the scheduler's clock."""
        if not is_number(now):
            logger.debug(f"Ignoring frame with invalid timestamp {now!r}")
            return
        self._engine.advance(float(now))

    def _begin_spin(self, speed: float, method: SpinMethod) -> float:
        actual = self._engine.begin_velocity_spin(speed)
        if actual != 0:
            self._raise_spin(SpinEvent(
                method=method,
                rotation_speed=actual,
                rotation_resistance=self._engine.rotation_resistance,
            ))
        return actual

    @staticmethod
    def _require_duration(duration: Any) -> float:
        value = require_number("duration", duration)
        if value < 0:
            raise WheelInputError(f"duration must be >= 0, got {duration!r}")
        return value

    @staticmethod
    def _require_easing(easing: Any) -> None:
        if easing is not None and not callable(easing):
            raise WheelInputError(f"easing must be a function or None, got {easing!r}")

    # ------------------------------------------------------------------
    # Dragging
    # ------------------------------------------------------------------
    def drag_start(self, point: PointLike) -> bool:
        """Grab the wheel. Returns False (and does nothing) if it is not interactive."""
        if not self.is_interactive:
            return False
        self._drag.drag_start(_as_point(point))
        return True

    def drag_move(self, point: PointLike) -> float:
        return self._drag.drag_move(_as_point(point))

    def drag_end(self) -> float:
        """Release the wheel; recent motion turns into a spin. Returns its speed."""
        speed = self._drag.drag_end()
        if speed != 0:
            self._raise_spin(SpinEvent(
                method=SpinMethod.INTERACT,
                rotation_speed=speed,
                rotation_resistance=self._engine.rotation_resistance,
            ))
        return speed

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def _on_rotation_change(self, rotation: float) -> None:
        self.refresh_current_index()

    def _raise_spin(self, event: SpinEvent) -> None:
        logger.info(f"Spin started ({event.method})")
        if self._config.on_spin is not None:
            self._config.on_spin(event)

    def _raise_rest(self) -> None:
        event = RestEvent(current_index=self.get_current_index(), rotation=self.rotation)
        logger.info(f"Wheel at rest on index {event.current_index} (rotation {event.rotation:.3f})")
        if self._config.on_rest is not None:
            self._config.on_rest(event)

    def _raise_current_index_change(self, index: int) -> None:
        if self._config.on_current_index_change is not None:
            self._config.on_current_index_change(CurrentIndexChangeEvent(current_index=index))
