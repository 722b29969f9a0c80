"""
Wheel Configuration
===================
This module defines the complete, validated configuration of one wheel.

Why is this file needed?
------------------------
1. Validation up front: A wheel is never built from half-valid input. The
   whole configuration is checked in one place and the first invalid field
   raises a `WheelInputError` naming it.
2. Defaults: A property falls back to its documented default only when it is
   absent. A property that is present but invalid is refused.
3. Updates: `replace()` revalidates the whole object, so a partial update
   either applies completely or not at all.

Classes:
    WheelConfig: Frozen dataclass of all wheel properties.
"""
from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from prizewheel.config import (
    AlignText,
    DEFAULT_BORDER_COLOR, DEFAULT_BORDER_WIDTH, DEFAULT_ITEM_BACKGROUND_COLORS,
    DEFAULT_ITEM_LABEL_ALIGN, DEFAULT_ITEM_LABEL_COLORS, DEFAULT_ITEM_LABEL_FONT,
    DEFAULT_ITEM_LABEL_RADIUS, DEFAULT_ITEM_LABEL_RADIUS_MAX, DEFAULT_ITEM_LABEL_ROTATION,
    DEFAULT_LINE_COLOR, DEFAULT_LINE_WIDTH, DEFAULT_PIXEL_RATIO, DEFAULT_POINTER_ANGLE,
    DEFAULT_RADIUS, DEFAULT_ROTATION, DEFAULT_ROTATION_RESISTANCE, DEFAULT_ROTATION_SPEED_MAX,
)
from prizewheel.model.errors import WheelInputError, is_number
from prizewheel.model.events import CurrentIndexChangeEvent, RestEvent, SpinEvent
from prizewheel.model.items import Item, coerce_items

SpinCallback = Callable[[SpinEvent], Any]
RestCallback = Callable[[RestEvent], Any]
IndexChangeCallback = Callable[[CurrentIndexChangeEvent], Any]


@dataclass(frozen=True)
class WheelConfig:
    """All properties of a wheel. Instances are always valid."""
    items: tuple[Item, ...] = ()

    # Motion
    rotation: float = DEFAULT_ROTATION
    rotation_resistance: float = DEFAULT_ROTATION_RESISTANCE
    rotation_speed_max: float = DEFAULT_ROTATION_SPEED_MAX
    pointer_angle: float = DEFAULT_POINTER_ANGLE
    is_interactive: bool = True

    # Surface
    radius: float = DEFAULT_RADIUS
    offset: tuple[float, float] = (0.0, 0.0)
    pixel_ratio: float = DEFAULT_PIXEL_RATIO
    debug: bool = False

    # Appearance (renderer only)
    border_color: str = DEFAULT_BORDER_COLOR
    border_width: float = DEFAULT_BORDER_WIDTH
    line_color: str = DEFAULT_LINE_COLOR
    line_width: float = DEFAULT_LINE_WIDTH
    item_background_colors: tuple[str, ...] = DEFAULT_ITEM_BACKGROUND_COLORS
    item_label_colors: tuple[str, ...] = DEFAULT_ITEM_LABEL_COLORS
    item_label_font: str = DEFAULT_ITEM_LABEL_FONT
    item_label_align: AlignText = DEFAULT_ITEM_LABEL_ALIGN
    item_label_radius: float = DEFAULT_ITEM_LABEL_RADIUS
    item_label_radius_max: float = DEFAULT_ITEM_LABEL_RADIUS_MAX
    item_label_rotation: float = DEFAULT_ITEM_LABEL_ROTATION

    # Notification hooks
    on_spin: Optional[SpinCallback] = field(default=None, compare=False)
    on_rest: Optional[RestCallback] = field(default=None, compare=False)
    on_current_index_change: Optional[IndexChangeCallback] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self._set("items", coerce_items(self.items))
        if not math.isfinite(sum(self.weights)):
            raise WheelInputError(f"WheelConfig.items total weight must be finite, got {self.weights}")

        for name in ("rotation", "border_width", "line_width", "radius",
                     "item_label_radius", "item_label_radius_max", "item_label_rotation"):
            self._require_number(name)

        self._require_number("rotation_resistance")
        if self.rotation_resistance >= 0:
            # A non-negative resistance would never bring a spin to rest
            raise WheelInputError(
                f"WheelConfig.rotation_resistance must be a negative number, got {self.rotation_resistance!r}"
            )

        self._require_number("rotation_speed_max")
        if self.rotation_speed_max < 0:
            raise WheelInputError(
                f"WheelConfig.rotation_speed_max must be a number >= 0, got {self.rotation_speed_max!r}"
            )

        self._require_number("pointer_angle")
        if self.pointer_angle < 0:
            raise WheelInputError(
                f"WheelConfig.pointer_angle must be a number between 0 and 360, got {self.pointer_angle!r}"
            )
        self._set("pointer_angle", float(self.pointer_angle) % 360)

        if self.radius <= 0:
            raise WheelInputError(f"WheelConfig.radius must be a positive number, got {self.radius!r}")

        self._require_number("pixel_ratio")
        if self.pixel_ratio < 0:
            raise WheelInputError(f"WheelConfig.pixel_ratio must be a number >= 0, got {self.pixel_ratio!r}")

        self._set("offset", self._coerce_offset(self.offset))

        for name in ("is_interactive", "debug"):
            if not isinstance(getattr(self, name), bool):
                raise WheelInputError(f"WheelConfig.{name} must be a boolean, got {getattr(self, name)!r}")

        for name in ("border_color", "line_color", "item_label_font"):
            if not isinstance(getattr(self, name), str):
                raise WheelInputError(f"WheelConfig.{name} must be a string, got {getattr(self, name)!r}")

        for name in ("item_background_colors", "item_label_colors"):
            colors = getattr(self, name)
            if not isinstance(colors, (list, tuple)) or not all(isinstance(c, str) for c in colors):
                raise WheelInputError(f"WheelConfig.{name} must be a list of strings, got {colors!r}")
            self._set(name, tuple(colors))

        try:
            self._set("item_label_align", AlignText(self.item_label_align))
        except ValueError:
            raise WheelInputError(
                f"WheelConfig.item_label_align must be one of {[a.value for a in AlignText]}, "
                f"got {self.item_label_align!r}"
            ) from None

        for name in ("on_spin", "on_rest", "on_current_index_change"):
            callback = getattr(self, name)
            if callback is not None and not callable(callback):
                raise WheelInputError(f"WheelConfig.{name} must be a function or None, got {callback!r}")

    @classmethod
    def from_dict(cls, props: Optional[Mapping[str, Any]] = None) -> WheelConfig:
        """
        Build a configuration from a mapping.

        Missing keys take their defaults; unknown keys are rejected so typos
        do not silently fall back to defaults.
        """
        if props is None:
            return cls()
        if not isinstance(props, Mapping):
            raise WheelInputError(f"Wheel properties must be a mapping or None, got {props!r}")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(props) - known
        if unknown:
            raise WheelInputError(f"Unknown wheel properties: {sorted(unknown)}")
        return cls(**props)

    def replace(self, **changes: Any) -> WheelConfig:
        """Return a revalidated copy with `changes` applied."""
        known = {f.name for f in dataclasses.fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise WheelInputError(f"Unknown wheel properties: {sorted(unknown)}")
        return dataclasses.replace(self, **changes)

    @property
    def weights(self) -> list[float]:
        return [item.weight for item in self.items]

    def _set(self, name: str, value: Any) -> None:
        object.__setattr__(self, name, value)

    def _require_number(self, name: str) -> None:
        value = getattr(self, name)
        if not is_number(value):
            raise WheelInputError(f"WheelConfig.{name} must be a number, got {value!r}")
        self._set(name, float(value))

    @staticmethod
    def _coerce_offset(offset: Any) -> tuple[float, float]:
        if isinstance(offset, Mapping):
            offset = (offset.get("w"), offset.get("h"))
        if (
            not isinstance(offset, (list, tuple))
            or len(offset) != 2
            or not all(is_number(v) for v in offset)
        ):
            raise WheelInputError(f"WheelConfig.offset must be a (w, h) pair of numbers, got {offset!r}")
        if offset[0] >= 1 or offset[1] >= 1:
            # The wheel shrinks by the offset fraction; 1 leaves no room at all
            raise WheelInputError(f"WheelConfig.offset values must be less than 1, got {offset!r}")
        return float(offset[0]), float(offset[1])
