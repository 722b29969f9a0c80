"""Notification payloads handed to the `on_spin`, `on_rest` and `on_current_index_change` hooks."""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Optional


class SpinMethod(StrEnum):
    """How a spin session was started."""
    SPIN = "spin"
    SPIN_TO = "spinto"
    SPIN_TO_ITEM = "spintoitem"
    INTERACT = "interact"


@dataclass(frozen=True)
class SpinEvent:
    type: ClassVar[str] = "spin"

    method: SpinMethod
    rotation_speed: Optional[float] = None
    rotation_resistance: Optional[float] = None
    target_rotation: Optional[float] = None
    target_item_index: Optional[int] = None
    duration: Optional[float] = None


@dataclass(frozen=True)
class RestEvent:
    type: ClassVar[str] = "rest"

    current_index: int
    rotation: float


@dataclass(frozen=True)
class CurrentIndexChangeEvent:
    type: ClassVar[str] = "currentIndexChange"

    current_index: int
