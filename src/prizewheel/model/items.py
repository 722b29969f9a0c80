"""Wheel items (one per slice)."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from prizewheel.config import DEFAULT_ITEM_LABEL, DEFAULT_ITEM_WEIGHT
from prizewheel.model.errors import WheelInputError, is_number


@dataclass(frozen=True)
class Item:
    """
    Passive description of one slice.

    Only `weight` matters to the geometry; the rest is carried through for
    the renderer and for whoever reads the result (`value`).
    """
    label: str = DEFAULT_ITEM_LABEL
    value: Any = None
    weight: float = DEFAULT_ITEM_WEIGHT
    background_color: Optional[str] = None
    label_color: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.label, str):
            raise WheelInputError(f"Item.label must be a string, got {self.label!r}")
        if not is_number(self.weight) or self.weight <= 0:
            raise WheelInputError(f"Item.weight must be a positive number, got {self.weight!r}")
        for name in ("background_color", "label_color"):
            color = getattr(self, name)
            if color is not None and not isinstance(color, str):
                raise WheelInputError(f"Item.{name} must be a string or None, got {color!r}")
        # Store ints as floats so layouts never mix types
        object.__setattr__(self, "weight", float(self.weight))

    @classmethod
    def from_dict(cls, props: Mapping[str, Any]) -> Item:
        """
        Build an item from a mapping. Missing keys take their defaults,
        unknown keys are rejected.
        """
        if not isinstance(props, Mapping):
            raise WheelInputError(f"Item properties must be a mapping, got {props!r}")
        known = {f.name for f in fields(cls)}
        unknown = set(props) - known
        if unknown:
            raise WheelInputError(f"Unknown item properties: {sorted(unknown)}")
        return cls(**props)


def coerce_items(items: Any) -> tuple[Item, ...]:
    """Accept a list of `Item`s or mappings and return validated items."""
    if not isinstance(items, (list, tuple)):
        raise WheelInputError(f"items must be a list of Items, got {items!r}")
    result = []
    for item in items:
        if isinstance(item, Item):
            result.append(item)
        else:
            result.append(Item.from_dict(item))
    return tuple(result)
