from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np
from PySide6.QtCore import QObject, Signal

from prizewheel.model.events import CurrentIndexChangeEvent, RestEvent, SpinEvent
from prizewheel.model.items import Item
from prizewheel.model.spin import Clock
from prizewheel.model.wheel import Wheel
from prizewheel.model.wheel_config import WheelConfig

logger = logging.getLogger(__name__)


class WheelStore(QObject):
    """Owns the wheel and re-emits its notifications as Qt signals for the UI."""
    spin_started = Signal(object)
    rested = Signal(object)
    current_index_changed = Signal(object)
    items_changed = Signal(object)

    def __init__(
        self,
        config: Optional[WheelConfig] = None,
        clock: Optional[Clock] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__()
        config = config or WheelConfig()

        # Hooks given by the caller still run, before the signal goes out
        self._user_hooks = (config.on_spin, config.on_rest, config.on_current_index_change)
        config = config.replace(
            on_spin=self._on_spin,
            on_rest=self._on_rest,
            on_current_index_change=self._on_current_index_change,
        )
        self.wheel = Wheel(config, clock=clock, rng=rng)

    def set_items(self, items: Sequence[Union[Item, Mapping[str, Any]]]) -> None:
        self.wheel.items = items
        self.items_changed.emit(self.wheel.items)
        logger.info(f"Wheel items replaced ({len(self.wheel.items)} items)")

    def _on_spin(self, event: SpinEvent) -> None:
        if self._user_hooks[0] is not None:
            self._user_hooks[0](event)
        self.spin_started.emit(event)

    def _on_rest(self, event: RestEvent) -> None:
        if self._user_hooks[1] is not None:
            self._user_hooks[1](event)
        self.rested.emit(event)

    def _on_current_index_change(self, event: CurrentIndexChangeEvent) -> None:
        if self._user_hooks[2] is not None:
            self._user_hooks[2](event)
        self.current_index_changed.emit(event)
