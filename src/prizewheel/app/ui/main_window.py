from __future__ import annotations

import logging

import numpy as np
from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QMainWindow, QPushButton, QVBoxLayout, QWidget
)

from prizewheel.app.state import WheelStore
from prizewheel.app.ui.wheel_widget import WheelWidget
from prizewheel.model.events import CurrentIndexChangeEvent, RestEvent

logger = logging.getLogger(__name__)

SPIN_TO_ITEM_DURATION_MS = 4000.0
SPIN_TO_ITEM_REVOLUTIONS = 3


class MainWindow(QMainWindow):
    """Wheel view with a few buttons to spin it programmatically."""

    def __init__(self, store: WheelStore, rng: np.random.Generator | None = None) -> None:
        super().__init__()
        self.store = store
        self.rng = rng if rng is not None else np.random.default_rng()
        self.setWindowTitle("Prize Wheel")
        self.resize(640, 720)

        self.wheel_widget = WheelWidget(store)

        self.current_label = QLabel()
        self.btn_spin = QPushButton("Spin")
        self.btn_spin_to_item = QPushButton("Spin to random item")
        self.btn_stop = QPushButton("Stop")

        self.btn_spin.clicked.connect(self.on_spin_clicked)
        self.btn_spin_to_item.clicked.connect(self.on_spin_to_item_clicked)
        self.btn_stop.clicked.connect(self.on_stop_clicked)

        buttons = QHBoxLayout()
        for btn in (self.btn_spin, self.btn_spin_to_item, self.btn_stop):
            buttons.addWidget(btn)

        layout = QVBoxLayout()
        layout.addWidget(self.wheel_widget, stretch=1)
        layout.addWidget(self.current_label)
        layout.addLayout(buttons)

        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

        self.store.current_index_changed.connect(self.on_current_index_changed)
        self.store.rested.connect(self.on_rested)
        self._refresh_current_label()

    def _refresh_current_label(self) -> None:
        item = self.store.wheel.current_item
        self.current_label.setText(f"Current: {item.label}" if item is not None else "Current: -")

    @Slot()
    def on_spin_clicked(self) -> None:
        speed_max = self.store.wheel.config.rotation_speed_max
        self.store.wheel.spin(float(self.rng.uniform(0.5, 1.0)) * speed_max)

    @Slot()
    def on_spin_to_item_clicked(self) -> None:
        n_items = len(self.store.wheel.items)
        if n_items == 0:
            return
        index = int(self.rng.integers(n_items))
        self.store.wheel.spin_to_item(
            index,
            duration=SPIN_TO_ITEM_DURATION_MS,
            spin_to_center=False,
            revolutions=SPIN_TO_ITEM_REVOLUTIONS,
        )

    @Slot()
    def on_stop_clicked(self) -> None:
        self.store.wheel.stop()

    def on_current_index_changed(self, event: CurrentIndexChangeEvent) -> None:
        self._refresh_current_label()

    def on_rested(self, event: RestEvent) -> None:
        item = self.store.wheel.current_item
        if item is not None:
            self.statusBar().showMessage(f"Landed on {item.label}")
