"""
Application Initialization
==========================
This module wires the wheel model to the Qt front end and starts the
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Creates the QApplication.
3. Instantiates the store (which owns the Wheel) with demo items.
4. Passes the store into the main window.

Run with: python -m prizewheel
"""
from __future__ import annotations

import logging
import sys

from prizewheel.app.application import create_app
from prizewheel.app.state import WheelStore
from prizewheel.app.ui.main_window import MainWindow
from prizewheel.logging_config import setup_logging
from prizewheel.model.wheel_config import WheelConfig

DEMO_ITEMS = [
    {"label": "Jackpot", "value": 1000, "weight": 0.5},
    {"label": "100", "value": 100},
    {"label": "Try again", "value": 0},
    {"label": "250", "value": 250},
    {"label": "Bankrupt", "value": -1, "weight": 0.75},
    {"label": "50", "value": 50, "weight": 1.5},
]

DEMO_COLORS = ["#f6bd60", "#f7ede2", "#f5cac3", "#84a59d", "#f28482"]


def main() -> int:
    """Main entry point for the application."""
    setup_logging(level=logging.INFO)

    app = create_app()

    config = WheelConfig.from_dict({
        "items": DEMO_ITEMS,
        "item_background_colors": DEMO_COLORS,
        "item_label_radius_max": 0.3,
    })
    store = WheelStore(config)

    win = MainWindow(store)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
