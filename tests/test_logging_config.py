from __future__ import annotations

import logging

from prizewheel.logging_config import setup_logging


def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "wheel.log"

    logger = setup_logging(level=logging.DEBUG, log_file=str(log_file))
    logger = setup_logging(level=logging.DEBUG, log_file=str(log_file))

    assert logger.name == "prizewheel"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger("prizewheel.model.wheel").debug("hello from the wheel")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the wheel" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
