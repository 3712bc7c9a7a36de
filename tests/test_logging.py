"""Tests for compdoc.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from compdoc.logging import configure_logging, get_logger


def test_get_logger_nests_under_compdoc() -> None:
    assert get_logger().name == "compdoc"
    assert get_logger("extraction.events").name == "compdoc.extraction.events"


def test_reconfiguring_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.DEBUG


def test_log_file_records_debug_while_console_stays_at_info(tmp_path: Path) -> None:
    log_file = tmp_path / "compdoc.log"
    logger = configure_logging(log_file=log_file)

    get_logger("inheritance").debug("Resolved %s", "WmButtonProps")

    console, file_handler = logger.handlers
    assert console.level == logging.INFO
    assert file_handler.level == logging.DEBUG
    assert "DEBUG compdoc.inheritance: Resolved WmButtonProps" in log_file.read_text(encoding="utf-8")
