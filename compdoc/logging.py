"""Logger setup shared by compdoc modules and the CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "compdoc"
CONSOLE_FORMAT = "[compdoc] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    return root.getChild(name) if name else root


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def configure_logging(
    *, verbose: bool = False, log_file: Optional[Path] = None
) -> logging.Logger:
    """Send compdoc records to stderr and, when ``log_file`` is given, to that file.

    The console shows INFO and above unless ``verbose`` is set. The log file
    always receives DEBUG records. Calling this again replaces the handlers
    installed by the previous call.
    """
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False
    _attach(logger, logging.StreamHandler(), console_level, CONSOLE_FORMAT)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _attach(
            logger,
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.DEBUG,
            FILE_FORMAT,
        )
    return logger


__all__ = ["configure_logging", "get_logger"]
