from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.library_builder import LibraryBuilder


@pytest.fixture
def library_builder(tmp_path: Path) -> LibraryBuilder:
    """Provide a reusable component library builder rooted at the pytest tmp_path."""
    return LibraryBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _restore_compdoc_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog keeps seeing compdoc records."""
    yield
    logger = logging.getLogger("compdoc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
