from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.doc_tree import CargoRepoBuilder


@pytest.fixture
def cargo_repo(tmp_path: Path) -> CargoRepoBuilder:
    """Provide a cargo repository rooted at the pytest tmp_path."""
    return CargoRepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog keeps seeing package records."""
    yield
    for name in ("docs_knowledge", "uvicorn.error"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
