from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.fake_compiler import FakeCompiler
from tests._fixtures.tree_builder import TreeBuilder


@pytest.fixture
def tree(tmp_path: Path) -> TreeBuilder:
    """Provide a source tree rooted below the pytest tmp_path."""
    return TreeBuilder(tmp_path)


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    # configure_logging() disables propagation, which hides records from caplog.
    logger = logging.getLogger("fudgeproto")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
