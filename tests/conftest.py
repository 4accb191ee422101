"""Shared test fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _isolate_package_logger():
    """Restore the cryptify logger after each test so no handler keeps a
    per-test capture stream that is closed once that test ends."""
    logger = logging.getLogger("cryptify")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
