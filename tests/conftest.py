"""Pytest configuration and shared fixtures for cargo-profclean."""

import logging

import pytest

from cargo_profclean.utils.logging import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undoes setup_logging() so later tests see package logs in caplog."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
