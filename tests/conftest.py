"""Shared fixtures for urltomarkdown tests."""

import logging

import pytest
from urltomarkdown.logging_config import PACKAGE_LOGGER, THIRD_PARTY_LOGGERS


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers and levels installed by setup_logging() during a test."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
