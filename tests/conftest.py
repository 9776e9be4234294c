"""Shared pytest fixtures."""

import logging

import pytest

from url_comparator.utils.logger import PACKAGE_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging so they never outlive a test's captured streams."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if getattr(handler, "_url_comparator_handler", False):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
