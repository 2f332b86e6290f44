"""Configuration for Folio tests.

This module adds fixtures giving page lists and restores the logger level
changed by the command-line interface.

"""

import logging

import pytest

from folio.logger import LOGGER

from .testing_utils import make_pages


@pytest.fixture
def pages():
    """Empty list of 100px × 100px pages without margins."""
    return make_pages()


@pytest.fixture(autouse=True)
def restore_logger():
    handlers, level = list(LOGGER.handlers), LOGGER.level
    yield
    LOGGER.handlers = handlers
    LOGGER.setLevel(level or logging.WARNING)
