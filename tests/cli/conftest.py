import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_knop_logger():
    yield
    logger = logging.getLogger("knop")
    logger.handlers.clear()
    logger.propagate = True
