"""Project-wide pytest configuration hooks."""

from __future__ import annotations

import logging
import os
import sys

import pytest

PACKAGE_ROOT = os.path.abspath(os.path.dirname(__file__))
if PACKAGE_ROOT not in sys.path:
    sys.path.insert(0, PACKAGE_ROOT)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Keep log level changes made by one test from leaking into the next."""

    logger = logging.getLogger("equip_events")
    level = logger.level
    yield
    logger.setLevel(level)
