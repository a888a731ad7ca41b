"""Test bootstrap: ensure package root is on sys.path and share fixtures.

Absolute imports such as `core.equip_events` and `config.equip_config` assume
the repository root is importable.
"""
import os
import sys
from pathlib import Path

import pytest

PACKAGE_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PACKAGE_ROOT not in sys.path:
    sys.path.insert(0, PACKAGE_ROOT)

from config.equip_config import EquipConfig, TimingMode  # noqa: E402


@pytest.fixture
def wait_config() -> EquipConfig:
    return EquipConfig(
        default_event_id=1,
        timing_mode=TimingMode.WAIT,
        invoke_on_unequip=False,
        default_unequip_event_id=1,
    )


@pytest.fixture
def immediate_config() -> EquipConfig:
    return EquipConfig(default_event_id=1, timing_mode=TimingMode.IMMEDIATE)


@pytest.fixture
def data_dir() -> Path:
    return Path(PACKAGE_ROOT) / "data"
