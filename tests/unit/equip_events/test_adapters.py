from __future__ import annotations

import pytest

from config.equip_config import EquipConfig, TimingMode
from core.equip_events.adapters import (
    HostVersion,
    MVSchedulerAdapter,
    MZSchedulerAdapter,
    create_scheduler_adapter,
)
from core.equip_events.dispatcher import EquipEventDispatcher
from core.equip_events.model import EquipChangeAction
from core.equip_events.scheduler_port import SchedulerPort
from core.equip_events.simulation import GameTempRunner, MVGameTemp, MZGameTemp

from tests.unit.test_utils import make_item


@pytest.mark.parametrize(
    "version, game_temp, expected",
    [
        ("mv", MVGameTemp(), MVSchedulerAdapter),
        ("MZ", MZGameTemp(), MZSchedulerAdapter),
        (HostVersion.MZ, MZGameTemp(), MZSchedulerAdapter),
    ],
)
def test_factory_selects_adapter(version, game_temp, expected) -> None:
    adapter = create_scheduler_adapter(version, game_temp)

    assert isinstance(adapter, expected)
    assert isinstance(adapter, SchedulerPort)


def test_factory_rejects_unknown_host() -> None:
    with pytest.raises(ValueError, match="Unknown host version"):
        create_scheduler_adapter("vx_ace", MVGameTemp())


def test_mz_adapter_discards_queued_reservation() -> None:
    game_temp = MZGameTemp()
    adapter = MZSchedulerAdapter(game_temp)
    dispatcher = EquipEventDispatcher(EquipConfig(), adapter)

    dispatcher.handle(EquipChangeAction(new_item=make_item(1, equip_event_id=12)))
    dispatcher.handle(EquipChangeAction(new_item=make_item(2, equip_event_id=20)))

    assert game_temp.queued == (20,)


def test_mz_queue_keeps_both_without_clear() -> None:
    game_temp = MZGameTemp()
    game_temp.reserve_common_event(12)
    game_temp.reserve_common_event(20)

    assert game_temp.queued == (12, 20)


def test_mv_adapter_clear_resets_slot() -> None:
    game_temp = MVGameTemp()
    adapter = MVSchedulerAdapter(game_temp)

    adapter.set_pending_reservation(7)
    assert game_temp.is_common_event_reserved()
    adapter.clear_pending_reservation()
    assert not game_temp.is_common_event_reserved()


@pytest.mark.parametrize("host", ["mv", "mz"])
def test_run_now_hook_fires_pending_event(host: str) -> None:
    game_temp = MVGameTemp() if host == "mv" else MZGameTemp()
    runner = GameTempRunner(game_temp)
    adapter = create_scheduler_adapter(host, game_temp, runner.run_now)
    dispatcher = EquipEventDispatcher(EquipConfig(timing_mode=TimingMode.IMMEDIATE), adapter)

    dispatcher.handle(EquipChangeAction(new_item=make_item(equip_event_id=12)))

    assert runner.fired == [12]
    assert not game_temp.is_common_event_reserved()


def test_adapter_without_hook_leaves_reservation_pending() -> None:
    game_temp = MVGameTemp()
    adapter = MVSchedulerAdapter(game_temp)

    adapter.set_pending_reservation(3)
    adapter.run_pending_reservation_now()

    assert game_temp.retrieve_common_event() == 3
    assert game_temp.retrieve_common_event() is None
