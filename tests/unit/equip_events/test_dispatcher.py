from __future__ import annotations

from config.equip_config import EquipConfig, TimingMode
from core.equip_events.dispatcher import EquipEventDispatcher, apply_reservation, dispatch_equip_change
from core.equip_events.model import EquipChangeAction, Reservation
from core.equip_events.scheduler_port import SchedulerPort
from core.equip_events.simulation import InMemoryScheduler
from core.events import topics

from tests.unit.test_utils import DummyEventBus, RecordingScheduler, make_item


def test_recording_scheduler_satisfies_port() -> None:
    assert isinstance(RecordingScheduler(), SchedulerPort)


def test_wait_timing_clears_then_sets_without_run_now(wait_config: EquipConfig) -> None:
    scheduler = RecordingScheduler()

    reservation = dispatch_equip_change(
        EquipChangeAction(new_item=make_item(equip_event_id=12)), wait_config, scheduler
    )

    assert reservation == Reservation(12, TimingMode.WAIT)
    assert scheduler.calls == [("clear", None), ("set", 12)]


def test_immediate_timing_runs_after_set(immediate_config: EquipConfig) -> None:
    scheduler = RecordingScheduler()

    dispatch_equip_change(EquipChangeAction(new_item=make_item()), immediate_config, scheduler)

    assert scheduler.calls == [("clear", None), ("set", 1), ("run_now", None)]


def test_no_reservation_leaves_scheduler_untouched(wait_config: EquipConfig) -> None:
    scheduler = RecordingScheduler()

    result = dispatch_equip_change(EquipChangeAction(previous_item=make_item()), wait_config, scheduler)

    assert result is None
    assert scheduler.calls == []


def test_immediate_without_reservation_does_not_run(immediate_config: EquipConfig) -> None:
    scheduler = RecordingScheduler()

    dispatch_equip_change(EquipChangeAction(new_item=make_item(equip_event_id=0)), immediate_config, scheduler)

    assert scheduler.calls == []


def test_sequential_equips_clear_before_each_set(wait_config: EquipConfig) -> None:
    scheduler = RecordingScheduler()
    dispatcher = EquipEventDispatcher(wait_config, scheduler)

    dispatcher.handle(EquipChangeAction(new_item=make_item(1, equip_event_id=12), slot_index=0))
    dispatcher.handle(EquipChangeAction(new_item=make_item(2), slot_index=1))

    assert scheduler.operations() == ["clear", "set", "clear", "set"]
    assert scheduler.calls[-1] == ("set", 1)


def test_apply_reservation_direct() -> None:
    scheduler = RecordingScheduler()

    apply_reservation(Reservation(4, TimingMode.IMMEDIATE), scheduler)

    assert scheduler.operations() == ["clear", "set", "run_now"]


def test_dispatcher_publishes_reserved(wait_config: EquipConfig) -> None:
    bus = DummyEventBus()
    dispatcher = EquipEventDispatcher(wait_config, RecordingScheduler(), bus)

    dispatcher.handle(EquipChangeAction(new_item=make_item(equip_event_id=12), slot_index=2))

    assert bus.published == [
        (
            topics.EQUIP_EVENT_RESERVED,
            {"event_id": 12, "fire_timing": TimingMode.WAIT, "slot_index": 2},
        )
    ]


def test_dispatcher_publishes_skip_reasons() -> None:
    bus = DummyEventBus()
    disabled = EquipEventDispatcher(EquipConfig(), RecordingScheduler(), bus)
    enabled = EquipEventDispatcher(
        EquipConfig(invoke_on_unequip=True, default_unequip_event_id=0), RecordingScheduler(), bus
    )

    disabled.handle(EquipChangeAction(previous_item=make_item(), slot_index=0))
    enabled.handle(EquipChangeAction(previous_item=make_item(), slot_index=1))
    disabled.handle(EquipChangeAction(new_item=make_item(equip_event_id=0), slot_index=2))

    reasons = [payload["reason"] for topic, payload in bus.published if topic == topics.EQUIP_EVENT_SKIPPED]
    assert reasons == ["unequip_disabled", "unequip_suppressed", "equip_suppressed"]


def test_dispatcher_exposes_config_and_scheduler(wait_config: EquipConfig) -> None:
    scheduler = RecordingScheduler()
    dispatcher = EquipEventDispatcher(wait_config, scheduler)

    assert dispatcher.config is wait_config
    assert dispatcher.scheduler is scheduler


def test_immediate_reservation_is_published_before_it_starts(immediate_config: EquipConfig) -> None:
    bus = DummyEventBus()
    scheduler = InMemoryScheduler(bus)
    dispatcher = EquipEventDispatcher(immediate_config, scheduler, bus)

    dispatcher.handle(EquipChangeAction(new_item=make_item(equip_event_id=12), slot_index=0))

    assert bus.topics() == [topics.EQUIP_EVENT_RESERVED, topics.COMMON_EVENT_STARTED]
    assert scheduler.calls == [("clear", None), ("set", 12), ("run_now", 12)]
    assert scheduler.fired == [12]
