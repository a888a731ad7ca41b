"""Command line harness replaying equip changes against the event rules."""
from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence

from config.config_loader import ConfigError
from config.equip_config import EquipConfig, TimingMode, load_equip_config
from core.equip_events import (
    EquipEventDispatcher,
    EquipScreenSession,
    GameTempRunner,
    InMemoryScheduler,
    ItemCatalog,
    ItemCatalogError,
    MVGameTemp,
    MZGameTemp,
    create_scheduler_adapter,
    load_item_catalog,
)
from core.equip_events.scheduler_port import SchedulerPort
from core.event_bus import EventBus
from core.events import topics
from entities.equipment_item import EquipmentItem
from utils.logger import LOG_LEVELS, configure_logging

HOST_CHOICES = ("memory", "mv", "mz")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay equipment changes and report the common events they trigger.")
    parser.add_argument("--items", required=True, help="YAML file listing weapons and armors with their notes.")
    parser.add_argument("--config", default=None, help="YAML file with the equip event options.")
    parser.add_argument("--slots", type=int, default=5, help="Number of equipment slots of the actor.")
    parser.add_argument(
        "--initial",
        action="append",
        default=[],
        metavar="SLOT:ITEM",
        help="Item equipped before the screen opens (no event). Repeatable.",
    )
    parser.add_argument(
        "--change",
        action="append",
        default=[],
        metavar="SLOT:ITEM",
        help="Equip change to replay, e.g. 0:w12, 2:a3 or 1:none. Repeatable, applied in order.",
    )
    parser.add_argument("--timing", choices=[mode.value for mode in TimingMode], default=None)
    parser.add_argument("--host", choices=HOST_CHOICES, default="memory")
    parser.add_argument("--close-menu", action="store_true", help="Close the menu after the last change.")
    parser.add_argument("--log-level", default="NONE", choices=sorted(LOG_LEVELS))
    return parser


def _parse_change(text: str, catalog: ItemCatalog) -> tuple[int, Optional[EquipmentItem]]:
    slot_text, sep, ref = text.partition(":")
    if not sep or not slot_text.strip().isdigit():
        raise ValueError(f"expected SLOT:ITEM, got {text!r}")
    try:
        item = catalog.lookup(ref)
    except KeyError as exc:
        raise ValueError(f"unknown item {ref!r}") from exc
    return int(slot_text), item


def _build_scheduler(host: str, bus: EventBus) -> SchedulerPort:
    if host == "memory":
        return InMemoryScheduler(bus)
    game_temp = MVGameTemp() if host == "mv" else MZGameTemp()
    runner = GameTempRunner(game_temp, bus)
    return create_scheduler_adapter(host, game_temp, runner.run_now)


def _print_event(kind: str):
    def _handler(**payload: Any) -> None:
        if kind == "reserved":
            timing = payload["fire_timing"]
            print(f"slot {payload['slot_index']}: reserved common event {payload['event_id']} ({timing.value})")
        elif kind == "skipped":
            print(f"slot {payload['slot_index']}: no common event ({payload['reason']})")
        else:
            print(f"common event {payload['event_id']} started ({payload['trigger']})")

    return _handler


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.slots <= 0:
        parser.error("--slots must be positive")
    configure_logging(args.log_level)

    try:
        catalog = load_item_catalog(args.items)
        config = load_equip_config(args.config) if args.config else EquipConfig()
        initial = [_parse_change(text, catalog) for text in args.initial]
        changes = [_parse_change(text, catalog) for text in args.change]
    except (ItemCatalogError, ConfigError, ValueError) as exc:
        parser.error(str(exc))

    if args.timing:
        config = config.with_timing(args.timing)

    slots: list[Optional[EquipmentItem]] = [None] * args.slots
    for slot_index, item in initial:
        if not 0 <= slot_index < args.slots:
            parser.error(f"slot {slot_index} out of range")
        slots[slot_index] = item

    bus = EventBus()
    started: list[int] = []
    bus.subscribe(topics.EQUIP_EVENT_RESERVED, _print_event("reserved"))
    bus.subscribe(topics.EQUIP_EVENT_SKIPPED, _print_event("skipped"))
    bus.subscribe(topics.COMMON_EVENT_STARTED, _print_event("started"))
    bus.subscribe(topics.COMMON_EVENT_STARTED, lambda event_id, **_: started.append(event_id))

    scheduler = _build_scheduler(args.host, bus)
    dispatcher = EquipEventDispatcher(config, scheduler, bus)
    session = EquipScreenSession(slots, dispatcher, bus)

    for slot_index, item in changes:
        if not session.is_open:
            print("equip screen closed; remaining changes ignored")
            break
        try:
            session.change_equip(slot_index, item)
        except IndexError as exc:
            parser.error(str(exc))

    if args.close_menu and session.is_open:
        session.close_menu()

    print(f"started: {started}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
