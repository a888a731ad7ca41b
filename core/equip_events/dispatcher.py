"""Dispatch layer bridging resolved equip changes and the host scheduler."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from config.equip_config import EquipConfig, TimingMode
from core.equip_events.model import EquipChangeAction, Reservation
from core.equip_events.resolver import resolve
from core.equip_events.scheduler_port import SchedulerPort
from core.events import topics
from core.event_bus import Topic
from utils.logger import get_logger, log_calls

__all__ = [
    "EquipEventDispatcher",
    "apply_reservation",
    "dispatch_equip_change",
    "install_reservation",
]

logger = get_logger(__name__)


class EventBusLike(Protocol):
    def publish(
        self, topic: Topic, payload: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> None:
        ...


def install_reservation(reservation: Reservation, scheduler: SchedulerPort) -> None:
    """Make ``reservation`` the scheduler's only pending reservation.

    The previous pending reservation is always discarded before the new one is
    installed, so the last equip change in a menu session wins.
    """

    scheduler.clear_pending_reservation()
    scheduler.set_pending_reservation(reservation.event_id)


def apply_reservation(reservation: Reservation, scheduler: SchedulerPort) -> None:
    """Hand ``reservation`` to ``scheduler``, running it at once for immediate timing."""

    install_reservation(reservation, scheduler)
    if reservation.fire_timing is TimingMode.IMMEDIATE:
        scheduler.run_pending_reservation_now()


def dispatch_equip_change(
    action: EquipChangeAction, config: EquipConfig, scheduler: SchedulerPort
) -> Optional[Reservation]:
    """Resolve ``action`` and apply the result to ``scheduler``."""

    reservation = resolve(action, config)
    if reservation is not None:
        apply_reservation(reservation, scheduler)
    return reservation


class EquipEventDispatcher:
    """Resolve equip changes and forward them to an injected scheduler port."""

    def __init__(
        self,
        config: EquipConfig,
        scheduler: SchedulerPort,
        event_bus: EventBusLike | None = None,
    ) -> None:
        self._config = config
        self._scheduler = scheduler
        self._bus = event_bus

    @property
    def config(self) -> EquipConfig:
        return self._config

    @property
    def scheduler(self) -> SchedulerPort:
        return self._scheduler

    @log_calls
    def handle(self, action: EquipChangeAction) -> Optional[Reservation]:
        reservation = resolve(action, self._config)

        if reservation is None:
            reason = self._skip_reason(action)
            logger.debug("No common event for slot %s (%s)", action.slot_index, reason)
            if self._bus is not None:
                self._bus.publish(
                    topics.EQUIP_EVENT_SKIPPED, slot_index=action.slot_index, reason=reason
                )
            return None

        install_reservation(reservation, self._scheduler)
        logger.debug(
            "Reserved common event %d (%s) for slot %s",
            reservation.event_id,
            reservation.fire_timing.value,
            action.slot_index,
        )
        # subscribers hear about the reservation before an immediate run starts it
        if self._bus is not None:
            self._bus.publish(
                topics.EQUIP_EVENT_RESERVED,
                event_id=reservation.event_id,
                fire_timing=reservation.fire_timing,
                slot_index=action.slot_index,
            )
        if reservation.fire_timing is TimingMode.IMMEDIATE:
            self._scheduler.run_pending_reservation_now()
        return reservation

    def _skip_reason(self, action: EquipChangeAction) -> str:
        if action.is_unequip and not self._config.invoke_on_unequip:
            return "unequip_disabled"
        if action.is_unequip:
            return "unequip_suppressed"
        return "equip_suppressed"
