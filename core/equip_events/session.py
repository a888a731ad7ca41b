"""Equip screen session driving the dispatcher like the host UI would.

The host calls into the rules from its equip screen "item OK" handler: it
remembers what the selected slot held, performs the change, and then reserves
the common event.  :class:`EquipScreenSession` reproduces that sequence for a
single actor so the rules can run outside the host.
"""

from __future__ import annotations

from typing import Iterable, Optional

from core.equip_events.dispatcher import EquipEventDispatcher
from core.equip_events.model import EquipChangeAction, Reservation
from core.events import topics
from core.event_bus import EventBus
from entities.equipment_item import EquipmentItem
from utils.logger import get_logger

__all__ = ["EquipScreenSession"]

logger = get_logger(__name__)


class EquipScreenSession:
    """One visit to the equip screen for one actor.

    With immediate timing a reservation makes the host leave the menu, so the
    session closes itself; with wait timing it stays open until
    :meth:`close_menu`.
    """

    def __init__(
        self,
        actor_equips: Iterable[Optional[EquipmentItem]],
        dispatcher: EquipEventDispatcher,
        event_bus: EventBus | None = None,
    ) -> None:
        self._slots: list[Optional[EquipmentItem]] = list(actor_equips)
        self._dispatcher = dispatcher
        self._bus = event_bus if event_bus is not None else EventBus()
        self._open = True

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def is_open(self) -> bool:
        return self._open

    def equips(self) -> tuple[Optional[EquipmentItem], ...]:
        return tuple(self._slots)

    def change_equip(self, slot_index: int, item: Optional[EquipmentItem]) -> Optional[Reservation]:
        """Put ``item`` (or nothing) into ``slot_index`` and dispatch the change."""

        if not self._open:
            raise RuntimeError("Equip screen is closed")
        if not 0 <= slot_index < len(self._slots):
            raise IndexError(f"Slot {slot_index} out of range (actor has {len(self._slots)} slots)")

        previous = self._slots[slot_index]
        self._slots[slot_index] = item
        action = EquipChangeAction(previous_item=previous, new_item=item, slot_index=slot_index)
        self._bus.publish(
            topics.EQUIP_CHANGED,
            slot_index=slot_index,
            previous_item=previous,
            new_item=item,
        )

        reservation = self._dispatcher.handle(action)
        if reservation is not None and self._dispatcher.config.is_immediate:
            logger.debug("Immediate reservation %d closes the equip screen", reservation.event_id)
            self._open = False
        return reservation

    def unequip(self, slot_index: int) -> Optional[Reservation]:
        return self.change_equip(slot_index, None)

    def close_menu(self) -> None:
        """Leave the menu flow; deferred reservations run now."""

        self._open = False
        self._bus.publish(topics.MENU_CLOSED)
