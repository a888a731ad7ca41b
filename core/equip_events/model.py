"""Value objects exchanged between the equip event resolver and its callers.

All structures are frozen dataclasses: an :class:`EquipChangeAction` lives for
one resolution call, and a :class:`Reservation` is handed to the scheduler
right after it is produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from config.equip_config import TimingMode
from entities.equipment_item import EquipmentItem

__all__ = ["EquipChangeAction", "NO_EVENT", "Reservation"]

NO_EVENT = 0
"""Common event id meaning "nothing to run"; never reserved."""


@dataclass(frozen=True, slots=True)
class EquipChangeAction:
    """One slot transition on the equip screen.

    ``new_item=None`` is an unequip, ``previous_item=None`` an equip into an
    empty slot.  ``slot_index`` is informational only.
    """

    previous_item: Optional[EquipmentItem] = None
    new_item: Optional[EquipmentItem] = None
    slot_index: Optional[int] = None

    @property
    def is_unequip(self) -> bool:
        return self.new_item is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "slot_index": self.slot_index,
            "previous_item": self.previous_item.item_id if self.previous_item else None,
            "new_item": self.new_item.item_id if self.new_item else None,
        }


@dataclass(frozen=True, slots=True)
class Reservation:
    """Request to run common event ``event_id`` with the configured timing."""

    event_id: int
    fire_timing: TimingMode

    def __post_init__(self) -> None:
        if self.event_id == NO_EVENT:
            raise ValueError("Common event 0 cannot be reserved")

    def to_dict(self) -> dict[str, Any]:
        return {"event_id": self.event_id, "fire_timing": self.fire_timing.value}
