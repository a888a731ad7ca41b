"""Equip-change rule resolver.

Maps one :class:`~core.equip_events.model.EquipChangeAction` and the static
:class:`~config.equip_config.EquipConfig` to the common event to reserve.
The resolver is a pure function: it keeps no state between calls and never
talks to the scheduler itself (see :mod:`core.equip_events.dispatcher`).
"""

from __future__ import annotations

from typing import Optional

from config.equip_config import EquipConfig
from core.equip_events.model import NO_EVENT, EquipChangeAction, Reservation
from entities.equipment_item import EquipmentItem
from utils.logger import get_logger

__all__ = ["equip_event_id_for", "resolve", "unequip_event_id_for"]

logger = get_logger(__name__)


def equip_event_id_for(item: EquipmentItem, config: EquipConfig) -> int:
    """Event id for equipping ``item``: its override when present, else the default."""

    if item.equip_event_id is not None:
        return item.equip_event_id
    return config.default_event_id


def unequip_event_id_for(item: Optional[EquipmentItem], config: EquipConfig) -> int:
    """Event id for clearing a slot that held ``item`` (which may be ``None``)."""

    if item is not None and item.unequip_event_id is not None:
        return item.unequip_event_id
    return config.default_unequip_event_id


def resolve(action: EquipChangeAction, config: EquipConfig) -> Optional[Reservation]:
    """Return the reservation produced by ``action``, or ``None`` when nothing should run."""

    if action.new_item is not None:
        event_id = equip_event_id_for(action.new_item, config)
    elif not config.invoke_on_unequip:
        logger.debug("Unequip in slot %s ignored: unequip events disabled", action.slot_index)
        return None
    else:
        event_id = unequip_event_id_for(action.previous_item, config)

    if event_id <= NO_EVENT:
        logger.debug("Equip change %s resolved to no event", action.to_dict())
        return None
    return Reservation(event_id=event_id, fire_timing=config.timing_mode)
