"""Common event dispatch triggered by equipment changes."""

from .adapters import HostVersion, MVSchedulerAdapter, MZSchedulerAdapter, create_scheduler_adapter
from .dispatcher import (
    EquipEventDispatcher,
    apply_reservation,
    dispatch_equip_change,
    install_reservation,
)
from .item_catalog import ItemCatalog, ItemCatalogError, load_item_catalog
from .model import NO_EVENT, EquipChangeAction, Reservation
from .resolver import resolve
from .scheduler_port import SchedulerPort
from .session import EquipScreenSession
from .simulation import GameTempRunner, InMemoryScheduler, MVGameTemp, MZGameTemp

__all__ = [
    "EquipChangeAction",
    "EquipEventDispatcher",
    "EquipScreenSession",
    "GameTempRunner",
    "HostVersion",
    "InMemoryScheduler",
    "ItemCatalog",
    "ItemCatalogError",
    "MVGameTemp",
    "MVSchedulerAdapter",
    "MZGameTemp",
    "MZSchedulerAdapter",
    "NO_EVENT",
    "Reservation",
    "SchedulerPort",
    "apply_reservation",
    "create_scheduler_adapter",
    "dispatch_equip_change",
    "install_reservation",
    "load_item_catalog",
    "resolve",
]
