from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from utils.note_tags import parse_event_id, parse_note_tags

EQUIP_EVENT_TAG = "invokeCommonEventId"
UNEQUIP_EVENT_TAG = "removeCommonEventId"

VALID_KINDS = ("weapon", "armor")


@dataclass(frozen=True, slots=True)
class EquipmentItem:
    """
    Weapon or armor as seen by the equip event rules.

    Only ``equip_event_id`` and ``unequip_event_id`` matter to the resolver.
    ``None`` means the note carries no override; ``0`` means the note
    explicitly disables the event for this item.
    """

    item_id: int
    name: str
    kind: str = "weapon"
    note: str = ""
    equip_event_id: Optional[int] = None
    unequip_event_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind not in VALID_KINDS:
            raise ValueError(f"Invalid item kind '{self.kind}'. Must be one of {VALID_KINDS}.")

    @classmethod
    def from_note(cls, item_id: int, name: str, note: str = "", kind: str = "weapon") -> "EquipmentItem":
        """Build an item, reading its event overrides from ``note`` once."""
        tags = parse_note_tags(note)
        return cls(
            item_id=item_id,
            name=name,
            kind=kind,
            note=note or "",
            equip_event_id=parse_event_id(tags, EQUIP_EVENT_TAG),
            unequip_event_id=parse_event_id(tags, UNEQUIP_EVENT_TAG),
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], kind: str = "weapon") -> "EquipmentItem":
        return cls.from_note(
            item_id=int(payload["id"]),
            name=str(payload.get("name", "")),
            note=str(payload.get("note") or ""),
            kind=kind,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.item_id,
            "name": self.name,
            "kind": self.kind,
            "note": self.note,
            "equip_event_id": self.equip_event_id,
            "unequip_event_id": self.unequip_event_id,
        }
