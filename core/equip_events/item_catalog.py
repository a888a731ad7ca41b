"""Load weapons and armors, with their event overrides, from YAML.

Expected layout::

    weapons:
      - id: 1
        name: Sword
        note: "<invokeCommonEventId:12>"
    armors:
      - id: 1
        name: Shield
        note: "<removeCommonEventId:15>"

Notes are parsed once, when the catalog is built.  Weapons and armors have
separate id spaces, so items are addressed by ``(kind, id)`` or by a short
reference such as ``w12`` / ``a3``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

import yaml

from entities.equipment_item import EquipmentItem
from utils.logger import get_logger

__all__ = ["ItemCatalog", "ItemCatalogError", "load_item_catalog"]

logger = get_logger(__name__)

_SECTIONS = {"weapons": "weapon", "armors": "armor"}
_REF_PREFIXES = {"w": "weapon", "a": "armor"}
EMPTY_SLOT_REFS = frozenset({"none", "empty", "-"})


class ItemCatalogError(Exception):
    """Raised when an item catalog file is missing or structurally invalid."""


class ItemCatalog:
    """Read-only lookup of :class:`EquipmentItem` values."""

    def __init__(self, items: Iterable[EquipmentItem] = ()) -> None:
        self._items: Dict[Tuple[str, int], EquipmentItem] = {}
        for item in items:
            key = (item.kind, item.item_id)
            if key in self._items:
                raise ItemCatalogError(f"Duplicate {item.kind} id {item.item_id}")
            self._items[key] = item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[EquipmentItem]:
        return iter(self._items[key] for key in sorted(self._items))

    def get(self, kind: str, item_id: int) -> EquipmentItem:
        try:
            return self._items[(kind, item_id)]
        except KeyError as exc:
            raise KeyError(f"{kind} {item_id}") from exc

    def lookup(self, ref: str) -> Optional[EquipmentItem]:
        """Resolve ``w<id>`` / ``a<id>``; ``none`` means an empty slot.

        A bare number is read as a weapon id.
        """

        text = ref.strip().lower()
        if text in EMPTY_SLOT_REFS:
            return None
        kind = "weapon"
        if text[:1] in _REF_PREFIXES:
            kind = _REF_PREFIXES[text[0]]
            text = text[1:]
        if not (text.isascii() and text.isdigit()):
            raise ValueError(f"Invalid item reference {ref!r}")
        return self.get(kind, int(text))


def load_item_catalog(path: Path | str) -> ItemCatalog:
    """Read ``path`` and build an :class:`ItemCatalog`."""

    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ItemCatalogError(f"Item file not found: {file_path}") from exc
    except OSError as exc:
        raise ItemCatalogError(f"Unable to read item file: {file_path}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ItemCatalogError(f"Invalid YAML in {file_path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ItemCatalogError(f"Expected top-level mapping in {file_path}")

    items: list[EquipmentItem] = []
    for section, kind in _SECTIONS.items():
        entries = raw.get(section) or []
        if not isinstance(entries, list):
            raise ItemCatalogError(f"'{section}' in {file_path} must be a list")
        for index, entry in enumerate(entries):
            items.append(_build_item(entry, kind, f"{section}[{index}]"))

    catalog = ItemCatalog(items)
    logger.debug("Loaded %d item(s) from %s", len(catalog), file_path)
    return catalog


def _build_item(entry: Any, kind: str, context: str) -> EquipmentItem:
    if not isinstance(entry, dict):
        raise ItemCatalogError(f"{context} must be a mapping")
    item_id = entry.get("id")
    if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id <= 0:
        raise ItemCatalogError(f"{context} needs a positive integer 'id'")
    return EquipmentItem.from_dict(entry, kind=kind)
