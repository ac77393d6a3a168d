from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .schema import validate_record

logger = logging.getLogger(__name__)

# <tag> or <tag:value> inside a note field
_MARKER_RE = re.compile(r"<([^<>:]+)(:?)([^>]*)>")


class ItemKind(str, Enum):
    ITEM = "item"
    WEAPON = "weapon"
    ARMOR = "armor"


def extract_markers(note: Optional[str]) -> Dict[str, Any]:
    """Parse note-field markers into a tag -> value mapping.

    ``<tag>`` maps to True, ``<tag:value>`` maps to the string value.
    """
    markers: Dict[str, Any] = {}
    if not note:
        return markers
    for match in _MARKER_RE.finditer(note):
        name, colon, value = match.groups()
        markers[name] = value if colon else True
    return markers


@dataclass(frozen=True)
class SellableEntry:
    """Classification data for one item, weapon or armor the party can sell.

    Exactly one of the three type ids is set, according to ``kind``. A type id
    of 0 means "no type" in host data and is treated like None.
    """

    id: int
    name: str
    kind: ItemKind
    price: int = 0
    item_type_id: Optional[int] = None
    weapon_type_id: Optional[int] = None
    armor_type_id: Optional[int] = None
    equipment_type_id: Optional[int] = None
    markers: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @property
    def key(self) -> Tuple[ItemKind, int]:
        return (self.kind, self.id)

    @classmethod
    def from_record(cls, record: Mapping[str, Any], kind: ItemKind) -> "SellableEntry":
        """Create an entry from a host database record, validating with the JSON schema."""
        kind = ItemKind(kind)
        data = dict(record)
        validate_record(data, kind.value)
        markers = extract_markers(data.get("note"))
        markers.update(data.get("meta") or {})
        entry = cls(
            id=int(data["id"]),
            name=str(data["name"]),
            kind=kind,
            price=int(data.get("price", 0)),
            item_type_id=data.get("itypeId") if kind is ItemKind.ITEM else None,
            weapon_type_id=data.get("wtypeId") if kind is ItemKind.WEAPON else None,
            armor_type_id=data.get("atypeId") if kind is ItemKind.ARMOR else None,
            equipment_type_id=data.get("etypeId") if kind is not ItemKind.ITEM else None,
            markers=markers,
        )
        logger.debug("Loaded %s %s (%s)", kind.value, entry.id, entry.name)
        return entry


__all__ = [
    "ItemKind",
    "SellableEntry",
    "extract_markers",
]
