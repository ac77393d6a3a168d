from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Optional, TypeVar

from .models import RestrictionSet

if TYPE_CHECKING:
    from ..items.models import SellableEntry

E = TypeVar("E", bound="SellableEntry")


def _has_tag(restrictions: RestrictionSet, entry: "SellableEntry") -> bool:
    markers = entry.markers
    return any(markers.get(tag) for tag in restrictions.tags)


def is_allowed(restrictions: Optional[RestrictionSet], entry: "SellableEntry") -> bool:
    """Decide whether a shop with ``restrictions`` will buy ``entry``.

    Rules are tried in order and the first match allows the entry:

    1. weapons: exact weapon id, weapon type, or equipment type
    2. armors: exact armor id, armor type, or equipment type
    3. items: item type or exact item id
    4. if any tags are set, the result is whether the entry carries one of them
    5. otherwise the entry is denied

    Rule 4 decides on its own once reached, so an entry whose category
    rules did not match is denied when it lacks every tag.
    """
    if restrictions is None:
        return True

    if entry.weapon_type_id:
        if entry.id in restrictions.weapon_ids:
            return True
        if entry.weapon_type_id in restrictions.weapon_type_ids:
            return True
        if entry.equipment_type_id in restrictions.equipment_type_ids:
            return True

    if entry.armor_type_id:
        if entry.id in restrictions.armor_ids:
            return True
        if entry.armor_type_id in restrictions.armor_type_ids:
            return True
        if entry.equipment_type_id in restrictions.equipment_type_ids:
            return True

    if entry.item_type_id:
        if entry.item_type_id in restrictions.item_type_ids:
            return True
        if entry.id in restrictions.item_ids:
            return True

    if restrictions.tags:
        return _has_tag(restrictions, entry)

    return False


def allowed_entries(restrictions: Optional[RestrictionSet], entries: Iterable[E]) -> Iterator[E]:
    """Yield the entries a shop with ``restrictions`` will buy."""
    for entry in entries:
        if is_allowed(restrictions, entry):
            yield entry


__all__ = [
    "allowed_entries",
    "is_allowed",
]
