from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, FrozenSet, Iterable, List, Union


@dataclass(frozen=True)
class RestrictionSet:
    """Allow-rules describing what one shop session will buy from the party.

    Each field is an independent allow-list. ``None`` in place of a
    RestrictionSet means the shop is unrestricted; an empty RestrictionSet
    buys nothing that is classified as an item, weapon or armor.
    """

    item_ids: FrozenSet[int] = field(default_factory=frozenset)
    item_type_ids: FrozenSet[int] = field(default_factory=frozenset)
    weapon_ids: FrozenSet[int] = field(default_factory=frozenset)
    weapon_type_ids: FrozenSet[int] = field(default_factory=frozenset)
    armor_ids: FrozenSet[int] = field(default_factory=frozenset)
    armor_type_ids: FrozenSet[int] = field(default_factory=frozenset)
    # Shared by weapons and armors
    equipment_type_ids: FrozenSet[int] = field(default_factory=frozenset)
    tags: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept any iterable at construction; store frozensets only.
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (str, bytes)):
                raise TypeError(f"{f.name} must be a collection of values, not a single {type(value).__name__}")
            if not isinstance(value, frozenset):
                object.__setattr__(self, f.name, frozenset(value))

    @classmethod
    def from_lists(cls, values: Dict[str, Iterable[Union[int, str]]]) -> "RestrictionSet":
        """Build from a mapping of field name to values, ignoring empty fields."""
        return cls(**{name: frozenset(items) for name, items in values.items() if items})

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def to_dict(self) -> Dict[str, List[Union[int, str]]]:
        """Plain, sorted representation for logging and JSON output."""
        return {f.name: sorted(getattr(self, f.name)) for f in fields(self)}


__all__ = [
    "RestrictionSet",
]
