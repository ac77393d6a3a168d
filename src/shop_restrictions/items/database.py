from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Union

from ..exceptions import ItemDataError
from .models import ItemKind, SellableEntry

logger = logging.getLogger(__name__)

# Section name in a database document -> kind of record it holds
SECTIONS = {
    "items": ItemKind.ITEM,
    "weapons": ItemKind.WEAPON,
    "armors": ItemKind.ARMOR,
}


class ItemDatabase:
    """
    Read-only index of the host's items, weapons and armors.

    Documents look like ``{"items": [...], "weapons": [...], "armors": [...]}``
    where each list holds host records. ``null`` entries are skipped, since
    host data arrays are 1-based with a leading null.
    """

    def __init__(self, entries: Iterable[SellableEntry] = ()) -> None:
        self._entries: Dict[ItemKind, Dict[int, SellableEntry]] = {kind: {} for kind in ItemKind}
        for entry in entries:
            self.add(entry)

    def add(self, entry: SellableEntry) -> None:
        bucket = self._entries[entry.kind]
        if entry.id in bucket:
            raise ItemDataError(f"Duplicate {entry.kind.value} id {entry.id}")
        bucket[entry.id] = entry

    def get(self, kind: Union[ItemKind, str], entry_id: int) -> SellableEntry:
        try:
            return self._entries[ItemKind(kind)][entry_id]
        except KeyError as exc:
            raise ItemDataError(f"Unknown {ItemKind(kind).value} id {entry_id}") from exc

    def of_kind(self, kind: Union[ItemKind, str]) -> List[SellableEntry]:
        return [self._entries[ItemKind(kind)][i] for i in sorted(self._entries[ItemKind(kind)])]

    def __iter__(self) -> Iterator[SellableEntry]:
        for kind in ItemKind:
            yield from self.of_kind(kind)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._entries.values())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ItemDatabase":
        db = cls()
        for section, kind in SECTIONS.items():
            for record in data.get(section) or []:
                if record is None:
                    continue
                db.add(SellableEntry.from_record(record, kind))
        logger.info("Loaded item database: %d entries", len(db))
        return db

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "ItemDatabase":
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Item database not found: {p}")
        try:
            with p.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ItemDataError(f"Failed to parse JSON at {p} (line {e.lineno}, column {e.colno}): {e.msg}") from e
        if not isinstance(raw, Mapping):
            raise ItemDataError(f"Item database root must be an object: {p}")
        return cls.from_dict(raw)


__all__ = [
    "ItemDatabase",
    "SECTIONS",
]
