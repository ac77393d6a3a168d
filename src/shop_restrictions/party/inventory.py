from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..items.models import ItemKind, SellableEntry

logger = logging.getLogger(__name__)

_KIND_ORDER = {ItemKind.ITEM: 0, ItemKind.WEAPON: 1, ItemKind.ARMOR: 2}


@dataclass
class InventoryEntry:
    entry: SellableEntry
    qty: int


class PartyInventory:
    """
    Party-held items, weapons and armors with quantities.

    Lines are listed items first, then weapons, then armors, each by id,
    which is the order the sell list shows them in.
    """

    def __init__(self) -> None:
        self._lines: Dict[Tuple[ItemKind, int], InventoryEntry] = {}

    def add(self, entry: SellableEntry, qty: int = 1) -> None:
        if qty <= 0:
            return
        line = self._lines.get(entry.key)
        if line:
            line.qty += qty
        else:
            self._lines[entry.key] = InventoryEntry(entry=entry, qty=qty)
        logger.debug("Added %d x %s %s (total=%d)", qty, entry.kind.value, entry.id, self._lines[entry.key].qty)

    def remove(self, entry: SellableEntry, qty: int = 1) -> None:
        """Remove ``qty`` units, dropping the line at zero.

        Raises ValueError when the party holds fewer than ``qty``.
        """
        line = self._lines.get(entry.key)
        held = line.qty if line else 0
        if qty <= 0 or held < qty:
            raise ValueError(f"Cannot remove {qty} x {entry.kind.value} {entry.id}; holding {held}")
        line.qty -= qty
        if line.qty == 0:
            del self._lines[entry.key]
        logger.debug("Removed %d x %s %s", qty, entry.kind.value, entry.id)

    def quantity(self, entry: SellableEntry) -> int:
        line = self._lines.get(entry.key)
        return line.qty if line else 0

    def entries(self) -> List[InventoryEntry]:
        return sorted(self._lines.values(), key=lambda line: (_KIND_ORDER[line.entry.kind], line.entry.id))

    def __len__(self) -> int:
        return len(self._lines)
