from __future__ import annotations

import logging
from typing import List, Optional

from ..items.models import ItemKind, SellableEntry
from ..party.inventory import InventoryEntry, PartyInventory
from ..restrictions.evaluator import is_allowed
from ..restrictions.models import RestrictionSet

logger = logging.getLogger(__name__)

NORMAL_ITEM_TYPE = 1
KEY_ITEM_TYPE = 2

CATEGORIES = ("item", "weapon", "armor", "key_item")


class ShopSellList:
    """
    The party's sellable inventory as shown by a shop.

    Both list membership (``includes``) and selectability (``is_enabled``)
    go through the same restriction check, so an entry the shop will not buy
    is never listed and never selectable.
    """

    def __init__(
        self,
        inventory: PartyInventory,
        restrictions: Optional[RestrictionSet] = None,
        category: Optional[str] = None,
        log_checks: bool = False,
    ) -> None:
        self._inventory = inventory
        self._restrictions = restrictions
        self._log_checks = log_checks
        self.category = None
        self.set_category(category)

    @property
    def restrictions(self) -> Optional[RestrictionSet]:
        return self._restrictions

    def set_category(self, category: Optional[str]) -> None:
        if category is not None and category not in CATEGORIES:
            raise ValueError(f"Unknown sell category: {category!r}")
        self.category = category

    def is_allowed(self, entry: SellableEntry) -> bool:
        allowed = is_allowed(self._restrictions, entry)
        if self._log_checks:
            logger.debug("Sell check %s %s (%s): %s", entry.kind.value, entry.id, entry.name, allowed)
        return allowed

    def _in_category(self, entry: SellableEntry) -> bool:
        if self.category is None:
            return True
        if self.category == "item":
            return entry.kind is ItemKind.ITEM and entry.item_type_id == NORMAL_ITEM_TYPE
        if self.category == "key_item":
            return entry.kind is ItemKind.ITEM and entry.item_type_id == KEY_ITEM_TYPE
        if self.category == "weapon":
            return entry.kind is ItemKind.WEAPON
        return entry.kind is ItemKind.ARMOR

    def includes(self, entry: SellableEntry) -> bool:
        return self._in_category(entry) and self.is_allowed(entry)

    def is_enabled(self, entry: SellableEntry) -> bool:
        return entry.price > 0 and self.is_allowed(entry)

    def items(self) -> List[InventoryEntry]:
        return [line for line in self._inventory.entries() if self.includes(line.entry)]

    def enabled_items(self) -> List[InventoryEntry]:
        return [line for line in self.items() if self.is_enabled(line.entry)]
