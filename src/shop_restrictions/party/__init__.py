from .inventory import InventoryEntry, PartyInventory
from .party import Party

__all__ = [
    "InventoryEntry",
    "Party",
    "PartyInventory",
]
