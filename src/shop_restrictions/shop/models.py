from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..items.models import ItemKind

# Goods type index used by shop command parameters
_GOODS_KINDS = (ItemKind.ITEM, ItemKind.WEAPON, ItemKind.ARMOR)


@dataclass(frozen=True)
class ShopGood:
    """One line of stock the shop sells to the party."""

    kind: ItemKind
    id: int
    price: Optional[int] = None  # None means the database price

    @classmethod
    def from_params(cls, params: Sequence) -> "ShopGood":
        """Build from ``[type, id, price_type, price, ...]`` command parameters."""
        kind = _GOODS_KINDS[int(params[0])]
        price = int(params[3]) if len(params) > 3 and int(params[2]) == 1 else None
        return cls(kind=kind, id=int(params[1]), price=price)
