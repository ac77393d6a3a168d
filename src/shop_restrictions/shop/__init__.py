from .models import ShopGood
from .scene import ShopScene
from .sell_list import CATEGORIES, ShopSellList

__all__ = [
    "CATEGORIES",
    "ShopGood",
    "ShopScene",
    "ShopSellList",
]
