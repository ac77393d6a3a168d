from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..exceptions import SellRejectedError
from ..items.models import SellableEntry
from ..party.party import Party
from ..restrictions.models import RestrictionSet
from ..scenes.base import BaseScene
from .models import ShopGood
from .sell_list import ShopSellList

logger = logging.getLogger(__name__)


class ShopScene(BaseScene):
    """A shop session.

    The restriction set handed over at construction belongs to this scene
    until it exits; the sell list is built from it on enter.
    """

    def __init__(
        self,
        party: Party,
        goods: Sequence[ShopGood],
        purchase_only: bool = False,
        restrictions: Optional[RestrictionSet] = None,
        log_checks: bool = False,
    ) -> None:
        super().__init__()
        self.party = party
        self.goods = tuple(goods)
        self.purchase_only = purchase_only
        self._restrictions = restrictions
        self._log_checks = log_checks
        self.sell_list: Optional[ShopSellList] = None

    @property
    def restrictions(self) -> Optional[RestrictionSet]:
        return self._restrictions

    def on_enter(self) -> None:
        super().on_enter()
        self.sell_list = self.create_sell_list()

    def on_exit(self) -> None:
        super().on_exit()
        self.sell_list = None
        self._restrictions = None

    def create_sell_list(self) -> ShopSellList:
        if self._restrictions is not None:
            logger.info("Shop buys only: %s", self._restrictions.to_dict())
        return ShopSellList(self.party.inventory, self._restrictions, log_checks=self._log_checks)

    @staticmethod
    def selling_price(entry: SellableEntry) -> int:
        return entry.price // 2

    def sell(self, entry: SellableEntry, qty: int = 1) -> int:
        """Sell ``qty`` of ``entry`` to the shop and return the gold received."""
        if self.sell_list is None:
            raise SellRejectedError("Shop is not open")
        if self.purchase_only:
            raise SellRejectedError("This shop does not buy from the party")
        if not self.sell_list.is_enabled(entry):
            raise SellRejectedError(f"The shop will not buy {entry.name}")
        self.party.inventory.remove(entry, qty)
        gold = self.selling_price(entry) * qty
        self.party.gain_gold(gold)
        logger.info("Sold %d x %s for %d gold", qty, entry.name, gold)
        return gold
