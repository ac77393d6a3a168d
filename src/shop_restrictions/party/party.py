from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .inventory import PartyInventory

logger = logging.getLogger(__name__)


@dataclass
class Party:
    """The player's party as seen by shop commands.

    Shops cannot be opened while ``in_battle`` is set.
    """

    inventory: PartyInventory = field(default_factory=PartyInventory)
    gold: int = 0
    in_battle: bool = False

    def gain_gold(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("amount must be non-negative")
        self.gold += amount
        logger.debug("Party gold +%d -> %d", amount, self.gold)
