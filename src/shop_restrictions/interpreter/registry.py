from __future__ import annotations

import logging
from typing import Optional

from ..restrictions.models import RestrictionSet

logger = logging.getLogger(__name__)


class PendingRestrictionRegistry:
    """Holds at most one restriction set waiting for the next shop.

    A declaration always replaces whatever was pending; restrictions do not
    stack. Consuming returns the pending set and leaves the registry empty,
    so a second shop opened without a new declaration is unrestricted.
    """

    def __init__(self) -> None:
        self._pending: Optional[RestrictionSet] = None

    @property
    def pending(self) -> Optional[RestrictionSet]:
        return self._pending

    def is_pending(self) -> bool:
        return self._pending is not None

    def declare(self, restrictions: RestrictionSet) -> None:
        if self._pending is not None:
            logger.debug("Replacing pending shop restrictions")
        self._pending = restrictions
        logger.info("Next shop buys only: %s", restrictions.to_dict())

    def consume_if_present(self) -> Optional[RestrictionSet]:
        restrictions, self._pending = self._pending, None
        if restrictions is not None:
            logger.debug("Consumed pending shop restrictions")
        return restrictions

    def reset(self) -> None:
        self._pending = None
