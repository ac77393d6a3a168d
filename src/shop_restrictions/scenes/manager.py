from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .base import BaseScene

logger = logging.getLogger(__name__)


class SceneManager:
    """Scenes opened by event commands, newest last.

    The interpreter opens a ShopScene for every shop command it runs. Popping
    that scene ends the shop session, which releases the restriction set it
    was handed; the popped scene is returned so callers can inspect it.
    """

    def __init__(self) -> None:
        self._scenes: List[BaseScene] = []

    def push(self, scene: BaseScene) -> None:
        scene.manager = self
        self._scenes.append(scene)
        scene.on_enter()
        logger.debug("Opened %s (%d open)", type(scene).__name__, len(self._scenes))

    def pop(self) -> Optional[BaseScene]:
        """Close the newest scene, or return None when nothing is open."""
        if not self._scenes:
            return None
        scene = self._scenes.pop()
        scene.on_exit()
        scene.manager = None
        logger.debug("Closed %s (%d open)", type(scene).__name__, len(self._scenes))
        return scene

    @property
    def current(self) -> Optional[BaseScene]:
        return self._scenes[-1] if self._scenes else None

    @property
    def scenes(self) -> Tuple[BaseScene, ...]:
        return tuple(self._scenes)

    def __len__(self) -> int:
        return len(self._scenes)
