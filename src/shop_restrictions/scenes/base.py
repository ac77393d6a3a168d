from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .manager import SceneManager

logger = logging.getLogger(__name__)


class BaseScene:
    """
    Base class for scenes pushed by the interpreter.

    Lifecycle hooks:
    - on_enter(): Called when scene is pushed onto the manager
    - on_exit(): Called when scene is popped from the manager
    """

    def __init__(self) -> None:
        self.manager: Optional["SceneManager"] = None  # set by SceneManager

    def on_enter(self) -> None:
        logger.debug("%s.on_enter", type(self).__name__)

    def on_exit(self) -> None:
        logger.debug("%s.on_exit", type(self).__name__)
