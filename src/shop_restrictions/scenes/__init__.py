from .base import BaseScene
from .manager import SceneManager

__all__ = [
    "BaseScene",
    "SceneManager",
]
