from .commands import EventCommand
from .interpreter import Interpreter
from .registry import PendingRestrictionRegistry

__all__ = [
    "EventCommand",
    "Interpreter",
    "PendingRestrictionRegistry",
]
