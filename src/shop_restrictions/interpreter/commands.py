from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

# Event command codes handled by the interpreter
SHOP_PROCESSING = 302
PLUGIN_COMMAND_TEXT = 356
PLUGIN_COMMAND = 357
SHOP_GOODS_CONTINUATION = 605


@dataclass(frozen=True)
class EventCommand:
    code: int
    parameters: List[Any] = field(default_factory=list, hash=False)
    indent: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "EventCommand":
        return cls(code=int(data["code"]), parameters=list(data.get("parameters", [])), indent=int(data.get("indent", 0)))
