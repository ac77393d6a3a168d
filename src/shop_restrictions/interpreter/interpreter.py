from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..config.loader import ShopRestrictionSettings, load_settings
from ..party.party import Party
from ..restrictions.parser import parse_command_args, parse_tokens
from ..scenes.manager import SceneManager
from ..shop.models import ShopGood
from ..shop.scene import ShopScene
from .commands import (
    PLUGIN_COMMAND,
    PLUGIN_COMMAND_TEXT,
    SHOP_GOODS_CONTINUATION,
    SHOP_PROCESSING,
    EventCommand,
)
from .registry import PendingRestrictionRegistry

logger = logging.getLogger(__name__)


class Interpreter:
    """Runs one event's command list.

    Each interpreter owns its own restriction registry, so a restriction
    declared by one event only reaches a shop opened by that same event.
    Without explicit settings the bundled YAML settings are loaded.
    """

    def __init__(
        self,
        scene_manager: SceneManager,
        party: Party,
        settings: Optional[ShopRestrictionSettings] = None,
    ) -> None:
        self.scene_manager = scene_manager
        self.party = party
        self.settings = settings or load_settings()
        self.registry = PendingRestrictionRegistry()
        self.event_id = 0
        self._list: List[EventCommand] = []
        self._index = 0
        self._handlers: Dict[int, Callable[[Sequence], None]] = {
            SHOP_PROCESSING: self.command_shop,
            PLUGIN_COMMAND_TEXT: self.command_plugin_text,
            PLUGIN_COMMAND: self.command_plugin,
        }

    def setup(self, commands: Iterable[EventCommand], event_id: int = 0) -> None:
        self._list = list(commands)
        self._index = 0
        self.event_id = event_id
        self.registry.reset()
        logger.debug("Interpreter set up for event %s (%d commands)", event_id, len(self._list))

    def is_running(self) -> bool:
        return self._index < len(self._list)

    def current_command(self) -> Optional[EventCommand]:
        return self._list[self._index] if self.is_running() else None

    def next_event_code(self) -> Optional[int]:
        nxt = self._index + 1
        return self._list[nxt].code if nxt < len(self._list) else None

    def run(self) -> None:
        while self.is_running():
            self.execute_command(self._list[self._index])
            self._index += 1

    def execute_command(self, command: EventCommand) -> None:
        handler = self._handlers.get(command.code)
        if handler is None:
            logger.debug("Skipping event command %s", command.code)
            return
        handler(command.parameters)

    # ---------------------- Plugin commands ----------------------
    def command_plugin_text(self, params: Sequence) -> None:
        """Text plugin command: ``<COMMAND> arg arg ...``."""
        words = str(params[0]).split() if params else []
        if not words:
            return
        self.plugin_command(words[0], words[1:])

    def plugin_command(self, command: str, args: Sequence[str]) -> None:
        if self.settings.command_name.lower() not in command.lower():
            logger.debug("Ignoring plugin command %s", command)
            return
        self.registry.declare(parse_tokens(args))

    def command_plugin(self, params: Sequence) -> None:
        """Structured plugin command: ``[plugin, command, label, args]``."""
        plugin_name, command_name = params[0], params[1]
        if plugin_name != self.settings.plugin_name or command_name != self.settings.command_name:
            logger.debug("Ignoring plugin command %s/%s", plugin_name, command_name)
            return
        args = params[3] if len(params) > 3 else {}
        self.registry.declare(parse_command_args(args))

    # ---------------------- Shop ----------------------
    def command_shop(self, params: Sequence) -> None:
        goods = [ShopGood.from_params(params)]
        while self.next_event_code() == SHOP_GOODS_CONTINUATION:
            self._index += 1
            goods.append(ShopGood.from_params(self._list[self._index].parameters))

        if self.party.in_battle:
            logger.info("Shop skipped during battle (event %s)", self.event_id)
            return

        restrictions = self.registry.consume_if_present()
        purchase_only = bool(params[4]) if len(params) > 4 else False
        scene = ShopScene(
            self.party,
            goods,
            purchase_only=purchase_only,
            restrictions=restrictions,
            log_checks=self.settings.log_restrictions,
        )
        self.scene_manager.push(scene)
