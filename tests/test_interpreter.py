import json

import pytest

from shop_restrictions.config.loader import ShopRestrictionSettings, load_settings
from shop_restrictions.exceptions import ParseError, SellRejectedError
from shop_restrictions.interpreter.commands import (
    PLUGIN_COMMAND,
    PLUGIN_COMMAND_TEXT,
    SHOP_GOODS_CONTINUATION,
    SHOP_PROCESSING,
    EventCommand,
)
from shop_restrictions.interpreter.interpreter import Interpreter
from shop_restrictions.items.models import ItemKind, SellableEntry
from shop_restrictions.party.party import Party
from shop_restrictions.restrictions.models import RestrictionSet
from shop_restrictions.scenes.manager import SceneManager
from shop_restrictions.shop.models import ShopGood
from shop_restrictions.shop.scene import ShopScene

POTION = SellableEntry(id=1, name="Potion", kind=ItemKind.ITEM, price=50, item_type_id=1)
SWORD = SellableEntry(id=1, name="Sword", kind=ItemKind.WEAPON, price=500, weapon_type_id=2, equipment_type_id=1)


def text_command(text):
    return EventCommand(PLUGIN_COMMAND_TEXT, [text])


def structured_command(fields, plugin="LWP_WhatShopCanBuy", command="buy_only"):
    return EventCommand(PLUGIN_COMMAND, [plugin, command, "Buy only these items", {"restrictions": json.dumps(fields)}])


def shop_command(item_id=1, purchase_only=False):
    return EventCommand(SHOP_PROCESSING, [0, item_id, 0, 0, purchase_only])


def make_interpreter(in_battle=False):
    party = Party(in_battle=in_battle)
    party.inventory.add(POTION, 2)
    party.inventory.add(SWORD)
    return Interpreter(SceneManager(), party)


def run(interp, commands):
    interp.setup(commands, event_id=1)
    interp.run()


def test_token_declaration_reaches_next_shop():
    interp = make_interpreter()
    run(interp, [text_command("BUY_ONLY wt2 health"), shop_command()])
    scene = interp.scene_manager.current
    assert isinstance(scene, ShopScene)
    assert scene.restrictions == RestrictionSet(weapon_type_ids={2}, tags={"health"})
    assert not interp.registry.is_pending()
    assert [line.entry.name for line in scene.sell_list.items()] == ["Sword"]


def test_restriction_applies_to_one_shop_only():
    interp = make_interpreter()
    run(interp, [text_command("BUY_ONLY i1"), shop_command(), shop_command()])
    first, second = interp.scene_manager.scenes
    assert first.restrictions == RestrictionSet(item_ids={1})
    assert second.restrictions is None


def test_last_declaration_wins():
    interp = make_interpreter()
    run(interp, [text_command("BUY_ONLY i1"), text_command("buy_only w1"), shop_command()])
    assert interp.scene_manager.current.restrictions == RestrictionSet(weapon_ids={1})


def test_shop_without_declaration_is_unrestricted():
    interp = make_interpreter()
    run(interp, [shop_command()])
    scene = interp.scene_manager.current
    assert scene.restrictions is None
    assert len(scene.sell_list.items()) == 2


def test_structured_declaration():
    interp = make_interpreter()
    run(interp, [structured_command({"itemId": '["1"]', "meta": ""}), shop_command()])
    assert interp.scene_manager.current.restrictions == RestrictionSet(item_ids={1})


def test_other_plugin_commands_are_ignored():
    interp = make_interpreter()
    run(interp, [
        text_command("SHOW_PICTURE 1"),
        structured_command({"itemId": "[1]"}, plugin="OtherPlugin"),
        shop_command(),
    ])
    assert interp.scene_manager.current.restrictions is None


def test_goods_continuation_lines_are_collected():
    interp = make_interpreter()
    run(interp, [
        shop_command(item_id=1, purchase_only=True),
        EventCommand(SHOP_GOODS_CONTINUATION, [1, 1, 1, 99]),
        EventCommand(SHOP_GOODS_CONTINUATION, [2, 3, 0, 0]),
    ])
    scene = interp.scene_manager.current
    assert scene.purchase_only
    assert scene.goods == (
        ShopGood(ItemKind.ITEM, 1),
        ShopGood(ItemKind.WEAPON, 1, price=99),
        ShopGood(ItemKind.ARMOR, 3),
    )
    assert len(interp.scene_manager) == 1


def test_shop_in_battle_is_skipped_and_keeps_restrictions():
    interp = make_interpreter(in_battle=True)
    run(interp, [text_command("BUY_ONLY i1"), shop_command()])
    assert interp.scene_manager.current is None
    assert interp.registry.pending == RestrictionSet(item_ids={1})


def test_parse_error_leaves_registry_unchanged():
    interp = make_interpreter()
    interp.setup([text_command("BUY_ONLY i1"), structured_command({"weaponId": "[oops"})])
    with pytest.raises(ParseError):
        interp.run()
    assert interp.registry.pending == RestrictionSet(item_ids={1})


def test_setup_resets_pending_restrictions():
    interp = make_interpreter()
    run(interp, [text_command("BUY_ONLY i1")])
    assert interp.registry.is_pending()
    run(interp, [shop_command()])
    assert interp.scene_manager.current.restrictions is None


def test_interpreters_do_not_share_registries():
    a = make_interpreter()
    b = Interpreter(a.scene_manager, a.party)
    run(a, [text_command("BUY_ONLY i1")])
    run(b, [shop_command()])
    assert a.scene_manager.current.restrictions is None
    assert a.registry.is_pending()


def test_custom_command_name():
    party = Party()
    interp = Interpreter(SceneManager(), party, ShopRestrictionSettings(command_name="sell_filter"))
    run(interp, [text_command("BUY_ONLY i1"), text_command("SELL_FILTER w1"), shop_command()])
    assert interp.scene_manager.current.restrictions == RestrictionSet(weapon_ids={1})


def test_selling_through_a_restricted_shop():
    interp = make_interpreter()
    run(interp, [text_command("BUY_ONLY i1"), shop_command()])
    scene = interp.scene_manager.current
    assert scene.sell(POTION) == 25
    assert interp.party.gold == 25
    assert interp.party.inventory.quantity(POTION) == 1
    with pytest.raises(SellRejectedError):
        scene.sell(SWORD)
    assert interp.party.inventory.quantity(SWORD) == 1


def test_purchase_only_shop_refuses_sales():
    interp = make_interpreter()
    run(interp, [shop_command(purchase_only=True)])
    with pytest.raises(SellRejectedError):
        interp.scene_manager.current.sell(POTION)


def test_scene_exit_drops_restrictions():
    interp = make_interpreter()
    run(interp, [text_command("BUY_ONLY i1"), shop_command()])
    scene = interp.scene_manager.pop()
    assert scene.restrictions is None
    assert scene.sell_list is None
    with pytest.raises(SellRejectedError):
        scene.sell(POTION)


def test_default_settings_come_from_bundled_yaml():
    interp = Interpreter(SceneManager(), Party())
    assert interp.settings == load_settings()
    assert interp.settings.plugin_name == "LWP_WhatShopCanBuy"


def test_bundled_settings_are_read_by_default(monkeypatch):
    import shop_restrictions.interpreter.interpreter as interpreter_module

    monkeypatch.setattr(interpreter_module, "load_settings",
                        lambda: ShopRestrictionSettings(command_name="sell_filter"))
    interp = Interpreter(SceneManager(), Party())
    run(interp, [text_command("SELL_FILTER w1"), shop_command()])
    assert interp.scene_manager.current.restrictions == RestrictionSet(weapon_ids={1})


def test_user_yaml_command_name_reaches_interpreter(tmp_path):
    p = tmp_path / "settings.yaml"
    p.write_text("command_name: sell_filter\n", encoding="utf-8")
    interp = Interpreter(SceneManager(), Party(), load_settings(str(p)))
    run(interp, [text_command("BUY_ONLY i1"), text_command("SELL_FILTER a3"), shop_command()])
    assert interp.scene_manager.current.restrictions == RestrictionSet(armor_ids={3})


def test_structured_command_from_existing_event_data():
    interp = make_interpreter()
    run(interp, [structured_command({"weaponId": '["1"]'}, plugin="LWP_WhatShopCanBuy"), shop_command()])
    assert interp.scene_manager.current.restrictions == RestrictionSet(weapon_ids={1})


def test_popping_the_shop_returns_the_closed_session():
    manager = SceneManager()
    assert manager.pop() is None
    interp = Interpreter(manager, Party())
    run(interp, [shop_command()])
    scene = manager.current
    assert manager.scenes == (scene,)
    assert manager.pop() is scene
    assert scene.manager is None
    assert len(manager) == 0
