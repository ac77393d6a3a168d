import logging

import pytest

from shop_restrictions.items.models import ItemKind, SellableEntry
from shop_restrictions.party.inventory import PartyInventory
from shop_restrictions.restrictions.models import RestrictionSet
from shop_restrictions.shop.sell_list import ShopSellList

POTION = SellableEntry(id=1, name="Potion", kind=ItemKind.ITEM, price=50, item_type_id=1)
KEY = SellableEntry(id=2, name="Old Key", kind=ItemKind.ITEM, price=0, item_type_id=2)
SWORD = SellableEntry(id=1, name="Sword", kind=ItemKind.WEAPON, price=500, weapon_type_id=2, equipment_type_id=1)
RING = SellableEntry(id=1, name="Ring", kind=ItemKind.ARMOR, price=300, armor_type_id=1,
                     equipment_type_id=5, markers={"shiny": True})


def make_inventory() -> PartyInventory:
    inv = PartyInventory()
    inv.add(RING)
    inv.add(SWORD)
    inv.add(POTION, 3)
    inv.add(KEY)
    return inv


def names(lines):
    return [line.entry.name for line in lines]


def test_unrestricted_lists_everything_in_order():
    sell = ShopSellList(make_inventory())
    assert names(sell.items()) == ["Potion", "Old Key", "Sword", "Ring"]
    # Zero-price entries are listed but cannot be sold
    assert names(sell.enabled_items()) == ["Potion", "Sword", "Ring"]


def test_restricted_list_hides_and_disables_the_same_entries():
    sell = ShopSellList(make_inventory(), RestrictionSet(equipment_type_ids={5}, item_ids={1}))
    assert names(sell.items()) == ["Potion", "Ring"]
    assert sell.is_enabled(RING)
    assert not sell.is_enabled(SWORD)
    assert not sell.includes(SWORD)


def test_empty_restrictions_list_nothing():
    sell = ShopSellList(make_inventory(), RestrictionSet())
    assert sell.items() == []


def test_categories():
    sell = ShopSellList(make_inventory(), category="item")
    assert names(sell.items()) == ["Potion"]
    sell.set_category("key_item")
    assert names(sell.items()) == ["Old Key"]
    sell.set_category("weapon")
    assert names(sell.items()) == ["Sword"]
    sell.set_category("armor")
    assert names(sell.items()) == ["Ring"]


def test_unknown_category_raises():
    with pytest.raises(ValueError):
        ShopSellList(PartyInventory(), category="spells")


def test_log_checks(caplog):
    caplog.set_level(logging.DEBUG, logger="shop_restrictions.shop.sell_list")
    sell = ShopSellList(make_inventory(), RestrictionSet(tags={"shiny"}), log_checks=True)
    assert names(sell.items()) == ["Ring"]
    assert any("Sell check" in rec.message for rec in caplog.records)


def test_inventory_quantities():
    inv = make_inventory()
    assert inv.quantity(POTION) == 3
    inv.remove(POTION, 3)
    assert inv.quantity(POTION) == 0
    assert len(inv) == 3
    with pytest.raises(ValueError):
        inv.remove(POTION)
