"""
Tests for the cosmetic shop wallet
"""

import json

import pytest

from questlog.gamification import Shop
from questlog.models import ShopItemType
from questlog.storage.local import SHOP_KEY


@pytest.fixture
def score():
    return {"value": 0}


@pytest.fixture
def shop(storage, score):
    return Shop(storage, score=lambda: score["value"])


def test_defaults_owned_and_equipped(shop):
    assert shop.is_owned("theme_default")
    assert shop.is_owned("bg_default")
    assert shop.equipped(ShopItemType.THEME).id == "theme_default"
    assert shop.balance() == 0


def test_balance_combines_score_and_coins(shop, score):
    score["value"] = 40
    shop.add_coins(15)
    assert shop.balance() == 55


def test_buy_item(shop, score, storage):
    score["value"] = 70

    result = shop.buy_item("theme_emerald")

    assert result.success is True
    assert result.message == "Purchased Matrix Emerald!"
    assert shop.total_spent() == 50
    assert shop.balance() == 20
    assert "theme_emerald" in storage.load_shop().owned_items


@pytest.mark.parametrize(
    "item_id,message",
    [
        ("nope", "Item not found"),
        ("theme_default", "Already owned"),
        ("bg_aurora", "Not enough coins"),
    ],
)
def test_buy_rejections(shop, item_id, message):
    result = shop.buy_item(item_id)
    assert result.success is False
    assert result.message == message


def test_buy_twice(shop, score):
    score["value"] = 500
    shop.buy_item("frame_fire")
    assert shop.buy_item("frame_fire").message == "Already owned"
    assert shop.total_spent() == 80


def test_equip(shop, score):
    assert shop.equip_item("style_holo").message == "Item not owned"

    score["value"] = 100
    shop.buy_item("style_holo")
    result = shop.equip_item("style_holo")

    assert result.success is True
    assert shop.equipped(ShopItemType.CARD_STYLE).id == "style_holo"


def test_revoked_score_can_go_negative(shop, score):
    score["value"] = 50
    shop.buy_item("theme_rose")
    score["value"] = 0

    assert shop.balance() == -50
    assert shop.is_owned("theme_rose")


def test_saved_shop_state_keeps_purchases(store, storage, score):
    store.set(
        SHOP_KEY,
        json.dumps({
            "ownedItems": ["theme_default", "frame_default", "style_default", "frame_neon_blue", "bg_matrix"],
            "equippedFrame": "frame_neon_blue",
            "equippedBackground": "bg_matrix",
            "coins": 0,
        }),
    )
    score["value"] = 200
    shop = Shop(storage, score=lambda: score["value"])

    assert shop.total_spent() == 180
    assert shop.balance() == 20
    assert shop.equipped(ShopItemType.FRAME).id == "frame_neon_blue"
    assert shop.equipped(ShopItemType.BACKGROUND).id == "bg_matrix"
