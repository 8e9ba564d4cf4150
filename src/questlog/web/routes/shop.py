"""Shop routes - inventory, purchases and equipment."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from questlog.gamification import SHOP_ITEMS
from questlog.models import ShopItem, ShopResult

router = APIRouter(prefix="/shop")


class ShopListing(ShopItem):
    owned: bool
    equipped: bool


class ShopOverview(BaseModel):
    balance: int
    coins: int
    score: int
    items: list[ShopListing]


@router.get("", response_model=ShopOverview)
async def overview(request: Request):
    ql = request.app.state.quest_log
    shop = ql.shop
    items = [
        ShopListing(
            **item.model_dump(),
            owned=shop.is_owned(item.id),
            equipped=shop.equipped(item.type).id == item.id,
        )
        for item in SHOP_ITEMS
    ]
    return ShopOverview(
        balance=shop.balance(),
        coins=shop.coins,
        score=ql.achievements.score(),
        items=items,
    )


@router.post("/{item_id}/buy", response_model=ShopResult)
async def buy(request: Request, item_id: str):
    return request.app.state.quest_log.shop.buy_item(item_id)


@router.post("/{item_id}/equip", response_model=ShopResult)
async def equip(request: Request, item_id: str):
    return request.app.state.quest_log.shop.equip_item(item_id)
