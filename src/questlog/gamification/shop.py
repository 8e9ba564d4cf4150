"""Cosmetic shop paid for with achievement score and login coins."""

import logging
from typing import Callable

from questlog.models import ShopItem, ShopItemType, ShopResult, ShopState
from questlog.storage import Storage

logger = logging.getLogger(__name__)

T, F, C, BG = (
    ShopItemType.THEME,
    ShopItemType.FRAME,
    ShopItemType.CARD_STYLE,
    ShopItemType.BACKGROUND,
)

SHOP_ITEMS: tuple[ShopItem, ...] = (
    # Themes
    ShopItem(
        id="theme_default", type=T, name="Original Blue", price=0,
        description="The classic look.", value="blue",
    ),
    ShopItem(
        id="theme_emerald", type=T, name="Matrix Emerald", price=50,
        description="Enter the matrix.", value="emerald",
    ),
    ShopItem(
        id="theme_orange", type=T, name="Sunset Orange", price=50,
        description="Warm and energetic.", value="orange",
    ),
    ShopItem(
        id="theme_rose", type=T, name="Rose Pink", price=50,
        description="Soft and elegant.", value="pink",
    ),
    ShopItem(
        id="theme_midnight", type=T, name="Midnight Purple", price=50,
        description="Deep purple vibes.", value="purple",
    ),
    ShopItem(
        id="theme_dracula", type=T, name="Vampire Red", price=50,
        description="Dark and bloody.", value="red",
    ),
    ShopItem(
        id="theme_lime", type=T, name="Toxic Lime", price=50,
        description="Radioactive green.", value="lime",
    ),
    ShopItem(
        id="theme_teal", type=T, name="Abyss Teal", price=50,
        description="From the depths.", value="teal",
    ),
    ShopItem(
        id="theme_indigo", type=T, name="Deep Indigo", price=50,
        description="Night sky.", value="indigo",
    ),
    ShopItem(
        id="theme_fuchsia", type=T, name="Neon Fuchsia", price=50,
        description="Retrowave vibes.", value="fuchsia",
    ),
    ShopItem(
        id="theme_cyberpunk", type=T, name="Cyberpunk Neon", price=50,
        description="High contrast pink and cyan.", value="cyberpunk",
    ),
    ShopItem(
        id="theme_royal", type=T, name="Royal Gold", price=50,
        description="Luxury for the elite.", value="gold",
    ),
    ShopItem(
        id="theme_brown", type=T, name="Coffee Brown", price=50,
        description="Earthy and grounded.", value="brown",
    ),
    ShopItem(
        id="theme_white", type=T, name="Clean White", price=50,
        description="Minimalist bright.", value="white",
    ),
    ShopItem(
        id="theme_black", type=T, name="Stealth Black", price=50,
        description="Dark mode supreme.", value="black",
    ),
    # Frames
    ShopItem(
        id="frame_default", type=F, name="No Frame", price=0,
        description="Clean and simple.",
    ),
    ShopItem(
        id="frame_gold", type=F, name="Golden Ring", price=80,
        description="A solid gold border.", value="gold_ring",
    ),
    ShopItem(
        id="frame_nature", type=F, name="Forest", price=80,
        description="Natural double border.", value="nature",
    ),
    ShopItem(
        id="frame_ice", type=F, name="Frost", price=80,
        description="Cold as ice.", value="ice",
    ),
    ShopItem(
        id="frame_neon_blue", type=F, name="Neon Blue", price=80,
        description="Glowing blue energy.", value="neon_blue",
    ),
    ShopItem(
        id="frame_neon_pink", type=F, name="Neon Pink", price=80,
        description="Glowing pink energy.", value="neon_pink",
    ),
    ShopItem(
        id="frame_glitch", type=F, name="System Error", price=80,
        description="Digital corruption.", value="glitch",
    ),
    ShopItem(
        id="frame_fire", type=F, name="Inferno", price=80,
        description="Animated fire effect.", value="fire",
    ),
    ShopItem(
        id="frame_rainbow", type=F, name="Prism", price=80,
        description="Taste the rainbow.", value="rainbow",
    ),
    ShopItem(
        id="frame_lightning", type=F, name="Thunder God", price=80,
        description="Wield the storm.", value="lightning",
    ),
    ShopItem(
        id="frame_cosmos", type=F, name="Cosmic Void", price=80,
        description="Stardust and mystery.", value="cosmos",
    ),
    # Card styles
    ShopItem(
        id="style_default", type=C, name="Standard Window", price=0,
        description="Clean and readable.",
    ),
    ShopItem(
        id="style_holo", type=C, name="Holo Foil", price=100,
        description="Shiny rainbow finish.", value="holo",
    ),
    ShopItem(
        id="style_gold", type=C, name="Golden Plate", price=100,
        description="Solid gold coating.", value="gold",
    ),
    ShopItem(
        id="style_cyber", type=C, name="Cyberpunk", price=100,
        description="Neon & Grid vibes.", value="cyber",
    ),
    ShopItem(
        id="style_retro", type=C, name="Retro Terminal", price=100,
        description="Green phosphor scanlines.", value="retro",
    ),
    ShopItem(
        id="style_fire", type=C, name="Inferno", price=100,
        description="Burning hot.", value="fire",
    ),
    ShopItem(
        id="style_glitter", type=C, name="Stardust", price=100,
        description="Sparkle sparkle.", value="glitter",
    ),
    ShopItem(
        id="style_spotlight", type=C, name="Cinema", price=100,
        description="You are the star.", value="spotlight",
    ),
    ShopItem(
        id="style_prism", type=C, name="Prism", price=100,
        description="Animated rgb border.", value="prism",
    ),
    ShopItem(
        id="style_glitch", type=C, name="Glitch", price=100,
        description="Unstable signal.", value="glitch",
    ),
    # Backgrounds
    ShopItem(
        id="bg_default", type=BG, name="Deep Void", price=0,
        description="Standard dark mode.",
    ),
    ShopItem(
        id="bg_stars", type=BG, name="Starfield", price=100,
        description="Lost in space.", value="stars",
    ),
    ShopItem(
        id="bg_grid", type=BG, name="Retro Grid", price=100,
        description="Synthwave horizon.", value="grid",
    ),
    ShopItem(
        id="bg_matrix", type=BG, name="The Matrix", price=100,
        description="Wake up, Neo.", value="matrix",
    ),
    ShopItem(
        id="bg_hex", type=BG, name="Hex Core", price=100,
        description="Geometric perfection.", value="hex",
    ),
    ShopItem(
        id="bg_aurora", type=BG, name="Northern Lights", price=100,
        description="Real aurora effects.", value="aurora",
    ),
    ShopItem(
        id="bg_pulse", type=BG, name="Cyber Pulse", price=100,
        description="Living digital network.", value="pulse",
    ),
    ShopItem(
        id="bg_dots", type=BG, name="Polka Dots", price=100,
        description="Subtle pattern.", value="dots",
    ),
    ShopItem(
        id="bg_circuit", type=BG, name="Circuit Board", price=100,
        description="Digital pathways.", value="circuit",
    ),
)

SHOP_ITEMS_BY_ID = {item.id: item for item in SHOP_ITEMS}

_EQUIP_FIELDS = {
    T: "equipped_theme",
    F: "equipped_frame",
    C: "equipped_card_style",
    BG: "equipped_background",
}


class Shop:
    """Wallet and inventory.

    Balance is achievement score plus credited coins minus what has been
    spent. Revoking a claimed achievement lowers the balance, which may go
    negative; owned items are never taken back.
    """

    def __init__(self, storage: Storage, score: Callable[[], int], state: ShopState | None = None):
        self.storage = storage
        self._score = score
        self.state = state if state is not None else storage.load_shop()

    def _save(self) -> None:
        self.storage.save_shop(self.state)

    @property
    def coins(self) -> int:
        return self.state.coins

    def total_spent(self) -> int:
        return sum(
            SHOP_ITEMS_BY_ID[item_id].price
            for item_id in self.state.owned_items
            if item_id in SHOP_ITEMS_BY_ID
        )

    def balance(self) -> int:
        return self._score() + self.state.coins - self.total_spent()

    def add_coins(self, amount: int) -> int:
        self.state.coins += amount
        self._save()
        logger.info(f"Credited {amount} coins (wallet: {self.state.coins})")
        return self.state.coins

    def is_owned(self, item_id: str) -> bool:
        item = SHOP_ITEMS_BY_ID.get(item_id)
        if item and item.price == 0:
            return True
        return item_id in self.state.owned_items

    def buy_item(self, item_id: str) -> ShopResult:
        item = SHOP_ITEMS_BY_ID.get(item_id)
        if item is None:
            return ShopResult(success=False, message="Item not found")
        if self.is_owned(item_id):
            return ShopResult(success=False, message="Already owned")
        if self.balance() < item.price:
            return ShopResult(success=False, message="Not enough coins")

        self.state.owned_items.append(item_id)
        self._save()
        logger.info(f"Purchased {item_id} for {item.price}")
        return ShopResult(success=True, message=f"Purchased {item.name}!")

    def equip_item(self, item_id: str) -> ShopResult:
        item = SHOP_ITEMS_BY_ID.get(item_id)
        if item is None or not self.is_owned(item_id):
            return ShopResult(success=False, message="Item not owned")

        setattr(self.state, _EQUIP_FIELDS[item.type], item_id)
        self._save()
        return ShopResult(success=True, message="Equipped!")

    def equipped(self, item_type: ShopItemType) -> ShopItem:
        item_id = getattr(self.state, _EQUIP_FIELDS[item_type])
        default = next(i for i in SHOP_ITEMS if i.type == item_type and i.price == 0)
        return SHOP_ITEMS_BY_ID.get(item_id, default)
