"""Data models for XP, achievements, daily logins and the shop."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from questlog.config import TIER_VALUES
from questlog.models.game import CamelModel, _ensure_naive_datetime

STATE_VERSION = 2


class Tier(str, Enum):
    """Achievement value classes."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"

    @property
    def points(self) -> int:
        return TIER_VALUES[self.value]


# =============================================================================
# Achievements
# =============================================================================


class AchievementDefinition(BaseModel):
    """Immutable catalog entry. ``predicate`` receives a LibrarySnapshot."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    tier: Tier
    icon: str = "Trophy"
    secret: bool = False  # cosmetic only
    predicate: Callable[[Any], bool] = Field(exclude=True, repr=False)

    @property
    def points(self) -> int:
        return self.tier.points


class UnlockRecord(CamelModel):
    """Persisted fact that an achievement is currently unlocked."""

    unlocked_at: datetime = Field(default_factory=datetime.now)
    claimed: bool = False  # only claimed records count toward score

    @field_validator("unlocked_at", mode="after")
    @classmethod
    def ensure_naive(cls, v: datetime) -> datetime:
        return _ensure_naive_datetime(v)


class AchievementCounters(CamelModel):
    """Usage counters the achievement predicates read."""

    quest_usage: int = 0
    exported: bool = False
    card_downloaded: bool = Field(default=False, alias="gamerCardDownloaded")


class AchievementState(CamelModel):
    """Everything the achievement engine persists, under one key."""

    version: int = STATE_VERSION
    unlocked: dict[str, UnlockRecord] = Field(default_factory=dict)
    counters: AchievementCounters = Field(default_factory=AchievementCounters)


class ReconcileResult(BaseModel):
    """Achievement ids that changed state during a reconciliation."""

    unlocked: list[str] = Field(default_factory=list)
    revoked: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.unlocked or self.revoked)


class UnlockNotification(BaseModel):
    """A queued "achievement unlocked" toast."""

    achievement_id: str
    title: str
    tier: Tier
    expires_at: float  # clock seconds


# =============================================================================
# XP and levels
# =============================================================================


class UserProfile(CamelModel):
    """Persisted user record. Holds the accumulated XP."""

    xp: int = 0  # may be negative after deductions
    name: str = "Guest"
    avatar: str | None = None
    title: str | None = None  # selected title override

    @field_validator("xp", mode="before")
    @classmethod
    def coerce_xp(cls, v):
        if v is None:
            return 0
        return int(v)

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        return v or "Guest"


class LevelState(BaseModel):
    """Derived view of the user's XP."""

    xp: int
    level: int
    progress_percent: float
    level_start_xp: int
    next_level_xp: int
    title: str


class XPAward(BaseModel):
    """Outcome of awarding (or deducting) XP."""

    xp_awarded: int
    old_total_xp: int
    new_total_xp: int
    old_level: int
    new_level: int

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


# =============================================================================
# Daily login
# =============================================================================


class LoginStreakState(CamelModel):
    """Persisted daily-login streak."""

    version: int = STATE_VERSION
    last_login_date: date | None = None
    current_streak: int = Field(default=0, ge=0)
    max_streak: int = Field(default=0, ge=0)
    claimed_today: bool = False

    @field_validator("last_login_date", mode="before")
    @classmethod
    def parse_login_date(cls, v):
        if v in ("", None):
            return None
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


class LoginCheck(BaseModel):
    """What claiming today would do."""

    today: date
    last_login_date: date | None
    streak: int
    already_claimed: bool


class LoginReward(BaseModel):
    """Coins and XP for one streak day. At most one of them is non-zero."""

    cycle_day: int
    coins: int = 0
    xp: int = 0


class ClaimResult(BaseModel):
    """Outcome of a daily login claim."""

    success: bool
    message: str = ""
    streak: int = 0
    coins: int = 0
    xp: int = 0


# =============================================================================
# Shop
# =============================================================================


class ShopItemType(str, Enum):
    THEME = "theme"
    FRAME = "frame"
    CARD_STYLE = "card_style"
    BACKGROUND = "background"


class ShopItem(BaseModel):
    """A cosmetic item in the shop catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: ShopItemType
    name: str
    price: int
    description: str = ""
    value: str = "none"


class ShopState(CamelModel):
    """Persisted shop state: owned items, equipped items and coins."""

    owned_items: list[str] = Field(
        default_factory=lambda: ["theme_default", "frame_default", "style_default"]
    )
    equipped_theme: str = "theme_default"
    equipped_frame: str = "frame_default"
    equipped_card_style: str = "style_default"
    equipped_background: str = "bg_default"
    coins: int = 0


class ShopResult(BaseModel):
    """Outcome of a purchase or equip action."""

    success: bool
    message: str
