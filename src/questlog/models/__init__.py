"""Data models for Questlog."""

from questlog.models.game import (
    CamelModel,
    GameRecord,
    GameStatus,
    Genre,
    Platform,
    normalize_genre,
    normalize_platform,
)
from questlog.models.gamification import (
    STATE_VERSION,
    AchievementCounters,
    AchievementDefinition,
    AchievementState,
    ClaimResult,
    LevelState,
    LoginCheck,
    LoginReward,
    LoginStreakState,
    ReconcileResult,
    ShopItem,
    ShopItemType,
    ShopResult,
    ShopState,
    Tier,
    UnlockNotification,
    UnlockRecord,
    UserProfile,
    XPAward,
)

__all__ = [
    # Library
    "CamelModel",
    "GameRecord",
    "GameStatus",
    "Genre",
    "Platform",
    "normalize_genre",
    "normalize_platform",
    # Gamification
    "STATE_VERSION",
    "AchievementCounters",
    "AchievementDefinition",
    "AchievementState",
    "ClaimResult",
    "LevelState",
    "LoginCheck",
    "LoginReward",
    "LoginStreakState",
    "ReconcileResult",
    "Tier",
    "UnlockNotification",
    "UnlockRecord",
    "UserProfile",
    "XPAward",
    # Shop
    "ShopItem",
    "ShopItemType",
    "ShopResult",
    "ShopState",
]
