"""
Gamification for Questlog

- XP and leveling curve with titles
- Achievement catalog and strict reconciliation
- Daily login streak and reward ladder
- Cosmetic shop
"""

from questlog.gamification.achievements import AchievementEngine
from questlog.gamification.catalog import ACHIEVEMENTS, CATALOG_VERSION, get_achievement
from questlog.gamification.daily_login import DailyLoginEngine, reward_for_streak
from questlog.gamification.leveling import (
    LevelingEngine,
    level_for_xp,
    progress_percent,
    title_for_level,
    xp_for_level,
)
from questlog.gamification.notifications import UnlockNotificationQueue
from questlog.gamification.shop import SHOP_ITEMS, Shop
from questlog.gamification.snapshot import LibrarySnapshot

__all__ = [
    "ACHIEVEMENTS",
    "CATALOG_VERSION",
    "SHOP_ITEMS",
    "AchievementEngine",
    "DailyLoginEngine",
    "LevelingEngine",
    "LibrarySnapshot",
    "Shop",
    "UnlockNotificationQueue",
    "get_achievement",
    "level_for_xp",
    "progress_percent",
    "reward_for_streak",
    "title_for_level",
    "xp_for_level",
]
