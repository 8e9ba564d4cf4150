"""
XP and Leveling System

Leveling curve:
    level = floor((xp / 500) ** (1 / 1.2)) + 1
    xp needed for a level = ceil(500 * (level - 1) ** 1.2)

XP is a signed running total. Removing games or undoing a status change
deducts XP, so the total can go negative; every negative total is level 1
with 0% progress.
"""

import logging
import math

from questlog.config import LEVEL_BASE_XP, LEVEL_EXPONENT
from questlog.models import LevelState, UserProfile, XPAward
from questlog.storage import Storage

logger = logging.getLogger(__name__)

# Highest threshold first
TITLES = [
    (100, "Godlike Entity"),
    (95, "Architect of Fun"),
    (90, "Timeless One"),
    (85, "Reality Bender"),
    (80, "Ascended Being"),
    (75, "Avatar of Gaming"),
    (70, "High Score King"),
    (65, "Pixel Perfect"),
    (60, "8-Bit Emperor"),
    (55, "Console Conqueror"),
    (50, "Grandmaster"),
    (45, "Mythic Champion"),
    (40, "Legendary Hero"),
    (36, "Legend in the Making"),
    (32, "Hardcore Veteran"),
    (28, "Speedrunner"),
    (24, "Completionist"),
    (20, "Master of Worlds"),
    (16, "Rare Collector"),
    (13, "Boss Battler"),
    (10, "Elite Gamer"),
    (8, "Dungeon Crawler"),
    (5, "Quest Seeker"),
    (3, "Apprentice Hero"),
    (1, "Novice Adventurer"),
]


def xp_for_level(level: int) -> int:
    """Total XP at which ``level`` starts."""
    if level <= 1:
        return 0
    return math.ceil(LEVEL_BASE_XP * (level - 1) ** LEVEL_EXPONENT)


def level_for_xp(xp: float) -> int:
    """Level reached with ``xp`` total XP. Never below 1."""
    if not math.isfinite(xp) or xp <= 0:
        return 1
    level = math.floor((xp / LEVEL_BASE_XP) ** (1 / LEVEL_EXPONENT)) + 1

    # Float rounding can land one level off right at a threshold
    while xp_for_level(level + 1) <= xp:
        level += 1
    while level > 1 and xp_for_level(level) > xp:
        level -= 1
    return level


def progress_percent(xp: float) -> float:
    """Progress through the current level, 0-100."""
    level = level_for_xp(xp)
    start = xp_for_level(level)
    end = xp_for_level(level + 1)
    if end <= start:
        return 100.0
    if not math.isfinite(xp):
        return 0.0
    progress = (xp - start) / (end - start) * 100
    return min(100.0, max(0.0, progress))


def title_for_level(level: int) -> str:
    """Title for the highest threshold at or below ``level``."""
    for required, title in TITLES:
        if level >= required:
            return title
    return TITLES[-1][1]


def titles_for_level(level: int) -> list[str]:
    """All titles unlocked at ``level``, highest first."""
    return [title for required, title in TITLES if level >= required]


class LevelingEngine:
    """Owns the user's XP total and derived level."""

    def __init__(self, storage: Storage, profile: UserProfile | None = None):
        self.storage = storage
        self.profile = profile if profile is not None else storage.load_user()

    @property
    def xp(self) -> int:
        return self.profile.xp

    @property
    def level(self) -> int:
        return level_for_xp(self.profile.xp)

    def state(self) -> LevelState:
        level = self.level
        return LevelState(
            xp=self.profile.xp,
            level=level,
            progress_percent=round(progress_percent(self.profile.xp), 1),
            level_start_xp=xp_for_level(level),
            next_level_xp=xp_for_level(level + 1),
            title=self.display_title(),
        )

    def award_xp(self, amount: int, reason: str = "") -> XPAward:
        """Add (or, with a negative amount, deduct) XP."""
        old_total = self.profile.xp
        old_level = level_for_xp(old_total)

        self.profile.xp = old_total + amount
        self.storage.save_user(self.profile)

        award = XPAward(
            xp_awarded=amount,
            old_total_xp=old_total,
            new_total_xp=self.profile.xp,
            old_level=old_level,
            new_level=level_for_xp(self.profile.xp),
        )

        logger.info(
            f"{'Awarded' if amount >= 0 else 'Deducted'} {abs(amount)} XP"
            f"{f' for {reason}' if reason else ''}. "
            f"Total: {award.new_total_xp} XP, Level: {award.new_level}"
        )
        if award.leveled_up:
            logger.info(f"Leveled up from {award.old_level} to {award.new_level}!")
        elif award.new_level < award.old_level:
            logger.info(f"Dropped from level {award.old_level} to {award.new_level}")

        return award

    def available_titles(self) -> list[str]:
        return titles_for_level(self.level)

    def display_title(self) -> str:
        """Selected title override, or the title earned at the current level."""
        if self.profile.title and self.profile.title in self.available_titles():
            return self.profile.title
        return title_for_level(self.level)

    def select_title(self, title: str | None) -> bool:
        """Pick a display title. Only titles already earned are accepted."""
        if title is not None and title not in self.available_titles():
            logger.debug(f"Ignoring unavailable title {title!r}")
            return False
        self.profile.title = title
        self.storage.save_user(self.profile)
        return True

    def set_name(self, name: str) -> None:
        self.profile.name = name
        self.storage.save_user(self.profile)
