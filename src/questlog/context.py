"""Application state handle.

``QuestLog`` builds every engine from one Storage, wires the XP and coin
callbacks between them, and re-reconciles achievements after each change
that a predicate could observe.
"""

import logging
import random
from datetime import datetime
from typing import Any, Callable

from pydantic import BaseModel

from questlog.gamification import (
    AchievementEngine,
    DailyLoginEngine,
    LevelingEngine,
    LibrarySnapshot,
    Shop,
    UnlockNotificationQueue,
)
from questlog.library import GameLibrary
from questlog.models import (
    ClaimResult,
    GameRecord,
    GameStatus,
    LevelState,
    LoginCheck,
    ReconcileResult,
)
from questlog.rawg import CatalogGame
from questlog.storage import Storage

logger = logging.getLogger(__name__)


class ProfileSummary(BaseModel):
    """Everything the profile card shows."""

    name: str
    avatar: str | None = None
    level: LevelState
    achievements_unlocked: int
    achievements_total: int
    score: int
    coins: int
    balance: int
    current_streak: int
    max_streak: int
    games: int
    completed: int


class QuestLog:
    """One user's library and gamification state."""

    def __init__(
        self,
        storage: Storage | None = None,
        clock: Callable[[], datetime] = datetime.now,
        notifications: UnlockNotificationQueue | None = None,
    ):
        self.storage = storage or Storage()
        self.clock = clock
        if notifications is None:
            notifications = UnlockNotificationQueue()
        self.notifications = notifications
        self._load()
        self.refresh()

    def _load(self) -> None:
        self.leveling = LevelingEngine(self.storage)
        self.achievements = AchievementEngine(self.storage, notifications=self.notifications)
        self.shop = Shop(self.storage, score=self.achievements.score)
        self.daily_login = DailyLoginEngine(
            self.storage,
            award_xp=self.leveling.award_xp,
            add_coins=self.shop.add_coins,
        )
        self.library = GameLibrary(self.storage, award_xp=self.leveling.award_xp, clock=self.clock)

    # =========================================================================
    # Achievements
    # =========================================================================

    def snapshot(self) -> LibrarySnapshot:
        return LibrarySnapshot.build(
            self.library.games,
            level=self.leveling.level,
            counters=self.achievements.counters,
            best_streak=self.daily_login.state.max_streak,
            now=self.clock(),
        )

    def refresh(self) -> ReconcileResult:
        """Reconcile achievements with the current state."""
        return self.achievements.reconcile(self.snapshot())

    def track_action(self, action: str) -> bool:
        tracked = self.achievements.track_action(action)
        if tracked:
            self.refresh()
        return tracked

    def claim_achievement(self, achievement_id: str) -> bool:
        return self.achievements.claim(achievement_id)

    def claim_all_achievements(self) -> list[str]:
        return self.achievements.claim_all()

    # =========================================================================
    # Library
    # =========================================================================

    def add_game(self, game: GameRecord) -> bool:
        added = self.library.add_game(game)
        if added:
            self.refresh()
        return added

    def remove_game(self, game_id: str) -> GameRecord | None:
        removed = self.library.remove_game(game_id)
        if removed:
            self.refresh()
        return removed

    def set_status(self, game_id: str, status: GameStatus | str) -> bool:
        changed = self.library.set_status(game_id, status)
        if changed:
            self.refresh()
        return changed

    def set_rating(self, game_id: str, rating: int) -> bool:
        changed = self.library.set_rating(game_id, rating)
        if changed:
            self.refresh()
        return changed

    def apply_details(self, game_id: str, details: CatalogGame) -> bool:
        """Merge a catalog lookup into a library game."""
        changed = self.library.apply_details(
            game_id,
            title=details.name,
            genres=details.genres or None,
            release_date=details.released,
            background_image=details.background_image,
            playtime_hours=details.best_playtime,
        )
        if changed:
            self.refresh()
        return changed

    def quest(self, rng: random.Random | None = None) -> GameRecord | None:
        """Quest Giver: pick a random backlog game to play next."""
        backlog = self.library.by_status(GameStatus.BACKLOG)
        if not backlog:
            return None
        pick = (rng or random).choice(backlog)
        self.track_action("quest_use")
        logger.info(f"Quest Giver picked {pick.title}")
        return pick

    # =========================================================================
    # Daily login
    # =========================================================================

    def daily_status(self) -> LoginCheck:
        return self.daily_login.evaluate(self.clock())

    def claim_daily(self) -> ClaimResult:
        result = self.daily_login.claim(self.clock())
        if result.success:
            self.refresh()
        return result

    # =========================================================================
    # Profile & backup
    # =========================================================================

    def profile(self) -> ProfileSummary:
        user = self.leveling.profile
        return ProfileSummary(
            name=user.name,
            avatar=user.avatar,
            level=self.leveling.state(),
            achievements_unlocked=len(self.achievements.unlocked),
            achievements_total=len(self.achievements.catalog),
            score=self.achievements.score(),
            coins=self.shop.coins,
            balance=self.shop.balance(),
            current_streak=self.daily_login.state.current_streak,
            max_streak=self.daily_login.state.max_streak,
            games=len(self.library.games),
            completed=len(self.library.by_status(GameStatus.COMPLETED)),
        )

    def export_backup(self, write: Callable[[dict], None] | None = None) -> dict:
        """Full backup of persisted state. Counts as the ``export`` action.

        With ``write``, the action only sticks if ``write`` succeeds. An
        OSError from it restores the previous counters and re-raises.
        """
        counters_before = self.achievements.counters.model_copy()
        self.track_action("export")
        backup = self.storage.export_backup()
        if write is not None:
            try:
                write(backup)
            except OSError:
                self.achievements.restore_counters(counters_before)
                self.refresh()
                raise
        return backup

    def import_backup(self, data: Any) -> list[str]:
        """Restore a backup and rebuild every engine from it."""
        written = self.storage.import_backup(data)
        self._load()
        self.refresh()
        return written

    def reset(self) -> None:
        """Wipe all persisted state."""
        self.storage.clear_all()
        self.notifications.clear()
        self._load()
        logger.info("All data reset")
