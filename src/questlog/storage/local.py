"""Key-value storage for user data.

Every engine keeps its state as one JSON blob under a fixed key. The key names
and camelCase field names match the legacy browser layout so old backups keep
loading.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from questlog.config import get_data_dir
from questlog.models import (
    AchievementCounters,
    AchievementState,
    GameRecord,
    LoginStreakState,
    ShopState,
    UnlockRecord,
    UserProfile,
)

logger = logging.getLogger(__name__)

GAMES_KEY = "game-tracker-games"
USER_KEY = "game-tracker-user"
ACHIEVEMENTS_KEY = "game-tracker-achievements"
DAILY_LOGIN_KEY = "game-tracker-daily-login"
SHOP_KEY = "game-tracker-shop-v2"

# Legacy keys, folded into ACHIEVEMENTS_KEY on first load
LEGACY_ACHIEVEMENT_STATS_KEY = "game-tracker-achievements_stats"
LEGACY_QUEST_USAGE_KEY = "game-tracker-quest-usage"

BACKUP_VERSION = 2


class PersistedStateCorrupt(Exception):
    """A stored blob could not be parsed or validated."""

    pass


class KeyValueStore(Protocol):
    """Flat string key-value persistence."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """In-memory store, used in tests and for throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileKeyValueStore:
    """One file per key inside a data directory."""

    def __init__(self, data_dir: Path | str | None = None):
        self.data_dir = Path(data_dir) if data_dir else get_data_dir()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        with open(self._path(key), "w", encoding="utf-8") as f:
            f.write(value)

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class Storage:
    """Typed load/save of each engine's state on top of a key-value store."""

    def __init__(self, store: KeyValueStore | None = None):
        self.store = store if store is not None else FileKeyValueStore()

    # =========================================================================
    # Raw JSON helpers
    # =========================================================================

    def _read_json(self, key: str):
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistedStateCorrupt(f"{key}: {e}") from e

    def _write_json(self, key: str, data) -> None:
        self.store.set(key, json.dumps(data, default=str))

    def _load_model(self, key: str, model_cls, default_factory):
        try:
            data = self._read_json(key)
            if data is None:
                return default_factory()
            return model_cls.model_validate(data)
        except (PersistedStateCorrupt, ValidationError) as e:
            logger.warning(f"Stored state under '{key}' is corrupt, using defaults: {e}")
            return default_factory()

    # =========================================================================
    # Games
    # =========================================================================

    def load_games(self) -> list[GameRecord]:
        """Load the library. Unreadable entries are skipped."""
        try:
            data = self._read_json(GAMES_KEY)
        except PersistedStateCorrupt as e:
            logger.warning(f"Game library is corrupt, starting empty: {e}")
            return []
        if not isinstance(data, list):
            return []

        games = []
        for entry in data:
            try:
                games.append(GameRecord.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable game record: {e}")
        return games

    def save_games(self, games: list[GameRecord]) -> None:
        self._write_json(GAMES_KEY, [g.to_storage() for g in games])

    # =========================================================================
    # User profile (XP)
    # =========================================================================

    def load_user(self) -> UserProfile:
        return self._load_model(USER_KEY, UserProfile, UserProfile)

    def save_user(self, user: UserProfile) -> None:
        self._write_json(USER_KEY, user.to_storage())

    # =========================================================================
    # Achievements
    # =========================================================================

    def load_achievements(self) -> AchievementState:
        """Load the unlock map and counters, migrating the legacy layout.

        Version 1 stored a flat ``{id: unlockedAt}`` map (later
        ``{id: {unlockedAt, claimed}}``) with counters under separate keys.
        Plain timestamp values predate claiming and count as claimed.
        """
        try:
            data = self._read_json(ACHIEVEMENTS_KEY)
            if isinstance(data, dict) and "version" in data and "unlocked" in data:
                return AchievementState.model_validate(data)
            if data is None and not self._has_legacy_counters():
                return AchievementState()
            state = self._migrate_legacy_achievements(data or {})
        except (PersistedStateCorrupt, ValidationError, AttributeError) as e:
            logger.warning(f"Stored achievements are corrupt, starting empty: {e}")
            return AchievementState()

        logger.info(f"Migrated {len(state.unlocked)} achievements to version {state.version}")
        self.save_achievements(state)
        self.store.remove(LEGACY_ACHIEVEMENT_STATS_KEY)
        self.store.remove(LEGACY_QUEST_USAGE_KEY)
        return state

    def _has_legacy_counters(self) -> bool:
        return (
            self.store.get(LEGACY_ACHIEVEMENT_STATS_KEY) is not None
            or self.store.get(LEGACY_QUEST_USAGE_KEY) is not None
        )

    def _migrate_legacy_achievements(self, data: dict) -> AchievementState:
        unlocked = {}
        for achievement_id, value in data.items():
            if isinstance(value, str):
                unlocked[achievement_id] = UnlockRecord(unlocked_at=value, claimed=True)
            elif value is True:
                unlocked[achievement_id] = UnlockRecord(claimed=True)
            else:
                unlocked[achievement_id] = UnlockRecord.model_validate(value)

        counters = AchievementCounters()
        try:
            stats = self._read_json(LEGACY_ACHIEVEMENT_STATS_KEY)
            if isinstance(stats, dict):
                counters = AchievementCounters.model_validate(stats)
        except (PersistedStateCorrupt, ValidationError) as e:
            logger.warning(f"Ignoring corrupt legacy achievement stats: {e}")

        quest_usage = self.store.get(LEGACY_QUEST_USAGE_KEY)
        if quest_usage:
            try:
                counters.quest_usage = int(quest_usage)
            except ValueError:
                logger.warning(f"Ignoring corrupt legacy quest usage: {quest_usage!r}")

        return AchievementState(unlocked=unlocked, counters=counters)

    def save_achievements(self, state: AchievementState) -> None:
        self._write_json(ACHIEVEMENTS_KEY, state.to_storage())

    # =========================================================================
    # Daily login
    # =========================================================================

    def load_login_state(self) -> LoginStreakState:
        """Load the streak record. Records without a high-water mark get one."""
        state = self._load_model(DAILY_LOGIN_KEY, LoginStreakState, LoginStreakState)
        if state.max_streak < state.current_streak:
            state.max_streak = state.current_streak
        return state

    def save_login_state(self, state: LoginStreakState) -> None:
        self._write_json(DAILY_LOGIN_KEY, state.to_storage())

    # =========================================================================
    # Shop
    # =========================================================================

    def load_shop(self) -> ShopState:
        return self._load_model(SHOP_KEY, ShopState, ShopState)

    def save_shop(self, state: ShopState) -> None:
        self._write_json(SHOP_KEY, state.to_storage())

    # =========================================================================
    # Backup
    # =========================================================================

    def export_backup(self) -> dict:
        """Collect every persisted blob into one backup document."""

        def read(key: str, default):
            try:
                data = self._read_json(key)
            except PersistedStateCorrupt:
                logger.warning(f"Leaving corrupt '{key}' out of the backup")
                return default
            return default if data is None else data

        return {
            "version": BACKUP_VERSION,
            "timestamp": datetime.now().isoformat(),
            "games": read(GAMES_KEY, []),
            "user": read(USER_KEY, {}),
            "achievements": read(ACHIEVEMENTS_KEY, {}),
            "shop": read(SHOP_KEY, {}),
            "dailyLogin": read(DAILY_LOGIN_KEY, {}),
        }

    def import_backup(self, data) -> list[str]:
        """Restore a backup document. Returns the keys that were written.

        A bare list is the legacy games-only export.
        """
        if isinstance(data, list):
            self._write_json(GAMES_KEY, data)
            return [GAMES_KEY]

        if not isinstance(data, dict) or not (
            data.get("version") or data.get("games") or data.get("user")
        ):
            raise ValueError("Unknown file format")

        sections = {
            "games": GAMES_KEY,
            "user": USER_KEY,
            "achievements": ACHIEVEMENTS_KEY,
            "achievementStats": LEGACY_ACHIEVEMENT_STATS_KEY,
            "shop": SHOP_KEY,
            "dailyLogin": DAILY_LOGIN_KEY,
        }
        written = []
        for section, key in sections.items():
            if data.get(section):
                self._write_json(key, data[section])
                written.append(key)

        quest_usage = (data.get("settings") or {}).get("questUsage")
        if quest_usage:
            self.store.set(LEGACY_QUEST_USAGE_KEY, str(quest_usage))
            written.append(LEGACY_QUEST_USAGE_KEY)

        logger.info(f"Imported backup sections: {', '.join(written) or 'none'}")
        return written

    def clear_all(self) -> None:
        """Clear all stored data."""
        for key in (
            GAMES_KEY,
            USER_KEY,
            ACHIEVEMENTS_KEY,
            DAILY_LOGIN_KEY,
            SHOP_KEY,
            LEGACY_ACHIEVEMENT_STATS_KEY,
            LEGACY_QUEST_USAGE_KEY,
        ):
            self.store.remove(key)
