"""Game library: the list of GameRecords and the XP tied to changing it.

XP table:

    add game                      +10
    backlog/ignored -> playing    +50  (sets started_at)
    playing -> completed          +200
    backlog/ignored -> completed  +250 (sets started_at)
    dropped -> completed          +200, +50 more if it was never started
    leaving completed             -200 (clears completed_at)
    playing/completed -> backlog  -50  (clears started_at)
    remove game                   -10, -50 if started, -200 if completed
"""

import logging
import math
import uuid
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Callable

from pydantic import BaseModel

from questlog.config import XP_ADD_GAME, XP_COMPLETE_GAME, XP_START_GAME
from questlog.models import GameRecord, GameStatus, Genre
from questlog.storage import Storage

logger = logging.getLogger(__name__)


class LibraryStats(BaseModel):
    """Summary numbers for the library."""

    total_games: int = 0
    status_counts: dict[str, int] = {}
    platform_counts: dict[str, int] = {}
    genre_counts: dict[str, int] = {}
    total_playtime_hours: float = 0.0
    total_duration_days: int = 0  # start to completion, or to today while unfinished
    completion_rate: int = 0  # percent
    average_rating: float | None = None


def is_unreleased(game: GameRecord, today: date) -> bool:
    """No release date yet, or one in the future."""
    return game.release_date is None or game.release_date > today


def new_game_id() -> str:
    """Id for a game added by hand rather than from a catalog."""
    return f"local_{uuid.uuid4().hex[:12]}"


class GameLibrary:
    """Owns the game list. Every mutation is persisted immediately."""

    def __init__(
        self,
        storage: Storage,
        award_xp: Callable[[int], object],
        games: list[GameRecord] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self._award_xp = award_xp
        self._clock = clock
        self.games: list[GameRecord] = games if games is not None else storage.load_games()

    def _save(self) -> None:
        self.storage.save_games(self.games)

    def _xp(self, amount: int, reason: str) -> None:
        if amount:
            self._award_xp(amount, reason)

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, game_id: str) -> GameRecord | None:
        return next((g for g in self.games if g.id == game_id), None)

    def find(self, query: str) -> GameRecord | None:
        """Look a game up by id, then by case-insensitive title."""
        game = self.get(query)
        if game:
            return game
        lowered = query.lower()
        return next((g for g in self.games if g.title.lower() == lowered), None)

    def by_status(self, status: GameStatus) -> list[GameRecord]:
        games = [g for g in self.games if g.status == status]
        if status == GameStatus.COMPLETED:
            # Most recently completed first
            games.sort(key=lambda g: g.completed_at or datetime.min, reverse=True)
        return games

    def stats(self) -> LibraryStats:
        total = len(self.games)
        if total == 0:
            return LibraryStats()

        status_counts = Counter(g.status.value for g in self.games)
        platform_counts = Counter(g.ecosystem.label for g in self.games)
        genre_counts: Counter[str] = Counter()
        for g in self.games:
            genre_counts.update(genre.value for genre in g.genre_set if genre != Genre.OTHER)

        rated = [g.rating for g in self.games if g.rating > 0]
        now = self._clock()
        return LibraryStats(
            total_games=total,
            status_counts={s.value: status_counts.get(s.value, 0) for s in GameStatus},
            platform_counts=dict(platform_counts),
            genre_counts=dict(genre_counts),
            total_playtime_hours=sum(g.playtime_hours for g in self.games),
            total_duration_days=sum(self._duration_days(g, now) for g in self.games),
            completion_rate=round(status_counts.get(GameStatus.COMPLETED.value, 0) / total * 100),
            average_rating=round(sum(rated) / len(rated), 1) if rated else None,
        )

    @staticmethod
    def _duration_days(game: GameRecord, now: datetime) -> int:
        if not game.started_at:
            return 0
        end = now
        if game.status == GameStatus.COMPLETED and game.completed_at:
            end = game.completed_at
        if end < game.started_at:
            return 0
        return math.ceil((end - game.started_at) / timedelta(days=1))

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_game(self, game: GameRecord) -> bool:
        """Add a game to the backlog. Returns False for a duplicate id."""
        if self.get(game.id):
            logger.debug(f"Game {game.id} already in library")
            return False

        game = game.model_copy(
            update={
                "status": GameStatus.BACKLOG,
                "rating": 0,
                "added_at": self._clock(),
                "started_at": None,
                "completed_at": None,
            }
        )
        self.games.append(game)
        self._save()
        self._xp(XP_ADD_GAME, f"adding {game.title}")
        logger.info(f"Added {game.title} ({game.id}) on {game.platform}")
        return True

    def remove_game(self, game_id: str) -> GameRecord | None:
        """Remove a game and take back the XP it earned."""
        game = self.get(game_id)
        if game is None:
            logger.debug(f"No game {game_id} to remove")
            return None

        deduction = XP_ADD_GAME
        if game.started_at:
            deduction += XP_START_GAME
        if game.completed_at:
            deduction += XP_COMPLETE_GAME

        self.games = [g for g in self.games if g.id != game_id]
        self._save()
        self._xp(-deduction, f"removing {game.title}")
        logger.info(f"Removed {game.title} ({game.id})")
        return game

    def set_status(self, game_id: str, status: GameStatus | str) -> bool:
        """Move a game to another status, applying the XP table."""
        game = self.get(game_id)
        try:
            new = GameStatus(status)
        except ValueError:
            logger.debug(f"Ignoring unknown status {status!r}")
            return False
        if game is None:
            logger.debug(f"No game {game_id} to update")
            return False

        old = game.status
        if old == new:
            return False

        now = self._clock()
        delta = 0
        not_started = (GameStatus.BACKLOG, GameStatus.IGNORED)

        # Undo what the old status earned
        if old == GameStatus.COMPLETED:
            delta -= XP_COMPLETE_GAME
            game.completed_at = None
        if new == GameStatus.BACKLOG and old in (GameStatus.PLAYING, GameStatus.COMPLETED):
            delta -= XP_START_GAME
            game.started_at = None

        # Award the new status
        if new == GameStatus.PLAYING and old in not_started:
            delta += XP_START_GAME
            if not game.started_at:
                game.started_at = now
        elif new == GameStatus.COMPLETED:
            if old == GameStatus.PLAYING:
                delta += XP_COMPLETE_GAME
            elif old in not_started:
                delta += XP_START_GAME + XP_COMPLETE_GAME
                if not game.started_at:
                    game.started_at = now
            elif old == GameStatus.DROPPED:
                delta += XP_COMPLETE_GAME
                if not game.started_at:
                    delta += XP_START_GAME
                    game.started_at = now
            game.completed_at = now

        game.status = new
        self._save()
        self._xp(delta, f"{game.title}: {old.value} -> {new.value}")
        logger.info(f"{game.title}: {old.value} -> {new.value} ({delta:+d} XP)")
        return True

    def set_rating(self, game_id: str, rating: int) -> bool:
        """Rate a game 1-5, or 0 to clear the rating."""
        game = self.get(game_id)
        if game is None or not isinstance(rating, int) or not 0 <= rating <= 5:
            logger.debug(f"Ignoring rating {rating!r} for {game_id}")
            return False
        game.rating = rating
        self._save()
        return True

    def set_playtime(self, game_id: str, hours: float) -> bool:
        game = self.get(game_id)
        if game is None or hours < 0:
            return False
        game.playtime_hours = hours
        self._save()
        return True

    def apply_details(
        self,
        game_id: str,
        *,
        title: str | None = None,
        genres: list[str] | None = None,
        release_date: date | None = None,
        background_image: str | None = None,
        playtime_hours: float | None = None,
    ) -> bool:
        """Merge catalog data into a game, keeping the user's own fields."""
        game = self.get(game_id)
        if game is None:
            return False
        if title:
            game.title = title
        if genres is not None:
            game.genres = genres
        if release_date is not None:
            game.release_date = release_date
        if background_image:
            game.background_image = background_image
        if playtime_hours:
            game.playtime_hours = max(game.playtime_hours, playtime_hours)
        self._save()
        return True
