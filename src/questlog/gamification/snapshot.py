"""Read-only view of library state that achievement predicates evaluate."""

from collections import Counter
from datetime import datetime, timedelta
from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field

from questlog.models import AchievementCounters, GameRecord, GameStatus, Genre, Platform


class LibrarySnapshot(BaseModel):
    """Everything the achievement catalog needs, frozen at one instant."""

    model_config = ConfigDict(frozen=True)

    games: tuple[GameRecord, ...] = ()
    level: int = 1
    counters: AchievementCounters = Field(default_factory=AchievementCounters)
    best_streak: int = 0
    now: datetime = Field(default_factory=datetime.now)

    @classmethod
    def build(
        cls,
        games: list[GameRecord],
        level: int = 1,
        counters: AchievementCounters | None = None,
        best_streak: int = 0,
        now: datetime | None = None,
    ) -> "LibrarySnapshot":
        return cls(
            games=tuple(g.model_copy() for g in games),
            level=level,
            counters=(counters or AchievementCounters()).model_copy(),
            best_streak=best_streak,
            now=now or datetime.now(),
        )

    # =========================================================================
    # Status sub-lists
    # =========================================================================

    def _with_status(self, status: GameStatus) -> tuple[GameRecord, ...]:
        return tuple(g for g in self.games if g.status == status)

    @cached_property
    def backlog(self) -> tuple[GameRecord, ...]:
        return self._with_status(GameStatus.BACKLOG)

    @cached_property
    def playing(self) -> tuple[GameRecord, ...]:
        return self._with_status(GameStatus.PLAYING)

    @cached_property
    def completed(self) -> tuple[GameRecord, ...]:
        return self._with_status(GameStatus.COMPLETED)

    @cached_property
    def dropped(self) -> tuple[GameRecord, ...]:
        return self._with_status(GameStatus.DROPPED)

    # =========================================================================
    # Aggregates
    # =========================================================================

    @cached_property
    def rated(self) -> tuple[GameRecord, ...]:
        return tuple(g for g in self.games if g.rating > 0)

    @cached_property
    def ecosystems(self) -> frozenset[Platform]:
        """Distinct known ecosystems in the library."""
        return frozenset(g.ecosystem for g in self.games) - {Platform.OTHER}

    @cached_property
    def genres(self) -> frozenset[Genre]:
        """Distinct known genres in the library."""
        found = set()
        for g in self.games:
            found |= g.genre_set
        return frozenset(found - {Genre.OTHER})

    @cached_property
    def total_playtime_hours(self) -> float:
        return sum(g.playtime_hours for g in self.games)

    def count_owned(self, *genres: Genre) -> int:
        return sum(1 for g in self.games if g.has_genre(*genres))

    def count_completed(self, *genres: Genre) -> int:
        return sum(1 for g in self.completed if g.has_genre(*genres))

    # =========================================================================
    # Date arithmetic
    # =========================================================================

    def any_completed_within(self, *, more_than: timedelta | None = None,
                             less_than: timedelta | None = None) -> bool:
        """A completed game whose start-to-completion time is in range."""
        for g in self.completed:
            if not g.started_at or not g.completed_at:
                continue
            took = g.completed_at - g.started_at
            if more_than is not None and not took > more_than:
                continue
            if less_than is not None and not took < less_than:
                continue
            return True
        return False

    def completed_on_weekend(self) -> bool:
        return any(
            g.completed_at and g.completed_at.weekday() >= 5 for g in self.completed
        )

    def completed_long_after_release(self, gap: timedelta) -> bool:
        return any(
            g.completed_at
            and g.release_date
            and g.completed_at.date() - g.release_date > gap
            for g in self.completed
        )

    def max_completions_in_a_month(self) -> int:
        months = Counter(
            (g.completed_at.year, g.completed_at.month)
            for g in self.completed
            if g.completed_at
        )
        return max(months.values(), default=0)

    def completions_since(self, since: datetime) -> int:
        return sum(1 for g in self.completed if g.completed_at and g.completed_at > since)

    def owns_release_before(self, year: int) -> bool:
        return any(g.release_date and g.release_date.year < year for g in self.games)

    def owns_unreleased(self) -> bool:
        today = self.now.date()
        return any(g.release_date and g.release_date > today for g in self.games)
