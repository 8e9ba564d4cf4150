"""
Daily Login Streak System

One claim per local calendar day. Consecutive days grow the streak without
limit; missing a day restarts it at 1. Rewards follow a 30-day cycle keyed by
``((streak - 1) % 30) + 1``:

- day 30:              100 coins
- days 5, 10, ..., 25: day * 10 XP, no coins
- every other day:     5 coins

The best streak ever reached is kept as a high-water mark.
"""

import logging
from datetime import date, datetime
from typing import Callable

from questlog.config import (
    LOGIN_CYCLE_DAYS,
    LOGIN_CYCLE_END_COINS,
    LOGIN_DAILY_COINS,
    LOGIN_MILESTONE_EVERY,
    LOGIN_MILESTONE_XP_PER_DAY,
)
from questlog.models import ClaimResult, LoginCheck, LoginReward, LoginStreakState
from questlog.storage import Storage

logger = logging.getLogger(__name__)


def cycle_day_for_streak(streak: int) -> int:
    """Position of ``streak`` within the repeating reward cycle (1-30)."""
    return ((max(streak, 1) - 1) % LOGIN_CYCLE_DAYS) + 1


def reward_for_streak(streak: int) -> LoginReward:
    """Reward for claiming on streak day ``streak``."""
    cycle_day = cycle_day_for_streak(streak)
    if cycle_day == LOGIN_CYCLE_DAYS:
        return LoginReward(cycle_day=cycle_day, coins=LOGIN_CYCLE_END_COINS)
    if cycle_day % LOGIN_MILESTONE_EVERY == 0:
        return LoginReward(cycle_day=cycle_day, xp=cycle_day * LOGIN_MILESTONE_XP_PER_DAY)
    return LoginReward(cycle_day=cycle_day, coins=LOGIN_DAILY_COINS)


def _as_date(now: datetime | date | None) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


class DailyLoginEngine:
    """Tracks consecutive-day logins and pays out the reward ladder."""

    def __init__(
        self,
        storage: Storage,
        award_xp: Callable[[int], object],
        add_coins: Callable[[int], object],
        state: LoginStreakState | None = None,
    ):
        self.storage = storage
        self._award_xp = award_xp
        self._add_coins = add_coins
        self.state = state if state is not None else storage.load_login_state()

    def evaluate(self, now: datetime | date | None = None) -> LoginCheck:
        """Work out the streak a claim right now would produce."""
        today = _as_date(now)
        state = self.state

        if state.claimed_today and state.last_login_date != today:
            state.claimed_today = False

        last = state.last_login_date
        if last is None:
            streak = 1
        else:
            days_since = (today - last).days
            if days_since == 0:
                streak = max(state.current_streak, 1)
            elif days_since == 1:
                streak = state.current_streak + 1
            else:
                # Missed at least one day (or the clock went backwards)
                streak = 1

        return LoginCheck(
            today=today,
            last_login_date=last,
            streak=streak,
            already_claimed=state.claimed_today,
        )

    def claim(self, now: datetime | date | None = None) -> ClaimResult:
        """Claim today's reward. A second claim on the same day fails."""
        check = self.evaluate(now)
        if check.already_claimed:
            return ClaimResult(
                success=False,
                message="Already claimed",
                streak=self.state.current_streak,
            )

        streak = check.streak
        reward = reward_for_streak(streak)

        self.state.last_login_date = check.today
        self.state.current_streak = streak
        self.state.claimed_today = True
        self.state.max_streak = max(self.state.max_streak, streak)
        self.storage.save_login_state(self.state)

        if reward.coins:
            self._add_coins(reward.coins)
        if reward.xp:
            self._award_xp(reward.xp)

        logger.info(
            f"Daily login claimed: day {streak} (cycle day {reward.cycle_day}), "
            f"+{reward.coins} coins, +{reward.xp} XP"
        )

        if reward.xp:
            message = f"Day {streak}: +{reward.xp} XP"
        else:
            message = f"Day {streak}: +{reward.coins} coins"

        return ClaimResult(
            success=True,
            message=message,
            streak=streak,
            coins=reward.coins,
            xp=reward.xp,
        )
