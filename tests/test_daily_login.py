"""
Tests for the daily login streak and reward ladder
"""

from datetime import date, datetime, timedelta

import pytest

from questlog.gamification import DailyLoginEngine, reward_for_streak
from questlog.gamification.daily_login import cycle_day_for_streak
from questlog.models import LoginStreakState

DAY_1 = date(2026, 3, 1)


@pytest.fixture
def payouts():
    return {"xp": [], "coins": []}


@pytest.fixture
def engine(storage, payouts):
    return DailyLoginEngine(
        storage,
        award_xp=payouts["xp"].append,
        add_coins=payouts["coins"].append,
    )


# ============================================
# Reward table
# ============================================

@pytest.mark.parametrize(
    "streak,coins,xp",
    [
        (1, 5, 0),
        (4, 5, 0),
        (5, 0, 50),
        (10, 0, 100),
        (25, 0, 250),
        (29, 5, 0),
        (30, 100, 0),
        (31, 5, 0),
        (35, 0, 50),
        (60, 100, 0),
    ],
)
def test_reward_ladder(streak, coins, xp):
    reward = reward_for_streak(streak)
    assert reward.coins == coins
    assert reward.xp == xp


def test_cycle_day():
    assert cycle_day_for_streak(1) == 1
    assert cycle_day_for_streak(30) == 30
    assert cycle_day_for_streak(31) == 1
    assert cycle_day_for_streak(0) == 1


# ============================================
# Streak evaluation
# ============================================

def test_evaluate_is_pure(engine):
    first = engine.evaluate(DAY_1)
    second = engine.evaluate(DAY_1)

    assert first == second
    assert first.streak == 1
    assert first.already_claimed is False
    assert engine.state.current_streak == 0


def test_consecutive_days_grow_streak(engine, payouts):
    for offset in range(3):
        result = engine.claim(DAY_1 + timedelta(days=offset))
        assert result.success is True
        assert result.streak == offset + 1

    assert engine.state.current_streak == 3
    assert engine.state.max_streak == 3
    assert payouts["coins"] == [5, 5, 5]


def test_missed_day_resets_streak_but_keeps_best(engine):
    for offset in range(4):
        engine.claim(DAY_1 + timedelta(days=offset))

    result = engine.claim(DAY_1 + timedelta(days=6))

    assert result.streak == 1
    assert engine.state.current_streak == 1
    assert engine.state.max_streak == 4


def test_max_streak_sequence(engine):
    """Claims on days 1,2,4,5,6 give streaks 1,2,1,2,3 and best streaks 1,2,2,2,3"""
    streaks = []
    best = []
    for day in (1, 2, 4, 5, 6):
        streaks.append(engine.claim(date(2026, 3, day)).streak)
        best.append(engine.state.max_streak)

    assert streaks == [1, 2, 1, 2, 3]
    assert best == [1, 2, 2, 2, 3]


def test_clock_going_backwards_resets(engine):
    engine.claim(DAY_1)
    check = engine.evaluate(DAY_1 - timedelta(days=3))
    assert check.streak == 1


def test_double_claim_rejected(engine, payouts):
    morning = datetime(2026, 3, 1, 8, 0)
    evening = datetime(2026, 3, 1, 23, 0)

    assert engine.claim(morning).success is True
    second = engine.claim(evening)

    assert second.success is False
    assert second.message == "Already claimed"
    assert second.streak == 1
    assert payouts["coins"] == [5]


def test_new_day_clears_claimed_flag(engine):
    engine.claim(DAY_1)
    check = engine.evaluate(DAY_1 + timedelta(days=1))

    assert check.already_claimed is False
    assert check.streak == 2


def test_milestone_pays_xp(storage, payouts):
    state = LoginStreakState(last_login_date=DAY_1, current_streak=4, max_streak=4)
    engine = DailyLoginEngine(
        storage,
        award_xp=payouts["xp"].append,
        add_coins=payouts["coins"].append,
        state=state,
    )

    result = engine.claim(DAY_1 + timedelta(days=1))

    assert result.message == "Day 5: +50 XP"
    assert payouts == {"xp": [50], "coins": []}


def test_claim_persists_state(engine, storage):
    engine.claim(DAY_1)

    saved = storage.load_login_state()
    assert saved.last_login_date == DAY_1
    assert saved.current_streak == 1
    assert saved.claimed_today is True
