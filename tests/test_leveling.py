"""
Tests for the XP curve, titles and the leveling engine
"""

import math

import pytest

from questlog.gamification.leveling import (
    LevelingEngine,
    level_for_xp,
    progress_percent,
    title_for_level,
    titles_for_level,
    xp_for_level,
)


# ============================================
# Curve
# ============================================

def test_level_thresholds():
    """Test the first few level thresholds"""
    assert xp_for_level(1) == 0
    assert xp_for_level(2) == 500
    assert xp_for_level(3) == math.ceil(500 * 2 ** 1.2)

    assert level_for_xp(0) == 1
    assert level_for_xp(499) == 1
    assert level_for_xp(500) == 2
    assert level_for_xp(xp_for_level(3) - 1) == 2
    assert level_for_xp(xp_for_level(3)) == 3


@pytest.mark.parametrize("level", range(2, 101))
def test_threshold_boundaries(level):
    """Exactly at a threshold is the new level, one XP short is the old one"""
    threshold = xp_for_level(level)
    assert level_for_xp(threshold) == level
    assert level_for_xp(threshold - 1) == level - 1


def test_negative_xp_is_level_one():
    assert level_for_xp(-1) == 1
    assert level_for_xp(-10_000) == 1
    assert progress_percent(-250) == 0.0


def test_non_finite_xp():
    assert level_for_xp(float("nan")) == 1
    assert level_for_xp(float("-inf")) == 1


def test_progress_percent():
    assert progress_percent(0) == 0.0
    assert progress_percent(250) == pytest.approx(50.0)
    # Level 2 spans 500..xp_for_level(3)
    span = xp_for_level(3) - 500
    assert progress_percent(500 + span / 4) == pytest.approx(25.0)


# ============================================
# Titles
# ============================================

def test_titles():
    assert title_for_level(1) == "Novice Adventurer"
    assert title_for_level(4) == "Apprentice Hero"
    assert title_for_level(20) == "Master of Worlds"
    assert title_for_level(150) == "Godlike Entity"


def test_titles_for_level():
    assert titles_for_level(1) == ["Novice Adventurer"]
    assert titles_for_level(5) == ["Quest Seeker", "Apprentice Hero", "Novice Adventurer"]


# ============================================
# Engine
# ============================================

def test_award_xp_persists(storage):
    engine = LevelingEngine(storage)

    award = engine.award_xp(600, "test")

    assert award.old_total_xp == 0
    assert award.new_total_xp == 600
    assert award.leveled_up is True
    assert award.new_level == 2
    assert storage.load_user().xp == 600


def test_deduction_below_zero(storage):
    engine = LevelingEngine(storage)
    engine.award_xp(10)

    award = engine.award_xp(-60)

    assert award.new_total_xp == -50
    assert award.new_level == 1
    assert award.leveled_up is False
    state = engine.state()
    assert state.level == 1
    assert state.progress_percent == 0.0


def test_select_title(storage):
    engine = LevelingEngine(storage)

    assert engine.select_title("Godlike Entity") is False
    assert engine.display_title() == "Novice Adventurer"

    engine.award_xp(xp_for_level(5))
    assert engine.select_title("Apprentice Hero") is True
    assert engine.display_title() == "Apprentice Hero"
    assert storage.load_user().title == "Apprentice Hero"

    assert engine.select_title(None) is True
    assert engine.display_title() == "Quest Seeker"
