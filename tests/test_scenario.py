"""
End-to-end flows through the QuestLog handle
"""

import random

import pytest
from conftest import make_game

from questlog.context import QuestLog
from questlog.gamification import UnlockNotificationQueue
from questlog.gamification.leveling import level_for_xp
from questlog.models import GameStatus
from questlog.storage import MemoryKeyValueStore, Storage


def test_complete_five_then_delete_one(quest_log):
    """Add 5 games, finish them all, then delete one finished game"""
    for i in range(5):
        assert quest_log.add_game(make_game(str(i)))
    assert quest_log.leveling.xp == 50

    for i in range(5):
        quest_log.set_status(str(i), GameStatus.COMPLETED)

    assert quest_log.leveling.xp == 50 + 5 * 250
    assert quest_log.achievements.is_unlocked("complete_5")
    assert quest_log.achievements.is_unlocked("rate_100_percent")
    level_before = quest_log.leveling.level
    assert level_before == level_for_xp(1300)

    quest_log.remove_game("0")

    assert quest_log.leveling.xp == 1300 - 260
    assert not quest_log.achievements.is_unlocked("complete_5")
    assert not quest_log.achievements.is_unlocked("rate_100_percent")
    assert quest_log.achievements.is_unlocked("complete_1")


def test_state_survives_restart(quest_log, storage, clock):
    quest_log.add_game(make_game("1", genres=["Indie"]))
    quest_log.add_game(make_game("2", genres=["Indie"]))
    quest_log.claim_all_achievements()
    quest_log.claim_daily()

    reopened = QuestLog(storage, clock=clock)

    assert reopened.leveling.xp == quest_log.leveling.xp
    assert reopened.achievements.score() == quest_log.achievements.score()
    assert reopened.achievements.is_unlocked("genre_indie_2")
    assert reopened.daily_login.evaluate(clock.now).already_claimed is True
    assert reopened.shop.coins == 5


def test_daily_streak_unlocks_streak_achievement(quest_log, clock):
    for _ in range(3):
        assert quest_log.claim_daily().success
        clock.advance(days=1)

    assert quest_log.achievements.is_unlocked("streak_3")

    # Breaking the streak keeps the achievement
    clock.advance(days=3)
    quest_log.claim_daily()
    assert quest_log.daily_login.state.current_streak == 1
    assert quest_log.achievements.is_unlocked("streak_3")


def test_daily_milestone_awards_xp(quest_log, clock):
    for _ in range(5):
        quest_log.claim_daily()
        clock.advance(days=1)

    assert quest_log.leveling.xp == 50
    assert quest_log.shop.coins == 4 * 5


def test_quest_giver(quest_log):
    assert quest_log.quest() is None
    assert quest_log.achievements.counters.quest_usage == 0

    quest_log.add_game(make_game("1"))
    quest_log.add_game(make_game("2"))
    pick = quest_log.quest(random.Random(7))

    assert pick.id in {"1", "2"}
    assert quest_log.achievements.counters.quest_usage == 1
    assert quest_log.achievements.is_unlocked("quest_1")


def test_notifications_queue_on_unlock(quest_log, toast_clock):
    quest_log.add_game(make_game("1"))

    pending = [n.achievement_id for n in quest_log.achievements.pending_notifications()]
    assert pending == ["add_1"]

    toast_clock.advance(seconds=6)
    assert quest_log.achievements.pending_notifications() == []


def test_speedrun_and_slow_burn(quest_log, clock):
    quest_log.add_game(make_game("fast"))
    quest_log.add_game(make_game("slow"))

    quest_log.set_status("slow", GameStatus.PLAYING)
    quest_log.set_status("fast", GameStatus.PLAYING)
    clock.advance(hours=3)
    quest_log.set_status("fast", GameStatus.COMPLETED)
    assert quest_log.achievements.is_unlocked("speedrunner")
    assert not quest_log.achievements.is_unlocked("slow_burn")

    clock.advance(days=400)
    quest_log.set_status("slow", GameStatus.COMPLETED)
    assert quest_log.achievements.is_unlocked("slow_burn")


def test_shop_spends_claimed_score(quest_log):
    for i in range(3):
        quest_log.add_game(make_game(str(i)))
    assert quest_log.shop.balance() == 0

    quest_log.claim_all_achievements()
    # add_1 and add_3 are both bronze
    assert quest_log.shop.balance() == 40

    assert quest_log.shop.buy_item("theme_orange").success is False
    quest_log.add_game(make_game("3"))
    quest_log.set_status("3", GameStatus.PLAYING)
    quest_log.claim_all_achievements()
    assert quest_log.shop.buy_item("theme_orange").success is True


def test_export_tracks_action(quest_log):
    backup = quest_log.export_backup()

    assert quest_log.achievements.is_unlocked("safety_first")
    assert backup["achievements"]["counters"]["exported"] is True


def test_failed_export_write_is_not_counted(quest_log):
    def write(backup):
        raise PermissionError("read-only")

    with pytest.raises(PermissionError):
        quest_log.export_backup(write=write)

    assert quest_log.achievements.counters.exported is False
    assert not quest_log.achievements.is_unlocked("safety_first")
    assert QuestLog(quest_log.storage).achievements.counters.exported is False


def test_import_rebuilds_engines(quest_log, clock):
    quest_log.add_game(make_game("1"))
    backup = quest_log.export_backup()

    fresh = QuestLog(Storage(MemoryKeyValueStore()), clock=clock)
    fresh.import_backup(backup)

    assert fresh.leveling.xp == 10
    assert [g.id for g in fresh.library.games] == ["1"]
    assert fresh.achievements.is_unlocked("add_1")


def test_reset(quest_log, clock):
    quest_log.add_game(make_game("1"))
    quest_log.claim_daily()

    quest_log.reset()

    assert quest_log.library.games == []
    assert quest_log.leveling.xp == 0
    assert quest_log.achievements.unlocked == {}
    assert quest_log.daily_login.evaluate(clock.now).already_claimed is False


def test_negative_xp_after_deductions(storage, clock):
    ql = QuestLog(storage, clock=clock, notifications=UnlockNotificationQueue())
    ql.add_game(make_game("1"))
    ql.leveling.award_xp(-500)

    assert ql.leveling.xp == -490
    assert ql.leveling.level == 1
    assert ql.profile().level.progress_percent == 0.0
