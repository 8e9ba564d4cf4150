"""Shared fixtures: in-memory storage and controllable clocks."""

from datetime import datetime, timedelta

import pytest

from questlog.context import QuestLog
from questlog.gamification import UnlockNotificationQueue
from questlog.models import GameRecord
from questlog.storage import MemoryKeyValueStore, Storage


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        delta = timedelta(**kwargs)
        if isinstance(self.now, float):
            self.now += delta.total_seconds()
        else:
            self.now += delta


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def storage(store):
    return Storage(store)


@pytest.fixture
def clock():
    # A Wednesday, so weekend-only achievements stay locked
    return FakeClock(datetime(2026, 3, 4, 12, 0))


@pytest.fixture
def toast_clock():
    return FakeClock(1000.0)


@pytest.fixture
def quest_log(storage, clock, toast_clock):
    return QuestLog(
        storage,
        clock=clock,
        notifications=UnlockNotificationQueue(clock=toast_clock),
    )


def make_game(game_id="1", title=None, **fields) -> GameRecord:
    return GameRecord(id=game_id, title=title or f"Game {game_id}", **fields)
