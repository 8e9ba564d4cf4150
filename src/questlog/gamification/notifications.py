"""Short-lived "achievement unlocked" notifications."""

import time
from typing import Callable

from questlog.config import UNLOCK_NOTIFICATION_TTL
from questlog.models import AchievementDefinition, UnlockNotification


class UnlockNotificationQueue:
    """FIFO of unlock toasts. Entries expire ``ttl`` seconds after being queued."""

    def __init__(
        self,
        ttl: float = UNLOCK_NOTIFICATION_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self._clock = clock
        self._queue: list[UnlockNotification] = []

    def push(self, achievement: AchievementDefinition) -> UnlockNotification:
        self.dismiss(achievement.id)
        notification = UnlockNotification(
            achievement_id=achievement.id,
            title=achievement.title,
            tier=achievement.tier,
            expires_at=self._clock() + self.ttl,
        )
        self._queue.append(notification)
        return notification

    def pending(self) -> list[UnlockNotification]:
        """Notifications that have not expired yet, oldest first."""
        now = self._clock()
        self._queue = [n for n in self._queue if n.expires_at > now]
        return list(self._queue)

    def dismiss(self, achievement_id: str) -> None:
        self._queue = [n for n in self._queue if n.achievement_id != achievement_id]

    def clear(self) -> None:
        self._queue.clear()

    def __len__(self) -> int:
        return len(self.pending())
