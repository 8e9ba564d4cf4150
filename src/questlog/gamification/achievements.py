"""
Achievement System

Evaluates every catalog predicate against a LibrarySnapshot and reconciles
the stored unlock map with the result:

- predicate true, no record   -> unlock (unclaimed) and queue a notification
- predicate false, has record -> revoke, claimed or not

Reconciling twice with the same snapshot changes nothing the second time.
Only claimed unlocks count toward the score that the shop spends.
"""

import logging

from questlog.gamification.catalog import (
    ACHIEVEMENTS,
    LEGACY_ACHIEVEMENT_ALIASES,
    evaluate,
)
from questlog.gamification.notifications import UnlockNotificationQueue
from questlog.gamification.snapshot import LibrarySnapshot
from questlog.models import (
    AchievementCounters,
    AchievementDefinition,
    AchievementState,
    ReconcileResult,
    UnlockNotification,
    UnlockRecord,
)
from questlog.storage import Storage

logger = logging.getLogger(__name__)


class AchievementEngine:
    """Owns the unlock map, usage counters and the notification queue."""

    def __init__(
        self,
        storage: Storage,
        catalog: tuple[AchievementDefinition, ...] = ACHIEVEMENTS,
        notifications: UnlockNotificationQueue | None = None,
    ):
        self.storage = storage
        self.catalog = catalog
        self._by_id = {a.id: a for a in catalog}
        if notifications is None:
            notifications = UnlockNotificationQueue()
        self.notifications = notifications
        self.state: AchievementState = storage.load_achievements()
        self._normalize_ids()

    def _normalize_ids(self) -> None:
        """Rename legacy ids and drop records the catalog no longer has."""
        changed = False
        for old_id, new_id in LEGACY_ACHIEVEMENT_ALIASES.items():
            record = self.state.unlocked.pop(old_id, None)
            if record is None:
                continue
            self.state.unlocked.setdefault(new_id, record)
            changed = True
        for achievement_id in list(self.state.unlocked):
            if achievement_id not in self._by_id:
                del self.state.unlocked[achievement_id]
                logger.info(f"Dropped unknown achievement record: {achievement_id}")
                changed = True
        if changed:
            self._save()

    def _save(self) -> None:
        self.storage.save_achievements(self.state)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def unlocked(self) -> dict[str, UnlockRecord]:
        return self.state.unlocked

    @property
    def counters(self) -> AchievementCounters:
        return self.state.counters

    def get(self, achievement_id: str) -> AchievementDefinition | None:
        return self._by_id.get(achievement_id)

    def is_unlocked(self, achievement_id: str) -> bool:
        return achievement_id in self.state.unlocked

    def unclaimed(self) -> list[str]:
        return [aid for aid, rec in self.state.unlocked.items() if not rec.claimed]

    def score(self) -> int:
        """Points from claimed unlocks. This is the shop's spendable income."""
        total = 0
        for achievement_id, record in self.state.unlocked.items():
            definition = self._by_id.get(achievement_id)
            if record.claimed and definition:
                total += definition.points
        return total

    def pending_notifications(self) -> list[UnlockNotification]:
        return self.notifications.pending()

    def dismiss(self, achievement_id: str) -> None:
        self.notifications.dismiss(achievement_id)

    # =========================================================================
    # Reconciliation
    # =========================================================================

    def reconcile(self, snapshot: LibrarySnapshot) -> ReconcileResult:
        """Bring the unlock map in line with the predicates."""
        result = ReconcileResult()

        for definition in self.catalog:
            holds = evaluate(definition, snapshot)
            record = self.state.unlocked.get(definition.id)

            if holds and record is None:
                self.state.unlocked[definition.id] = UnlockRecord(
                    unlocked_at=snapshot.now, claimed=False
                )
                self.notifications.push(definition)
                result.unlocked.append(definition.id)
                logger.info(
                    f"Unlocked achievement: {definition.id} "
                    f"({definition.title}, {definition.tier.value})"
                )

            elif not holds and record is not None:
                del self.state.unlocked[definition.id]
                self.notifications.dismiss(definition.id)
                result.revoked.append(definition.id)
                logger.info(
                    f"Revoked achievement: {definition.id} "
                    f"({'claimed' if record.claimed else 'unclaimed'})"
                )

        if result.changed:
            self._save()
        return result

    # =========================================================================
    # Actions
    # =========================================================================

    def claim(self, achievement_id: str) -> bool:
        """Claim an unlocked achievement. Absent or already claimed is a no-op."""
        record = self.state.unlocked.get(achievement_id)
        if record is None or record.claimed:
            logger.debug(f"Nothing to claim for {achievement_id}")
            return False
        record.claimed = True
        self._save()
        logger.info(f"Claimed achievement: {achievement_id}")
        return True

    def claim_all(self) -> list[str]:
        claimed = self.unclaimed()
        for achievement_id in claimed:
            self.state.unlocked[achievement_id].claimed = True
        if claimed:
            self._save()
            logger.info(f"Claimed {len(claimed)} achievements")
        return claimed

    def track_action(self, action: str) -> bool:
        """Record an app action predicates depend on.

        Known actions: ``export``, ``download_card``, ``quest_use``. Callers
        reconcile afterwards to unlock whatever the action earned.
        """
        counters = self.state.counters
        if action == "export":
            counters.exported = True
        elif action == "download_card":
            counters.card_downloaded = True
        elif action == "quest_use":
            counters.quest_usage += 1
        else:
            logger.debug(f"Ignoring unknown action {action!r}")
            return False
        self._save()
        return True

    def restore_counters(self, counters: AchievementCounters) -> None:
        self.state.counters = counters
        self._save()

    def reset(self) -> None:
        """Forget every unlock and counter."""
        self.state = AchievementState()
        self.notifications.clear()
        self._save()
        logger.info("Achievements reset")
