"""Throttle gate limiting how often a visitor sees a notification."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Final

from socialproof.constants import STORAGE_KEY
from socialproof.errors import MalformedPersistedRecord
from socialproof.policy import READ_THROTTLE_STATE, WRITE_THROTTLE_STATE, recover
from socialproof.settings.user import NotificationSettings
from socialproof.storage.protocols import KeyValueStore
from socialproof.utils.time import Clock, SystemClock, TimeUtils

logger: Final = logging.getLogger(__name__)


class ThrottleGate:
    """Decides whether a notification may be shown, based on persisted state.

    The only state is the ISO-8601 time of the last successful display,
    kept under ``STORAGE_KEY``. Read problems fail open (the notification
    may show); write problems are logged and skipped.
    """

    def __init__(
        self,
        settings: NotificationSettings,
        store: KeyValueStore,
        clock: Clock | None = None,
        key: str = STORAGE_KEY,
    ) -> None:
        self.settings = settings
        self.store = store
        self.clock = clock or SystemClock()
        self.key = key

    def may_show(self) -> bool:
        """Check whether enough time has passed since the last display.

        Returns:
            True when persistence is disabled, no valid record exists, or
            at least ``min_time_between`` hours have elapsed
        """
        if not self.settings.save_to_storage:
            return True

        last_shown = recover(READ_THROTTLE_STATE, self.last_shown, lambda: None)
        if last_shown is None:
            return True

        elapsed = TimeUtils.hours_between(last_shown, self.clock.now())
        allowed = elapsed >= self.settings.min_time_between
        if not allowed:
            logger.info(
                "Last shown %.2f h ago (minimum %s h) → skipping",
                elapsed,
                self.settings.min_time_between,
            )
        return allowed

    def mark_shown(self) -> None:
        """Record the current time as the last successful display."""
        if not self.settings.save_to_storage:
            return

        stamp = TimeUtils.to_iso(self.clock.now())
        recover(WRITE_THROTTLE_STATE, lambda: self.store.set(self.key, stamp), lambda: None)

    def last_shown(self) -> datetime | None:
        """Read the persisted last-shown time.

        Returns:
            The stored time, or None when nothing was recorded

        Raises:
            PersistenceUnavailable: If the store cannot be read
            MalformedPersistedRecord: If the stored value is not ISO-8601
        """
        raw = self.store.get(self.key)
        if not raw:
            return None
        try:
            return TimeUtils.parse_iso(raw)
        except ValueError as exc:
            raise MalformedPersistedRecord(raw) from exc
