# src/socialproof/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

import time
from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with the persisted last-shown time:
    - ISO-8601 formatting and parsing
    - Elapsed time in hours
    """

    @staticmethod
    def to_iso(dt: datetime) -> str:
        """Format a datetime as an ISO-8601 UTC string with a ``Z`` suffix.

        Args:
            dt: Datetime to format (assumes UTC if naive)

        Returns:
            ISO-8601 string with millisecond precision
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @staticmethod
    def parse_iso(value: str) -> datetime:
        """Parse an ISO-8601 string into a timezone-aware datetime.

        Args:
            value: ISO-8601 string, with or without offset

        Returns:
            Timezone-aware datetime (UTC when no offset was given)

        Raises:
            ValueError: If the string is not ISO-8601
        """
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    @staticmethod
    def hours_between(start: datetime, end: datetime) -> float:
        """Get the elapsed time between two datetimes in (fractional) hours."""
        return (end - start) / timedelta(hours=1)


@runtime_checkable
class Clock(Protocol):
    """Source of wall time for throttling and monotonic time for timers."""

    def now(self) -> datetime:
        """Return the current timezone-aware wall time."""
        ...

    def monotonic(self) -> float:
        """Return seconds on a clock that never goes backwards."""
        ...

    def sleep(self, seconds: float) -> None:
        """Wait for the given number of seconds."""
        ...


class SystemClock:
    """Clock backed by the operating system."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class ManualClock:
    """Clock that only moves when told to.

    ``sleep`` advances the clock instantly, so a scheduler driven by this
    clock runs a whole timeline without waiting.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._wall = start or datetime(2024, 1, 1, tzinfo=UTC)
        self._elapsed = 0.0

    def now(self) -> datetime:
        return self._wall + timedelta(seconds=self._elapsed)

    def monotonic(self) -> float:
        return self._elapsed

    def sleep(self, seconds: float) -> None:
        self.advance(seconds)

    def advance(self, seconds: float) -> None:
        """Move the clock forward.

        Args:
            seconds: Non-negative number of seconds to advance
        """
        if seconds < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._elapsed += seconds

    def advance_to(self, monotonic: float) -> None:
        """Move the clock forward to an exact ``monotonic()`` reading."""
        self._elapsed = max(self._elapsed, monotonic)
