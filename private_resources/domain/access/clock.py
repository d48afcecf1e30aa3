"""
Clocks

Time sources for expiration checks. All clocks return timezone-aware UTC datetimes.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Abstract source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as an aware datetime."""
        pass  # pragma: no cover


class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Synthetic clock that only moves when told to."""

    def __init__(self, current: datetime):
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        self._current = current

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        self._current = current

    def advance(self, delta: timedelta) -> None:
        self._current = self._current + delta
