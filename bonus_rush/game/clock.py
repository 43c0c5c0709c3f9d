"""Injectable wall clocks."""

from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Real local time."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """A clock that only moves when told to. Used by tests and replays."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self._now = start or datetime(2026, 1, 26, 9, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 0, days: float = 0) -> None:
        self._now = self._now + timedelta(seconds=seconds, days=days)

    def set(self, moment: datetime) -> None:
        self._now = moment


def now_ms(clock: Clock) -> int:
    """Milliseconds since the epoch according to ``clock``."""
    return int(clock.now().timestamp() * 1000)
