"""Concrete clocks."""

from datetime import UTC, datetime, tzinfo

from cadence.domain.ports import Clock


class SystemClock(Clock):
    """Reads the wall clock."""

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock(Clock):
    """
    Always returns the same instant.

    Used by tests and by callers replaying a review at a known time.
    Naive instants are taken to be UTC.
    """

    def __init__(self, instant: datetime, tz: tzinfo = UTC):
        super().__init__(tz)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        self._instant = instant.astimezone(tz)

    def now(self) -> datetime:
        return self._instant
