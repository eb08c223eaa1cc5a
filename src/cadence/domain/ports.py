"""
Ports (interfaces) for the engine's ambient inputs.

The only ambient input is the current time. Engine components depend on this
abstraction, never on the wall clock directly, so every computation is
deterministic under test.
"""

from abc import ABC, abstractmethod
from datetime import UTC, date, datetime, time, tzinfo


class Clock(ABC):
    """
    Port for reading the current time and bucketing timestamps into calendar days.

    Every day-granular comparison (next review normalization, streak dates)
    goes through `local_date` / `start_of_day` so a single time zone
    convention applies everywhere.

    Implementations:
        - SystemClock: Reads the wall clock.
        - FixedClock: Returns a pinned instant (tests, replays).
    """

    def __init__(self, tz: tzinfo = UTC):
        self.tz = tz

    @abstractmethod
    def now(self) -> datetime:
        """
        Return the current instant as an aware datetime.
        """
        pass

    def today(self) -> date:
        return self.local_date(self.now())

    def local_date(self, moment: datetime) -> date:
        """
        Calendar date of `moment` in this clock's zone.

        Naive datetimes are taken to be UTC.
        """
        return self.localize(moment).date()

    def localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        return moment.astimezone(self.tz)

    def start_of_day(self, day: date) -> datetime:
        """Midnight at the start of `day` in this clock's zone."""
        return datetime.combine(day, time.min, tzinfo=self.tz)
