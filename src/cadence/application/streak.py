"""
Study streak tracker.

Works on the caller's session log, not on card data. Sessions are bucketed
into calendar days using the clock's time zone.
"""

import logging
from collections.abc import Iterable
from datetime import timedelta

from cadence.domain.models import SessionRecord, StreakStats
from cadence.domain.ports import Clock
from cadence.infrastructure.clock import SystemClock

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


class StreakTracker:
    """
    Computes current and longest study streaks.

    The result does not depend on the order of the input sessions.
    """

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()

    def calculate_streak(self, sessions: Iterable[SessionRecord]) -> StreakStats:
        studied = {
            self._clock.local_date(session.started_at)
            for session in sessions
            if session.cards_studied > 0
        }
        if not studied:
            return StreakStats()

        last_study_date = max(studied)
        today = self._clock.today()

        current_streak = 0
        if last_study_date in (today, today - _ONE_DAY):
            day = last_study_date
            while day in studied:
                current_streak += 1
                day -= _ONE_DAY

        longest_streak = 0
        run = 0
        previous = None
        for day in sorted(studied):
            if previous is not None and day - previous == _ONE_DAY:
                run += 1
            else:
                run = 1
            longest_streak = max(longest_streak, run)
            previous = day

        logger.debug(
            f"Streak: current={current_streak}, longest={longest_streak}, "
            f"last={last_study_date} over {len(studied)} study days"
        )

        return StreakStats(
            current_streak=current_streak,
            longest_streak=longest_streak,
            last_study_date=last_study_date,
        )
