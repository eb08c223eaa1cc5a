"""
Mastery estimator.

Projects when a card will be mastered by walking a canonical SM-2 interval
progression. A card counts as mastered after five reviews at 80% accuracy.
"""

import logging
import math
from datetime import datetime, timedelta

from cadence.domain.constants import (
    CANONICAL_PROGRESSION,
    LOW_ACCURACY_INFLATION,
    MASTERY_MIN_ACCURACY,
    MASTERY_MIN_REVIEWS,
    UNSEEN_CARD_ACCURACY,
)
from cadence.domain.models import CardState
from cadence.domain.ports import Clock
from cadence.infrastructure.clock import SystemClock

logger = logging.getLogger(__name__)


def is_mastered(card: CardState) -> bool:
    """True once the card has enough reviews at a high enough accuracy."""
    return (
        card.times_reviewed >= MASTERY_MIN_REVIEWS
        and card.correct_count / card.times_reviewed >= MASTERY_MIN_ACCURACY
    )


class MasteryEstimator:
    """Projects a mastery date for a single card."""

    def __init__(
        self,
        clock: Clock | None = None,
        progression: tuple[int, ...] = CANONICAL_PROGRESSION,
    ):
        self._clock = clock or SystemClock()
        self._progression = progression

    def predict_mastery_date(self, card: CardState) -> datetime:
        """
        Estimate when `card` will be mastered.

        Already-mastered cards return now. Otherwise the remaining reviews are
        inflated by 1.5x for cards below 80% accuracy, and the matching entries
        of the progression (starting at the card's review count, repeating the
        last entry once exhausted) are summed as days from now.

        The walk covers every estimated review, not just the first five table
        entries: a new card needs eight reviews and lands 418 days out
        (1 + 6 + 15 + 36 + 4 * 90), where stopping at the table's end would
        give 148.
        """
        now = self._clock.now()
        if is_mastered(card):
            return now

        reviews_needed = self.estimated_reviews_needed(card)
        total_days = sum(
            self._interval_at(index)
            for index in range(card.times_reviewed, card.times_reviewed + reviews_needed)
        )

        logger.debug(
            f"Card {card.card_id}: {reviews_needed} reviews to mastery, ~{total_days} days"
        )
        return now + timedelta(days=total_days)

    def estimated_reviews_needed(self, card: CardState) -> int:
        reviews_needed = max(0, MASTERY_MIN_REVIEWS - card.times_reviewed)
        accuracy = card.accuracy
        if accuracy is None:
            accuracy = UNSEEN_CARD_ACCURACY

        if accuracy < MASTERY_MIN_ACCURACY:
            return math.ceil(reviews_needed * LOW_ACCURACY_INFLATION)
        return reviews_needed

    def _interval_at(self, index: int) -> int:
        if index < len(self._progression):
            return self._progression[index]
        return self._progression[-1]
