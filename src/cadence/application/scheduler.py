"""
SM-2 style review scheduler.

Given a card's previous state and a quality rating (0-5), computes the ease
factor, the next interval and the day the card is due again. The ease factor
is derived from the difficulty tier on every call rather than stored per card,
so stored ease and stored tier can never drift apart.

Quality scale:
0 - Complete blackout, no recall
1 - Incorrect, but the answer was remembered once shown
2 - Incorrect, but the answer seemed easy to recall
3 - Correct, with serious difficulty
4 - Correct, after hesitation
5 - Correct, perfect instant recall
"""

import logging
from dataclasses import replace
from datetime import timedelta

from cadence.domain.constants import (
    CORRECT_QUALITY,
    FIRST_INTERVAL_DAYS,
    MAX_INTERVAL_DAYS,
    MIN_EASE_FACTOR,
    MIN_INTERVAL_DAYS,
    SECOND_INTERVAL_DAYS,
    SECONDS_PER_DAY,
    TIER_EASE_FACTORS,
)
from cadence.domain.models import CardState, ReviewResult
from cadence.domain.ports import Clock
from cadence.infrastructure.clock import SystemClock

from .difficulty import DifficultyAdapter
from .utils.rounding import round_half_up

logger = logging.getLogger(__name__)


class ReviewScheduler:
    """
    Computes the outcome of a single review.

    Never mutates the card it is given; the caller merges the returned
    ReviewResult into its stored state (see `apply_review`).
    """

    def __init__(
        self,
        clock: Clock | None = None,
        adapter: DifficultyAdapter | None = None,
    ):
        """
        Args:
            clock: Source of "now" and of the calendar-day convention.
            adapter: Optional custom difficulty adapter; uses default if not provided.
        """
        self._clock = clock or SystemClock()
        self._adapter = adapter or DifficultyAdapter()

    def calculate_next_review(self, card: CardState, quality: int) -> ReviewResult:
        """
        Schedule the next review of `card` after a review rated `quality`.

        Args:
            card: State before this review (pre-validated).
            quality: Rating in [0, 5].

        Returns:
            ReviewResult with a day-normalized next review.
        """
        current_interval = self.current_interval(card)

        # EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
        ease_delta = 0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02)
        ease_factor = max(MIN_EASE_FACTOR, TIER_EASE_FACTORS[card.difficulty.value] + ease_delta)

        if quality < CORRECT_QUALITY:
            # Failed recall - reset
            interval = FIRST_INTERVAL_DAYS
        elif card.times_reviewed == 0:
            interval = FIRST_INTERVAL_DAYS
        elif card.times_reviewed == 1 or current_interval <= 1:
            # Second review, or recovering from a reset
            interval = SECOND_INTERVAL_DAYS
        else:
            interval = round_half_up(current_interval * ease_factor)

        interval = min(MAX_INTERVAL_DAYS, max(MIN_INTERVAL_DAYS, interval))

        due_day = self._clock.today() + timedelta(days=interval)
        next_review = self._clock.start_of_day(due_day)

        new_difficulty = self._adapter.calculate_new_difficulty(card, quality)

        logger.debug(
            f"Scheduled {card.card_id}: quality={quality}, ease={ease_factor:.2f}, "
            f"interval={current_interval}d -> {interval}d, next_review={due_day}"
        )

        return ReviewResult(
            next_review=next_review,
            interval_days=interval,
            new_difficulty=new_difficulty,
            ease_factor=ease_factor,
        )

    def current_interval(self, card: CardState) -> int:
        """
        Interval the card was last scheduled with, in whole days.

        Zero when the card has no complete schedule yet; otherwise the rounded
        gap between last review and next review, never below one day.
        """
        if card.last_reviewed is None or card.next_review is None:
            return 0

        gap = self._clock.localize(card.next_review) - self._clock.localize(card.last_reviewed)
        return max(1, round_half_up(gap.total_seconds() / SECONDS_PER_DAY))

    def apply_review(
        self,
        card: CardState,
        quality: int,
        result: ReviewResult | None = None,
    ) -> CardState:
        """
        Merge a review into the card's state, as the persistence layer would.

        Args:
            card: State before the review.
            quality: Rating in [0, 5].
            result: Outcome already computed for this review; computed if omitted.

        Returns:
            A new CardState. The input is left untouched.
        """
        if result is None:
            result = self.calculate_next_review(card, quality)

        return replace(
            card,
            difficulty=result.new_difficulty,
            times_reviewed=card.times_reviewed + 1,
            correct_count=card.correct_count + (1 if quality >= CORRECT_QUALITY else 0),
            last_reviewed=self._clock.now(),
            next_review=result.next_review,
        )
