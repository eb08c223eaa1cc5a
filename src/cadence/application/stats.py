"""
Deck statistics and daily workload recommendations.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable

from cadence.domain.constants import BASE_NEW_CARDS, BASE_REVIEW_CARDS
from cadence.domain.models import CardState, DailyRecommendation, DeckStats, Difficulty
from cadence.domain.ports import Clock
from cadence.infrastructure.clock import SystemClock

from .mastery import is_mastered
from .utils.rounding import round_half_up


class StatsCalculator:
    """
    Computes aggregate metrics over a learner's cards.

    Stateless and side-effect free.
    """

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()

    def deck_stats(self, cards: Iterable[CardState]) -> DeckStats:
        """
        Summarize a set of cards.

        A card is due now when it has never been scheduled or its next review
        has passed. Average accuracy is an integer percentage over all reviews.
        """
        cards = list(cards)
        if not cards:
            return DeckStats()

        now = self._clock.now()
        due_now = sum(
            1
            for c in cards
            if c.next_review is None or self._clock.localize(c.next_review) <= now
        )
        mastered = sum(1 for c in cards if is_mastered(c))

        by_difficulty = {d.value: 0 for d in Difficulty}
        for card in cards:
            by_difficulty[card.difficulty.value] += 1

        total_reviewed = sum(c.times_reviewed for c in cards)
        total_correct = sum(c.correct_count for c in cards)
        average_accuracy = (
            round_half_up(total_correct / total_reviewed * 100) if total_reviewed else 0
        )

        return DeckStats(
            total=len(cards),
            due_now=due_now,
            mastered=mastered,
            learning=len(cards) - mastered,
            by_difficulty=by_difficulty,
            average_accuracy=average_accuracy,
        )

    def recommend_daily_count(
        self,
        total_cards: int,
        average_accuracy: float,
        average_session_minutes: float,
    ) -> DailyRecommendation:
        """
        Recommend how many new and review cards to study per day.

        Args:
            total_cards: Cards available to the learner.
            average_accuracy: Historical accuracy in [0, 1].
            average_session_minutes: Typical session length.
        """
        new_cards = BASE_NEW_CARDS
        review_cards = BASE_REVIEW_CARDS

        # Lower accuracy -> fewer new cards
        if average_accuracy < 0.6:
            new_cards, review_cards = 10, 30
        elif average_accuracy < 0.8:
            new_cards, review_cards = 15, 40

        if average_session_minutes < 10:
            new_cards = min(new_cards, 10)
            review_cards = min(review_cards, 20)
        elif average_session_minutes > 30:
            new_cards = min(new_cards + 10, 30)
            review_cards = min(review_cards + 20, 100)

        return DailyRecommendation(
            new_cards=min(new_cards, total_cards),
            review_cards=review_cards,
        )
