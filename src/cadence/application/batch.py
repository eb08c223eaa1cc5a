"""
Batch review orchestrator.

Applies a submitted batch of (card, quality) pairs through the scheduler and
produces the aggregate session summary the caller records. Nothing is
persisted here.
"""

import logging
from collections.abc import Iterable, Mapping

from cadence.domain.constants import CORRECT_QUALITY
from cadence.domain.models import (
    BatchItemResult,
    BatchReviewOutcome,
    CardState,
    ReviewItem,
    SessionSummary,
)

from .scheduler import ReviewScheduler

logger = logging.getLogger(__name__)


class BatchReviewer:
    """
    Reviews many cards in one call.

    Depends on a ReviewScheduler; uses a default one if not provided.
    """

    def __init__(self, scheduler: ReviewScheduler | None = None):
        self._scheduler = scheduler or ReviewScheduler()

    def review_batch(
        self,
        cards: Mapping[str, CardState],
        reviews: Iterable[ReviewItem],
    ) -> BatchReviewOutcome:
        """
        Review every item in order.

        Unknown card ids are reported as failed items rather than aborting the
        batch. A card reviewed twice in the same batch sees its merged state
        the second time.

        Args:
            cards: Current states keyed by card id.
            reviews: Validated review items.

        Returns:
            BatchReviewOutcome with per-item results, merged states and a summary.
        """
        reviews = list(reviews)
        updated: dict[str, CardState] = {}
        results: list[BatchItemResult] = []

        for item in reviews:
            card = updated.get(item.card_id) or cards.get(item.card_id)
            if card is None:
                logger.warning(f"Skipping review for unknown card {item.card_id}")
                results.append(
                    BatchItemResult(card_id=item.card_id, success=False, error="Card not found")
                )
                continue

            result = self._scheduler.calculate_next_review(card, item.quality)
            updated[item.card_id] = self._scheduler.apply_review(card, item.quality, result)
            results.append(BatchItemResult(card_id=item.card_id, success=True, result=result))

        successful = sum(1 for r in results if r.success)
        correct = sum(1 for item in reviews if item.quality >= CORRECT_QUALITY)
        summary = SessionSummary(
            total=len(reviews),
            successful=successful,
            correct=correct,
            accuracy=correct / len(reviews) if reviews else 0.0,
        )

        logger.info(
            f"Batch review: {successful}/{len(reviews)} applied, {correct} correct"
        )
        return BatchReviewOutcome(results=results, updated=updated, summary=summary)
