"""
Difficulty adaptation.

Reclassifies a card's tier from its accumulated performance plus the rating
being submitted. Rules are evaluated top to bottom and the first match wins,
so a catastrophic single failure can only escalate a card whose running
average did not already trigger a move.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from cadence.domain.constants import (
    CATASTROPHIC_QUALITY,
    CORRECT_QUALITY,
    EASIER_SUCCESS_RATE,
    HARDER_SUCCESS_RATE,
    MAX_QUALITY,
    MIN_REVIEWS_FOR_ADAPTATION,
    PERFECT_RECALL_SUCCESS_RATE,
)
from cadence.domain.models import CardState, Difficulty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleInput:
    """Everything a rule may look at."""

    difficulty: Difficulty
    quality: int
    success_rate: float


@dataclass(frozen=True)
class AdaptationRule:
    """A guarded tier move: if `applies` holds, the tier becomes `move(tier)`."""

    name: str
    applies: Callable[[RuleInput], bool]
    move: Callable[[Difficulty], Difficulty]


DEFAULT_RULES: tuple[AdaptationRule, ...] = (
    # high_success_rate: requires a passing rating, otherwise a long good
    # history (e.g. 19/20 correct) would ease a card on a failed review and
    # break "quality < 3 never lowers difficulty"
    AdaptationRule(
        name="high_success_rate",
        applies=lambda r: r.success_rate >= EASIER_SUCCESS_RATE
        and r.quality >= CORRECT_QUALITY
        and r.difficulty is not Difficulty.EASY,
        move=Difficulty.easier,
    ),
    AdaptationRule(
        name="low_success_rate",
        applies=lambda r: r.success_rate < HARDER_SUCCESS_RATE
        and r.difficulty is not Difficulty.HARD,
        move=Difficulty.harder,
    ),
    AdaptationRule(
        name="catastrophic_failure",
        applies=lambda r: r.quality <= CATASTROPHIC_QUALITY
        and r.difficulty is not Difficulty.HARD,
        move=Difficulty.harder,
    ),
    AdaptationRule(
        name="perfect_recall",
        applies=lambda r: r.quality == MAX_QUALITY
        and r.difficulty is not Difficulty.EASY
        and r.success_rate >= PERFECT_RECALL_SUCCESS_RATE,
        move=Difficulty.easier,
    ),
)


class DifficultyAdapter:
    """
    Computes a card's new difficulty tier after a review.

    Stateless and side-effect free.
    """

    def __init__(self, rules: tuple[AdaptationRule, ...] = DEFAULT_RULES):
        self._rules = rules

    def calculate_new_difficulty(self, card: CardState, quality: int) -> Difficulty:
        """
        Return the tier the card should have once this review is counted.

        The tier is left alone until the card has at least three reviews
        including this one, and otherwise moves by at most one step.
        """
        total_reviews = card.times_reviewed + 1
        if total_reviews < MIN_REVIEWS_FOR_ADAPTATION:
            return card.difficulty

        correct_reviews = card.correct_count + (1 if quality >= CORRECT_QUALITY else 0)
        rule_input = RuleInput(
            difficulty=card.difficulty,
            quality=quality,
            success_rate=correct_reviews / total_reviews,
        )

        for rule in self._rules:
            if rule.applies(rule_input):
                new_difficulty = rule.move(card.difficulty)
                logger.debug(
                    f"Card {card.card_id}: rule {rule.name} moved "
                    f"{card.difficulty.value} -> {new_difficulty.value} "
                    f"(success_rate={rule_input.success_rate:.2f}, quality={quality})"
                )
                return new_difficulty

        return card.difficulty
