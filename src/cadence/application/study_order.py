"""
Study order planner.

Builds a single flat study queue by:
1. Putting overdue cards first, most overdue first
2. Sorting cards due today hardest first
3. Interleaving new cards into the due-today stream (one after every three)
4. Appending leftover new cards, then cards not yet due
"""

import logging
from collections.abc import Iterable
from datetime import timedelta

from cadence.domain.constants import NEW_CARD_STRIDE
from cadence.domain.models import CardState, StudyPlan
from cadence.domain.ports import Clock
from cadence.infrastructure.clock import SystemClock

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


class StudyOrderPlanner:
    """
    Orders a learner's cards into a study queue.

    Stateless and side-effect free.
    """

    def __init__(self, clock: Clock | None = None, new_card_stride: int = NEW_CARD_STRIDE):
        self._clock = clock or SystemClock()
        self._stride = new_card_stride

    def get_study_order(self, cards: Iterable[CardState]) -> list[str]:
        """
        Return card ids in the order they should be studied.

        Every input card appears exactly once.
        """
        return self.plan(cards).order

    def plan(self, cards: Iterable[CardState]) -> StudyPlan:
        """
        Partition cards as of now and build the flat queue.

        Returns:
            StudyPlan with the overdue, due-today, new and upcoming partitions.
        """
        now = self._clock.now()

        overdue: list[tuple[timedelta, CardState]] = []
        due_today: list[CardState] = []
        new: list[CardState] = []
        upcoming: list[CardState] = []

        for card in cards:
            if card.next_review is None or card.times_reviewed == 0:
                new.append(card)
                continue

            lateness = now - self._clock.localize(card.next_review)
            if lateness < timedelta(0):
                upcoming.append(card)
            elif lateness >= _ONE_DAY:
                overdue.append((lateness, card))
            else:
                due_today.append(card)

        # Most overdue first; ties by id so the order is reproducible
        overdue.sort(key=lambda item: (-item[0], item[1].card_id))
        # Stable sort keeps input order within a tier
        due_today.sort(key=lambda c: c.difficulty.review_rank)
        upcoming.sort(key=lambda c: (self._clock.localize(c.next_review), c.card_id))

        order = [card.card_id for _, card in overdue]

        new_iter = iter(new)
        for position, card in enumerate(due_today, start=1):
            order.append(card.card_id)
            if position % self._stride == 0:
                next_new = next(new_iter, None)
                if next_new is not None:
                    order.append(next_new.card_id)

        order.extend(card.card_id for card in new_iter)
        order.extend(card.card_id for card in upcoming)

        logger.debug(
            f"Study plan: {len(overdue)} overdue, {len(due_today)} due today, "
            f"{len(new)} new, {len(upcoming)} upcoming"
        )

        return StudyPlan(
            overdue=[card.card_id for _, card in overdue],
            due_today=[card.card_id for card in due_today],
            new=[card.card_id for card in new],
            upcoming=[card.card_id for card in upcoming],
            order=order,
        )
