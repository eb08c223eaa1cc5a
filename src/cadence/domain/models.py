"""
Domain models for the scheduling engine.

These are pure data structures with no I/O or external dependencies.
Card state is owned by the caller's persistence layer; the engine only reads
it and returns new values.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class Difficulty(str, Enum):
    """Coarse three-level difficulty tier."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    def harder(self) -> "Difficulty":
        """One tier up, saturating at HARD."""
        if self is Difficulty.EASY:
            return Difficulty.MEDIUM
        return Difficulty.HARD

    def easier(self) -> "Difficulty":
        """One tier down, saturating at EASY."""
        if self is Difficulty.HARD:
            return Difficulty.MEDIUM
        return Difficulty.EASY

    @property
    def review_rank(self) -> int:
        """Sort key for due cards: harder material first."""
        return _REVIEW_RANK[self]


_REVIEW_RANK = {Difficulty.HARD: 0, Difficulty.MEDIUM: 1, Difficulty.EASY: 2}


@dataclass(frozen=True)
class CardState:
    """
    Scheduling state of a single card as persisted by the caller.

    Attributes:
        card_id: Opaque identifier, used for ordering output.
        difficulty: Current difficulty tier.
        times_reviewed: Completed reviews so far.
        correct_count: Reviews answered with quality >= 3 (never above times_reviewed).
        last_reviewed: Timestamp of the previous review, if any.
        next_review: Previously scheduled next review, if any.
    """

    card_id: str
    difficulty: Difficulty = Difficulty.MEDIUM
    times_reviewed: int = 0
    correct_count: int = 0
    last_reviewed: datetime | None = None
    next_review: datetime | None = None

    @classmethod
    def new(cls, card_id: str, difficulty: Difficulty = Difficulty.MEDIUM) -> "CardState":
        """State for a card on first exposure: zeroed counters, no schedule."""
        return cls(card_id=card_id, difficulty=difficulty)

    @property
    def accuracy(self) -> float | None:
        """Share of correct reviews, or None when never reviewed."""
        if self.times_reviewed == 0:
            return None
        return self.correct_count / self.times_reviewed


@dataclass(frozen=True)
class ReviewResult:
    """
    Outcome of scheduling one review.

    Attributes:
        next_review: Start of the day the card is due again.
        interval_days: Days until next review, within [1, 365].
        new_difficulty: Tier after adaptation (at most one step from the old tier).
        ease_factor: Ease used for this review, never below 1.3.
    """

    next_review: datetime
    interval_days: int
    new_difficulty: Difficulty
    ease_factor: float


@dataclass(frozen=True)
class SessionRecord:
    """A completed study session from the caller's session log."""

    started_at: datetime
    cards_studied: int


@dataclass(frozen=True)
class StreakStats:
    """Study-streak statistics derived from a session log."""

    current_streak: int = 0
    longest_streak: int = 0
    last_study_date: date | None = None


@dataclass
class StudyPlan:
    """
    Partitioned study queue.

    `order` is the flat sequence to present; the other lists keep the
    partitions for reporting.
    """

    overdue: list[str] = field(default_factory=list)  # most overdue first
    due_today: list[str] = field(default_factory=list)  # hardest first
    new: list[str] = field(default_factory=list)  # input order
    upcoming: list[str] = field(default_factory=list)  # soonest first
    order: list[str] = field(default_factory=list)

    @property
    def total_cards(self) -> int:
        return len(self.order)


@dataclass(frozen=True)
class ReviewItem:
    """A single (card, quality) pair from a batch submission."""

    card_id: str
    quality: int


@dataclass(frozen=True)
class BatchItemResult:
    """Per-card outcome of a batch review."""

    card_id: str
    success: bool
    result: ReviewResult | None = None
    error: str | None = None


@dataclass(frozen=True)
class SessionSummary:
    """Aggregate summary the caller records for a batch review."""

    total: int
    successful: int
    correct: int
    accuracy: float

    @property
    def cards_studied(self) -> int:
        return self.successful


@dataclass
class BatchReviewOutcome:
    """Result of a batch review: per-item results, merged states and a summary."""

    results: list[BatchItemResult]
    updated: dict[str, CardState]
    summary: SessionSummary


@dataclass(frozen=True)
class DailyRecommendation:
    """Recommended number of new and review cards for one day."""

    new_cards: int
    review_cards: int


@dataclass(frozen=True)
class DeckStats:
    """Aggregate statistics over a set of cards."""

    total: int = 0
    due_now: int = 0
    mastered: int = 0
    learning: int = 0
    by_difficulty: dict[str, int] = field(
        default_factory=lambda: {d.value: 0 for d in Difficulty}
    )
    average_accuracy: int = 0  # percent
