# Domain Package
from .errors import CadenceError, InvalidReviewError
from .models import (
    BatchItemResult,
    BatchReviewOutcome,
    CardState,
    DailyRecommendation,
    DeckStats,
    Difficulty,
    ReviewItem,
    ReviewResult,
    SessionRecord,
    SessionSummary,
    StreakStats,
    StudyPlan,
)
from .ports import Clock

__all__ = [
    "BatchItemResult",
    "BatchReviewOutcome",
    "CadenceError",
    "CardState",
    "Clock",
    "DailyRecommendation",
    "DeckStats",
    "Difficulty",
    "InvalidReviewError",
    "ReviewItem",
    "ReviewResult",
    "SessionRecord",
    "SessionSummary",
    "StreakStats",
    "StudyPlan",
]
