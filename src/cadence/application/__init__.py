# Application Package
from .batch import BatchReviewer
from .difficulty import AdaptationRule, DifficultyAdapter
from .mastery import MasteryEstimator, is_mastered
from .scheduler import ReviewScheduler
from .stats import StatsCalculator
from .streak import StreakTracker
from .study_order import StudyOrderPlanner

__all__ = [
    "AdaptationRule",
    "BatchReviewer",
    "DifficultyAdapter",
    "MasteryEstimator",
    "ReviewScheduler",
    "StatsCalculator",
    "StreakTracker",
    "StudyOrderPlanner",
    "is_mastered",
]
