"""Centralized constants for the scheduling engine.

All magic numbers live here so every layer imports from a single source of truth.
"""

# ---------- Ease factor ----------
# Baseline ease per difficulty tier, keyed by Difficulty value.
TIER_EASE_FACTORS = {
    "EASY": 2.8,
    "MEDIUM": 2.5,
    "HARD": 2.0,
}
MIN_EASE_FACTOR = 1.3

# ---------- Intervals ----------
MIN_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 365
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
SECONDS_PER_DAY = 86400

# ---------- Quality ----------
MIN_QUALITY = 0
MAX_QUALITY = 5
CORRECT_QUALITY = 3  # quality >= this counts as a correct answer

# ---------- Difficulty adaptation ----------
MIN_REVIEWS_FOR_ADAPTATION = 3
EASIER_SUCCESS_RATE = 0.9
HARDER_SUCCESS_RATE = 0.5
PERFECT_RECALL_SUCCESS_RATE = 0.8
CATASTROPHIC_QUALITY = 1

# ---------- Study order ----------
NEW_CARD_STRIDE = 3  # one new card after every N due-today cards

# ---------- Mastery ----------
MASTERY_MIN_REVIEWS = 5
MASTERY_MIN_ACCURACY = 0.8
UNSEEN_CARD_ACCURACY = 0.5
LOW_ACCURACY_INFLATION = 1.5
CANONICAL_PROGRESSION = (1, 6, 15, 36, 90)

# ---------- Batch review ----------
MAX_BATCH_REVIEWS = 100

# ---------- Daily recommendation ----------
BASE_NEW_CARDS = 20
BASE_REVIEW_CARDS = 50
