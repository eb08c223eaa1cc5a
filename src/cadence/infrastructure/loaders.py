"""Load card and session records from JSON files."""

import json
import logging
from pathlib import Path
from typing import Any

from cadence.application.validation import validate_batch, validate_cards, validate_sessions
from cadence.domain.constants import MAX_BATCH_REVIEWS
from cadence.domain.errors import InvalidReviewError
from cadence.domain.models import CardState, ReviewItem, SessionRecord

logger = logging.getLogger(__name__)


def _read_records(path: Path) -> list[dict[str, Any]]:
    """
    Read a JSON array of objects.

    A top-level object with a single list value (e.g. {"cards": [...]}) is
    unwrapped as well.
    """
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidReviewError(f"{path}: not valid JSON ({e.msg} at line {e.lineno})") from e

    if isinstance(data, dict):
        lists = [v for v in data.values() if isinstance(v, list)]
        if len(lists) == 1:
            data = lists[0]

    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise InvalidReviewError(f"{path}: expected a JSON array of objects")

    logger.debug(f"Read {len(data)} records from {path}")
    return data


def load_cards(path: Path) -> list[CardState]:
    return validate_cards(_read_records(path))


def load_sessions(path: Path) -> list[SessionRecord]:
    return validate_sessions(_read_records(path))


def load_review_batch(path: Path, max_reviews: int = MAX_BATCH_REVIEWS) -> list[ReviewItem]:
    """Read a batch of reviews, either a bare array or {"reviews": [...]}."""
    return validate_batch({"reviews": _read_records(path)}, max_reviews=max_reviews)
