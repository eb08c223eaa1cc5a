"""
Validation boundary.

The engine assumes pre-validated input and never coerces out-of-domain values.
Callers run raw records (API payloads, JSON files) through these models first;
anything outside the documented domain is rejected with InvalidReviewError.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)

from cadence.domain.constants import MAX_BATCH_REVIEWS, MAX_QUALITY, MIN_QUALITY
from cadence.domain.errors import InvalidReviewError
from cadence.domain.models import CardState, Difficulty, ReviewItem, SessionRecord


class CardRecord(BaseModel):
    """A stored card as received from persistence. Accepts camelCase keys."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    card_id: str = Field(min_length=1, validation_alias=AliasChoices("card_id", "cardId", "id"))
    difficulty: Difficulty = Difficulty.MEDIUM
    times_reviewed: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("times_reviewed", "timesReviewed")
    )
    correct_count: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("correct_count", "correctCount")
    )
    last_reviewed: datetime | None = Field(
        default=None, validation_alias=AliasChoices("last_reviewed", "lastReviewed")
    )
    next_review: datetime | None = Field(
        default=None, validation_alias=AliasChoices("next_review", "nextReview")
    )

    @model_validator(mode="after")
    def check_counters(self) -> "CardRecord":
        if self.correct_count > self.times_reviewed:
            raise ValueError(
                f"correct_count ({self.correct_count}) exceeds "
                f"times_reviewed ({self.times_reviewed})"
            )
        return self

    def to_state(self) -> CardState:
        return CardState(
            card_id=self.card_id,
            difficulty=self.difficulty,
            times_reviewed=self.times_reviewed,
            correct_count=self.correct_count,
            last_reviewed=self.last_reviewed,
            next_review=self.next_review,
        )


class ReviewRequest(BaseModel):
    """One review submission."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    card_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("card_id", "cardId", "flashcardId", "id"),
    )
    quality: int = Field(ge=MIN_QUALITY, le=MAX_QUALITY)

    def to_item(self) -> ReviewItem:
        return ReviewItem(card_id=self.card_id, quality=self.quality)


class BatchReviewRequest(BaseModel):
    """A batch of review submissions."""

    reviews: list[ReviewRequest] = Field(min_length=1)


class SessionLogEntry(BaseModel):
    """One entry from a learner's session log."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    started_at: datetime = Field(validation_alias=AliasChoices("started_at", "startedAt"))
    cards_studied: int = Field(ge=0, validation_alias=AliasChoices("cards_studied", "cardsStudied"))

    def to_record(self) -> SessionRecord:
        return SessionRecord(started_at=self.started_at, cards_studied=self.cards_studied)


def humanize_validation_error(e: ValidationError) -> str:
    """Flatten a pydantic error into one readable line."""
    parts = []
    for err in e.errors():
        location = ".".join(str(p) for p in err["loc"]) or "record"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def validate_card(data: Mapping[str, Any]) -> CardState:
    try:
        return CardRecord.model_validate(data).to_state()
    except ValidationError as e:
        raise InvalidReviewError(f"Invalid card: {humanize_validation_error(e)}") from e


def validate_cards(records: Iterable[Mapping[str, Any]]) -> list[CardState]:
    return [validate_card(record) for record in records]


def validate_review(data: Mapping[str, Any]) -> ReviewItem:
    try:
        return ReviewRequest.model_validate(data).to_item()
    except ValidationError as e:
        raise InvalidReviewError(f"Invalid review: {humanize_validation_error(e)}") from e


def validate_batch(
    data: Mapping[str, Any],
    max_reviews: int = MAX_BATCH_REVIEWS,
) -> list[ReviewItem]:
    """
    Validate a batch payload of the form {"reviews": [{card_id, quality}, ...]}.

    Raises:
        InvalidReviewError: If any review is malformed or the batch is empty
            or larger than `max_reviews`.
    """
    try:
        request = BatchReviewRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidReviewError(f"Invalid batch: {humanize_validation_error(e)}") from e

    if len(request.reviews) > max_reviews:
        raise InvalidReviewError(
            f"Invalid batch: {len(request.reviews)} reviews exceeds the limit of {max_reviews}"
        )
    return [review.to_item() for review in request.reviews]


def validate_session(data: Mapping[str, Any]) -> SessionRecord:
    try:
        return SessionLogEntry.model_validate(data).to_record()
    except ValidationError as e:
        raise InvalidReviewError(f"Invalid session: {humanize_validation_error(e)}") from e


def validate_sessions(records: Iterable[Mapping[str, Any]]) -> list[SessionRecord]:
    return [validate_session(record) for record in records]
