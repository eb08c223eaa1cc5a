"""Tests for batch reviews."""

import pytest

from cadence.application.batch import BatchReviewer
from cadence.application.scheduler import ReviewScheduler
from cadence.domain.models import ReviewItem


@pytest.fixture
def reviewer(clock):
    return BatchReviewer(scheduler=ReviewScheduler(clock=clock))


def test_batch_applies_each_review(reviewer, make_card, now):
    cards = {
        "a": make_card(card_id="a"),
        "b": make_card(card_id="b", times_reviewed=1, correct_count=1, interval_days=1, due_in_days=0),
    }

    outcome = reviewer.review_batch(cards, [ReviewItem("a", 4), ReviewItem("b", 1)])

    assert [r.success for r in outcome.results] == [True, True]
    assert outcome.results[0].result.interval_days == 1
    assert outcome.updated["a"].times_reviewed == 1
    assert outcome.updated["a"].correct_count == 1
    assert outcome.updated["b"].times_reviewed == 2
    assert outcome.updated["b"].correct_count == 1
    assert outcome.updated["b"].last_reviewed == now
    # Inputs untouched
    assert cards["a"].times_reviewed == 0

    assert outcome.summary.total == 2
    assert outcome.summary.successful == 2
    assert outcome.summary.correct == 1
    assert outcome.summary.accuracy == 0.5
    assert outcome.summary.cards_studied == 2


def test_unknown_card_is_reported_not_raised(reviewer, make_card):
    cards = {"a": make_card(card_id="a")}

    outcome = reviewer.review_batch(cards, [ReviewItem("missing", 5), ReviewItem("a", 3)])

    assert outcome.results[0].success is False
    assert outcome.results[0].error == "Card not found"
    assert outcome.results[1].success is True
    assert set(outcome.updated) == {"a"}
    # Accuracy is over every submitted review
    assert outcome.summary.successful == 1
    assert outcome.summary.correct == 2
    assert outcome.summary.accuracy == 1.0


def test_repeated_card_sees_merged_state(reviewer, make_card):
    cards = {"a": make_card(card_id="a")}

    outcome = reviewer.review_batch(cards, [ReviewItem("a", 4), ReviewItem("a", 4)])

    assert outcome.results[0].result.interval_days == 1
    assert outcome.results[1].result.interval_days == 6
    assert outcome.updated["a"].times_reviewed == 2


def test_empty_batch(reviewer):
    outcome = reviewer.review_batch({}, [])
    assert outcome.results == []
    assert outcome.summary.accuracy == 0.0
