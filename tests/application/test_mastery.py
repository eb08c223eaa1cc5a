"""Tests for the mastery estimator."""

from datetime import timedelta

import pytest

from cadence.application.mastery import MasteryEstimator, is_mastered


@pytest.fixture
def estimator(clock):
    return MasteryEstimator(clock=clock)


def test_mastered_card_returns_now(estimator, make_card, now):
    card = make_card(times_reviewed=5, correct_count=4)
    assert is_mastered(card)
    assert estimator.predict_mastery_date(card) == now


def test_new_card_assumes_half_accuracy(estimator, make_card, now):
    # 5 reviews needed, inflated to ceil(7.5) = 8 entries: 1+6+15+36+90+90+90+90
    card = make_card()
    assert estimator.estimated_reviews_needed(card) == 8
    assert estimator.predict_mastery_date(card) == now + timedelta(days=418)


def test_accurate_card_walks_remaining_progression(estimator, make_card, now):
    card = make_card(times_reviewed=2, correct_count=2)
    assert estimator.predict_mastery_date(card) == now + timedelta(days=15 + 36 + 90)


def test_inaccurate_card_is_inflated(estimator, make_card, now):
    # 3 reviews needed -> ceil(4.5) = 5, repeating the last entry past the end
    card = make_card(times_reviewed=2, correct_count=1)
    assert estimator.estimated_reviews_needed(card) == 5
    assert estimator.predict_mastery_date(card) == now + timedelta(days=15 + 36 + 90 + 90 + 90)


def test_one_review_left(estimator, make_card, now):
    card = make_card(times_reviewed=4, correct_count=4)
    assert estimator.predict_mastery_date(card) == now + timedelta(days=90)


def test_enough_reviews_but_low_accuracy_needs_no_more_reviews(estimator, make_card, now):
    card = make_card(times_reviewed=6, correct_count=3)
    assert not is_mastered(card)
    assert estimator.estimated_reviews_needed(card) == 0
    assert estimator.predict_mastery_date(card) == now


def test_custom_progression(clock, make_card, now):
    estimator = MasteryEstimator(clock=clock, progression=(2, 4))
    card = make_card(times_reviewed=1, correct_count=1)
    # 4 reviews needed from index 1: 4 + 4 + 4 + 4
    assert estimator.predict_mastery_date(card) == now + timedelta(days=16)


@pytest.mark.parametrize(
    "times_reviewed,correct_count,expected",
    [(0, 0, False), (4, 4, False), (5, 3, False), (5, 4, True), (10, 10, True)],
)
def test_is_mastered(make_card, times_reviewed, correct_count, expected):
    card = make_card(times_reviewed=times_reviewed, correct_count=correct_count)
    assert is_mastered(card) is expected
