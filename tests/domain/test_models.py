"""Tests for domain models and the clock port."""

from dataclasses import FrozenInstanceError
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from cadence.domain.models import CardState, Difficulty, StudyPlan
from cadence.infrastructure.clock import FixedClock, SystemClock


class TestCardState:
    def test_new_card_has_zeroed_counters(self):
        card = CardState.new("c1", Difficulty.HARD)
        assert card.times_reviewed == 0
        assert card.correct_count == 0
        assert card.last_reviewed is None
        assert card.next_review is None
        assert card.difficulty == Difficulty.HARD

    def test_is_immutable(self):
        card = CardState.new("c1")
        with pytest.raises(FrozenInstanceError):
            card.times_reviewed = 3

    def test_accuracy(self):
        assert CardState.new("c1").accuracy is None
        assert CardState("c1", times_reviewed=4, correct_count=3).accuracy == 0.75


def test_difficulty_review_rank():
    ranked = sorted(Difficulty, key=lambda d: d.review_rank)
    assert ranked == [Difficulty.HARD, Difficulty.MEDIUM, Difficulty.EASY]


def test_difficulty_is_a_string():
    assert Difficulty("EASY") is Difficulty.EASY
    assert Difficulty.MEDIUM == "MEDIUM"


def test_study_plan_total():
    assert StudyPlan(order=["a", "b"]).total_cards == 2


class TestClock:
    def test_fixed_clock(self):
        instant = datetime(2026, 3, 10, 15, 30, tzinfo=UTC)
        clock = FixedClock(instant)
        assert clock.now() == instant
        assert clock.today() == date(2026, 3, 10)

    def test_fixed_clock_naive_instant_is_utc(self):
        clock = FixedClock(datetime(2026, 3, 10, 23, 0))
        assert clock.now() == datetime(2026, 3, 10, 23, 0, tzinfo=UTC)

    def test_local_date_in_zone(self):
        clock = FixedClock(datetime(2026, 3, 10, 23, 0, tzinfo=UTC), tz=ZoneInfo("Europe/Berlin"))
        assert clock.today() == date(2026, 3, 11)
        assert clock.local_date(datetime(2026, 3, 10, 22, 59, tzinfo=UTC)) == date(2026, 3, 10)

    def test_start_of_day(self):
        tz = ZoneInfo("Europe/Berlin")
        clock = FixedClock(datetime(2026, 3, 10, tzinfo=UTC), tz=tz)
        assert clock.start_of_day(date(2026, 3, 12)) == datetime(2026, 3, 11, 23, 0, tzinfo=UTC)

    def test_system_clock_is_aware(self):
        assert SystemClock().now().tzinfo is not None
