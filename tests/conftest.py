from datetime import UTC, datetime, timedelta

import pytest

from cadence.domain.models import CardState, Difficulty
from cadence.infrastructure.clock import FixedClock

# Mid-afternoon so day normalization is observable
NOW = datetime(2026, 3, 10, 15, 30, tzinfo=UTC)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def make_card():
    """Factory for card states relative to NOW."""

    def _make(
        card_id: str = "c1",
        difficulty: Difficulty = Difficulty.MEDIUM,
        times_reviewed: int = 0,
        correct_count: int = 0,
        interval_days: int | None = None,
        due_in_days: float | None = None,
    ) -> CardState:
        last_reviewed = None
        next_review = None
        if due_in_days is not None:
            next_review = NOW + timedelta(days=due_in_days)
            if interval_days is not None:
                last_reviewed = next_review - timedelta(days=interval_days)
        return CardState(
            card_id=card_id,
            difficulty=difficulty,
            times_reviewed=times_reviewed,
            correct_count=correct_count,
            last_reviewed=last_reviewed,
            next_review=next_review,
        )

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config lookups from the real home directory
    monkeypatch.setenv("HOME", str(home))
    return home
