"""cadence CLI: schedule reviews, build study queues and report progress from JSON files."""

import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Annotated, Any

import typer

from cadence.application.config import EngineConfig, resolve_config
from cadence.domain.errors import CadenceError

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="cadence: spaced-repetition scheduling engine.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage cadence configuration.")
app.add_typer(config_app, name="config")

logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.ERROR, 1: logging.WARNING, 2: logging.INFO, 3: logging.DEBUG}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime | date):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def _echo_json(value: Any) -> None:
    if is_dataclass(value):
        value = asdict(value)
    typer.echo(json.dumps(value, indent=2, default=_json_default))


def _config(ctx: typer.Context) -> EngineConfig:
    try:
        return resolve_config(ctx.obj)
    except ValueError as e:
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _fail(e: CadenceError) -> typer.Exit:
    typer.secho(str(e), fg="red", err=True)
    return typer.Exit(1)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity: -v for info, -vv for debug."
        ),
    ] = 0,
    timezone: Annotated[
        str | None, typer.Option("--timezone", "--tz", help="IANA zone for calendar days.")
    ] = None,
):
    """Global settings for cadence."""
    ctx.ensure_object(dict)
    # Without -v the level comes from CADENCE_VERBOSE or the config file
    ctx.obj["verbose"] = min(verbose + 1, 3) if verbose else None
    ctx.obj["timezone"] = timezone

    config = _config(ctx)
    logging.basicConfig(
        level=_LOG_LEVELS[config.verbose],
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Engine commands
# ---------------------------------------------------------------------------


@app.command()
def review(
    ctx: typer.Context,
    cards_file: Annotated[Path, typer.Argument(help="JSON array of card records.")],
    card_id: Annotated[str, typer.Argument(help="Card being reviewed.")],
    quality: Annotated[int, typer.Argument(help="Recall quality, 0 (blackout) to 5 (perfect).")],
):
    """[bold green]Schedule[/bold green] the next review of a card."""
    from cadence.application.scheduler import ReviewScheduler
    from cadence.application.validation import validate_review
    from cadence.infrastructure.loaders import load_cards

    config = _config(ctx)
    try:
        item = validate_review({"card_id": card_id, "quality": quality})
        cards = {c.card_id: c for c in load_cards(cards_file)}
    except CadenceError as e:
        raise _fail(e) from e

    card = cards.get(item.card_id)
    if card is None:
        typer.secho(f"Card not found: {item.card_id}", fg="red", err=True)
        raise typer.Exit(1)

    result = ReviewScheduler(clock=config.clock()).calculate_next_review(card, item.quality)
    _echo_json(result)


@app.command()
def batch(
    ctx: typer.Context,
    cards_file: Annotated[Path, typer.Argument(help="JSON array of card records.")],
    reviews_file: Annotated[
        Path, typer.Argument(help="JSON array of {cardId, quality} reviews.")
    ],
):
    """Apply a batch of reviews; prints per-card results, merged states and a summary."""
    from cadence.application.batch import BatchReviewer
    from cadence.application.scheduler import ReviewScheduler
    from cadence.infrastructure.loaders import load_cards, load_review_batch

    config = _config(ctx)
    try:
        cards = {c.card_id: c for c in load_cards(cards_file)}
        reviews = load_review_batch(reviews_file, max_reviews=config.max_batch_reviews)
    except CadenceError as e:
        raise _fail(e) from e

    reviewer = BatchReviewer(scheduler=ReviewScheduler(clock=config.clock()))
    _echo_json(reviewer.review_batch(cards, reviews))


@app.command()
def queue(
    ctx: typer.Context,
    cards_file: Annotated[Path, typer.Argument(help="JSON array of card records.")],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output the partitioned plan as JSON.")
    ] = False,
):
    """Print the study order: overdue, then due today with new cards interleaved."""
    from cadence.application.study_order import StudyOrderPlanner
    from cadence.infrastructure.loaders import load_cards

    config = _config(ctx)
    try:
        cards = load_cards(cards_file)
    except CadenceError as e:
        raise _fail(e) from e

    plan = StudyOrderPlanner(clock=config.clock()).plan(cards)
    if json_output:
        _echo_json(plan)
        return

    for card_id in plan.order:
        typer.echo(card_id)


@app.command()
def mastery(
    ctx: typer.Context,
    cards_file: Annotated[Path, typer.Argument(help="JSON array of card records.")],
    card_id: Annotated[str, typer.Argument(help="Card to project.")],
):
    """Project when a card will be mastered."""
    from cadence.application.mastery import MasteryEstimator, is_mastered
    from cadence.infrastructure.loaders import load_cards

    config = _config(ctx)
    try:
        cards = {c.card_id: c for c in load_cards(cards_file)}
    except CadenceError as e:
        raise _fail(e) from e

    card = cards.get(card_id)
    if card is None:
        typer.secho(f"Card not found: {card_id}", fg="red", err=True)
        raise typer.Exit(1)

    estimator = MasteryEstimator(clock=config.clock())
    _echo_json(
        {
            "card_id": card_id,
            "mastered": is_mastered(card),
            "mastery_date": estimator.predict_mastery_date(card),
        }
    )


@app.command()
def streak(
    ctx: typer.Context,
    sessions_file: Annotated[Path, typer.Argument(help="JSON array of session records.")],
):
    """Report current and longest study streaks."""
    from cadence.application.streak import StreakTracker
    from cadence.infrastructure.loaders import load_sessions

    config = _config(ctx)
    try:
        sessions = load_sessions(sessions_file)
    except CadenceError as e:
        raise _fail(e) from e

    _echo_json(StreakTracker(clock=config.clock()).calculate_streak(sessions))


@app.command()
def stats(
    ctx: typer.Context,
    cards_file: Annotated[Path, typer.Argument(help="JSON array of card records.")],
    session_minutes: Annotated[
        float | None,
        typer.Option(help="Typical session length; adds a daily recommendation."),
    ] = None,
):
    """Summarize a deck: due, mastered, difficulty mix and accuracy."""
    from cadence.application.stats import StatsCalculator
    from cadence.infrastructure.loaders import load_cards

    config = _config(ctx)
    try:
        cards = load_cards(cards_file)
    except CadenceError as e:
        raise _fail(e) from e

    calculator = StatsCalculator(clock=config.clock())
    deck = calculator.deck_stats(cards)
    output: dict[str, Any] = asdict(deck)

    if session_minutes is not None:
        recommendation = calculator.recommend_daily_count(
            total_cards=deck.total,
            average_accuracy=deck.average_accuracy / 100,
            average_session_minutes=session_minutes,
        )
        output["recommendation"] = asdict(recommendation)

    _echo_json(output)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    _echo_json(config.model_dump())
