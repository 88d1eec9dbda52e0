"""phraseforge CLI: study commands on top of the scheduling library."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

import pydantic
import typer

from phraseforge.application.config import AppConfig, resolve_config
from phraseforge.application.factory import StudySession, build_session
from phraseforge.application.scheduling.next_date import describe_next_review
from phraseforge.domain.errors import PhraseForgeError
from phraseforge.domain.intervals import ReviewInterval, interval_label
from phraseforge.domain.models import Phrase

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="phraseforge: spaced-repetition study for bilingual phrases.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage phraseforge configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _config(ctx: typer.Context) -> AppConfig:
    """Resolve configuration, reporting invalid settings as exit code 1."""
    try:
        return resolve_config(ctx.obj.get("overrides") if ctx.obj else None)
    except pydantic.ValidationError as e:
        logger.debug("Invalid configuration", exc_info=True)
        typer.secho(f"Error: invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(1)


def _run(ctx: typer.Context, action) -> Any:
    """Build a session, run `action(session)` and turn domain errors into exit code 1."""
    session = build_session(_config(ctx))

    async def runner():
        await session.initialize()
        return await action(session)

    try:
        return asyncio.run(runner())
    except PhraseForgeError as e:
        logger.debug("Command failed", exc_info=True)
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1)


def _phrase_line(phrase: Phrase, now: datetime) -> str:
    when = describe_next_review(phrase.next_review_date, now)
    return f"{phrase.id}  {phrase.english} / {phrase.japanese}  [{when}]"


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    data_path: Annotated[
        Path | None, typer.Option(help="Path to the YAML phrase store.")
    ] = None,
    backend: Annotated[
        str | None, typer.Option(help="Storage backend: yaml, memory.")
    ] = None,
):
    """Global settings for phraseforge."""
    logging.getLogger().setLevel(VERBOSITY_LEVELS.get(verbose, logging.DEBUG))
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"data_path": data_path, "backend": backend}


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def init(ctx: typer.Context):
    """Create the store and seed the default categories."""

    async def action(session: StudySession):
        return await session.catalog.categories()

    categories = _run(ctx, action)
    typer.secho(f"Ready with {len(categories)} categories.", fg="green")


@app.command()
def add(
    ctx: typer.Context,
    english: Annotated[str, typer.Argument(help="Front of the card.")],
    japanese: Annotated[str, typer.Argument(help="Back of the card.")],
    category: Annotated[str, typer.Option(help="Category ID.")] = "daily",
    pronunciation: Annotated[str | None, typer.Option(help="Pronunciation hint.")] = None,
    tag: Annotated[
        list[str] | None, typer.Option("--tag", "-t", help="Tag; repeat for several.")
    ] = None,
    on_duplicate: Annotated[
        str, typer.Option(help="When the phrase already exists: allow, reject, merge.")
    ] = "reject",
):
    """[bold green]Add[/bold green] a phrase, due today."""

    async def action(session: StudySession):
        return await session.phrases.add_phrase(
            english,
            japanese,
            category_id=category,
            pronunciation=pronunciation,
            tags=tag or [],
            on_duplicate=on_duplicate,
        )

    phrase = _run(ctx, action)
    typer.echo(phrase.id)


@app.command()
def due(
    ctx: typer.Context,
    date: Annotated[
        datetime | None, typer.Option("--date", help="Reference day (defaults to today).")
    ] = None,
):
    """List phrases due for review."""
    now = date or datetime.now()

    async def action(session: StudySession):
        return await session.phrases.due_phrases(now)

    phrases = _run(ctx, action)
    if not phrases:
        typer.secho("Nothing due.", fg="green")
        return
    for phrase in phrases:
        typer.echo(_phrase_line(phrase, now))
    typer.echo(f"{len(phrases)} due")


@app.command()
def recommend(
    ctx: typer.Context,
    phrase_id: Annotated[str, typer.Argument(help="Phrase ID.")],
):
    """Show the recommended next interval for a phrase."""

    async def action(session: StudySession):
        return await session.phrases.recommend(phrase_id)

    interval = _run(ctx, action)
    typer.echo(f"{interval.value} ({interval_label(interval)})")


@app.command()
def review(
    ctx: typer.Context,
    phrase_id: Annotated[str, typer.Argument(help="Phrase ID.")],
    interval: Annotated[
        ReviewInterval | None,
        typer.Argument(help="Interval to schedule. Defaults to the recommendation."),
    ] = None,
    difficulty: Annotated[
        float, typer.Option("--difficulty", "-d", help="0.0 (trivial) to 1.0 (very hard).")
    ] = 0.5,
):
    """[bold green]Record[/bold green] a review and reschedule the phrase."""

    async def action(session: StudySession):
        chosen = interval or await session.phrases.recommend(phrase_id)
        return await session.reviews.record_review(phrase_id, chosen, difficulty)

    phrase = _run(ctx, action)
    last = phrase.review_history[-1]
    typer.secho(
        f"Recorded {last.interval} review; next review "
        f"{phrase.next_review_date:%Y-%m-%d} ({describe_next_review(phrase.next_review_date)})",
        fg="green",
    )


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Text to look for on either side.")],
):
    """Search phrases by English or Japanese text."""

    async def action(session: StudySession):
        return await session.phrases.search(query)

    now = datetime.now()
    for phrase in _run(ctx, action):
        typer.echo(_phrase_line(phrase, now))


@app.command()
def stats(
    ctx: typer.Context,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the full snapshot as JSON.")
    ] = False,
):
    """Show study statistics."""

    async def action(session: StudySession):
        return await session.stats.get_stats()

    snapshot = _run(ctx, action)
    if as_json:
        typer.echo(json.dumps(asdict(snapshot), indent=2, default=str, ensure_ascii=False))
        return

    m = snapshot.mastery_levels
    typer.echo(f"Phrases:         {snapshot.total_phrases} ({snapshot.phrases_learned} learned)")
    typer.echo(f"Total reviews:   {snapshot.total_reviews} ({snapshot.monthly_reviews} this month)")
    typer.echo(f"Streak:          {snapshot.current_streak} (longest {snapshot.longest_streak})")
    typer.echo(f"Mastery:         {m.beginner} / {m.intermediate} / {m.advanced}")
    typer.echo(f"Avg difficulty:  {snapshot.average_mastery}%")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
