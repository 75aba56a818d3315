"""Command line entry point for habitarc."""

from __future__ import annotations

from datetime import date
from typing import Optional

import click

from .config import BaseConfig
from .dates import parse_day
from .infra.database import bootstrap_database
from .infra.repositories.habit import SQLModelHabitRepository
from .logging_config import setup_logging
from .models.habit import Habit
from .services.stats import collect_daily_stats, collect_weekly_progress


def _parse_today(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> date:
    if value is None:
        return date.today()
    try:
        return parse_day(value)
    except ValueError as exc:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}") from exc


def _repository(ctx: click.Context) -> SQLModelHabitRepository:
    config: BaseConfig = ctx.obj["config"]
    _, session_factory = bootstrap_database(config)
    return SQLModelHabitRepository(session_factory)


today_option = click.option(
    "--today",
    callback=_parse_today,
    default=None,
    help="Evaluate as of this day (YYYY-MM-DD). Defaults to the current date.",
)
day_option = click.option(
    "--day",
    callback=_parse_today,
    default=None,
    help="Day to record (YYYY-MM-DD). Defaults to the current date.",
)
user_option = click.option("--user-id", type=int, default=1, show_default=True, help="Owner of the habits.")


def _require_habit(repo: SQLModelHabitRepository, habit_id: int, user_id: int) -> Habit:
    habit = repo.get_by_id(habit_id, user_id=user_id)
    if habit is None:
        raise click.ClickException(f"Habit {habit_id} not found")
    return habit


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Habit streak and completion statistics."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create the database schema."""

    config: BaseConfig = ctx.obj["config"]
    bootstrap_database(config)
    click.echo(f"Database ready: {config.DATABASE_URL}")


@cli.command("add")
@click.argument("name")
@click.option("--cadence", type=click.Choice(["daily", "weekly"]), default="daily", show_default=True)
@click.option("--start-date", callback=_parse_today, default=None, help="First tracked day (YYYY-MM-DD).")
@click.option("--order", type=int, default=0, show_default=True, help="Display position.")
@user_option
@click.pass_context
def add(ctx: click.Context, name: str, cadence: str, start_date: date, order: int, user_id: int) -> None:
    """Create a habit."""

    habit = Habit(user_id=user_id, name=name, cadence=cadence, start_date=start_date, order=order)
    try:
        habit = _repository(ctx).create(habit, user_id=user_id)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created habit {habit.id}: {habit.name}")


@cli.command("log")
@click.argument("habit_id", type=int)
@day_option
@click.option("--skip", is_flag=True, help="Record the day as skipped instead of completed.")
@user_option
@click.pass_context
def log(ctx: click.Context, habit_id: int, day: date, skip: bool, user_id: int) -> None:
    """Record a habit as completed (or skipped) for a day."""

    repo = _repository(ctx)
    habit = _require_habit(repo, habit_id, user_id)
    repo.upsert_log(habit.id, day, not skip, user_id=user_id)
    click.echo(f"{habit.name}: {'skipped' if skip else 'completed'} on {day.isoformat()}")


@cli.command("freeze")
@click.argument("habit_id", type=int)
@day_option
@click.option("--remove", is_flag=True, help="Remove the freeze instead of adding it.")
@user_option
@click.pass_context
def freeze(ctx: click.Context, habit_id: int, day: date, remove: bool, user_id: int) -> None:
    """Freeze a day so a missed log does not break the streak."""

    repo = _repository(ctx)
    habit = _require_habit(repo, habit_id, user_id)
    if remove:
        repo.remove_freeze(habit.id, day, user_id=user_id)
        click.echo(f"{habit.name}: unfrozen {day.isoformat()}")
    else:
        repo.add_freeze(habit.id, day, user_id=user_id)
        click.echo(f"{habit.name}: frozen {day.isoformat()}")


@cli.command("archive")
@click.argument("habit_id", type=int)
@click.option("--restore", is_flag=True, help="Bring an archived habit back.")
@user_option
@click.pass_context
def archive(ctx: click.Context, habit_id: int, restore: bool, user_id: int) -> None:
    """Archive a habit, or restore it with --restore."""

    repo = _repository(ctx)
    _require_habit(repo, habit_id, user_id)
    if restore:
        habit = repo.restore(habit_id, user_id=user_id)
        click.echo(f"Restored {habit.name}")
    else:
        habit = repo.archive(habit_id, user_id=user_id)
        click.echo(f"Archived {habit.name}")


@cli.command("delete")
@click.argument("habit_id", type=int)
@user_option
@click.confirmation_option(prompt="Delete this habit and all of its history?")
@click.pass_context
def delete(ctx: click.Context, habit_id: int, user_id: int) -> None:
    """Delete a habit with its logs, freezes and weekly targets."""

    repo = _repository(ctx)
    habit = _require_habit(repo, habit_id, user_id)
    repo.delete(habit.id, user_id=user_id)
    click.echo(f"Deleted {habit.name}")


@cli.command("stats")
@user_option
@today_option
@click.pass_context
def stats(ctx: click.Context, user_id: int, today: date) -> None:
    """Print streaks and completion rate for each daily habit."""

    rows = collect_daily_stats(_repository(ctx), user_id=user_id, today=today)
    if not rows:
        click.echo("No active daily habits.")
        return
    for row in rows:
        marker = {True: "x", False: "-", None: " "}[row.today_log]
        click.echo(
            f"[{marker}] {row.name}: current {row.current_streak}, "
            f"longest {row.longest_streak}, {row.completion_rate}% complete"
        )


@cli.command("weekly")
@user_option
@today_option
@click.pass_context
def weekly(ctx: click.Context, user_id: int, today: date) -> None:
    """Print this week's progress for each weekly habit."""

    config: BaseConfig = ctx.obj["config"]
    rows = collect_weekly_progress(
        _repository(ctx), user_id=user_id, today=today, week_start_day=config.WEEK_START_DAY
    )
    if not rows:
        click.echo("No active weekly habits.")
        return
    for row in rows:
        target = row.target if row.target is not None else "-"
        click.echo(f"{row.name}: {row.progress}/{target}")


def main() -> None:  # pragma: no cover - console script
    cli(obj={})
