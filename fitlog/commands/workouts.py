"""Workout list/show/add/edit/delete commands."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import typer
from rich.table import Table

from fitlog.commands.common import (
    date_format,
    get_app,
    get_state,
    persist,
    print_json_payload,
    select_workout,
    workout_summary,
)
from fitlog.core.constants import (
    DEFAULT_LENGTH_IN_MINUTES,
    DEFAULT_WORKOUT_NAME,
    MAX_LENGTH_IN_MINUTES,
    MIN_LENGTH_IN_MINUTES,
)
from fitlog.core.models import Workout
from fitlog.core.sample_data import sample_workouts
from fitlog.core.state import CLIState
from fitlog.utils.formatting import format_date, format_length, format_rest, format_weight
from fitlog.utils.parsing import parse_datetime


def _parse_date_option(value: Optional[str]):
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))


def _print_workout_line(state: CLIState, message: str, workout: Workout) -> None:
    if state.plain_output:
        typer.echo(f"{message}\t{workout.id}\t{workout.name}")
        return
    state.console.print(f"{message}: {workout.name} ({format_date(workout.date, date_format(state) or None)})")


def list_command(ctx: typer.Context) -> None:
    """List all workouts, newest first."""
    state = get_state(ctx)
    app = get_app(state)
    rows = [workout_summary(state, idx, workout) for idx, workout in enumerate(app.state, 1)]

    if state.json_output:
        print_json_payload(state, {"total": len(rows), "workouts": rows})
        return

    if state.plain_output:
        for row in rows:
            typer.echo(
                f"{row['position']}\t{row['displayDate']}\t{row['name']}\t{row['lengthInMinutes']}\t{row['exercises']}\t{row['sets']}"
            )
        return

    if not rows:
        state.console.print("No workouts yet. Use 'fitlog add' or 'fitlog seed'.")
        return

    table = Table(title="Your Workouts")
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Workout")
    table.add_column("Duration", justify="right")
    table.add_column("Exercises", justify="right")
    table.add_column("Sets", justify="right")
    for row in rows:
        table.add_row(
            str(row["position"]),
            row["displayDate"],
            row["name"],
            format_length(row["lengthInMinutes"]),
            str(row["exercises"]),
            str(row["sets"]),
        )
    state.console.print(table)


def show_command(
    ctx: typer.Context,
    position: int = typer.Argument(..., help="Workout position as shown by 'list'"),
) -> None:
    """Show one workout with its exercises and sets."""
    state = get_state(ctx)
    _, workout = select_workout(state, position)

    if state.json_output:
        print_json_payload(state, workout.to_dict())
        return

    if state.plain_output:
        typer.echo(f"workout\t{workout.id}\t{workout.name}\t{workout.date.isoformat()}\t{workout.length_in_minutes}")
        for ex_idx, exercise in enumerate(workout.exercises, 1):
            typer.echo(f"exercise\t{ex_idx}\t{exercise.name}")
            for set_idx, item in enumerate(exercise.sets, 1):
                typer.echo(
                    f"set\t{ex_idx}.{set_idx}\t{item.weight_in_kg:g}\t{item.no_reps}\t{item.rest_time_in_seconds}"
                )
        return

    console = state.console
    console.print(f"[bold]{workout.name}[/bold]")
    console.print(f"Date: {format_date(workout.date, date_format(state) or None)}")
    console.print(f"Duration: {format_length(workout.length_in_minutes)}")
    if not workout.exercises:
        console.print("No exercises yet. Use 'fitlog exercise add'.")
        return
    for ex_idx, exercise in enumerate(workout.exercises, 1):
        table = Table(title=f"{ex_idx}. {exercise.name}")
        table.add_column("Set", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("Reps", justify="right")
        table.add_column("Rest", justify="right")
        for set_idx, item in enumerate(exercise.sets, 1):
            table.add_row(
                str(set_idx),
                format_weight(item.weight_in_kg),
                str(item.no_reps),
                format_rest(item.rest_time_in_seconds),
            )
        console.print(table)


def add_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, help="Workout name"),
    date: Optional[str] = typer.Option(None, help="Workout date (YYYY-MM-DD or 'YYYY-MM-DD HH:MM')"),
    minutes: Optional[int] = typer.Option(
        None,
        min=MIN_LENGTH_IN_MINUTES,
        max=MAX_LENGTH_IN_MINUTES,
        help="Workout length in minutes",
    ),
) -> None:
    """Add a new workout; the list is re-sorted by date."""
    state = get_state(ctx)
    when = _parse_date_option(date)
    defaults = state.config.get("defaults", {})

    workout = Workout(
        name=name or str(defaults.get("workout_name") or DEFAULT_WORKOUT_NAME),
        length_in_minutes=(
            minutes if minutes is not None else int(defaults.get("length_in_minutes", DEFAULT_LENGTH_IN_MINUTES))
        ),
    )
    if when is not None:
        workout.date = when

    app = get_app(state)
    app.state.add_workout(workout)
    persist(state)

    if state.json_output:
        print_json_payload(state, {"status": "created", "workout": workout.to_dict()})
        return
    _print_workout_line(state, "Added workout", workout)


def edit_command(
    ctx: typer.Context,
    position: int = typer.Argument(..., help="Workout position as shown by 'list'"),
    name: Optional[str] = typer.Option(None, help="New workout name"),
    date: Optional[str] = typer.Option(None, help="New date (YYYY-MM-DD or 'YYYY-MM-DD HH:MM')"),
    minutes: Optional[int] = typer.Option(
        None,
        min=MIN_LENGTH_IN_MINUTES,
        max=MAX_LENGTH_IN_MINUTES,
        help="New length in minutes",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Save without asking for confirmation"),
) -> None:
    """Edit a workout's name, date or length."""
    state = get_state(ctx)
    if name is None and date is None and minutes is None:
        raise typer.BadParameter("Nothing to change: pass --name, --date or --minutes")
    when = _parse_date_option(date)

    index, _ = select_workout(state, position)
    app = get_app(state)
    session = app.state.begin_workout_edit(index)
    draft = session.draft
    if name is not None:
        draft.name = name
    if when is not None:
        draft.date = when
    if minutes is not None:
        draft.length_in_minutes = minutes

    if not yes:
        fmt = date_format(state) or None
        typer.echo(f"Name:     {session.target.name} -> {draft.name}")
        typer.echo(f"Date:     {format_date(session.target.date, fmt)} -> {format_date(draft.date, fmt)}")
        typer.echo(f"Duration: {session.target.length_in_minutes} -> {draft.length_in_minutes} minutes")
        if not typer.confirm("Save changes?", default=True):
            session.discard()
            typer.echo("Changes discarded")
            return

    workout = session.commit()
    persist(state)

    if state.json_output:
        print_json_payload(state, {"status": "updated", "workout": workout.to_dict()})
        return
    _print_workout_line(state, "Updated workout", workout)


def delete_command(
    ctx: typer.Context,
    position: int = typer.Argument(..., help="Workout position as shown by 'list'"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete a workout with all of its exercises and sets."""
    state = get_state(ctx)
    index, workout = select_workout(state, position)

    if not force:
        confirmed = typer.confirm(f"Delete workout '{workout.name}'?", default=False)
        if not confirmed:
            raise typer.Exit(code=0)

    app = get_app(state)
    removed = app.state.remove_workout(index)
    persist(state)

    payload = {"status": "deleted", "id": str(removed.id), "name": removed.name}
    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo("status\tdeleted")
        typer.echo(f"workout_id\t{removed.id}")
        return

    state.console.print(f"Deleted workout {removed.name}")


def seed_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Add samples even when workouts exist"),
) -> None:
    """Add the sample workouts to an empty log."""
    state = get_state(ctx)
    app = get_app(state)

    if len(app.state) and not force:
        typer.echo("Workout log is not empty; use --force to add samples anyway.")
        raise typer.Exit(code=1)

    added: List[Dict[str, Any]] = []
    for workout in sample_workouts():
        app.state.add_workout(workout)
        added.append({"id": str(workout.id), "name": workout.name})
    persist(state)

    if state.json_output:
        print_json_payload(state, {"status": "seeded", "workouts": added})
        return
    if state.plain_output:
        typer.echo(f"seeded\t{len(added)}")
        return
    state.console.print(f"Added {len(added)} sample workouts")
