"""Exercise commands: add, rename, delete."""

from __future__ import annotations

from typing import Optional

import typer

from fitlog.commands.common import get_app, get_state, persist, print_json_payload, select_exercise, select_workout
from fitlog.core.constants import DEFAULT_EXERCISE_NAME
from fitlog.core.models import Exercise

app = typer.Typer(help="Manage the exercises of a workout", no_args_is_help=True)


@app.command("add")
def add_exercise_command(
    ctx: typer.Context,
    workout: int = typer.Argument(..., help="Workout position"),
    name: Optional[str] = typer.Option(None, help="Exercise name"),
) -> None:
    """Append an exercise to a workout."""
    state = get_state(ctx)
    _, target = select_workout(state, workout)

    exercise = target.add_exercise(Exercise(name=name or DEFAULT_EXERCISE_NAME))
    get_app(state).state.notify()
    persist(state)

    if state.json_output:
        print_json_payload(state, {"status": "created", "workoutId": str(target.id), "exercise": exercise.to_dict()})
        return
    if state.plain_output:
        typer.echo(f"created\t{exercise.id}\t{exercise.name}")
        return
    state.console.print(f"Added exercise {exercise.name} to {target.name}")


@app.command("rename")
def rename_exercise_command(
    ctx: typer.Context,
    workout: int = typer.Argument(..., help="Workout position"),
    exercise: int = typer.Argument(..., help="Exercise position within the workout"),
    name: str = typer.Argument(..., help="New exercise name"),
) -> None:
    """Rename an exercise."""
    state = get_state(ctx)
    _, _, target = select_exercise(state, workout, exercise)

    app_state = get_app(state).state
    session = app_state.begin_child_edit(target)
    session.draft.name = name
    session.commit()
    persist(state)

    if state.json_output:
        print_json_payload(state, {"status": "renamed", "exercise": target.to_dict()})
        return
    if state.plain_output:
        typer.echo(f"renamed\t{target.id}\t{target.name}")
        return
    state.console.print(f"Renamed exercise to {target.name}")


@app.command("delete")
def delete_exercise_command(
    ctx: typer.Context,
    workout: int = typer.Argument(..., help="Workout position"),
    exercise: int = typer.Argument(..., help="Exercise position within the workout"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete an exercise and its sets."""
    state = get_state(ctx)
    owner, index, target = select_exercise(state, workout, exercise)

    if not force:
        if not typer.confirm(f"Delete exercise '{target.name}'?", default=False):
            raise typer.Exit(code=0)

    removed = owner.remove_exercise(index)
    get_app(state).state.notify()
    persist(state)

    if state.json_output:
        print_json_payload(state, {"status": "deleted", "id": str(removed.id), "name": removed.name})
        return
    if state.plain_output:
        typer.echo(f"deleted\t{removed.id}")
        return
    state.console.print(f"Deleted exercise {removed.name}")
