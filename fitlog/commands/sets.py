"""Set commands: add, edit, delete."""

from __future__ import annotations

from typing import Optional

import typer

from fitlog.commands.common import (
    configured_default_set,
    get_app,
    get_state,
    persist,
    print_json_payload,
    resolve_position,
    select_exercise,
)
from fitlog.core.models import WorkoutSet
from fitlog.core.state import CLIState
from fitlog.utils.formatting import format_rest, format_weight

app = typer.Typer(help="Manage the sets of an exercise", no_args_is_help=True)


def _describe(item: WorkoutSet) -> str:
    return f"{format_weight(item.weight_in_kg)} x {item.no_reps}, rest {format_rest(item.rest_time_in_seconds)}"


def _report(state: CLIState, status: str, item: WorkoutSet) -> None:
    if state.json_output:
        print_json_payload(state, {"status": status, "set": item.to_dict()})
        return
    if state.plain_output:
        typer.echo(f"{status}\t{item.id}\t{item.weight_in_kg:g}\t{item.no_reps}\t{item.rest_time_in_seconds}")
        return
    state.console.print(f"Set {status}: {_describe(item)}")


@app.command("add")
def add_set_command(
    ctx: typer.Context,
    workout: int = typer.Argument(..., help="Workout position"),
    exercise: int = typer.Argument(..., help="Exercise position within the workout"),
    weight: Optional[float] = typer.Option(None, help="Weight in kilograms"),
    reps: Optional[int] = typer.Option(None, help="Number of repetitions"),
    rest: Optional[int] = typer.Option(None, help="Rest time in seconds"),
) -> None:
    """Append a set; unspecified values repeat the previous set."""
    state = get_state(ctx)
    _, _, target = select_exercise(state, workout, exercise)

    item = target.sets[-1].duplicate() if target.sets else configured_default_set(state)
    if weight is not None:
        item.weight_in_kg = weight
    if reps is not None:
        item.no_reps = reps
    if rest is not None:
        item.rest_time_in_seconds = rest
    target.add_set(item)
    get_app(state).state.notify()
    persist(state)
    _report(state, "created", item)


@app.command("edit")
def edit_set_command(
    ctx: typer.Context,
    workout: int = typer.Argument(..., help="Workout position"),
    exercise: int = typer.Argument(..., help="Exercise position within the workout"),
    set_position: int = typer.Argument(..., metavar="SET", help="Set position within the exercise"),
    weight: Optional[float] = typer.Option(None, help="Weight in kilograms"),
    reps: Optional[int] = typer.Option(None, help="Number of repetitions"),
    rest: Optional[int] = typer.Option(None, help="Rest time in seconds"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Save without asking for confirmation"),
) -> None:
    """Change the weight, reps or rest time of a set."""
    state = get_state(ctx)
    if weight is None and reps is None and rest is None:
        raise typer.BadParameter("Nothing to change: pass --weight, --reps or --rest")

    _, _, owner = select_exercise(state, workout, exercise)
    index = resolve_position(set_position, len(owner.sets), "set")

    session = get_app(state).state.begin_child_edit(owner.sets[index])
    if weight is not None:
        session.draft.weight_in_kg = weight
    if reps is not None:
        session.draft.no_reps = reps
    if rest is not None:
        session.draft.rest_time_in_seconds = rest

    if not yes:
        typer.echo(f"{_describe(session.target)} -> {_describe(session.draft)}")
        if not typer.confirm("Save changes?", default=True):
            session.discard()
            typer.echo("Changes discarded")
            return

    item = session.commit()
    persist(state)
    _report(state, "updated", item)


@app.command("delete")
def delete_set_command(
    ctx: typer.Context,
    workout: int = typer.Argument(..., help="Workout position"),
    exercise: int = typer.Argument(..., help="Exercise position within the workout"),
    set_position: int = typer.Argument(..., metavar="SET", help="Set position within the exercise"),
) -> None:
    """Delete a set."""
    state = get_state(ctx)
    _, _, owner = select_exercise(state, workout, exercise)
    index = resolve_position(set_position, len(owner.sets), "set")

    removed = owner.remove_set(index)
    get_app(state).state.notify()
    persist(state)
    _report(state, "deleted", removed)
