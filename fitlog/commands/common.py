"""Shared command helpers."""

from __future__ import annotations

import json
from typing import Any, Dict, Tuple

import typer

from fitlog.core.app import LifecyclePhase, WorkoutApp
from fitlog.core.config import resolve_data_dir
from fitlog.core.errors import StoreError
from fitlog.core.models import Exercise, Workout, WorkoutSet
from fitlog.core.state import CLIState
from fitlog.core.store import WorkoutStore
from fitlog.utils.formatting import format_date


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def _alert(action: str, error: StoreError) -> None:
    typer.echo(f"Could not {action} workouts: {error}", err=True)


def get_app(state: CLIState) -> WorkoutApp:
    """Build the workout app on first use and load the stored workouts."""
    if state.app is not None:
        return state.app

    store = WorkoutStore(data_dir=resolve_data_dir(state.config, state.data_dir))
    app = WorkoutApp(store, on_error=_alert)
    if not app.start():
        store.close()
        raise typer.Exit(code=1)
    state.app = app
    return app


def persist(state: CLIState) -> None:
    """Leave the foreground: saves the collection, exit code 1 on failure."""
    app = get_app(state)
    saved = app.on_phase_change(LifecyclePhase.INACTIVE)
    if not saved:
        raise typer.Exit(code=1)


def resolve_position(position: int, size: int, label: str) -> int:
    """Convert a 1-based CLI position into a list index."""
    if position < 1 or position > size:
        if size == 0:
            raise typer.BadParameter(f"There are no {label}s")
        raise typer.BadParameter(f"{label.capitalize()} position must be between 1 and {size}, got {position}")
    return position - 1


def select_workout(state: CLIState, position: int) -> Tuple[int, Workout]:
    app = get_app(state)
    index = resolve_position(position, len(app.state), "workout")
    return index, app.state[index]


def select_exercise(state: CLIState, workout_pos: int, exercise_pos: int) -> Tuple[Workout, int, Exercise]:
    _, workout = select_workout(state, workout_pos)
    index = resolve_position(exercise_pos, len(workout.exercises), "exercise")
    return workout, index, workout.exercises[index]


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def date_format(state: CLIState) -> str:
    return str(state.config.get("display", {}).get("date_format") or "")


def workout_summary(state: CLIState, position: int, workout: Workout) -> Dict[str, Any]:
    return {
        "position": position,
        "id": str(workout.id),
        "name": workout.name,
        "date": workout.date.isoformat(),
        "displayDate": format_date(workout.date, date_format(state) or None),
        "lengthInMinutes": workout.length_in_minutes,
        "exercises": len(workout.exercises),
        "sets": workout.set_count,
    }


def configured_default_set(state: CLIState) -> WorkoutSet:
    """Default set values, taking the ``defaults`` config section into account."""
    defaults = state.config.get("defaults", {})
    fallback = WorkoutSet.default()
    return WorkoutSet(
        weight_in_kg=float(defaults.get("set_weight_in_kg", fallback.weight_in_kg)),
        no_reps=int(defaults.get("set_reps", fallback.no_reps)),
        rest_time_in_seconds=int(defaults.get("set_rest_in_seconds", fallback.rest_time_in_seconds)),
    )
