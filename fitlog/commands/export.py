"""Export and import workouts."""

from __future__ import annotations

import csv
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import typer
import yaml

from fitlog.commands.common import date_format, get_app, get_state, persist, print_json_payload
from fitlog.core.errors import DecodeError
from fitlog.core.models import Workout
from fitlog.exporters.json_export import write_workouts_json
from fitlog.exporters.markdown import generate_index, write_workout_markdown
from fitlog.utils.parsing import load_workout_input, workouts_from_import

_FORMATS = ("json", "markdown", "csv")


def _write_csv(path: Path, workouts: Sequence[Workout]) -> None:
    """One row per set, so spreadsheets can pivot on any level."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fields = [
        "workoutId",
        "date",
        "workout",
        "lengthInMinutes",
        "exercise",
        "set",
        "weightInKG",
        "noReps",
        "restTimeInSeconds",
    ]
    with path.open("w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fields)
        writer.writeheader()
        for workout in workouts:
            for exercise in workout.exercises:
                for idx, item in enumerate(exercise.sets, 1):
                    writer.writerow(
                        {
                            "workoutId": str(workout.id),
                            "date": workout.date.isoformat(),
                            "workout": workout.name,
                            "lengthInMinutes": workout.length_in_minutes,
                            "exercise": exercise.name,
                            "set": idx,
                            "weightInKG": item.weight_in_kg,
                            "noReps": item.no_reps,
                            "restTimeInSeconds": item.rest_time_in_seconds,
                        }
                    )


def export_command(
    ctx: typer.Context,
    output: Path = typer.Option(Path("./fitlog-export"), help="Output file (json/csv) or directory (markdown)"),
    export_format: str = typer.Option("json", "--format", help="Export format: json|markdown|csv"),
    rewrite: bool = typer.Option(False, help="Rewrite existing markdown files"),
) -> None:
    """Export all workouts."""
    state = get_state(ctx)
    export_format = export_format.lower()
    if export_format not in _FORMATS:
        raise typer.BadParameter(f"Unsupported format '{export_format}'. Use one of: {', '.join(_FORMATS)}")

    workouts = get_app(state).state.workouts
    written: List[str] = []

    if export_format == "json":
        path = output if output.suffix else output.with_suffix(".json")
        written.append(str(write_workouts_json(path, workouts)))
    elif export_format == "csv":
        path = output if output.suffix else output.with_suffix(".csv")
        _write_csv(path, workouts)
        written.append(str(path))
    else:
        fmt = date_format(state) or None
        for workout in workouts:
            written.append(str(write_workout_markdown(output, workout, rewrite=rewrite, date_format=fmt)))
        written.append(str(generate_index(output, workouts, date_format=fmt)))

    payload = {"format": export_format, "workouts": len(workouts), "files": written}
    if state.json_output:
        print_json_payload(state, payload)
        return
    if state.plain_output:
        for item in written:
            typer.echo(item)
        return
    state.console.print(f"Exported {len(workouts)} workouts ({export_format})")
    state.console.print(f"Exported to: {written[0] if len(written) == 1 else output}")


def import_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON/YAML file with workout(s)",
    ),
    stdin: bool = typer.Option(False, "--stdin", help="Read workout data from stdin"),
) -> None:
    """Import workouts in the storage schema; ids may be omitted."""
    state = get_state(ctx)
    stdin_text = sys.stdin.read() if stdin else ""
    try:
        items = load_workout_input(file_path=file, read_stdin=stdin, stdin_text=stdin_text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Could not parse input: {exc}")
    if not items:
        raise typer.BadParameter("Provide a FILE or --stdin with at least one workout")

    try:
        workouts = workouts_from_import(items)
    except DecodeError as exc:
        raise typer.BadParameter(f"Invalid workout data: {exc}")

    app = get_app(state)
    existing = {workout.id for workout in app.state}
    for workout in workouts:
        if workout.id in existing:
            # Keep the imported content but give it a new identity.
            workout = workouts_from_import([_without_ids(workout.to_dict())])[0]
        app.state.add_workout(workout, sort=False)
        existing.add(workout.id)
    app.state.sort_by_date()
    persist(state)

    if state.json_output:
        print_json_payload(state, {"status": "imported", "count": len(workouts)})
        return
    if state.plain_output:
        typer.echo(f"imported\t{len(workouts)}")
        return
    state.console.print(f"Imported {len(workouts)} workout(s)")


def _without_ids(node):
    if isinstance(node, dict):
        return {key: _without_ids(value) for key, value in node.items() if key != "id"}
    if isinstance(node, list):
        return [_without_ids(item) for item in node]
    return node
