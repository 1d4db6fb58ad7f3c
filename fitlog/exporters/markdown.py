"""Markdown workout export functionality."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from fitlog.core.models import Exercise, Workout
from fitlog.utils.formatting import format_date, format_length, format_rest, format_volume, format_weight
from fitlog.utils.text import slugify


def _exercise_lines(exercise: Exercise) -> List[str]:
    lines = [f"### {exercise.name}", ""]
    if not exercise.sets:
        lines.append("No sets recorded")
        return lines
    lines.append("| Set | Weight | Reps | Rest |")
    lines.append("|-----|--------|------|------|")
    for idx, item in enumerate(exercise.sets, 1):
        lines.append(
            f"| {idx} | {format_weight(item.weight_in_kg)} | {item.no_reps} | {format_rest(item.rest_time_in_seconds)} |"
        )
    return lines


def workout_to_markdown(workout: Workout, date_format: Optional[str] = None) -> str:
    """Convert a workout to markdown with frontmatter."""
    title_yaml = workout.name.replace('"', '\\"')
    body: List[str] = []
    for exercise in workout.exercises:
        body.extend(_exercise_lines(exercise))
        body.append("")
    exercises_text = "\n".join(body).rstrip() or "No exercises recorded"

    return (
        f"---\n"
        f"title: \"{title_yaml}\"\n"
        f"date: \"{workout.date.isoformat()}\"\n"
        f"lengthInMinutes: {workout.length_in_minutes}\n"
        f"workoutId: {workout.id}\n"
        f"---\n\n"
        f"# {workout.name}\n\n"
        f"- **Date:** {format_date(workout.date, date_format)}\n"
        f"- **Duration:** {format_length(workout.length_in_minutes)}\n"
        f"- **Exercises:** {len(workout.exercises)}\n"
        f"- **Sets:** {workout.set_count}\n"
        f"- **Volume:** {format_volume(workout.total_volume)}\n\n"
        f"## Exercises\n\n"
        f"{exercises_text}\n"
    )


def workout_filename(workout: Workout) -> str:
    return f"{workout.date.astimezone().strftime('%Y-%m-%d')}-{slugify(workout.name)}-{workout.id.hex[:8]}.md"


def write_workout_markdown(
    output_dir: Path,
    workout: Workout,
    rewrite: bool = False,
    date_format: Optional[str] = None,
) -> Path:
    """Write one workout markdown file and return output path."""
    out_path = output_dir / workout_filename(workout)
    if out_path.exists() and not rewrite:
        return out_path

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path.write_text(workout_to_markdown(workout, date_format))
    return out_path


def generate_index(output_dir: Path, workouts: Iterable[Workout], date_format: Optional[str] = None) -> Path:
    """Write INDEX.md linking every exported workout, newest first."""
    rows = sorted(workouts, key=lambda item: item.date, reverse=True)
    lines = [
        "# All Workouts",
        "",
        f"_{len(rows)} workouts_",
        "",
        "| Date | Workout | Duration | Exercises | Sets |",
        "|------|---------|----------|-----------|------|",
    ]
    for workout in rows:
        link = f"[{workout.name}]({workout_filename(workout)})"
        lines.append(
            f"| {format_date(workout.date, date_format)} | {link} | {format_length(workout.length_in_minutes)} "
            f"| {len(workout.exercises)} | {workout.set_count} |"
        )
    lines.append("")
    path = output_dir / "INDEX.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines))
    return path
