from __future__ import annotations

from pathlib import Path
from typing import List

from fitlog.core.models import Workout
from fitlog.exporters.json_export import write_workouts_json
from fitlog.exporters.markdown import generate_index, workout_to_markdown, write_workout_markdown
from fitlog.core.codec import decode_workouts


def test_workout_to_markdown_contains_frontmatter_and_sets(leg_day: Workout) -> None:
    text = workout_to_markdown(leg_day, date_format="%Y-%m-%d")
    assert text.startswith("---\n")
    assert 'title: "Leg Day"' in text
    assert f"workoutId: {leg_day.id}" in text
    assert "lengthInMinutes: 45" in text
    assert "### Squat" in text
    assert "| 2 | 102.5 kg | 5 | 3min |" in text
    assert "### Lunge" in text
    assert "No sets recorded" in text


def test_workout_without_exercises() -> None:
    text = workout_to_markdown(Workout(name='Say "hi"'))
    assert 'title: "Say \\"hi\\""' in text
    assert "No exercises recorded" in text


def test_write_workout_markdown_respects_rewrite(tmp_path: Path, leg_day: Workout) -> None:
    path = write_workout_markdown(tmp_path, leg_day)
    assert path.name.endswith(f"-leg-day-{leg_day.id.hex[:8]}.md")
    path.write_text("custom")
    write_workout_markdown(tmp_path, leg_day)
    assert path.read_text() == "custom"
    write_workout_markdown(tmp_path, leg_day, rewrite=True)
    assert path.read_text().startswith("---")


def test_generate_index_lists_newest_first(tmp_path: Path, workouts: List[Workout]) -> None:
    path = generate_index(tmp_path, reversed(workouts))
    lines = path.read_text().splitlines()
    assert lines[0] == "# All Workouts"
    assert "_2 workouts_" in lines
    rows = [line for line in lines if line.startswith("| ") and "[" in line]
    assert "Push Day" in rows[0]
    assert "Leg Day" in rows[1]


def test_write_workouts_json_uses_storage_schema(tmp_path: Path, workouts: List[Workout]) -> None:
    path = write_workouts_json(tmp_path / "out" / "export.json", workouts)
    assert decode_workouts(path.read_bytes()) == workouts
