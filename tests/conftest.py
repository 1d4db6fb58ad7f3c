from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List

import pytest
from typer.testing import CliRunner

from fitlog.core.models import Exercise, Workout, WorkoutSet


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("FITLOG_DATA_DIR", raising=False)
    monkeypatch.setenv("FITLOG_CONFIG_FILE", str(tmp_path / "no-config.toml"))


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture()
def leg_day() -> Workout:
    return Workout(
        name="Leg Day",
        date=datetime(2026, 2, 14, 18, 30, tzinfo=timezone.utc),
        length_in_minutes=45,
        exercises=[
            Exercise(
                name="Squat",
                sets=[
                    WorkoutSet(weight_in_kg=100.0, no_reps=5, rest_time_in_seconds=180),
                    WorkoutSet(weight_in_kg=102.5, no_reps=5, rest_time_in_seconds=180),
                ],
            ),
            Exercise(name="Lunge", sets=[]),
        ],
    )


@pytest.fixture()
def push_day() -> Workout:
    return Workout(
        name="Push Day",
        date=datetime(2026, 2, 16, 7, 0, tzinfo=timezone.utc),
        length_in_minutes=60,
        exercises=[
            Exercise(
                name="Bench Press",
                sets=[WorkoutSet(weight_in_kg=70.0, no_reps=8, rest_time_in_seconds=120)],
            )
        ],
    )


@pytest.fixture()
def workouts(leg_day: Workout, push_day: Workout) -> List[Workout]:
    return [push_day, leg_day]


@pytest.fixture()
def write_store_file(data_dir: Path):
    def _write(payload: Any) -> Path:
        data_dir.mkdir(parents=True, exist_ok=True)
        path = data_dir / "workouts.data"
        text = payload if isinstance(payload, str) else json.dumps(payload, indent=2)
        path.write_text(text)
        return path

    return _write
