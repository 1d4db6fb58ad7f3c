"""Sample workouts for empty-state bootstrapping and previews."""

from __future__ import annotations

from typing import List

from fitlog.core.models import Exercise, Workout, WorkoutSet


def default_set() -> WorkoutSet:
    """Placeholder set shown before the user edits a new set."""
    return WorkoutSet.default()


def _two_sets(weight_in_kg: float) -> List[WorkoutSet]:
    return [
        WorkoutSet(weight_in_kg=weight_in_kg, no_reps=8, rest_time_in_seconds=120),
        WorkoutSet(weight_in_kg=weight_in_kg, no_reps=8, rest_time_in_seconds=120),
    ]


def sample_workouts() -> List[Workout]:
    """Return fresh copies of the two built-in sample workouts."""
    return [
        Workout(
            name="Chest Day",
            length_in_minutes=60,
            exercises=[Exercise(name="Bench Press", sets=_two_sets(70.0))],
        ),
        Workout(
            name="Leg Day",
            length_in_minutes=60,
            exercises=[Exercise(name="Squat", sets=_two_sets(100.0))],
        ),
    ]
