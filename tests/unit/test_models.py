from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fitlog.core.models import Exercise, Workout, WorkoutSet
from fitlog.core.sample_data import default_set, sample_workouts


def test_workout_defaults() -> None:
    before = datetime.now(timezone.utc)
    workout = Workout()
    after = datetime.now(timezone.utc)
    assert workout.name == "New Workout"
    assert workout.length_in_minutes == 60
    assert workout.exercises == []
    assert before <= workout.date <= after


def test_ids_are_unique_across_entities() -> None:
    ids = set()
    for _ in range(50):
        ids.add(Workout().id)
        ids.add(Exercise(name="Row").id)
        ids.add(WorkoutSet(weight_in_kg=1, no_reps=1, rest_time_in_seconds=1).id)
    assert len(ids) == 150


def test_id_cannot_be_reassigned() -> None:
    workout = Workout()
    with pytest.raises(AttributeError):
        workout.id = Exercise(name="x").id


def test_id_stable_across_mutation(leg_day: Workout) -> None:
    original = leg_day.id
    leg_day.name = "Heavy Legs"
    leg_day.length_in_minutes = 90
    leg_day.exercises.clear()
    assert leg_day.id == original


def test_set_update_from_copies_values_keeps_id() -> None:
    target = WorkoutSet(weight_in_kg=60, no_reps=8, rest_time_in_seconds=120)
    source = WorkoutSet(weight_in_kg=72.5, no_reps=5, rest_time_in_seconds=200)
    original = target.id
    target.update_from(source)
    assert (target.weight_in_kg, target.no_reps, target.rest_time_in_seconds) == (72.5, 5, 200)
    assert target.id == original


def test_workout_update_from_leaves_exercises(leg_day: Workout) -> None:
    other = Workout(name="Renamed", date=datetime(2020, 1, 1, tzinfo=timezone.utc), length_in_minutes=181)
    exercises = list(leg_day.exercises)
    original = leg_day.id
    leg_day.update_from(other)
    assert leg_day.name == "Renamed"
    assert leg_day.date == other.date
    assert leg_day.length_in_minutes == 181
    assert leg_day.exercises == exercises
    assert leg_day.id == original


def test_exercise_update_from_copies_name_only(leg_day: Workout) -> None:
    squat = leg_day.exercises[0]
    squat.update_from(Exercise(name="Front Squat"))
    assert squat.name == "Front Squat"
    assert len(squat.sets) == 2


def test_negative_values_are_permitted() -> None:
    item = WorkoutSet(weight_in_kg=-5.0, no_reps=0, rest_time_in_seconds=-1)
    assert item.weight_in_kg == -5.0
    assert item.no_reps == 0


def test_add_set_repeats_last_set_with_new_id(leg_day: Workout) -> None:
    squat = leg_day.exercises[0]
    added = squat.add_set()
    last = squat.sets[-2]
    assert added.weight_in_kg == last.weight_in_kg
    assert added.no_reps == last.no_reps
    assert added.id != last.id
    assert len(squat.sets) == 3


def test_add_set_on_empty_exercise_uses_default_set() -> None:
    exercise = Exercise(name="Curl")
    added = exercise.add_set()
    expected = default_set()
    assert (added.weight_in_kg, added.no_reps, added.rest_time_in_seconds) == (
        expected.weight_in_kg,
        expected.no_reps,
        expected.rest_time_in_seconds,
    )


def test_child_sequence_operations(leg_day: Workout) -> None:
    new = leg_day.add_exercise()
    assert new.name == "New Exercise"
    assert leg_day.exercises[-1] is new

    replacement = Exercise(name="Deadlift")
    previous = leg_day.replace_exercise(0, replacement)
    assert previous.name == "Squat"
    assert leg_day.exercises[0] is replacement

    removed = leg_day.remove_exercise(1)
    assert removed.name == "Lunge"
    assert [item.name for item in leg_day.exercises] == ["Deadlift", "New Exercise"]

    with pytest.raises(IndexError):
        leg_day.remove_exercise(5)


def test_set_replace_and_remove(leg_day: Workout) -> None:
    squat = leg_day.exercises[0]
    replacement = WorkoutSet(weight_in_kg=110, no_reps=3, rest_time_in_seconds=240)
    squat.replace_set(1, replacement)
    assert squat.sets[1] is replacement
    removed = squat.remove_set(0)
    assert removed.weight_in_kg == 100.0
    assert squat.sets == [replacement]


def test_copy_is_deep_and_keeps_ids(leg_day: Workout) -> None:
    clone = leg_day.copy()
    assert clone == leg_day
    assert clone is not leg_day
    clone.exercises[0].sets[0].no_reps = 99
    assert leg_day.exercises[0].sets[0].no_reps == 5


def test_volume_and_set_count(leg_day: Workout) -> None:
    assert leg_day.set_count == 2
    assert leg_day.total_volume == pytest.approx(100 * 5 + 102.5 * 5)


def test_sample_workouts_are_fresh_objects() -> None:
    first = sample_workouts()
    second = sample_workouts()
    assert [w.name for w in first] == ["Chest Day", "Leg Day"]
    assert first[0].exercises[0].name == "Bench Press"
    assert [s.weight_in_kg for s in first[1].exercises[0].sets] == [100.0, 100.0]
    assert first[0].id != second[0].id


def test_naive_workout_date_is_taken_as_utc() -> None:
    workout = Workout(date=datetime(2026, 1, 2, 7, 30))
    assert workout.date == datetime(2026, 1, 2, 7, 30, tzinfo=timezone.utc)

    workout.date = datetime(2026, 1, 3)
    assert workout.date.tzinfo is timezone.utc

    other = Workout(date=datetime(2026, 1, 4))
    other.date = other.date.replace(tzinfo=None)
    workout.update_from(other)
    assert workout.date == datetime(2026, 1, 4, tzinfo=timezone.utc)
