"""Workout, exercise and set records."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from fitlog.core.constants import (
    DEFAULT_EXERCISE_NAME,
    DEFAULT_LENGTH_IN_MINUTES,
    DEFAULT_SET_REPS,
    DEFAULT_SET_REST_IN_SECONDS,
    DEFAULT_SET_WEIGHT_IN_KG,
    DEFAULT_WORKOUT_NAME,
)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_aware(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class _Identified:
    """Mixin that freezes ``id`` once the constructor assigned it."""

    id: UUID

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError(f"{type(self).__name__}.id cannot be reassigned")
        object.__setattr__(self, name, value)

    def copy(self):
        """Deep copy with the same ids, used for staging copies."""
        return copy.deepcopy(self)


@dataclass
class WorkoutSet(_Identified):
    """One performance of an exercise: weight, reps and the rest taken after it."""

    weight_in_kg: float
    no_reps: int
    rest_time_in_seconds: int
    id: UUID = field(default_factory=uuid4)

    def update_from(self, other: "WorkoutSet") -> None:
        self.weight_in_kg = other.weight_in_kg
        self.no_reps = other.no_reps
        self.rest_time_in_seconds = other.rest_time_in_seconds

    def duplicate(self) -> "WorkoutSet":
        """Same values under a fresh id."""
        return WorkoutSet(
            weight_in_kg=self.weight_in_kg,
            no_reps=self.no_reps,
            rest_time_in_seconds=self.rest_time_in_seconds,
        )

    @property
    def volume(self) -> float:
        return float(self.weight_in_kg) * self.no_reps

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "weightInKG": self.weight_in_kg,
            "noReps": self.no_reps,
            "restTimeInSeconds": self.rest_time_in_seconds,
        }

    @classmethod
    def default(cls) -> "WorkoutSet":
        """Placeholder values shown for a brand new set."""
        return cls(
            weight_in_kg=DEFAULT_SET_WEIGHT_IN_KG,
            no_reps=DEFAULT_SET_REPS,
            rest_time_in_seconds=DEFAULT_SET_REST_IN_SECONDS,
        )


@dataclass
class Exercise(_Identified):
    """A named movement within a workout; owns its sets."""

    name: str
    sets: List[WorkoutSet] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    def update_from(self, other: "Exercise") -> None:
        """Copy the name only; the set list is edited through its own operations."""
        self.name = other.name

    def add_set(self, workout_set: Optional[WorkoutSet] = None) -> WorkoutSet:
        """Append ``workout_set``, or a copy of the last set (or the default set)."""
        if workout_set is None:
            workout_set = self.sets[-1].duplicate() if self.sets else WorkoutSet.default()
        self.sets.append(workout_set)
        return workout_set

    def remove_set(self, index: int) -> WorkoutSet:
        return self.sets.pop(index)

    def replace_set(self, index: int, workout_set: WorkoutSet) -> WorkoutSet:
        previous = self.sets[index]
        self.sets[index] = workout_set
        return previous

    @property
    def total_volume(self) -> float:
        return sum(item.volume for item in self.sets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "sets": [item.to_dict() for item in self.sets],
        }


@dataclass
class Workout(_Identified):
    """A single training session."""

    name: str = DEFAULT_WORKOUT_NAME
    date: datetime = field(default_factory=utc_now)
    length_in_minutes: int = DEFAULT_LENGTH_IN_MINUTES
    exercises: List[Exercise] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "date" and isinstance(value, datetime):
            value = as_aware(value)
        super().__setattr__(name, value)

    def update_from(self, other: "Workout") -> None:
        """Copy name, date and length; exercises are left alone."""
        self.name = other.name
        self.date = other.date
        self.length_in_minutes = other.length_in_minutes

    def add_exercise(self, exercise: Optional[Exercise] = None) -> Exercise:
        if exercise is None:
            exercise = Exercise(name=DEFAULT_EXERCISE_NAME)
        self.exercises.append(exercise)
        return exercise

    def remove_exercise(self, index: int) -> Exercise:
        return self.exercises.pop(index)

    def replace_exercise(self, index: int, exercise: Exercise) -> Exercise:
        previous = self.exercises[index]
        self.exercises[index] = exercise
        return previous

    @property
    def set_count(self) -> int:
        return sum(len(exercise.sets) for exercise in self.exercises)

    @property
    def total_volume(self) -> float:
        return sum(exercise.total_volume for exercise in self.exercises)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "date": self.date.isoformat(),
            "lengthInMinutes": self.length_in_minutes,
            "exercises": [exercise.to_dict() for exercise in self.exercises],
        }
