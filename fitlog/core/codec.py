"""JSON encoding of the workout collection.

Layout of the stored document::

    [
      {"id": "<uuid>", "name": "Leg Day", "date": "2026-02-14T18:30:00+00:00",
       "lengthInMinutes": 45,
       "exercises": [
         {"id": "<uuid>", "name": "Squat",
          "sets": [{"id": "<uuid>", "weightInKG": 100.0, "noReps": 8, "restTimeInSeconds": 120}]}
       ]}
    ]

Decoding is strict: any missing key, mistyped or non-finite value fails the
whole document.
"""

from __future__ import annotations

import json
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Sequence, Tuple, Type, Union
from uuid import UUID

from fitlog.core.errors import DecodeError, EncodeError
from fitlog.core.models import Exercise, Workout, WorkoutSet, as_aware

# Numeric dates count seconds from here, as Foundation's JSONEncoder writes them.
REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)


def _reject_constant(value: str) -> Any:
    raise ValueError(f"non-finite number {value} is not allowed")


def _field(data: Dict[str, Any], key: str, kind: Union[Type, Tuple[Type, ...]], where: str) -> Any:
    if key not in data:
        raise DecodeError(f"{where}: missing '{key}'")
    value = data[key]
    # bool is an int subclass; never accept it for numeric fields.
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DecodeError(f"{where}: '{key}' has unexpected type {type(value).__name__}")
    return value


def _finite_float(data: Dict[str, Any], key: str, where: str) -> float:
    raw = _field(data, key, (int, float), where)
    try:
        value = float(raw)
    except OverflowError as exc:
        raise DecodeError(f"{where}: '{key}' is out of range") from exc
    if not math.isfinite(value):
        raise DecodeError(f"{where}: '{key}' must be a finite number")
    return value


def _parse_id(data: Dict[str, Any], where: str) -> UUID:
    raw = _field(data, "id", str, where)
    try:
        return UUID(raw)
    except ValueError as exc:
        raise DecodeError(f"{where}: invalid id {raw!r}") from exc


def parse_date(value: Any) -> datetime:
    """Parse an ISO-8601 string, or seconds since 2001-01-01 UTC, into an aware datetime."""
    if isinstance(value, bool):
        raise DecodeError(f"invalid date {value!r}")
    if isinstance(value, (int, float)):
        try:
            return REFERENCE_DATE + timedelta(seconds=value)
        except (OverflowError, ValueError) as exc:
            raise DecodeError(f"invalid timestamp {value!r}") from exc
    if not isinstance(value, str):
        raise DecodeError(f"invalid date {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise DecodeError(f"invalid date {value!r}") from exc
    return as_aware(parsed)


def set_from_dict(data: Any, where: str = "set") -> WorkoutSet:
    if not isinstance(data, dict):
        raise DecodeError(f"{where}: expected an object")
    return WorkoutSet(
        id=_parse_id(data, where),
        weight_in_kg=_finite_float(data, "weightInKG", where),
        no_reps=_field(data, "noReps", int, where),
        rest_time_in_seconds=_field(data, "restTimeInSeconds", int, where),
    )


def exercise_from_dict(data: Any, where: str = "exercise") -> Exercise:
    if not isinstance(data, dict):
        raise DecodeError(f"{where}: expected an object")
    raw_sets = _field(data, "sets", list, where)
    return Exercise(
        id=_parse_id(data, where),
        name=_field(data, "name", str, where),
        sets=[set_from_dict(item, f"{where}.sets[{idx}]") for idx, item in enumerate(raw_sets)],
    )


def workout_from_dict(data: Any, where: str = "workout") -> Workout:
    if not isinstance(data, dict):
        raise DecodeError(f"{where}: expected an object")
    if "date" not in data:
        raise DecodeError(f"{where}: missing 'date'")
    raw_exercises = _field(data, "exercises", list, where)
    return Workout(
        id=_parse_id(data, where),
        name=_field(data, "name", str, where),
        date=parse_date(data["date"]),
        length_in_minutes=_field(data, "lengthInMinutes", int, where),
        exercises=[
            exercise_from_dict(item, f"{where}.exercises[{idx}]")
            for idx, item in enumerate(raw_exercises)
        ],
    )


def workouts_to_payload(workouts: Sequence[Workout]) -> List[Dict[str, Any]]:
    """Convert workouts to JSON-ready dictionaries."""
    return [workout.to_dict() for workout in workouts]


def workouts_from_payload(payload: Any) -> List[Workout]:
    """Build workouts from an already-parsed JSON/YAML document."""
    if not isinstance(payload, list):
        raise DecodeError("workout collection must be a JSON array")
    return [workout_from_dict(item, f"workouts[{idx}]") for idx, item in enumerate(payload)]


def encode_workouts(workouts: Sequence[Workout]) -> bytes:
    """Serialize the full collection to UTF-8 JSON bytes."""
    try:
        text = json.dumps(workouts_to_payload(workouts), indent=2, allow_nan=False)
    except (TypeError, ValueError, AttributeError) as exc:
        raise EncodeError(f"Failed to encode workouts: {exc}") from exc
    return (text + "\n").encode("utf-8")


def decode_workouts(data: bytes) -> List[Workout]:
    """Parse bytes produced by :func:`encode_workouts`."""
    try:
        payload = json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DecodeError(f"Stored workouts are not valid JSON: {exc}") from exc
    return workouts_from_payload(payload)
