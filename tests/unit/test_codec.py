from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

import pytest

from fitlog.core.codec import decode_workouts, encode_workouts, parse_date
from fitlog.core.errors import DecodeError, EncodeError
from fitlog.core.models import Workout, WorkoutSet


def _payload(**overrides: Any) -> List[Dict[str, Any]]:
    workout = {
        "id": str(uuid4()),
        "name": "Leg Day",
        "date": "2026-02-14T18:30:00+00:00",
        "lengthInMinutes": 45,
        "exercises": [
            {
                "id": str(uuid4()),
                "name": "Squat",
                "sets": [{"id": str(uuid4()), "weightInKG": 100, "noReps": 5, "restTimeInSeconds": 180}],
            }
        ],
    }
    workout.update(overrides)
    return [workout]


def test_round_trip_preserves_everything(workouts: List[Workout]) -> None:
    decoded = decode_workouts(encode_workouts(workouts))
    assert decoded == workouts
    assert [w.id for w in decoded] == [w.id for w in workouts]


def test_encoded_layout_uses_storage_keys(leg_day: Workout) -> None:
    payload = json.loads(encode_workouts([leg_day]))
    assert set(payload[0]) == {"id", "name", "date", "lengthInMinutes", "exercises"}
    assert set(payload[0]["exercises"][0]) == {"id", "name", "sets"}
    assert set(payload[0]["exercises"][0]["sets"][0]) == {"id", "weightInKG", "noReps", "restTimeInSeconds"}
    assert payload[0]["date"] == "2026-02-14T18:30:00+00:00"


def test_empty_collection_round_trip() -> None:
    assert decode_workouts(encode_workouts([])) == []


def test_integer_weight_decodes_as_float() -> None:
    workouts = decode_workouts(json.dumps(_payload()).encode())
    assert workouts[0].exercises[0].sets[0].weight_in_kg == 100.0
    assert isinstance(workouts[0].exercises[0].sets[0].weight_in_kg, float)


def test_numeric_date_counts_from_2001_reference_date() -> None:
    workouts = decode_workouts(json.dumps(_payload(date=0)).encode())
    assert workouts[0].date == datetime(2001, 1, 1, tzinfo=timezone.utc)
    # 2026-02-14 18:30 UTC as Foundation's JSONEncoder writes it.
    workouts = decode_workouts(json.dumps(_payload(date=792786600)).encode())
    assert workouts[0].date == datetime(2026, 2, 14, 18, 30, tzinfo=timezone.utc)


def test_naive_iso_date_is_utc() -> None:
    assert parse_date("2026-02-14T10:00:00") == datetime(2026, 2, 14, 10, tzinfo=timezone.utc)
    assert parse_date("2026-02-14T10:00:00Z") == datetime(2026, 2, 14, 10, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "data",
    [
        b"not json",
        b"\xff\xfe",
        b'{"id": "x"}',
        b"[1, 2]",
        b"[NaN]",
    ],
)
def test_invalid_documents_raise_decode_error(data: bytes) -> None:
    with pytest.raises(DecodeError):
        decode_workouts(data)


@pytest.mark.parametrize(
    "overrides",
    [
        {"id": "not-a-uuid"},
        {"name": 5},
        {"lengthInMinutes": "60"},
        {"lengthInMinutes": True},
        {"date": "yesterday"},
        {"date": None},
        {"exercises": {}},
    ],
)
def test_schema_violations_raise_decode_error(overrides: Dict[str, Any]) -> None:
    with pytest.raises(DecodeError):
        decode_workouts(json.dumps(_payload(**overrides)).encode())


def test_missing_set_field_raises_decode_error() -> None:
    payload = _payload()
    del payload[0]["exercises"][0]["sets"][0]["noReps"]
    with pytest.raises(DecodeError, match="noReps"):
        decode_workouts(json.dumps(payload).encode())


def test_non_finite_weight_raises_encode_error() -> None:
    workout = Workout()
    workout.add_exercise().add_set(WorkoutSet(weight_in_kg=float("nan"), no_reps=1, rest_time_in_seconds=1))
    with pytest.raises(EncodeError):
        encode_workouts([workout])


@pytest.mark.parametrize("weight", ["1" + "0" * 400, "1e400", "-1e400"])
def test_out_of_range_weight_raises_decode_error(weight: str) -> None:
    text = json.dumps(_payload()).replace('"weightInKG": 100', f'"weightInKG": {weight}')
    with pytest.raises(DecodeError, match="weightInKG"):
        decode_workouts(text.encode())


@pytest.mark.parametrize("date", ["1e400", "1" + "0" * 400])
def test_out_of_range_numeric_date_raises_decode_error(date: str) -> None:
    text = json.dumps(_payload(date=0)).replace('"date": 0', f'"date": {date}')
    with pytest.raises(DecodeError):
        decode_workouts(text.encode())


def test_deeply_nested_document_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_workouts(b"[" * 200000)
