"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from fitlog.core.codec import workouts_to_payload
from fitlog.core.models import Workout


def write_workouts_json(path: Path, workouts: Sequence[Workout]) -> Path:
    """Write workouts in the storage schema as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(workouts_to_payload(workouts), indent=2) + "\n")
    return path
