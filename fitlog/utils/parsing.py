"""Parsing helpers for CLI values and workout import files."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

import yaml

from fitlog.core.codec import workouts_from_payload
from fitlog.core.models import Workout

_DATETIME_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d")


def parse_datetime(value: str) -> datetime:
    """Parse 'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM' as local time."""
    raw = value.strip()
    for fmt in _DATETIME_FORMATS:
        try:
            parsed = datetime.strptime(raw, fmt)
        except ValueError:
            continue
        return parsed.astimezone()
    raise ValueError(
        f"Invalid date '{value}'. Expected YYYY-MM-DD or 'YYYY-MM-DD HH:MM' (e.g. 2026-01-15 18:30)"
    )


def _normalize(node: Any, key: Optional[str] = None) -> Any:
    if isinstance(node, dict):
        normalized = {k: _normalize(v, k) for k, v in node.items()}
        if "id" not in normalized:
            normalized["id"] = str(uuid4())
        return normalized
    if isinstance(node, list):
        return [_normalize(item) for item in node]
    # YAML turns unquoted timestamps into date/datetime objects.
    if key == "date" and isinstance(node, datetime):
        return node.isoformat()
    if key == "date" and isinstance(node, date):
        return datetime(node.year, node.month, node.day).astimezone().isoformat()
    return node


def load_workout_input(file_path: Optional[Path], read_stdin: bool, stdin_text: str = "") -> List[Dict[str, Any]]:
    """Load workout object(s) from file or stdin text."""
    raw_data: Any
    if file_path:
        text = file_path.read_text()
        if file_path.suffix.lower() in {".yaml", ".yml"}:
            raw_data = yaml.safe_load(text)
        else:
            raw_data = json.loads(text)
    elif read_stdin:
        text = stdin_text.strip()
        if not text:
            return []
        try:
            raw_data = json.loads(text)
        except json.JSONDecodeError:
            raw_data = yaml.safe_load(text)
    else:
        return []

    if isinstance(raw_data, dict):
        return [raw_data]
    if isinstance(raw_data, list):
        return [item for item in raw_data if isinstance(item, dict)]
    return []


def workouts_from_import(items: List[Dict[str, Any]]) -> List[Workout]:
    """Build workouts from import records, generating ids where they are missing."""
    return workouts_from_payload(_normalize(items))
