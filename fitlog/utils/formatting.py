"""Formatting helpers used by exports and console output."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fitlog.core.constants import DATE_FORMAT


def format_date(value: datetime, fmt: Optional[str] = None) -> str:
    """Format an aware datetime in local time."""
    return value.astimezone().strftime(fmt or DATE_FORMAT)


def format_length(minutes: Optional[int]) -> str:
    """Format workout length as '45 min' or '1h 05m'."""
    if minutes is None:
        return "N/A"
    if minutes >= 60:
        h, m = divmod(int(minutes), 60)
        return f"{h}h {m:02d}m"
    return f"{int(minutes)} min"


def format_weight(kg: float) -> str:
    """Drop the decimal part for whole kilograms."""
    value = float(kg)
    if value.is_integer():
        return f"{int(value)} kg"
    return f"{value:g} kg"


def format_rest(seconds: int) -> str:
    """Format rest time in seconds into readable text."""
    seconds = int(seconds)
    if seconds >= 60:
        m, s = divmod(seconds, 60)
        return f"{m}min" if s == 0 else f"{m}min {s}sec"
    return f"{seconds}sec"


def format_volume(kg: float) -> str:
    return f"{float(kg):,.0f} kg"
