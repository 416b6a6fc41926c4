"""
Small numeric and clock helpers shared by routing and planning
"""

import math
from datetime import datetime
from typing import Tuple

from .errors import ValidationError


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values"""
    return int(math.floor(value + 0.5))


def parse_clock_time(value: str) -> Tuple[int, int]:
    """
    Parse an HH:MM clock time

    Args:
        value: Time string such as "09:00" or "17:30"

    Returns:
        (hour, minute) tuple

    Raises:
        ValidationError: If the value is empty or not a valid 24h clock time
    """
    if not value or not value.strip():
        raise ValidationError("Please enter a target arrival time")

    try:
        hours, minutes = value.strip().split(":")
        hour = int(hours)
        minute = int(minutes)
    except (ValueError, AttributeError):
        raise ValidationError(f"Arrival time must be in HH:MM format (e.g., 09:00), got {value!r}")

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValidationError(f"Arrival time must be in HH:MM format (e.g., 09:00), got {value!r}")

    return hour, minute


def format_clock(moment: datetime) -> str:
    """Format a timestamp as a short 12-hour clock time (8:05 AM)"""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"
