"""
Departure scheduling and traffic modelling
"""

from .schedule import (
    SchedulePlanner,
    arrive_by_scenarios,
    leave_now_scenarios,
    resolve_target_arrival,
)
from .traffic import TrafficBands, TrafficBucket, TrafficModel

__all__ = [
    "SchedulePlanner",
    "arrive_by_scenarios",
    "leave_now_scenarios",
    "resolve_target_arrival",
    "TrafficBands",
    "TrafficBucket",
    "TrafficModel",
]
