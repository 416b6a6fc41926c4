"""
Core models and errors for commute estimation
"""

from .errors import CommuteError, NotFoundError, RoutingError, ServiceError, ValidationError
from .models import (
    CommuteResult,
    Coordinate,
    DepartureScenario,
    RawRoute,
    RouteCandidate,
    RouteSegment,
    ScheduleMode,
    TrafficAdjustedRoute,
)

__all__ = [
    "CommuteError",
    "NotFoundError",
    "RoutingError",
    "ServiceError",
    "ValidationError",
    "CommuteResult",
    "Coordinate",
    "DepartureScenario",
    "RawRoute",
    "RouteCandidate",
    "RouteSegment",
    "ScheduleMode",
    "TrafficAdjustedRoute",
]
