"""
CommuteCalc: Commute Time Estimation Engine

Resolves two addresses, fetches driving routes in both directions and
estimates departure scenarios under a simulated rush-hour traffic model.
"""

__version__ = "0.1.0"

from .core.errors import CommuteError, NotFoundError, RoutingError, ServiceError, ValidationError
from .core.models import CommuteResult, ScheduleMode
from .planner.factory import calculate, create_planner
from .planner.schedule import SchedulePlanner

__all__ = [
    "calculate",
    "create_planner",
    "SchedulePlanner",
    "CommuteResult",
    "ScheduleMode",
    "CommuteError",
    "NotFoundError",
    "RoutingError",
    "ServiceError",
    "ValidationError",
]
