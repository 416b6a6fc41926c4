"""
Schedule planner producing departure scenarios for a commute
"""

import asyncio
import logging
from datetime import datetime, time, timedelta
from typing import Callable, List, Optional, Sequence, Union

from commutecalc.core.errors import ValidationError
from commutecalc.core.models import (
    CommuteResult,
    Coordinate,
    DepartureScenario,
    RouteCandidate,
    ScheduleMode,
    TrafficAdjustedRoute,
)
from commutecalc.core.utils import parse_clock_time
from commutecalc.routing.geocoder import Geocoder
from commutecalc.routing.providers import RouteProvider

from .traffic import TrafficModel

LEAVE_NOW_OFFSETS = (0, 15, 30)
ARRIVAL_BUFFERS = (0, 10, 20)

ArrivalTime = Union[str, time]


def leave_now_scenarios(
    routes: Sequence[RouteCandidate],
    now: datetime,
    model: TrafficModel,
    offsets: Sequence[int] = LEAVE_NOW_OFFSETS,
) -> List[DepartureScenario]:
    """
    Build scenarios departing at fixed offsets from now

    Each route is adjusted exactly once per scenario.
    """
    scenarios = []
    for offset in offsets:
        departure = now + timedelta(minutes=offset)
        scenarios.append(DepartureScenario(
            departure_time=departure,
            routes=[
                TrafficAdjustedRoute.from_candidate(
                    route,
                    adjusted_duration_minutes=model.adjust(
                        route.duration_minutes, departure.hour, departure.minute
                    ),
                )
                for route in routes
            ],
        ))
    return scenarios


def resolve_target_arrival(arrival_time: ArrivalTime, now: datetime) -> datetime:
    """
    Pin a clock time to today, or tomorrow if it has already passed

    Args:
        arrival_time: "HH:MM" string or time object
        now: Current time

    Returns:
        Target arrival timestamp not earlier than now
    """
    if isinstance(arrival_time, time):
        hour, minute = arrival_time.hour, arrival_time.minute
    else:
        hour, minute = parse_clock_time(arrival_time)

    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if target < now:
        target += timedelta(days=1)
    return target


def arrive_by_scenarios(
    routes: Sequence[RouteCandidate],
    target: datetime,
    model: TrafficModel,
    buffers: Sequence[int] = ARRIVAL_BUFFERS,
) -> List[DepartureScenario]:
    """
    Build scenarios back-computed from a target arrival

    The lead time for each buffer is the mean base duration of all routes
    plus the buffer. Routes are adjusted for the resulting departure time and
    flagged on time when they arrive no later than the target.
    """
    if not routes:
        raise ValueError("at least one route is required")

    baseline = sum(route.duration_minutes for route in routes) / len(routes)

    scenarios = []
    for buffer in buffers:
        departure = target - timedelta(minutes=baseline + buffer)
        adjusted_routes = []
        for route in routes:
            adjusted = model.adjust(route.duration_minutes, departure.hour, departure.minute)
            arrival = departure + timedelta(minutes=adjusted)
            adjusted_routes.append(TrafficAdjustedRoute.from_candidate(
                route,
                adjusted_duration_minutes=adjusted,
                estimated_arrival=arrival,
                on_time=arrival <= target,
            ))

        scenarios.append(DepartureScenario(
            departure_time=departure,
            target_arrival=target,
            buffer_minutes=buffer,
            routes=adjusted_routes,
        ))
    return scenarios


class SchedulePlanner:
    """
    Orchestrates geocoding, routing and traffic adjustment for a commute

    Args:
        geocoder: Address resolver
        route_provider: Routing backend
        traffic_model: Duration perturbation model
        clock: Returns the current time; swap for a frozen clock in tests
        geocode_delay: Seconds to wait after each address resolution
    """

    def __init__(
        self,
        geocoder: Geocoder,
        route_provider: RouteProvider,
        traffic_model: Optional[TrafficModel] = None,
        clock: Optional[Callable[[], datetime]] = None,
        geocode_delay: float = 1.0,
    ):
        self.geocoder = geocoder
        self.route_provider = route_provider
        self.traffic_model = traffic_model or TrafficModel()
        self.clock = clock or datetime.now
        self.geocode_delay = geocode_delay
        self.logger = logging.getLogger(__name__)

    async def calculate(
        self,
        home_address: str,
        office_address: str,
        mode: Union[ScheduleMode, str] = ScheduleMode.NOW,
        arrival_time: Optional[ArrivalTime] = None,
    ) -> CommuteResult:
        """
        Calculate commute scenarios in both directions

        Args:
            home_address: Origin of the outbound leg
            office_address: Destination of the outbound leg
            mode: "now" for leave-now, "arrival" for arrive-by on the outbound leg
            arrival_time: Target arrival clock time, required in arrive-by mode

        Returns:
            Fully populated CommuteResult

        Raises:
            ValidationError: Missing addresses or arrival time
            NotFoundError: An address could not be resolved
            RoutingError: No route in either direction
            ServiceError: An upstream service failed
        """
        if not home_address or not home_address.strip() or not office_address or not office_address.strip():
            raise ValidationError("Please enter both addresses")

        try:
            mode = ScheduleMode(mode)
        except ValueError:
            raise ValidationError(f"Unknown schedule mode: {mode}")

        if mode == ScheduleMode.ARRIVAL:
            if not arrival_time:
                raise ValidationError("Please enter a target arrival time")
            if isinstance(arrival_time, str):
                parse_clock_time(arrival_time)

        home_address = home_address.strip()
        office_address = office_address.strip()
        self.logger.info(f"Calculating commute {home_address} -> {office_address} ({mode.value})")

        home, office = await asyncio.gather(
            self._resolve_with_delay(home_address),
            self._resolve_with_delay(office_address),
        )

        # One lookup per direction, reused by every scenario
        outbound_routes, return_routes = await asyncio.gather(
            self.route_provider.routes(home, office),
            self.route_provider.routes(office, home),
        )

        now = self.clock()
        if mode == ScheduleMode.ARRIVAL:
            target = resolve_target_arrival(arrival_time, now)
            to_destination = arrive_by_scenarios(outbound_routes, target, self.traffic_model)
        else:
            to_destination = leave_now_scenarios(outbound_routes, now, self.traffic_model)

        # The return leg is always leave-now
        to_origin = leave_now_scenarios(return_routes, now, self.traffic_model)

        return CommuteResult(
            to_destination=to_destination,
            to_origin=to_origin,
            mode=mode,
            origin_address=home_address,
            destination_address=office_address,
            calculated_at=now,
        )

    async def _resolve_with_delay(self, address: str) -> Coordinate:
        """Resolve an address, then pause to respect upstream rate limits"""
        coordinate = await self.geocoder.resolve(address)
        if self.geocode_delay > 0:
            await asyncio.sleep(self.geocode_delay)
        return coordinate
