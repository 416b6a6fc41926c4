"""
Builds planners and backends from engine configuration
"""

import random
from datetime import datetime
from typing import Callable, Optional, Union

from commutecalc.config.models import EngineConfig, GeocoderBackend, RouterBackend
from commutecalc.core.models import CommuteResult, ScheduleMode
from commutecalc.routing.geocoder import Geocoder, NominatimGeocoder, TravelTimeGeocoder
from commutecalc.routing.providers import (
    GoogleDirectionsRouteProvider,
    OSRMRouteProvider,
    RouteProvider,
)

from .schedule import ArrivalTime, SchedulePlanner
from .traffic import TrafficModel


def create_geocoder(config: EngineConfig) -> Geocoder:
    """Instantiate the configured geocoding backend"""
    if config.geocoder == GeocoderBackend.TRAVELTIME:
        return TravelTimeGeocoder(timeout=config.timeout)
    return NominatimGeocoder(
        base_url=config.nominatim_url,
        user_agent=config.user_agent,
        timeout=config.timeout,
    )


def create_route_provider(config: EngineConfig) -> RouteProvider:
    """Instantiate the configured routing backend"""
    if config.router == RouterBackend.GOOGLE:
        return GoogleDirectionsRouteProvider(timeout=config.timeout)
    return OSRMRouteProvider(base_url=config.osrm_url, timeout=config.timeout)


def create_planner(
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> SchedulePlanner:
    """
    Wire a SchedulePlanner from configuration

    Raises:
        ValueError: If the selected backend is missing credentials
    """
    config = config or EngineConfig()
    return SchedulePlanner(
        geocoder=create_geocoder(config),
        route_provider=create_route_provider(config),
        traffic_model=TrafficModel(rng=rng, bands=config.traffic),
        clock=clock,
        geocode_delay=config.geocode_delay,
    )


async def calculate(
    home_address: str,
    office_address: str,
    mode: Union[ScheduleMode, str] = ScheduleMode.NOW,
    arrival_time: Optional[ArrivalTime] = None,
    config: Optional[EngineConfig] = None,
) -> CommuteResult:
    """Calculate a commute with a planner built from configuration"""
    planner = create_planner(config)
    return await planner.calculate(home_address, office_address, mode, arrival_time)
