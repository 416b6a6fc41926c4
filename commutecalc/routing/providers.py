"""
Route providers retrieving candidate routes between two coordinates
"""

import logging
import os
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from commutecalc.core.errors import RoutingError, ServiceError
from commutecalc.core.models import Coordinate, RawRoute, RouteCandidate, RouteSegment
from commutecalc.core.utils import round_half_up

from .highways import extract

MAX_ROUTES = 3
MAX_PREVIEW_SEGMENTS = 5

PRIMARY_LABEL = "Fastest Route"


def route_label(index: int) -> str:
    """Label for the route at a given position"""
    return PRIMARY_LABEL if index == 0 else f"Alternative {index}"


def to_candidate(raw_route: RawRoute, index: int) -> RouteCandidate:
    """Convert a backend route into a route candidate"""
    preview = [
        segment.name
        for segment in raw_route.segments[:MAX_PREVIEW_SEGMENTS]
        if segment.name
    ]
    return RouteCandidate(
        label=route_label(index),
        duration_minutes=max(1, round_half_up(raw_route.duration_seconds / 60)),
        distance_km=round(raw_route.distance_meters / 1000, 1),
        highways=extract(raw_route.segments),
        preview_segments=preview,
    )


class RouteProvider(ABC):
    """
    Capability interface for routing backends
    Subclasses fetch raw routes; conversion and error mapping live here
    """

    name = "base"

    def __init__(self, timeout: float = 30):
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    async def routes(self, origin: Coordinate, destination: Coordinate) -> List[RouteCandidate]:
        """
        Retrieve candidate routes between two coordinates

        Args:
            origin: Start coordinate
            destination: End coordinate

        Returns:
            Between 1 and 3 route candidates, primary route first

        Raises:
            RoutingError: If the backend reports no viable route
            ServiceError: If the backend cannot be reached or answers garbage
        """
        try:
            raw_routes = await self._fetch(origin, destination)
        except httpx.HTTPError as e:
            self.logger.error(f"HTTP error fetching routes from {self.name}: {e}")
            raise ServiceError(f"Routing service unavailable: {e}") from e
        except (AttributeError, KeyError, IndexError, TypeError, ValueError, PydanticValidationError) as e:
            self.logger.error(f"Error parsing {self.name} routing response: {e}")
            raise ServiceError("Unexpected routing response") from e

        if not raw_routes:
            raise RoutingError("Routing failed: no routes found")

        candidates = [
            to_candidate(raw_route, index)
            for index, raw_route in enumerate(raw_routes[:MAX_ROUTES])
        ]
        self.logger.debug(
            f"Fetched {len(candidates)} routes from {self.name}: "
            f"{[c.duration_minutes for c in candidates]} min"
        )
        return candidates

    @abstractmethod
    async def _fetch(self, origin: Coordinate, destination: Coordinate) -> List[RawRoute]:
        """
        Query the backend for routes

        Returns:
            Raw routes in backend order, primary first
        """
        pass


class OSRMRouteProvider(RouteProvider):
    """OpenStreetMap Routing Machine driving routes with alternatives"""

    name = "osrm"

    def __init__(self, base_url: str = "https://router.project-osrm.org", timeout: float = 30):
        super().__init__(timeout=timeout)
        self.base_url = base_url.rstrip("/")

    async def _fetch(self, origin: Coordinate, destination: Coordinate) -> List[RawRoute]:
        # OSRM expects lon,lat pairs
        locations = (
            f"{origin.longitude},{origin.latitude};"
            f"{destination.longitude},{destination.latitude}"
        )
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/route/v1/driving/{locations}",
                params={"overview": "false", "alternatives": "true", "steps": "true"},
            )

            # Routing failures come back as 4xx with a JSON code
            try:
                data = response.json()
            except ValueError:
                response.raise_for_status()
                raise

            if data.get("code") != "Ok":
                message = data.get("message") or data.get("code") or "unknown error"
                raise RoutingError(f"Routing failed: {message}")

            return [self._parse_route(route) for route in data.get("routes", [])]

    @staticmethod
    def _parse_route(route: Dict[str, Any]) -> RawRoute:
        legs = route.get("legs") or []
        steps = legs[0].get("steps", []) if legs else []
        return RawRoute(
            duration_seconds=route["duration"],
            distance_meters=route["distance"],
            segments=[
                RouteSegment(name=step.get("name") or None, ref=step.get("ref") or None)
                for step in steps
            ],
        )


class GoogleDirectionsRouteProvider(RouteProvider):
    """Google Directions API, reports driving time in current traffic"""

    name = "google"
    DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

    NO_ROUTE_STATUSES = {"ZERO_RESULTS", "NOT_FOUND"}

    ONTO_PATTERN = re.compile(r"\b(?:onto|on)\s+<b>(.*?)</b>", re.IGNORECASE)
    BOLD_PATTERN = re.compile(r"<b>(.*?)</b>", re.IGNORECASE)
    TAG_PATTERN = re.compile(r"<[^>]+>")

    def __init__(self, api_key: Optional[str] = None, timeout: float = 30):
        super().__init__(timeout=timeout)
        self.api_key = api_key or os.getenv("GOOGLE_API_KEY")

        if not self.api_key:
            raise ValueError("Google Maps API key required. Set GOOGLE_API_KEY")

    async def _fetch(self, origin: Coordinate, destination: Coordinate) -> List[RawRoute]:
        params = {
            "origin": f"{origin.latitude},{origin.longitude}",
            "destination": f"{destination.latitude},{destination.longitude}",
            "alternatives": "true",
            "departure_time": "now",
            "key": self.api_key,
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.DIRECTIONS_URL, params=params)
            response.raise_for_status()

            data = response.json()
            status = data.get("status")
            if status in self.NO_ROUTE_STATUSES:
                raise RoutingError(f"Routing failed: {status}")
            if status != "OK":
                detail = data.get("error_message") or status
                raise ServiceError(f"Google Directions request failed: {detail}")

            return [self._parse_route(route) for route in data.get("routes", [])]

    @classmethod
    def _parse_route(cls, route: Dict[str, Any]) -> RawRoute:
        leg = route["legs"][0]
        # Falls back to free-flow duration when no traffic estimate is available
        duration = leg.get("duration_in_traffic") or leg["duration"]
        return RawRoute(
            duration_seconds=duration["value"],
            distance_meters=leg["distance"]["value"],
            segments=[
                RouteSegment(name=cls.road_name(step.get("html_instructions", "")))
                for step in leg.get("steps", [])
            ],
        )

    @classmethod
    def road_name(cls, instructions: str) -> Optional[str]:
        """Pull the road name out of an HTML turn instruction"""
        match = cls.ONTO_PATTERN.search(instructions)
        if match:
            fragment = match.group(1)
        else:
            bolds = cls.BOLD_PATTERN.findall(instructions)
            if not bolds:
                return None
            fragment = bolds[-1]

        name = cls.TAG_PATTERN.sub("", fragment).strip()
        return name or None
