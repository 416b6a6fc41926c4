"""
Geocoding clients resolving free-text addresses to coordinates
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from commutecalc.core.errors import NotFoundError, ServiceError, ValidationError
from commutecalc.core.models import Coordinate


class Geocoder(ABC):
    """Base class for geocoding backends"""

    def __init__(self, timeout: float = 30):
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    async def resolve(self, address: str) -> Coordinate:
        """
        Resolve an address to its highest-ranked coordinate

        Args:
            address: Free-text address

        Returns:
            Coordinate of the first match

        Raises:
            ValidationError: If the address is empty
            NotFoundError: If the service returns no matches
            ServiceError: If the service cannot be reached or answers garbage
        """
        if not address or not address.strip():
            raise ValidationError("Address must not be empty")

        address = address.strip()
        try:
            coordinate = await self._lookup(address)
        except httpx.HTTPError as e:
            self.logger.error(f"HTTP error geocoding address {address}: {e}")
            raise ServiceError(f"Geocoding service unavailable: {e}") from e
        except (AttributeError, KeyError, IndexError, TypeError, ValueError, PydanticValidationError) as e:
            self.logger.error(f"Error parsing geocoding response for {address}: {e}")
            raise ServiceError(f"Unexpected geocoding response for {address}") from e

        if coordinate is None:
            self.logger.warning(f"No geocoding results for address: {address}")
            raise NotFoundError(address)

        self.logger.debug(f"Geocoded {address}: {coordinate.latitude}, {coordinate.longitude}")
        return coordinate

    @abstractmethod
    async def _lookup(self, address: str) -> Optional[Coordinate]:
        """
        Query the backend for an address

        Returns:
            Coordinate of the first match, or None when nothing matched
        """
        pass


class NominatimGeocoder(Geocoder):
    """OpenStreetMap Nominatim geocoder, no API key required"""

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "CommuteCalc/1.0",
        timeout: float = 30,
    ):
        super().__init__(timeout=timeout)
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent

    @property
    def headers(self) -> Dict[str, str]:
        """HTTP headers for API requests"""
        return {"User-Agent": self.user_agent}

    async def _lookup(self, address: str) -> Optional[Coordinate]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/search",
                headers=self.headers,
                params={"format": "json", "q": address, "limit": 1},
            )
            response.raise_for_status()

            data = response.json()
            if not data:
                return None

            match = data[0]
            return Coordinate(latitude=float(match["lat"]), longitude=float(match["lon"]))


class TravelTimeGeocoder(Geocoder):
    """TravelTime geocoding search, requires application credentials"""

    def __init__(
        self,
        app_id: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 30,
    ):
        super().__init__(timeout=timeout)
        self.app_id = app_id or os.getenv("TRAVELTIME_APP_ID")
        self.api_key = api_key or os.getenv("TRAVELTIME_API_KEY")
        self.base_url = "https://api.traveltimeapp.com"

        if not self.app_id or not self.api_key:
            raise ValueError(
                "TravelTime API credentials required. Set TRAVELTIME_APP_ID and TRAVELTIME_API_KEY"
            )

    @property
    def headers(self) -> Dict[str, str]:
        """HTTP headers for API requests"""
        return {
            "Content-Type": "application/json",
            "X-Application-Id": self.app_id,
            "X-Api-Key": self.api_key,
        }

    async def _lookup(self, address: str) -> Optional[Coordinate]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/v4/geocoding/search",
                headers=self.headers,
                params={"query": address, "limit": 1},
            )
            response.raise_for_status()

            data = response.json()
            if not data.get("features"):
                return None

            # GeoJSON order is [lng, lat]
            lng, lat = data["features"][0]["geometry"]["coordinates"][:2]
            return Coordinate(latitude=lat, longitude=lng)
