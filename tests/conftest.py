"""
Shared fixtures for commute engine tests
"""

from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest

from commutecalc.core.models import Coordinate, RouteCandidate
from commutecalc.routing.geocoder import Geocoder
from commutecalc.routing.providers import RouteProvider

SEATTLE = Coordinate(latitude=47.6038, longitude=-122.3301)
BELLEVUE = Coordinate(latitude=47.6144, longitude=-122.1923)


@pytest.fixture
def frozen_now():
    """Monday 8:00 AM"""
    return datetime(2024, 5, 6, 8, 0)


@pytest.fixture
def sample_routes():
    """Candidate routes between Seattle and Bellevue"""
    return [
        RouteCandidate(
            label="Fastest Route",
            duration_minutes=20,
            distance_km=16.4,
            highways=["I-90", "I-405"],
            preview_segments=["4th Avenue", "I-90", "I-405"],
        ),
        RouteCandidate(
            label="Alternative 1",
            duration_minutes=24,
            distance_km=18.9,
            highways=["SR-520"],
            preview_segments=["Montlake Boulevard", "SR-520"],
        ),
    ]


@pytest.fixture
def mock_geocoder():
    """Geocoder resolving the two test cities"""
    geocoder = Mock(spec=Geocoder)

    async def resolve(address):
        return {"Seattle, WA": SEATTLE, "Bellevue, WA": BELLEVUE}[address]

    geocoder.resolve = AsyncMock(side_effect=resolve)
    return geocoder


@pytest.fixture
def mock_route_provider(sample_routes):
    """Route provider returning the sample routes for any pair"""
    provider = Mock(spec=RouteProvider)
    provider.routes = AsyncMock(return_value=sample_routes)
    return provider
