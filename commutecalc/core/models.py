"""
Core data models for commute estimation
Values are immutable once created; traffic adjustment derives new objects
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScheduleMode(str, Enum):
    """Scheduling mode for a calculation"""

    NOW = "now"
    ARRIVAL = "arrival"


class Coordinate(BaseModel):
    """Geographic coordinate resolved by a geocoder"""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class RouteSegment(BaseModel):
    """Named path segment (routing step) of a raw route"""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(None, description="Street or road name")
    ref: Optional[str] = Field(None, description="Reference code attached by the router (e.g. I 90)")


class RawRoute(BaseModel):
    """Route as returned by a routing backend, before conversion"""

    model_config = ConfigDict(frozen=True)

    duration_seconds: float = Field(..., ge=0, description="Total duration in seconds")
    distance_meters: float = Field(..., ge=0, description="Total distance in meters")
    segments: List[RouteSegment] = Field(default_factory=list, description="Ordered path segments")


class RouteCandidate(BaseModel):
    """One possible path between two coordinates"""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Fastest Route / Alternative N")
    duration_minutes: int = Field(..., ge=1, description="Base duration in whole minutes")
    distance_km: float = Field(..., ge=0, description="Distance in kilometers, one decimal")
    highways: List[str] = Field(default_factory=list, max_length=4, description="Named highways traversed")
    preview_segments: List[str] = Field(default_factory=list, max_length=5, description="Leading segment names")

    @field_validator("distance_km")
    def round_distance(cls, v):
        """Keep distance at one decimal place"""
        return round(v, 1)

    @property
    def via(self) -> str:
        """Short human-readable path summary"""
        return " → ".join(self.preview_segments[:3]) or "Main route"


class TrafficAdjustedRoute(RouteCandidate):
    """Route candidate with a traffic-adjusted duration for one scenario"""

    adjusted_duration_minutes: int = Field(..., ge=1, description="Duration after traffic adjustment")
    estimated_arrival: Optional[datetime] = Field(None, description="Arrival time (arrive-by mode only)")
    on_time: Optional[bool] = Field(None, description="Arrives no later than target (arrive-by mode only)")

    @classmethod
    def from_candidate(
        cls,
        candidate: RouteCandidate,
        adjusted_duration_minutes: int,
        estimated_arrival: Optional[datetime] = None,
        on_time: Optional[bool] = None,
    ) -> "TrafficAdjustedRoute":
        """Derive an adjusted route without touching the candidate"""
        return cls(
            **candidate.model_dump(include=set(RouteCandidate.model_fields)),
            adjusted_duration_minutes=adjusted_duration_minutes,
            estimated_arrival=estimated_arrival,
            on_time=on_time,
        )

    @property
    def duration_display(self) -> str:
        return f"{self.adjusted_duration_minutes} min"


class DepartureScenario(BaseModel):
    """Routes evaluated for a single hypothetical departure time"""

    model_config = ConfigDict(frozen=True)

    departure_time: datetime = Field(..., description="When to leave")
    target_arrival: Optional[datetime] = Field(None, description="Target arrival (arrive-by mode only)")
    buffer_minutes: Optional[int] = Field(None, ge=0, description="Safety buffer (arrive-by mode only)")
    routes: List[TrafficAdjustedRoute] = Field(default_factory=list, description="Adjusted routes")

    @property
    def fastest(self) -> Optional[TrafficAdjustedRoute]:
        """Route with the shortest adjusted duration"""
        if not self.routes:
            return None
        return min(self.routes, key=lambda r: r.adjusted_duration_minutes)


class CommuteResult(BaseModel):
    """Result of one commute calculation request"""

    model_config = ConfigDict(frozen=True)

    to_destination: List[DepartureScenario] = Field(..., min_length=3, max_length=3)
    to_origin: List[DepartureScenario] = Field(..., min_length=3, max_length=3)
    mode: ScheduleMode = Field(..., description="Scheduling mode used for the outbound leg")

    origin_address: Optional[str] = Field(None, description="Home address as entered")
    destination_address: Optional[str] = Field(None, description="Office address as entered")
    calculated_at: Optional[datetime] = Field(None, description="When calculated")
