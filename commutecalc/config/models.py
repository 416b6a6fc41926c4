"""
Engine configuration models
Supports YAML/JSON configuration files for backend selection and tuning
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from commutecalc.planner.traffic import TrafficBands


class ConfigFormat(str, Enum):
    """Supported configuration file formats"""

    YAML = "yaml"
    JSON = "json"


class GeocoderBackend(str, Enum):
    """Available geocoding services"""

    NOMINATIM = "nominatim"
    TRAVELTIME = "traveltime"


class RouterBackend(str, Enum):
    """Available routing services"""

    OSRM = "osrm"
    GOOGLE = "google"


class EngineConfig(BaseModel):
    """
    Commute engine configuration
    Credentials are not stored here; they come from the environment
    """

    geocoder: GeocoderBackend = Field(
        GeocoderBackend.NOMINATIM,
        description="Geocoding service"
    )
    nominatim_url: str = Field(
        "https://nominatim.openstreetmap.org",
        description="Nominatim base URL"
    )
    user_agent: str = Field(
        "CommuteCalc/1.0",
        description="User-Agent sent to Nominatim",
        min_length=1
    )

    router: RouterBackend = Field(
        RouterBackend.OSRM,
        description="Routing service"
    )
    osrm_url: str = Field(
        "https://router.project-osrm.org",
        description="OSRM base URL"
    )

    timeout: float = Field(
        30,
        description="HTTP timeout in seconds",
        gt=0
    )
    geocode_delay: float = Field(
        1.0,
        description="Pause after each geocoding call in seconds",
        ge=0
    )

    traffic: TrafficBands = Field(
        default_factory=TrafficBands,
        description="Traffic multiplier ranges"
    )

    default_arrival_time: Optional[str] = Field(
        None,
        description="Target arrival used when none is given (HH:MM format)"
    )

    @field_validator('default_arrival_time')
    def validate_arrival_time(cls, v):
        """Validate arrival time format"""
        if v:
            try:
                hours, minutes = v.split(':')
                hour = int(hours)
                minute = int(minutes)
                if not (0 <= hour <= 23 and 0 <= minute <= 59):
                    raise ValueError
            except (ValueError, AttributeError):
                raise ValueError("Arrival time must be in HH:MM format (e.g., 09:00)")
        return v
