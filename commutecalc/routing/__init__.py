"""
Geocoding and routing backends
"""

from .geocoder import Geocoder, NominatimGeocoder, TravelTimeGeocoder
from .highways import extract
from .providers import GoogleDirectionsRouteProvider, OSRMRouteProvider, RouteProvider

__all__ = [
    "Geocoder",
    "NominatimGeocoder",
    "TravelTimeGeocoder",
    "extract",
    "RouteProvider",
    "OSRMRouteProvider",
    "GoogleDirectionsRouteProvider",
]
