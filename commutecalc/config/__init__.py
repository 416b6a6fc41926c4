"""
CommuteCalc Configuration Module
Handles YAML/JSON configuration files for backend selection
"""

from .models import EngineConfig, GeocoderBackend, RouterBackend
from .parser import ConfigParser, ConfigParserError
from .manager import ConfigManager, ConfigManagerError

__all__ = [
    "EngineConfig",
    "GeocoderBackend",
    "RouterBackend",
    "ConfigParser",
    "ConfigParserError",
    "ConfigManager",
    "ConfigManagerError",
]
