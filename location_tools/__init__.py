"""
Location Tools

Geocoding, reverse geocoding, timezone estimation, major-city lookup and
great-circle distance, packaged as tools for an agent runtime.

Quick start (library usage):
    from location_tools import LocationService

    with LocationService() as service:
        print(service.geocode_address("New York City"))
        print(service.reverse_geocode(40.7128, -74.0060))

Or serve them over HTTP:
    python -m location_tools serve --port 8000
"""

from .cancellation import CancellationToken
from .config_manager import LocatorConfig
from .exceptions import (
    LocationToolsError,
    InvalidCoordinateError,
    ConfigurationError,
    ServerError,
)
from .service import LocationService
from .tools import TOOLS, call_tool

__version__ = "1.0.0"
__all__ = [
    "LocationService",
    "LocatorConfig",
    "CancellationToken",
    "TOOLS",
    "call_tool",
    "LocationToolsError",
    "InvalidCoordinateError",
    "ConfigurationError",
    "ServerError",
]
