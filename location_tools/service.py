"""
LocationService - High-level API for the location tools.

Composes the resilient Nominatim client, the address normalizer and the
offline geometry into five operations. Each operation returns a single
formatted text block and never raises; failures are rendered as text.

Usage:
    from location_tools import LocationService

    with LocationService() as service:
        print(service.geocode_address("New York City"))
        print(service.calculate_distance(40.7128, -74.0060, 34.0522, -118.2437))
"""

import sys
from dataclasses import replace
from typing import Optional

import httpx

from .cancellation import CancellationToken
from .config import GEOCODE_RESULT_LIMIT, MAJOR_CITIES_LIMIT, UNKNOWN
from .config_manager import LocatorConfig
from .exceptions import InvalidCoordinateError
from .geo import (
    Success,
    NotFound,
    Failed,
    Interrupted,
    LookupOutcome,
    LookupRequest,
    build_client,
    build_search_request,
    build_reverse_request,
    fetch_with_retry,
    validate_coordinate,
    haversine,
    estimate_continent,
    hemisphere_labels,
    estimate_utc_offset,
    format_utc_offset,
)


# Output templates. Field order and labels are part of the tool contract.
GEOCODE_TEMPLATE = """\
Location: {display_name}
Coordinates: {latitude}, {longitude}
City: {city}
State: {state}
Country: {country}
"""

REVERSE_TEMPLATE = """\
Address: {display_name}
City: {city}
State: {state}
Country: {country}
Postal Code: {postal_code}
"""

FALLBACK_TEMPLATE = """\
Coordinates: {latitude:.4f}, {longitude:.4f}
Hemisphere: {north_south} {east_west}
Estimated Region: {continent}
Note: Detailed address lookup failed, showing approximate location info.
"""

TIMEZONE_TEMPLATE = """\
Coordinates: {latitude:.4f}, {longitude:.4f}
Estimated UTC Offset: {utc_offset} hours
Note: This is a rough estimate based on longitude.
For precise timezone data, use a dedicated timezone service.
"""

DISTANCE_TEMPLATE = """\
Distance between points:
Point 1: {lat1:.4f}, {lon1:.4f}
Point 2: {lat2:.4f}, {lon2:.4f}
Distance: {kilometers:.2f} kilometers ({miles:.2f} miles)
"""


def _coords_text(latitude, longitude, digits: int = 4) -> str:
    """Format a coordinate pair for messages, tolerating non-numeric input."""
    try:
        return f"{float(latitude):.{digits}f}, {float(longitude):.{digits}f}"
    except (TypeError, ValueError):
        return f"{latitude}, {longitude}"


def _value_or_unknown(value) -> str:
    return UNKNOWN if value is None else str(value)


class LocationService:
    """High-level interface for the geolocation tools.

    Owns an httpx.Client built from the configuration unless one is
    injected. The client is the only state shared between calls and is
    safe to use from several threads at once.

    Args:
        config: LocatorConfig (defaults to env/config.py values).
        client: Optional pre-built httpx.Client. Not closed by close().
        transport: Optional httpx transport for the owned client.
        verbose: Override config.verbose.

    Example:
        with LocationService(verbose=False) as service:
            print(service.reverse_geocode(48.8584, 2.2945))
    """

    def __init__(
        self,
        config: Optional[LocatorConfig] = None,
        client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
        verbose: Optional[bool] = None,
    ):
        self._config = config or LocatorConfig()
        if verbose is not None:
            self._config = replace(self._config, verbose=verbose)
        self._owns_client = client is None
        self._client = client if client is not None else build_client(self._config, transport=transport)

    @property
    def config(self) -> LocatorConfig:
        return self._config

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Close the HTTP client if this service created it."""
        if self._owns_client:
            self._client.close()

    def _log(self, message: str):
        if self._config.verbose:
            print(message, file=sys.stderr)

    def _lookup(self, request: LookupRequest, cancel_token: Optional[CancellationToken]) -> LookupOutcome:
        outcome = fetch_with_retry(
            self._client,
            request,
            max_attempts=self._config.max_attempts,
            retry_delay=self._config.retry_delay,
            cancel_token=cancel_token,
            verbose=self._config.verbose,
        )
        if isinstance(outcome, Interrupted) and cancel_token is not None:
            # Keep the caller's flag raised so cancellation propagates
            cancel_token.cancel()
        return outcome

    # -------------------------------------------------------------------------
    # Forward geocoding
    # -------------------------------------------------------------------------

    def geocode_address(self, address: str, cancel_token: Optional[CancellationToken] = None) -> str:
        """
        Convert an address or place name to coordinates.

        Args:
            address: Address or city name to geocode
            cancel_token: Optional cancellation token

        Returns:
            Location, coordinates, city, state and country as text
        """
        request = build_search_request(address, limit=GEOCODE_RESULT_LIMIT)
        outcome = self._lookup(request, cancel_token)

        if isinstance(outcome, Success):
            result = outcome.first
            return GEOCODE_TEMPLATE.format(
                display_name=_value_or_unknown(result.display_name),
                latitude=_value_or_unknown(result.latitude_text),
                longitude=_value_or_unknown(result.longitude_text),
                city=result.address.city_name,
                state=result.address.state_name,
                country=result.address.country_name,
            )
        if isinstance(outcome, NotFound):
            return f"No location found for: {address}"
        if isinstance(outcome, Interrupted):
            return f"Request interrupted for address: {address}"
        return (
            f"Failed to geocode address '{address}' after {outcome.attempts} attempts. "
            f"Error: {outcome.message}"
        )

    # -------------------------------------------------------------------------
    # Reverse geocoding
    # -------------------------------------------------------------------------

    def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        """
        Convert coordinates to an address and city name.

        Falls back to an offline hemisphere/continent estimate when every
        attempt fails.
        """
        try:
            latitude, longitude = validate_coordinate(latitude, longitude)
        except InvalidCoordinateError as e:
            return f"Failed to reverse geocode coordinates: {_coords_text(latitude, longitude)}. Error: {e}"

        outcome = self._lookup(build_reverse_request(latitude, longitude), cancel_token)

        if isinstance(outcome, Success):
            result = outcome.first
            return REVERSE_TEMPLATE.format(
                display_name=_value_or_unknown(result.display_name),
                city=result.address.city_name,
                state=result.address.state_name,
                country=result.address.country_name,
                postal_code=result.address.postal_code,
            )
        if isinstance(outcome, NotFound):
            return f"No location found for coordinates: {_coords_text(latitude, longitude, digits=6)}"
        if isinstance(outcome, Interrupted):
            return f"Request interrupted for coordinates: {_coords_text(latitude, longitude)}"

        self._log(
            f"[Lookup] Reverse geocoding failed after {outcome.attempts} attempts "
            f"({outcome.message}), using offline estimate"
        )
        return self.fallback_location_info(latitude, longitude)

    @staticmethod
    def fallback_location_info(latitude: float, longitude: float) -> str:
        """Approximate location info computed without any network access."""
        north_south, east_west = hemisphere_labels(latitude, longitude)
        return FALLBACK_TEMPLATE.format(
            latitude=latitude,
            longitude=longitude,
            north_south=north_south,
            east_west=east_west,
            continent=estimate_continent(latitude, longitude),
        )

    # -------------------------------------------------------------------------
    # Offline operations
    # -------------------------------------------------------------------------

    def get_timezone(self, latitude: float, longitude: float) -> str:
        """Estimate the UTC offset for a coordinate from its longitude. No network call."""
        try:
            latitude, longitude = validate_coordinate(latitude, longitude)
        except InvalidCoordinateError as e:
            return (
                f"Unable to determine timezone for coordinates: {_coords_text(latitude, longitude)}. "
                f"Error: {e}"
            )

        return TIMEZONE_TEMPLATE.format(
            latitude=latitude,
            longitude=longitude,
            utc_offset=format_utc_offset(estimate_utc_offset(longitude)),
        )

    def calculate_distance(self, lat1: float, lon1: float, lat2: float, lon2: float) -> str:
        """Great-circle distance between two points, in kilometers and miles."""
        try:
            lat1, lon1 = validate_coordinate(lat1, lon1)
            lat2, lon2 = validate_coordinate(lat2, lon2)
        except InvalidCoordinateError as e:
            return f"Failed to calculate distance: {e}"

        distance = haversine(lat1, lon1, lat2, lon2)
        return DISTANCE_TEMPLATE.format(
            lat1=lat1,
            lon1=lon1,
            lat2=lat2,
            lon2=lon2,
            kilometers=distance.kilometers,
            miles=distance.miles,
        )

    # -------------------------------------------------------------------------
    # Major cities
    # -------------------------------------------------------------------------

    def get_major_cities(self, country: str, cancel_token: Optional[CancellationToken] = None) -> str:
        """
        List up to five major cities of a country with their coordinates.

        Uses the same retry policy as the other lookups.
        """
        request = build_search_request(
            f"{country} major cities",
            limit=MAJOR_CITIES_LIMIT,
            feature_type="city",
        )
        outcome = self._lookup(request, cancel_token)

        if isinstance(outcome, Interrupted):
            return f"Request interrupted for country: {country}"
        if isinstance(outcome, Failed):
            return (
                f"Failed to get major cities for country '{country}' after {outcome.attempts} attempts. "
                f"Error: {outcome.message}"
            )
        if isinstance(outcome, NotFound):
            return f"No major cities found for country: {country}"

        lines = []
        for result in outcome.results:
            if len(lines) >= MAJOR_CITIES_LIMIT:
                break
            if not result.short_name or not result.has_coordinates:
                continue
            lines.append(f"- {result.short_name} ({result.latitude:.4f}, {result.longitude:.4f})")

        if not lines:
            return f"No major cities found for country: {country}"
        return f"Major cities in {country}:\n" + "\n".join(lines) + "\n"
