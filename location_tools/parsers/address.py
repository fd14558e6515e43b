"""
Address Normalization

Turns the loosely-typed objects returned by Nominatim into GeocodeResult
and AddressFields records. Missing or malformed fields degrade to the
"Unknown" sentinel instead of failing the lookup.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from ..config import UNKNOWN


CITY_KEYS = ("city", "town", "village")
STATE_KEYS = ("state", "province")


def first_non_empty(mapping: Any, *keys: str) -> str:
    """
    Return the first value under `keys` that is a non-empty string.

    Args:
        mapping: Address dictionary (anything else is treated as empty)
        *keys: Keys to try, in priority order

    Returns:
        The first non-empty string, or "Unknown"
    """
    if not isinstance(mapping, dict):
        return UNKNOWN
    for key in keys:
        value = mapping.get(key)
        if isinstance(value, str) and value:
            return value
    return UNKNOWN


def city_name(address: Any) -> str:
    """City name with city > town > village priority, or "Unknown"."""
    if isinstance(address, AddressFields):
        address = address.to_dict()
    return first_non_empty(address, *CITY_KEYS)


def _optional_str(raw: Dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    return value if isinstance(value, str) and value else None


def _optional_float(value: Any) -> Optional[float]:
    # Nominatim sends coordinates as strings
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _coordinate_text(value: Any) -> Optional[str]:
    """Upstream coordinate exactly as sent, for display."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


@dataclass
class AddressFields:
    """Address parts Nominatim may return. Every field can be absent."""
    city: Optional[str] = None
    town: Optional[str] = None
    village: Optional[str] = None
    state: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    postcode: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "AddressFields":
        if not isinstance(raw, dict):
            return cls()
        return cls(
            city=_optional_str(raw, "city"),
            town=_optional_str(raw, "town"),
            village=_optional_str(raw, "village"),
            state=_optional_str(raw, "state"),
            province=_optional_str(raw, "province"),
            country=_optional_str(raw, "country"),
            postcode=_optional_str(raw, "postcode"),
        )

    def to_dict(self) -> Dict[str, str]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    @property
    def city_name(self) -> str:
        return first_non_empty(self.to_dict(), *CITY_KEYS)

    @property
    def state_name(self) -> str:
        return first_non_empty(self.to_dict(), *STATE_KEYS)

    @property
    def country_name(self) -> str:
        return first_non_empty(self.to_dict(), "country")

    @property
    def postal_code(self) -> str:
        return first_non_empty(self.to_dict(), "postcode")


@dataclass
class GeocodeResult:
    """A single normalized Nominatim result."""
    display_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: AddressFields = field(default_factory=AddressFields)
    latitude_text: Optional[str] = None
    longitude_text: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "GeocodeResult":
        """Build a result from one upstream JSON object. Never raises."""
        if not isinstance(raw, dict):
            return cls()
        display_name = raw.get("display_name")
        return cls(
            display_name=display_name if isinstance(display_name, str) and display_name else None,
            latitude=_optional_float(raw.get("lat")),
            longitude=_optional_float(raw.get("lon")),
            address=AddressFields.from_dict(raw.get("address")),
            latitude_text=_coordinate_text(raw.get("lat")),
            longitude_text=_coordinate_text(raw.get("lon")),
        )

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def short_name(self) -> Optional[str]:
        """Display name up to the first comma (e.g. "Lyon, Rhône, France" -> "Lyon")."""
        if not self.display_name:
            return None
        return self.display_name.split(",")[0].strip()


def parse_results(payload: Any) -> List[GeocodeResult]:
    """
    Normalize a /search array or a /reverse object into results.

    Raises:
        ValueError: If the payload is neither a list nor a dict
    """
    if isinstance(payload, list):
        return [GeocodeResult.from_dict(item) for item in payload if isinstance(item, dict)]
    if isinstance(payload, dict):
        return [GeocodeResult.from_dict(payload)]
    raise ValueError(f"Unexpected response payload type: {type(payload).__name__}")
