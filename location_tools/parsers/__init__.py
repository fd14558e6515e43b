"""
Parsers module for normalizing Nominatim responses.

- address.py: Address field fallbacks and GeocodeResult records
"""

from .address import (
    AddressFields,
    GeocodeResult,
    first_non_empty,
    city_name,
    parse_results,
)
