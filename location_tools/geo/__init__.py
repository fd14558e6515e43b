"""
Geographic utilities module.

- geometry.py: Offline distance, continent and UTC offset estimates
- nominatim.py: Resilient lookups against the OpenStreetMap Nominatim API
"""

from .geometry import (
    AreaBoundary,
    Distance,
    CONTINENT_BOUNDARIES,
    is_in_boundary,
    validate_coordinate,
    haversine,
    estimate_continent,
    hemisphere_labels,
    estimate_utc_offset,
    format_utc_offset,
)
from .nominatim import (
    Success,
    NotFound,
    Failed,
    Interrupted,
    LookupOutcome,
    LookupRequest,
    build_search_request,
    build_reverse_request,
    build_client,
    fetch_with_retry,
)
