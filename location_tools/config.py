"""
Default configuration for Location Tools.

Module-level constants used across the package. Every value that depends on
the deployment can be overridden with a LOCATION_TOOLS_* environment
variable or through LocatorConfig / LocationService constructor args.
"""

import os

# Nominatim (OpenStreetMap) endpoint
NOMINATIM_BASE_URL = os.environ.get(
    "LOCATION_TOOLS_BASE_URL", "https://nominatim.openstreetmap.org"
)

# Nominatim's usage policy requires an identifying User-Agent
USER_AGENT = os.environ.get(
    "LOCATION_TOOLS_USER_AGENT", "LocationTools/1.0 (location-tools)"
)

# Default headers for every outbound request.
# "Connection: close" avoids connection reuse issues with the upstream service.
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Connection": "close",
}

# Request timeout (seconds)
REQUEST_TIMEOUT = float(os.environ.get("LOCATION_TOOLS_TIMEOUT", "30.0"))

# Retry policy (linear backoff: retry index * RETRY_DELAY)
MAX_ATTEMPTS = int(os.environ.get("LOCATION_TOOLS_MAX_ATTEMPTS", "3"))
RETRY_DELAY = float(os.environ.get("LOCATION_TOOLS_RETRY_DELAY", "0.5"))

# Proxy Configuration
PROXY_HOST = os.environ.get("LOCATION_TOOLS_PROXY_HOST", "")
PROXY_USER = os.environ.get("LOCATION_TOOLS_PROXY_USER", "")
PROXY_PASS = os.environ.get("LOCATION_TOOLS_PROXY_PASS", "")


def get_proxy_url():
    """Get proxy URL. Returns single URL string for httpx."""
    if PROXY_HOST and PROXY_USER and PROXY_PASS:
        return f"http://{PROXY_USER}:{PROXY_PASS}@{PROXY_HOST}"
    return None


# API Server
API_HOST = "0.0.0.0"
API_PORT = 8000

# Search Parameters
GEOCODE_RESULT_LIMIT = 1
MAJOR_CITIES_LIMIT = 5

# Geographic Constants
EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371
DEGREES_PER_TIMEZONE = 15.0

# Sentinel for missing address data
UNKNOWN = "Unknown"
UNKNOWN_REGION = "Unknown Region"
