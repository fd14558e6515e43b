"""
Nominatim API Integration

Forward and reverse geocoding against OpenStreetMap Nominatim with bounded
retries. A lookup never raises: it returns one of the LookupOutcome
variants and leaves the fallback decision to the caller.
"""

import sys
import httpx
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field

from ..cancellation import CancellationToken
from ..config import DEFAULT_HEADERS, MAX_ATTEMPTS, RETRY_DELAY
from ..config_manager import LocatorConfig
from ..parsers import GeocodeResult, parse_results


# =============================================================================
# Lookup Outcomes
# =============================================================================

@dataclass
class Success:
    """Upstream answered with at least one result."""
    results: List[GeocodeResult]
    attempts: int = 1

    @property
    def first(self) -> GeocodeResult:
        return self.results[0]


@dataclass
class NotFound:
    """Upstream answered successfully but matched nothing. Never retried."""
    attempts: int = 1


@dataclass
class Failed:
    """Every attempt failed; `error` is the one from the last attempt."""
    error: Optional[Exception] = None
    attempts: int = 0

    @property
    def message(self) -> str:
        if self.error is None:
            return "Unknown error"
        return str(self.error) or type(self.error).__name__


@dataclass
class Interrupted:
    """The caller's cancellation token fired before the lookup finished."""
    attempts: int = 0


LookupOutcome = Union[Success, NotFound, Failed, Interrupted]


# =============================================================================
# Requests
# =============================================================================

@dataclass
class LookupRequest:
    """One logical Nominatim call: endpoint path plus query parameters."""
    path: str
    params: Dict[str, Any] = field(default_factory=dict)
    description: str = ""


def build_search_request(query: str, limit: int = 1, feature_type: Optional[str] = None) -> LookupRequest:
    """
    Build a forward geocoding request.

    Args:
        query: Free-text address or place name
        limit: Maximum number of results
        feature_type: Optional Nominatim featureType filter (e.g., "city")

    Returns:
        LookupRequest for GET /search
    """
    params = {
        "q": query,
        "format": "json",
        "limit": limit,
        "addressdetails": 1,
    }
    if feature_type:
        params["featureType"] = feature_type
    return LookupRequest(path="/search", params=params, description=f"search '{query}'")


def build_reverse_request(latitude: float, longitude: float) -> LookupRequest:
    """Build a reverse geocoding request for GET /reverse."""
    params = {
        "lat": latitude,
        "lon": longitude,
        "format": "json",
        "addressdetails": 1,
    }
    return LookupRequest(path="/reverse", params=params, description=f"reverse ({latitude}, {longitude})")


def build_client(
    config: Optional[LocatorConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Create the shared HTTP client.

    Keep-alive is disabled and every request carries "Connection: close".
    The client is safe to share between threads.

    Args:
        config: Configuration (defaults to LocatorConfig())
        transport: Optional transport override (tests use httpx.MockTransport)
    """
    config = config or LocatorConfig()
    headers = dict(DEFAULT_HEADERS)
    headers["User-Agent"] = config.user_agent

    client_kwargs = {
        "base_url": config.base_url,
        "headers": headers,
        "timeout": config.timeout,
        "limits": httpx.Limits(max_keepalive_connections=0),
    }
    if transport is not None:
        client_kwargs["transport"] = transport
    elif config.proxy_url:
        client_kwargs["proxy"] = config.proxy_url

    return httpx.Client(**client_kwargs)


# =============================================================================
# Lookup with Retry
# =============================================================================

def _is_empty(payload: Any) -> bool:
    if payload is None:
        return True
    if isinstance(payload, (list, dict)) and not payload:
        return True
    # /reverse answers {"error": "Unable to geocode"} when nothing is there
    if isinstance(payload, dict) and "error" in payload and "display_name" not in payload:
        return True
    return False


def _attempt(client: httpx.Client, request: LookupRequest, attempt: int) -> LookupOutcome:
    """Run a single attempt and classify it."""
    try:
        response = client.get(request.path, params=request.params)
        response.raise_for_status()
        payload = response.json()
        if _is_empty(payload):
            return NotFound(attempts=attempt)
        results = parse_results(payload)
    except Exception as e:
        # Any transport or decoding failure (deeply nested JSON raises
        # RecursionError, httpx.InvalidURL is not an HTTPError) is retried
        return Failed(error=e, attempts=attempt)

    if not results:
        return NotFound(attempts=attempt)
    return Success(results=results, attempts=attempt)


def fetch_with_retry(
    client: httpx.Client,
    request: LookupRequest,
    max_attempts: int = MAX_ATTEMPTS,
    retry_delay: float = RETRY_DELAY,
    cancel_token: Optional[CancellationToken] = None,
    verbose: bool = False,
) -> LookupOutcome:
    """
    Perform one logical lookup with linear backoff.

    Attempt 1 fires immediately; attempt n waits (n - 1) * retry_delay
    seconds first. NotFound ends the loop at once. Cancellation is checked
    during each wait and right before each network call.

    Args:
        client: Shared httpx client (see build_client)
        request: What to fetch
        max_attempts: Attempts including the first one
        retry_delay: Backoff unit in seconds
        cancel_token: Caller's cancellation token
        verbose: Print a line for every failed attempt

    Returns:
        Success, NotFound, Failed or Interrupted
    """
    token = cancel_token or CancellationToken()
    outcome: LookupOutcome = Failed(attempts=0)

    for attempt in range(1, max_attempts + 1):
        if attempt > 1 and token.wait((attempt - 1) * retry_delay):
            return Interrupted(attempts=attempt - 1)
        if token.is_cancelled:
            return Interrupted(attempts=attempt - 1)

        outcome = _attempt(client, request, attempt)
        if not isinstance(outcome, Failed):
            return outcome

        if verbose:
            print(
                f"[Lookup] Attempt {attempt}/{max_attempts} failed for {request.description}: {outcome.message}",
                file=sys.stderr,
            )

    return outcome
