"""
Command Line Interface

Entry point for running the location tools from the command line.

Usage:
    python -m location_tools geocode "New York City"
    python -m location_tools reverse 40.7128 -74.0060
    python -m location_tools timezone 40.7128 -74.0060
    python -m location_tools cities "France"
    python -m location_tools distance 40.7128 -74.0060 34.0522 -118.2437
    python -m location_tools demo
    python -m location_tools serve --port 8000
"""

import argparse
import socket
import sys
import time

from .config import API_HOST, API_PORT, MAX_ATTEMPTS, RETRY_DELAY
from .config_manager import LocatorConfig
from .exceptions import LocationToolsError, ServerError
from .service import LocationService


def run_demo(service: LocationService, pause: float = 1.0):
    """Run one call of every tool against the live service."""
    print("=== Geocoding Test ===")
    print(service.geocode_address("New York City"))

    # Be polite to the public Nominatim instance
    time.sleep(pause)

    print("\n=== Reverse Geocoding Test ===")
    print(service.reverse_geocode(40.7128, -74.0060))

    time.sleep(pause)

    print("\n=== Timezone Test ===")
    print(service.get_timezone(40.7128, -74.0060))

    # No external API needed
    print("\n=== Distance Test ===")
    print(service.calculate_distance(40.7128, -74.0060, 34.0522, -118.2437))


def is_port_in_use(port: int) -> bool:
    """Check if something is already listening on the local port."""
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.settimeout(0.2)
            return sock.connect_ex(("127.0.0.1", port)) == 0
        finally:
            sock.close()
    except OSError:
        return False


def serve(host: str, port: int, verbose: bool):
    """Run the FastAPI server with uvicorn."""
    import uvicorn

    if is_port_in_use(port):
        raise ServerError(f"Port {port} is already in use")

    if verbose:
        print(f"[Server] Listening on http://{host}:{port}")
    uvicorn.run(
        "location_tools.server:app",
        host=host,
        port=port,
        log_level="info" if verbose else "warning",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="location_tools",
        description="Geocoding, reverse geocoding, timezone and distance tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m location_tools geocode "Eiffel Tower, Paris"
  python -m location_tools reverse 48.8584 2.2945
  python -m location_tools cities Japan
  python -m location_tools distance 40.7128 -74.0060 34.0522 -118.2437
  python -m location_tools serve --port 8080
        """
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress progress output"
    )
    parser.add_argument(
        "--base-url",
        help="Nominatim base URL (default: LOCATION_TOOLS_BASE_URL or the public instance)"
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=MAX_ATTEMPTS,
        help=f"Attempts per lookup (default: {MAX_ATTEMPTS})"
    )
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=RETRY_DELAY,
        help=f"Backoff unit in seconds (default: {RETRY_DELAY})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    geocode = subparsers.add_parser("geocode", help="Convert an address to coordinates")
    geocode.add_argument("address", help="Address or place name")

    reverse = subparsers.add_parser("reverse", help="Convert coordinates to an address")
    reverse.add_argument("latitude", type=float)
    reverse.add_argument("longitude", type=float)

    timezone = subparsers.add_parser("timezone", help="Estimate the UTC offset for coordinates")
    timezone.add_argument("latitude", type=float)
    timezone.add_argument("longitude", type=float)

    cities = subparsers.add_parser("cities", help="List major cities of a country")
    cities.add_argument("country", help="Country name")

    distance = subparsers.add_parser("distance", help="Distance between two points")
    for name in ("lat1", "lon1", "lat2", "lon2"):
        distance.add_argument(name, type=float)

    subparsers.add_parser("demo", help="Run every tool once against the live service")

    server = subparsers.add_parser("serve", help="Run the HTTP API server")
    server.add_argument("--host", default=API_HOST, help=f"Bind address (default: {API_HOST})")
    server.add_argument("--port", type=int, default=API_PORT, help=f"Port (default: {API_PORT})")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    verbose = not args.quiet

    try:
        if args.command == "serve":
            serve(args.host, args.port, verbose)
            return 0

        config_kwargs = {
            "max_attempts": args.attempts,
            "retry_delay": args.retry_delay,
            "verbose": verbose,
        }
        if args.base_url:
            config_kwargs["base_url"] = args.base_url
        config = LocatorConfig(**config_kwargs)

        with LocationService(config) as service:
            if args.command == "geocode":
                print(service.geocode_address(args.address))
            elif args.command == "reverse":
                print(service.reverse_geocode(args.latitude, args.longitude))
            elif args.command == "timezone":
                print(service.get_timezone(args.latitude, args.longitude))
            elif args.command == "cities":
                print(service.get_major_cities(args.country))
            elif args.command == "distance":
                print(service.calculate_distance(args.lat1, args.lon1, args.lat2, args.lon2))
            elif args.command == "demo":
                run_demo(service)

        return 0

    except LocationToolsError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
