"""
Tool catalogue for agent runtimes.

Names, descriptions and JSON-schema parameters for the five operations,
plus a dispatcher that maps a tool call onto a LocationService method.
"""

from typing import Any, Callable, Dict, List

from .service import LocationService


_COORDINATE = {"type": "number"}

TOOLS: List[Dict[str, Any]] = [
    {
        "name": "geocode_address",
        "description": "Convert address or city name to coordinates (latitude, longitude)",
        "parameters": {
            "type": "object",
            "properties": {"address": {"type": "string"}},
            "required": ["address"],
        },
    },
    {
        "name": "reverse_geocode",
        "description": "Convert coordinates (latitude, longitude) to address and city name",
        "parameters": {
            "type": "object",
            "properties": {"latitude": _COORDINATE, "longitude": _COORDINATE},
            "required": ["latitude", "longitude"],
        },
    },
    {
        "name": "get_timezone",
        "description": "Get timezone information for specific coordinates (latitude, longitude)",
        "parameters": {
            "type": "object",
            "properties": {"latitude": _COORDINATE, "longitude": _COORDINATE},
            "required": ["latitude", "longitude"],
        },
    },
    {
        "name": "get_major_cities",
        "description": "Get major cities within a specific country",
        "parameters": {
            "type": "object",
            "properties": {"country": {"type": "string"}},
            "required": ["country"],
        },
    },
    {
        "name": "calculate_distance",
        "description": "Calculate distance between two geographic points",
        "parameters": {
            "type": "object",
            "properties": {
                "lat1": _COORDINATE,
                "lon1": _COORDINATE,
                "lat2": _COORDINATE,
                "lon2": _COORDINATE,
            },
            "required": ["lat1", "lon1", "lat2", "lon2"],
        },
    },
]

_TOOLS_BY_NAME = {tool["name"]: tool for tool in TOOLS}


def get_tool(name: str) -> Dict[str, Any]:
    """Return the descriptor for `name`. Raises KeyError for unknown tools."""
    return _TOOLS_BY_NAME[name]


def call_tool(service: LocationService, name: str, arguments: Dict[str, Any]) -> str:
    """
    Invoke a tool by name.

    Args:
        service: The service that performs the work
        name: Tool name from TOOLS
        arguments: Keyword arguments matching the tool's parameters

    Returns:
        The tool's formatted text

    Raises:
        KeyError: Unknown tool name
        TypeError: Missing or unexpected arguments
    """
    tool = get_tool(name)
    required = tool["parameters"]["required"]
    missing = [param for param in required if param not in arguments]
    if missing:
        raise TypeError(f"{name}() missing required arguments: {', '.join(missing)}")
    unexpected = [param for param in arguments if param not in tool["parameters"]["properties"]]
    if unexpected:
        raise TypeError(f"{name}() got unexpected arguments: {', '.join(unexpected)}")

    method: Callable[..., str] = getattr(service, name)
    return method(**arguments)
