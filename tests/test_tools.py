import pytest

from location_tools import TOOLS, LocationService, call_tool
from location_tools.tools import get_tool


def test_every_tool_maps_to_a_service_method():
    for tool in TOOLS:
        assert callable(getattr(LocationService, tool["name"]))
        assert tool["description"]
        assert set(tool["parameters"]["required"]) <= set(tool["parameters"]["properties"])


def test_get_tool_unknown_name():
    with pytest.raises(KeyError):
        get_tool("teleport")


def test_call_tool_dispatches(make_service, unreachable):
    service = make_service(unreachable)
    text = call_tool(service, "calculate_distance", {"lat1": 0, "lon1": 0, "lat2": 0, "lon2": 0})
    assert "Distance: 0.00 kilometers" in text


def test_call_tool_rejects_missing_arguments(make_service, unreachable):
    with pytest.raises(TypeError, match="missing required arguments: longitude"):
        call_tool(make_service(unreachable), "get_timezone", {"latitude": 1})


def test_call_tool_rejects_unexpected_arguments(make_service, unreachable):
    with pytest.raises(TypeError, match="unexpected arguments: altitude"):
        call_tool(make_service(unreachable), "get_timezone", {"latitude": 1, "longitude": 2, "altitude": 3})
