import threading
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from location_tools import server
from location_tools.server import app, get_service

from .helpers import Upstream


PARIS = {
    "lat": "48.8588897",
    "lon": "2.3200410",
    "display_name": "Paris, Île-de-France, France",
    "address": {"city": "Paris", "state": "Île-de-France", "country": "France"},
}


@pytest.fixture
def upstream():
    return Upstream((200, [PARIS]))


@pytest.fixture
def api(make_service, upstream):
    service = make_service(upstream)
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(api):
    response = api.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_tools(api):
    tools = api.get("/api/tools").json()["tools"]
    assert [tool["name"] for tool in tools] == [
        "geocode_address",
        "reverse_geocode",
        "get_timezone",
        "get_major_cities",
        "calculate_distance",
    ]


def test_geocode_endpoint(api):
    response = api.post("/api/geocode", json={"address": "Paris"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["tool"] == "geocode_address"
    assert body["result"].startswith("Location: Paris, Île-de-France, France\n")


def test_reverse_geocode_endpoint_falls_back(make_service):
    service = make_service(Upstream(httpx.ConnectError("down")))
    app.dependency_overrides[get_service] = lambda: service
    try:
        response = TestClient(app).post("/api/reverse-geocode", json={"latitude": 48.85, "longitude": 2.35})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert "Estimated Region: Europe" in response.json()["result"]


def test_timezone_endpoint(api, upstream):
    response = api.post("/api/timezone", json={"latitude": 40.7128, "longitude": -74.006})

    assert "Estimated UTC Offset: -5 hours" in response.json()["result"]
    assert upstream.calls == 0


def test_major_cities_endpoint(api):
    response = api.post("/api/major-cities", json={"country": "France"})
    assert response.json()["result"] == "Major cities in France:\n- Paris (48.8589, 2.3200)\n"


def test_distance_endpoint(api):
    response = api.post("/api/distance", json={"lat1": 0, "lon1": 0, "lat2": 0, "lon2": 180})
    assert "Distance: 20015.09 kilometers" in response.json()["result"]


def test_invoke_tool_by_name(api):
    response = api.post("/api/tools/get_timezone", json={"arguments": {"latitude": 0, "longitude": 30}})

    assert response.status_code == 200
    assert response.json()["tool"] == "get_timezone"
    assert "Estimated UTC Offset: +2 hours" in response.json()["result"]


def test_invoke_unknown_tool(api):
    response = api.post("/api/tools/launch_rocket", json={"arguments": {}})
    assert response.status_code == 404


def test_invoke_tool_with_missing_arguments(api):
    response = api.post("/api/tools/calculate_distance", json={"arguments": {"lat1": 0}})
    assert response.status_code == 400
    assert "lon1" in response.json()["detail"]


def test_malformed_body_is_rejected(api):
    response = api.post("/api/reverse-geocode", json={"latitude": "north"})
    assert response.status_code == 422


def test_shared_service_is_built_once_under_concurrency(monkeypatch):
    built = []

    class SlowService:
        def __init__(self):
            time.sleep(0.05)
            built.append(self)

    monkeypatch.setattr(server, "_service", None)
    monkeypatch.setattr(server, "LocationService", SlowService)

    seen = []
    threads = [threading.Thread(target=lambda: seen.append(get_service())) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(built) == 1
    assert all(service is built[0] for service in seen)
