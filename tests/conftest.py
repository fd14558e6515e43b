import httpx
import pytest

from location_tools import LocationService
from location_tools.geo import build_client

from .helpers import make_config


@pytest.fixture
def make_client():
    clients = []

    def _make(upstream, **config_overrides):
        client = build_client(make_config(**config_overrides), transport=httpx.MockTransport(upstream))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def make_service():
    services = []

    def _make(upstream, **config_overrides):
        service = LocationService(make_config(**config_overrides), transport=httpx.MockTransport(upstream))
        services.append(service)
        return service

    yield _make
    for service in services:
        service.close()


@pytest.fixture
def unreachable():
    """Upstream that fails the test if any request is made."""
    def _handler(request):
        pytest.fail(f"unexpected request to {request.url}")
    return _handler
