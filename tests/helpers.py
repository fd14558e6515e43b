"""Shared test doubles for the location tools tests."""

import httpx

from location_tools import CancellationToken, LocatorConfig


TEST_BASE_URL = "https://nominatim.test"


class RecordingToken(CancellationToken):
    """Cancellation token that records backoff waits instead of sleeping."""

    def __init__(self):
        super().__init__()
        self.waits = []

    def wait(self, timeout):
        self.waits.append(timeout)
        return self.is_cancelled


class Upstream:
    """Scripted Nominatim stand-in for httpx.MockTransport.

    Each call pops the next step; the last step repeats. A step is either an
    exception instance to raise, a ready httpx.Response, or a
    (status_code, json_payload) tuple.
    """

    def __init__(self, *steps):
        self.steps = list(steps)
        self.requests = []

    @property
    def calls(self):
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.steps.pop(0) if len(self.steps) > 1 else self.steps[0]
        if isinstance(step, Exception):
            raise step
        if isinstance(step, httpx.Response):
            return step
        status_code, payload = step
        return httpx.Response(status_code, json=payload)


def make_config(**overrides):
    overrides.setdefault("base_url", TEST_BASE_URL)
    overrides.setdefault("retry_delay", 0.0)
    overrides.setdefault("verbose", False)
    return LocatorConfig(**overrides)


