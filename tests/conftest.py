"""
Shared fixtures: an in-memory SmartThings API and a controllable clock.

The fake API is served through httpx.MockTransport, so the real
SmartThingsBackend code path (headers, status handling, JSON decoding)
runs in every gateway test without touching the network.
"""

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from homedeck.capabilities import DeviceGateway
from homedeck.capabilities.backends import SmartThingsBackend

API_BASE = "https://api.smartthings.com/v1"
API_PREFIX = "/v1"

Responder = Callable[[httpx.Request], httpx.Response]


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSmartThings:
    """Route table plus request log for httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Responder] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        status: int = 200,
        content: Optional[bytes] = None,
    ) -> None:
        # A fresh Response per request; httpx marks responses as consumed
        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status, content=content)
            return httpx.Response(status, json=json_body)

        self.routes[(method, path)] = respond

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]

        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.method} {path}"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> int:
        return sum(
            1 for r in self.requests
            if r.method == method and r.url.path == API_PREFIX + path
        )

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


def _make_device(device_id: str, *capabilities: str, label: Optional[str] = None) -> dict:
    return {
        "deviceId": device_id,
        "label": label or device_id,
        "components": [
            {"id": "main", "capabilities": [{"id": c, "version": 1} for c in capabilities]}
        ],
    }


def _make_status(**capabilities: dict) -> dict:
    """Build a status document for the main component.

    _make_status(switch={"switch": "on"}) ->
        {"components": {"main": {"switch": {"switch": {"value": "on"}}}}}
    """
    main = {
        capability: {attr: {"value": value} for attr, value in attrs.items()}
        for capability, attrs in capabilities.items()
    }
    return {"components": {"main": main}}


@pytest.fixture
def make_device():
    return _make_device


@pytest.fixture
def make_status():
    return _make_status


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_api() -> FakeSmartThings:
    return FakeSmartThings()


@pytest.fixture
def gateway(fake_api: FakeSmartThings, clock: FakeClock) -> DeviceGateway:
    backend = SmartThingsBackend(token="test-token", base_url=API_BASE, transport=fake_api.transport)
    return DeviceGateway(backend=backend, devices_ttl=600, status_ttl=60, clock=clock)
