"""
Shared fixtures: backend payloads and a client wired to an in-process transport.
"""

from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from rideau_dashboard.client import DashboardClient
from rideau_dashboard.config import DashboardConfig
from rideau_dashboard.view import InMemoryView

LOCATIONS = ["Dow's Lake", "Fifth Avenue", "NAC"]

LATEST_PAYLOAD = {
    "success": True,
    "data": [
        {
            "location": "Dow's Lake",
            "avgIceThickness": 32.456,
            "avgSurfaceTemperature": -4.25,
            "avgSnowAccumulation": 2.0,
            "safetyStatus": "Safe",
        },
        {
            "location": "Fifth Avenue",
            "avgIceThickness": 27.04,
            "avgSurfaceTemperature": -1.5,
            "avgSnowAccumulation": None,
            "safetyStatus": "Caution",
        },
        {
            "location": "NAC",
            "avgIceThickness": 19.96,
            "avgSurfaceTemperature": 0.3,
            "avgSnowAccumulation": 5.75,
        },
    ],
}

STATUS_PAYLOAD = {"success": True, "overallStatus": "Caution"}


def make_history(location_index: int, points: int = 12) -> dict:
    """Twelve five-minute windows ending at 12:55 UTC on 2026-01-15."""
    start = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    data = []
    for i in range(points):
        end = start + timedelta(minutes=5 * i)
        data.append(
            {
                "windowEndTime": end.isoformat().replace("+00:00", "Z"),
                "avgIceThickness": 30.0 + location_index + i * 0.1,
                "avgSurfaceTemperature": -5.0 + location_index + i * 0.25,
            }
        )
    return {"data": data}


HISTORY_PAYLOADS = {name: make_history(i) for i, name in enumerate(LOCATIONS)}


class FakeBackend:
    """Routes requests to canned payloads and records what was asked for."""

    def __init__(self, latest=None, status=None, history=None):
        self.latest = LATEST_PAYLOAD if latest is None else latest
        self.status = STATUS_PAYLOAD if status is None else status
        self.history = dict(HISTORY_PAYLOADS if history is None else history)
        self.failing_history = set()
        self.failing_paths = set()
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self.failing_paths:
            return httpx.Response(503, json={"error": "unavailable"})
        if path == "/api/latest":
            return httpx.Response(200, json=self.latest)
        if path == "/api/status":
            return httpx.Response(200, json=self.status)
        if path.startswith("/api/history/"):
            location = path[len("/api/history/") :]
            if location in self.failing_history:
                raise httpx.ConnectError("connection refused", request=request)
            if location not in self.history:
                return httpx.Response(404, json={"error": "unknown location"})
            return httpx.Response(200, json=self.history[location])
        return httpx.Response(404)


@pytest.fixture
def config():
    return DashboardConfig(base_url="http://dashboard.test", timezone="UTC")


@pytest.fixture
def view():
    return InMemoryView.for_locations()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest_asyncio.fixture
async def client(config, backend):
    """A DashboardClient whose inner httpx client talks to FakeBackend."""
    dashboard_client = DashboardClient(config)
    await dashboard_client._client.aclose()
    dashboard_client._client = httpx.AsyncClient(
        base_url=config.base_url, transport=httpx.MockTransport(backend)
    )
    yield dashboard_client
    await dashboard_client.close()
