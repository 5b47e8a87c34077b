"""Shared fixtures for the shiprocket-relay test suite."""
from __future__ import annotations

import copy
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import httpx
import pytest

from shiprocket_relay.auth import AuthManager
from shiprocket_relay.client import ShiprocketClient
from shiprocket_relay.config import Config, Credentials
from shiprocket_relay.handler import TrackingHandler


LIVE_AWB = "19041424751540"

LIVE_BODY = {
    "tracking_data": {
        "track_status": 1,
        "shipment_status": 18,
        "shipment_track": [
            {
                "id": 236612717,
                "awb_code": LIVE_AWB,
                "courier_company_id": 51,
                "shipment_id": 236612717,
                "order_id": 237157589,
                "current_status": "In Transit",
                "origin": "Mumbai",
                "destination": "Bengaluru",
                "courier_name": "Xpressbees Surface",
                "edd": "2025-11-08",
            }
        ],
        "shipment_track_activities": [
            {"date": "2025-11-03 18:20:00", "status": "In Transit", "location": "Mumbai Hub"},
        ],
        "track_url": f"https://shiprocket.co/tracking/{LIVE_AWB}",
        "qc_response": "",
        "is_return": False,
        "error": "",
        "order_tag": "",
    }
}


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeShiprocket:
    """Stand-in for the Shiprocket API, mounted on an httpx.MockTransport."""

    def __init__(self) -> None:
        self.login_calls = 0
        self.login_requests: list[httpx.Request] = []
        self.track_requests: list[httpx.Request] = []
        self.login_bodies: list[dict] = []
        self.next_token = 1
        self.track_body: object = copy.deepcopy(LIVE_BODY)
        self.track_error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/auth/login"):
            self.login_calls += 1
            self.login_requests.append(request)
            if self.login_bodies:
                return httpx.Response(200, json=self.login_bodies.pop(0))
            token = f"tok-{self.next_token}"
            self.next_token += 1
            return httpx.Response(200, json={"id": 7, "email": "ops@example.com", "token": token})

        if "/courier/track/awb/" in request.url.path:
            self.track_requests.append(request)
            if self.track_error is not None:
                raise self.track_error
            return httpx.Response(200, json=self.track_body)

        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def fake_credentials() -> Credentials:
    return Credentials(email="ops@example.com", password="s3cret")


@pytest.fixture
def fake_config(fake_credentials) -> Config:
    return Config(credentials=fake_credentials)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 11, 1, 9, 0, 0))


@pytest.fixture
def upstream() -> FakeShiprocket:
    return FakeShiprocket()


@pytest.fixture
def http(upstream) -> httpx.Client:
    client = httpx.Client(transport=httpx.MockTransport(upstream))
    yield client
    client.close()


@pytest.fixture
def handler(fake_config, http, clock) -> TrackingHandler:
    """Handler wired to the fake Shiprocket with a controllable clock."""
    auth = AuthManager(fake_config, http=http, clock=clock)
    client = ShiprocketClient(fake_config, auth, http=http)
    return TrackingHandler(client, demo=fake_config.demo)


@pytest.fixture
def mock_auth():
    """MagicMock standing in for AuthManager."""
    auth = MagicMock()
    auth.get_access_token.return_value = "test-token"
    auth.close = MagicMock()
    return auth
