"""Tests for handler.py — validation, demo mode, live lookups, normalization."""
import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from conftest import LIVE_AWB, LIVE_BODY
from shiprocket_relay.demo import get_demo_data
from shiprocket_relay.handler import TrackingHandler, handle_tracking_request, has_shipments


NOT_FOUND = {"error": "No tracking number found or invalid AWB"}
SERVER_ERROR = {"error": "Internal Server Error"}


# ── Validation ───────────────────────────────────────────────────────

def test_missing_awb(handler, upstream):
    result = handler.handle(None)
    assert result.status_code == 400
    assert result.body == {"error": "Missing AWB number"}
    assert upstream.login_calls == 0


def test_empty_awb(handler):
    result = handler.handle("")
    assert result.status_code == 400
    assert result.render() == '{"error": "Missing AWB number"}'


# ── Demo mode ────────────────────────────────────────────────────────

def test_demo_awb(handler, upstream):
    result = handler.handle("1234")
    assert result.status_code == 200
    assert result.body == get_demo_data()
    assert upstream.login_calls == 0
    assert upstream.track_requests == []


def test_demo_keyword(handler, upstream):
    assert handler.handle("MyDemoShipment").body == get_demo_data()
    assert upstream.track_requests == []


def test_demo_without_credentials():
    """Demo data never needs a token, so a bare client is enough."""
    client = MagicMock()
    result = TrackingHandler(client).handle("1234")
    assert result.status_code == 200
    client.track_awb.assert_not_called()


# ── Live lookups ─────────────────────────────────────────────────────

def test_live_success(handler, upstream):
    result = handler.handle(LIVE_AWB)
    assert result.status_code == 200
    assert result.body == LIVE_BODY
    assert upstream.track_requests[0].headers["Authorization"] == "Bearer tok-1"


def test_live_success_is_pretty_printed(handler):
    rendered = handler.handle(LIVE_AWB).render()
    assert rendered == json.dumps(LIVE_BODY, indent=2)


def test_token_reused_within_window(handler, upstream, clock):
    handler.handle(LIVE_AWB)
    clock.advance(minutes=30)
    handler.handle(LIVE_AWB)
    assert upstream.login_calls == 1

    clock.advance(minutes=26)
    handler.handle(LIVE_AWB)
    assert upstream.login_calls == 2
    assert upstream.track_requests[-1].headers["Authorization"] == "Bearer tok-2"


# ── Normalization ────────────────────────────────────────────────────

def test_empty_shipment_track_is_404(handler, upstream):
    upstream.track_body = {"tracking_data": {"track_status": 0, "shipment_track": [], "error": ""}}
    result = handler.handle("000000")
    assert result.status_code == 404
    assert result.body == NOT_FOUND


def test_missing_shipment_track_is_404(handler, upstream):
    upstream.track_body = {"tracking_data": {"track_status": 0}}
    assert handler.handle("000000").status_code == 404


def test_tracking_error_is_404(handler, upstream):
    upstream.track_body = {
        "tracking_data": {
            "track_status": 0,
            "shipment_track": [{"awb_code": "000000"}],
            "error": "Aahh! There is no activities found in our DB for this AWB.",
        }
    }
    assert handler.handle("000000").body == NOT_FOUND


def test_upstream_message_without_tracking_data_is_404(handler, upstream):
    upstream.track_body = {"message": "Token has expired", "status_code": 401}
    assert handler.handle("000000").status_code == 404


@pytest.mark.parametrize("body", [
    {"tracking_data": None},
    {"tracking_data": []},
    ["unexpected"],
    None,
])
def test_malformed_bodies_have_no_shipments(body):
    assert has_shipments(body) is False


def test_has_shipments():
    assert has_shipments(LIVE_BODY) is True


# ── Failures ─────────────────────────────────────────────────────────

def test_network_failure_is_500(handler, upstream):
    upstream.track_error = httpx.ConnectError("connection reset by peer")

    result = handler.handle(LIVE_AWB)
    assert result.status_code == 500
    assert result.body == SERVER_ERROR
    assert "connection reset" not in result.render()


def test_failure_does_not_poison_next_request(handler, upstream):
    upstream.track_error = httpx.ReadTimeout("read timed out")
    assert handler.handle(LIVE_AWB).status_code == 500

    upstream.track_error = None
    assert handler.handle(LIVE_AWB).status_code == 200
    assert handler.handle("1234").status_code == 200


def test_auth_failure_is_500(handler, upstream):
    upstream.login_bodies = [{"message": "Invalid email and password combination"}]

    result = handler.handle(LIVE_AWB)
    assert result.status_code == 500
    assert result.body == SERVER_ERROR
    assert upstream.track_requests == []


def test_auth_failure_then_recovery(handler, upstream):
    upstream.login_bodies = [{"message": "Invalid email and password combination"}]
    assert handler.handle(LIVE_AWB).status_code == 500

    assert handler.handle(LIVE_AWB).status_code == 200
    assert handler.handle(LIVE_AWB).status_code == 200
    assert upstream.login_calls == 2


def test_unexpected_exception_is_500(caplog):
    client = MagicMock()
    client.track_awb.side_effect = KeyError("tracking_data")

    result = TrackingHandler(client).handle(LIVE_AWB)
    assert result.status_code == 500
    assert result.body == SERVER_ERROR
    assert "tracking_data" in caplog.text


def test_failures_are_logged(handler, upstream, caplog):
    upstream.track_error = httpx.ConnectError("connection refused")
    with caplog.at_level("ERROR"):
        handler.handle(LIVE_AWB)
    assert "connection refused" in caplog.text


# ── Library entry point ──────────────────────────────────────────────

def test_handle_tracking_request_uses_default_handler():
    default = MagicMock()
    with patch("shiprocket_relay.handler.get_default_handler", return_value=default):
        handle_tracking_request("1234")
    default.handle.assert_called_once_with("1234")
