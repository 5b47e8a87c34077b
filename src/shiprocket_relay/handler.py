"""Tracking request handler.

Turns an inbound AWB into a status code and JSON body: validation, demo
short-circuit, live lookup, and normalization of Shiprocket's response.
Every failure ends here as an error envelope; nothing is raised to callers.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from shiprocket_relay.auth import AuthManager
from shiprocket_relay.client import ShiprocketClient
from shiprocket_relay.config import Config, DemoSettings, get_config
from shiprocket_relay.demo import get_demo_data, is_demo_awb
from shiprocket_relay.models.tracking import TrackingResult
from shiprocket_relay.utils.errors import (
    NotFoundError,
    RelayError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class TrackingHandler:
    """Resolves tracking queries against demo data or Shiprocket."""

    def __init__(self, client: ShiprocketClient, demo: DemoSettings | None = None) -> None:
        self._client = client
        self._demo = demo or DemoSettings()

    def handle(self, awb: str | None) -> TrackingResult:
        """Answer a tracking query.

        Returns 200 with the envelope, or 400/404/500 with ``{"error": ...}``.
        """
        try:
            body = self.resolve(awb)
        except RelayError as e:
            if e.status_code >= 500:
                logger.error(f"Error fetching tracking info for AWB {awb}: {e}")
            else:
                logger.warning(f"Tracking request for AWB {awb!r} rejected: {e}")
            return TrackingResult(status_code=e.status_code, body=e.to_body())
        except Exception as e:
            logger.exception(f"Unexpected error fetching tracking info for AWB {awb}: {e}")
            return TrackingResult(status_code=500, body=RelayError().to_body())

        return TrackingResult(status_code=200, body=body)

    def resolve(self, awb: str | None) -> dict[str, Any]:
        """Return the tracking envelope for an AWB or raise a RelayError."""
        if not awb:
            raise ValidationError("Missing AWB number")

        if is_demo_awb(awb, self._demo):
            logger.info(f"Returning demo tracking data for AWB {awb}")
            return get_demo_data()

        data = self._client.track_awb(awb)
        if not has_shipments(data):
            raise NotFoundError(f"No shipment found for AWB: {awb}")
        return data

    def close(self) -> None:
        self._client.close()


def has_shipments(data: Any) -> bool:
    """Check that a Shiprocket body carries shipment data and no error."""
    if not isinstance(data, dict):
        return False
    tracking = data.get("tracking_data")
    if not isinstance(tracking, dict):
        return False
    if tracking.get("error"):
        return False
    return bool(tracking.get("shipment_track"))


def build_handler(config: Config) -> TrackingHandler:
    """Wire a handler with its own token cache and HTTP clients."""
    auth = AuthManager(config)
    client = ShiprocketClient(config, auth)
    return TrackingHandler(client, demo=config.demo)


@lru_cache(maxsize=1)
def get_default_handler() -> TrackingHandler:
    """Process-wide handler, so the token cache outlives single requests."""
    return build_handler(get_config())


def handle_tracking_request(awb: str | None) -> TrackingResult:
    """Entry point for serverless runtimes and other embedders."""
    return get_default_handler().handle(awb)
