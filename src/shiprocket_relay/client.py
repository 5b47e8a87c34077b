"""HTTP client for the Shiprocket courier tracking API.

Injects the cached bearer token. Requests are not retried.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from shiprocket_relay.auth import AuthManager
from shiprocket_relay.config import Config
from shiprocket_relay.utils.errors import UpstreamError

logger = logging.getLogger(__name__)


class ShiprocketClient:
    """Authenticated access to the Shiprocket tracking endpoint."""

    def __init__(
        self,
        config: Config,
        auth: AuthManager,
        http: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._auth = auth
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=config.upstream.timeout)

    def track_awb(self, awb: str) -> Any:
        """Fetch the raw tracking body for an AWB.

        The body is returned whatever the HTTP status; Shiprocket reports
        unknown AWBs inside ``tracking_data`` rather than through the status.

        Raises:
            AuthenticationFailure: No token could be obtained.
            UpstreamError: The request failed or the body was not JSON.
        """
        url = f"{self._config.upstream.track_url}/{quote(awb, safe='')}"
        headers = self._build_headers()

        try:
            response = self._http.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Tracking request for AWB {awb} failed: {e}") from e

        if response.status_code >= 400:
            logger.warning(f"Shiprocket returned HTTP {response.status_code} for AWB {awb}")

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Invalid JSON from tracking endpoint (HTTP {response.status_code}): {e}"
            ) from e

    def _build_headers(self) -> dict[str, str]:
        token = self._auth.get_access_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def close(self) -> None:
        """Close the underlying HTTP client and the auth manager."""
        if self._owns_http:
            self._http.close()
        self._auth.close()
