"""Bearer token cache for the Shiprocket API.

Exchanges the configured email/password for a token and reuses it until the
expiry window passes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

import httpx

from shiprocket_relay.config import Config
from shiprocket_relay.models.auth import LoginResponse, TokenStatus
from shiprocket_relay.utils.errors import AuthenticationFailure, UpstreamError

logger = logging.getLogger(__name__)


class AuthManager:
    """Manages the Shiprocket bearer token.

    The token lives on the instance, not in module state. ``http`` and
    ``clock`` are injectable so callers control the transport and time.
    No lock is taken: two concurrent misses both log in and the last one wins.
    """

    def __init__(
        self,
        config: Config,
        http: httpx.Client | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config
        self._clock = clock
        self._token: str | None = None
        self._fetched_at: datetime | None = None
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=config.upstream.timeout)

    @property
    def expiry_window(self) -> timedelta:
        return timedelta(minutes=self._config.token.ttl_minutes)

    def get_access_token(self, force_refresh: bool = False) -> str:
        """Get a valid bearer token, logging in if needed.

        Args:
            force_refresh: Log in again even if the cached token is still valid.

        Returns:
            A bearer token string.

        Raises:
            AuthenticationFailure: The login response carried no token.
            UpstreamError: The login request could not be completed.
        """
        if not force_refresh and self._is_token_valid():
            return self._token  # type: ignore[return-value]

        return self._refresh_token()

    def get_status(self) -> TokenStatus:
        """Get the current token status."""
        if not self._token or not self._fetched_at:
            return TokenStatus(has_token=False, is_expired=True)

        now = self._clock()
        expires_at = self._fetched_at + self.expiry_window
        is_expired = now >= expires_at
        seconds_remaining = None
        if not is_expired:
            seconds_remaining = int((expires_at - now).total_seconds())

        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            fetched_at=self._fetched_at,
            expires_at=expires_at,
            seconds_remaining=seconds_remaining,
        )

    def invalidate(self) -> None:
        """Drop the cached token so the next call logs in again."""
        self._token = None
        self._fetched_at = None

    def _is_token_valid(self) -> bool:
        if not self._token or not self._fetched_at:
            return False
        return self._clock() - self._fetched_at < self.expiry_window

    def _refresh_token(self) -> str:
        """Exchange credentials for a new token and cache it."""
        now = self._clock()
        credentials = self._config.credentials

        logger.info("Fetching new Shiprocket token...")
        try:
            response = self._http.post(
                self._config.upstream.login_url,
                json={"email": credentials.email, "password": credentials.password},
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Login request failed: {e}") from e

        try:
            login = LoginResponse.model_validate(response.json())
        except ValueError as e:  # bad JSON or a non-object body
            raise AuthenticationFailure(
                f"Failed to fetch token (HTTP {response.status_code}): {response.text}",
                response_body=response.text,
            ) from e

        if not login.token:
            raise AuthenticationFailure(
                f"Failed to fetch token: {response.text}",
                response_body=response.text,
            )

        # Value and timestamp are replaced together
        self._token, self._fetched_at = login.token, now
        logger.info("Token refreshed successfully")
        return login.token

    def close(self) -> None:
        """Close the underlying HTTP client if this manager created it."""
        if self._owns_http:
            self._http.close()
