"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, ConfigDict


class LoginResponse(BaseModel):
    """Response from the Shiprocket login endpoint.

    Only ``token`` matters here; the rest of the user profile is ignored.
    """
    model_config = ConfigDict(extra="allow")

    token: str | None = None


class TokenStatus(BaseModel):
    """Current state of the cached bearer token."""
    has_token: bool
    is_expired: bool
    fetched_at: datetime | None = None
    expires_at: datetime | None = None
    seconds_remaining: int | None = None
