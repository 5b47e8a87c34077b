"""Configuration management for the Shiprocket tracking relay.

Loads credentials from .env and server/upstream settings from relay.yaml.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://apiv2.shiprocket.in/v1/external"


class Credentials(BaseModel):
    """Shiprocket API user used for the login exchange."""
    email: str = ""
    password: str = ""


class ServerSettings(BaseModel):
    """Local HTTP listener settings."""
    host: str = "0.0.0.0"
    port: int = 3000
    track_path: str = "/api/track"


class UpstreamSettings(BaseModel):
    """Shiprocket API endpoint settings."""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    @property
    def login_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/auth/login"

    @property
    def track_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/courier/track/awb"


class TokenSettings(BaseModel):
    """Bearer token caching. Shiprocket tokens live for an hour."""
    ttl_minutes: int = Field(default=55, gt=0)


class DemoSettings(BaseModel):
    """AWB values answered with canned data instead of a live lookup."""
    awbs: list[str] = Field(default_factory=lambda: ["1234"])
    keyword: str = "demo"


class Config(BaseModel):
    """Full application configuration."""
    credentials: Credentials = Field(default_factory=Credentials)
    server: ServerSettings = Field(default_factory=ServerSettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    token: TokenSettings = Field(default_factory=TokenSettings)
    demo: DemoSettings = Field(default_factory=DemoSettings)

    @property
    def has_credentials(self) -> bool:
        return bool(self.credentials.email and self.credentials.password)


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "relay.yaml").exists():
            return parent
    # Fallback: cwd
    return Path.cwd()


def _load_yaml(project_root: Path) -> dict:
    """Load non-secret settings from relay.yaml. A missing file means defaults."""
    path = project_root / "config" / "relay.yaml"
    if not path.exists():
        return {}

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _load_credentials() -> Credentials:
    """Load the Shiprocket API user from environment variables.

    Missing values are left empty; the login call reports them.
    """
    return Credentials(
        email=_env("SHIPROCKET_EMAIL"),
        password=_env("SHIPROCKET_PASSWORD"),
    )


def load_config(project_root: Path) -> Config:
    """Build a Config from the environment and the project's relay.yaml."""
    data = _load_yaml(project_root)
    return Config(
        credentials=_load_credentials(),
        server=ServerSettings(**(data.get("server") or {})),
        upstream=UpstreamSettings(**(data.get("upstream") or {})),
        token=TokenSettings(**(data.get("token") or {})),
        demo=DemoSettings(**(data.get("demo") or {})),
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache the full application configuration."""
    project_root = _find_project_root()

    # Load .env from project root if it exists
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return load_config(project_root)
