"""Relay error taxonomy and structured CLI error output."""

from __future__ import annotations

import json
import sys

from rich.console import Console

console = Console(stderr=True)


class RelayError(Exception):
    """Base class for failures that map onto an HTTP status.

    ``public_message`` is what clients see; the exception text stays in the logs.
    """

    status_code = 500
    code = "RELAY_ERROR"
    public_message = "Internal Server Error"

    def to_body(self) -> dict[str, str]:
        return {"error": self.public_message}


class ValidationError(RelayError):
    """The request is missing required input."""

    status_code = 400
    code = "VALIDATION_ERROR"
    public_message = "Missing AWB number"


class AuthenticationFailure(RelayError):
    """The login exchange did not yield a token."""

    code = "AUTH_ERROR"

    def __init__(self, message: str, response_body: str = "") -> None:
        super().__init__(message)
        self.response_body = response_body


class NotFoundError(RelayError):
    """Shiprocket has no shipment data for the AWB."""

    status_code = 404
    code = "NOT_FOUND"
    public_message = "No tracking number found or invalid AWB"


class UpstreamError(RelayError):
    """Network or parse failure talking to Shiprocket."""

    code = "UPSTREAM_ERROR"


# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("failed to fetch token", "Check SHIPROCKET_EMAIL and SHIPROCKET_PASSWORD in your .env file"),
    ("login", "Check SHIPROCKET_EMAIL and SHIPROCKET_PASSWORD in your .env file"),
    ("no tracking number", "Verify the AWB number, or use 1234 for demo data"),
    ("missing awb", "Pass an AWB number, e.g. `shiprocket-relay track 1234`"),
    ("timeout", "Request timed out — try again or check network connectivity"),
    ("timed out", "Request timed out — try again or check network connectivity"),
    ("connection", "Connection error — check network connectivity"),
    ("relay.yaml", "Check your config/relay.yaml"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern.lower() in lower:
            return hint
    return None


def handle_error(error: Exception) -> None:
    """Handle an error with structured output to stdout and human-readable output to stderr.

    Outputs a JSON error object to stdout for scripted consumers:
    {"error": true, "code": "AUTH_ERROR", "message": "...", "hint": "..."}

    Also prints a human-readable error to stderr.
    """
    message = str(error)
    hint = _get_hint(message)

    code = "RUNTIME_ERROR"
    if isinstance(error, RelayError):
        code = error.code
    elif "timeout" in message.lower() or "timed out" in message.lower():
        code = "TIMEOUT"
    elif "connection" in message.lower():
        code = "CONNECTION_ERROR"

    error_obj: dict[str, object] = {
        "error": True,
        "code": code,
        "message": message,
    }
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    # Human-readable to stderr
    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
