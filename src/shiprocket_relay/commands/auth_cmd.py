"""CLI commands for Shiprocket authentication."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from shiprocket_relay.config import get_config
from shiprocket_relay.auth import AuthManager
from shiprocket_relay.utils.errors import RelayError, handle_error
from shiprocket_relay.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Check Shiprocket credentials.")


def _token_result(auth: AuthManager, label: str) -> dict[str, object]:
    status = auth.get_status()
    return {
        "status": label,
        "fetched_at": str(status.fetched_at),
        "expires_at": str(status.expires_at),
        "seconds_remaining": status.seconds_remaining,
    }


@app.command()
def login(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Log in with the configured credentials and display token status."""
    config = get_config()
    auth = AuthManager(config)

    try:
        if not config.has_credentials:
            console.print("[yellow]SHIPROCKET_EMAIL or SHIPROCKET_PASSWORD is not set.[/yellow]")
        console.print("Logging in to Shiprocket...", style="yellow")
        auth.get_access_token()
        print_output(_token_result(auth, "authenticated"), output, title="Authentication")
    except RelayError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        auth.close()


@app.command()
def refresh(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Force a new login even if a token is cached."""
    config = get_config()
    auth = AuthManager(config)

    try:
        console.print("Force refreshing Shiprocket token...", style="yellow")
        auth.get_access_token(force_refresh=True)
        print_output(_token_result(auth, "refreshed"), output, title="Token Refreshed")
    except RelayError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        auth.close()
