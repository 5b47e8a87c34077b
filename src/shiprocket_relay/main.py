"""Shiprocket tracking relay — entry point.

Serves AWB tracking lookups over HTTP and from the command line.
"""

from __future__ import annotations

import logging

import typer

from shiprocket_relay.commands.auth_cmd import app as auth_app
from shiprocket_relay.commands.serve_cmd import serve
from shiprocket_relay.commands.track_cmd import track

app = typer.Typer(
    name="shiprocket-relay",
    help="Relay for Shiprocket shipment tracking with token caching and demo data.",
    no_args_is_help=True,
)

app.add_typer(auth_app, name="auth")
app.command("serve")(serve)
app.command("track")(track)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Shiprocket tracking relay — serve the API or look up AWBs."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
