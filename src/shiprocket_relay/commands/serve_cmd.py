"""CLI command that runs the local HTTP listener."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
import uvicorn
from rich.console import Console

from shiprocket_relay.config import get_config
from shiprocket_relay.server import create_app

console = Console(stderr=True)


def serve(
    host: Annotated[str | None, typer.Option("--host", help="Interface to bind")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port to listen on")] = None,
) -> None:
    """Serve the tracking endpoint (default http://localhost:3000/api/track)."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    config = get_config()
    host = host or config.server.host
    port = port or config.server.port

    if not config.has_credentials:
        console.print("[yellow]No Shiprocket credentials configured — only demo AWBs will resolve.[/yellow]")
    console.print(
        f"Server running → http://localhost:{port}{config.server.track_path}?awb=1234",
        style="green",
    )
    uvicorn.run(create_app(config), host=host, port=port, log_level="info")
