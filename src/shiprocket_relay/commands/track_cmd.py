"""CLI command for one-off AWB lookups."""

from __future__ import annotations

from typing import Annotated

import typer

from shiprocket_relay.config import get_config
from shiprocket_relay.handler import build_handler
from shiprocket_relay.utils.errors import RelayError, handle_error
from shiprocket_relay.utils.output import OutputFormat, print_tracking


def track(
    awb: Annotated[str, typer.Argument(help="Air waybill number (1234 for demo data)")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Look up an AWB the same way the HTTP endpoint does."""
    handler = build_handler(get_config())

    try:
        envelope = handler.resolve(awb)
        print_tracking(envelope, output)
    except RelayError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        handler.close()
