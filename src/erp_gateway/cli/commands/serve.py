"""Serve command for erp-gateway CLI.

Runs the gateway under uvicorn.
"""

from __future__ import annotations

__all__ = ["serve"]

import click
import uvicorn

from erp_gateway.api.server import create_app
from erp_gateway.config import FallbackMode, load_config_strict
from erp_gateway.exceptions import ConfigurationError
from erp_gateway.utils.logging.logger_setup import configure_gateway_logging

from ..styling import style_error, style_forwarding


@click.command()
@click.option("--host", default=None, help="Interface to bind (overrides config)")
@click.option("--port", type=int, default=None, help="Port to listen on (overrides config)")
@click.option("--backend-url", default=None, help="Backend base URL (overrides config)")
@click.option(
    "--fallback-mode",
    type=click.Choice([m.value for m in FallbackMode]),
    default=None,
    help="'endpoint' uses per-endpoint policies, 'transparent' never serves fallback data",
)
@click.option("--no-log-file", is_flag=True, help="Log to stderr only")
def serve(
    host: str | None,
    port: int | None,
    backend_url: str | None,
    fallback_mode: str | None,
    no_log_file: bool,
) -> None:
    """Start the gateway server."""
    try:
        config = load_config_strict()
        overrides = {
            key: value
            for key, value in (
                ("host", host),
                ("port", port),
                ("backend_url", backend_url),
                ("fallback_mode", fallback_mode),
            )
            if value is not None
        }
        if overrides:
            config = config.model_validate({**config.model_dump(), **overrides})
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        raise SystemExit(1) from e
    except ValueError as e:
        # pydantic.ValidationError from the command-line overrides
        click.echo(style_error(f"Invalid option: {e}"), err=True)
        raise SystemExit(2) from e

    configure_gateway_logging(config, log_to_file=not no_log_file)
    click.echo(style_forwarding(f"http://{config.host}:{config.port}", config.backend_url))

    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())
