"""Config command group for erp-gateway CLI."""

from __future__ import annotations

__all__ = ["config"]

import json

import click
from pydantic import ValidationError

from erp_gateway.config import (
    FallbackMode,
    GatewayConfig,
    get_config_path,
    load_config_strict,
    save_config,
)
from erp_gateway.exceptions import ConfigurationError
from erp_gateway.utils.logging.logger_setup import get_gateway_log_path

from ..styling import style_dim, style_error, style_header, style_success, style_warning

# Scalar settings editable with `config set`
SETTABLE_KEYS = ("backend_url", "host", "port", "log_dir", "log_level", "tunnel_bypass", "fallback_mode")


@click.group()
def config() -> None:
    """Configuration management commands."""


@config.command("path")
def config_path() -> None:
    """Print the config file location."""
    path = get_config_path()
    click.echo(str(path))
    if not path.exists():
        click.echo(style_dim("(file does not exist; built-in defaults apply)"), err=True)


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def config_show(as_json: bool) -> None:
    """Display the resolved configuration (file plus environment)."""
    try:
        loaded = load_config_strict()
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        raise SystemExit(1) from e

    if as_json:
        data = loaded.model_dump(mode="json")
        data["_computed"] = {
            "config_file": str(get_config_path()),
            "log_file": str(get_gateway_log_path(loaded)),
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo("\nerp-gateway configuration:\n")

    click.echo(style_header("Backend"))
    click.echo(f"  backend_url: {loaded.backend_url}")
    click.echo(f"  tunnel_bypass: {loaded.tunnel_bypass}")
    click.echo()

    click.echo(style_header("Server"))
    click.echo(f"  host: {loaded.host}")
    click.echo(f"  port: {loaded.port}")
    click.echo()

    click.echo(style_header("Logging"))
    click.echo(f"  log_dir: {loaded.log_dir}")
    click.echo(f"  log_level: {loaded.log_level}")
    click.echo(f"  log_file: {get_gateway_log_path(loaded)}")
    click.echo()

    click.echo(style_header("Fallback"))
    click.echo(f"  fallback_mode: {loaded.fallback_mode.value}")
    if loaded.fallback_mode is FallbackMode.TRANSPARENT:
        click.echo("  " + style_warning("fallback data is disabled for every endpoint"))
    if loaded.fallback_overrides:
        click.echo("  overrides:")
        for key, policy in sorted(loaded.fallback_overrides.items()):
            click.echo(f"    {key}: {policy.value}")
    else:
        click.echo("  overrides: " + style_dim("(none)"))
    click.echo()


@config.command("set")
@click.argument("key", type=click.Choice(SETTABLE_KEYS))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set KEY to VALUE in the config file.

    Environment overrides are not written back; only the file's own
    values and the new one are saved.
    """
    path = get_config_path()
    try:
        current = load_config_strict(path, environ={})
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        raise SystemExit(1) from e

    try:
        updated = GatewayConfig.model_validate({**current.model_dump(mode="json"), key: value})
    except ValidationError as e:
        raise click.BadParameter(e.errors()[0]["msg"], param_hint=key) from e

    try:
        save_config(updated, path)
    except OSError as e:
        raise click.ClickException(f"Cannot write {path}: {e}") from e

    click.echo(style_success(f"{key} = {updated.model_dump(mode='json')[key]}"))
    click.echo(style_dim(f"Saved to {path}"))
