"""Gateway configuration for erp-gateway.

Defines the single configuration object resolved once at process start
and injected into every handler via app.state.

Sources, in increasing precedence:
    1. Model defaults
    2. JSON file at <app dir>/config.json
    3. ERP_GATEWAY_* environment variables

Example usage:
    # Load (defaults on missing/invalid file)
    config = load_config()

    # Load, raising ConfigurationError on any problem
    config = load_config_strict(Path("gateway.json"))
"""

from __future__ import annotations

__all__ = [
    "FallbackMode",
    "FallbackPolicy",
    "GatewayConfig",
    "get_config_path",
    "load_config",
    "load_config_strict",
    "save_config",
]

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import click
from pydantic import BaseModel, Field, ValidationError, field_validator

from erp_gateway.constants import (
    APP_NAME,
    CONFIG_ENV_PREFIX,
    DEFAULT_BACKEND_URL,
    DEFAULT_HOST,
    DEFAULT_LOG_DIR,
    DEFAULT_PORT,
)
from erp_gateway.exceptions import ConfigurationError

_logger = logging.getLogger(f"{APP_NAME}.config")

# Fields that may be overridden from the environment
_ENV_FIELDS = ("backend_url", "host", "port", "log_dir", "log_level", "fallback_mode")


class FallbackPolicy(str, Enum):
    """What an endpoint does when the backend fails.

    - TRANSPARENT: relay backend errors, classify transport failures
    - MASK_UNREACHABLE: substitute fallback data on transport failures only
    - MASK_ERRORS: substitute fallback data on transport failures, 401 and
      any non-2xx status (except the endpoint's pass-through statuses)
    """

    TRANSPARENT = "transparent"
    MASK_UNREACHABLE = "mask_unreachable"
    MASK_ERRORS = "mask_errors"


class FallbackMode(str, Enum):
    """Gateway-wide switch over per-endpoint fallback policies."""

    ENDPOINT = "endpoint"  # Use each endpoint's declared policy
    TRANSPARENT = "transparent"  # Never substitute fallback data


class GatewayConfig(BaseModel):
    """Gateway configuration.

    Attributes:
        backend_url: Base URL of the external REST backend. Trailing
            slashes are stripped.
        host: Interface the gateway binds to.
        port: Port the gateway listens on.
        log_dir: Directory for the gateway's JSONL log.
        log_level: Minimum level for console and file logging.
        tunnel_bypass: Send the tunnel bypass header on outbound calls.
        fallback_mode: Gateway-wide fallback switch.
        fallback_overrides: Per-endpoint policy overrides keyed
            "<resource>.<action>" (e.g., "customers.get").
    """

    backend_url: str = Field(default=DEFAULT_BACKEND_URL, min_length=1)
    host: str = Field(default=DEFAULT_HOST, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    log_dir: str = Field(default=DEFAULT_LOG_DIR, min_length=1)
    log_level: str = Field(default="INFO")
    tunnel_bypass: bool = True
    fallback_mode: FallbackMode = FallbackMode.ENDPOINT
    fallback_overrides: dict[str, FallbackPolicy] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}  # Ignore unknown fields for forward compat

    @field_validator("backend_url")
    @classmethod
    def _strip_trailing_slashes(cls, value: str) -> str:
        stripped = value.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"backend_url must be an http(s) URL, got '{value}'")
        return stripped

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"log_level must be DEBUG, INFO, WARNING or ERROR, got '{value}'")
        return level

    def resolve_policy(self, endpoint_key: str, declared: FallbackPolicy) -> FallbackPolicy:
        """Resolve the effective fallback policy for an endpoint.

        Args:
            endpoint_key: "<resource>.<action>" key.
            declared: Policy declared in the resource table.

        Returns:
            TRANSPARENT in transparent mode, otherwise the override or the
            declared policy.
        """
        if self.fallback_mode is FallbackMode.TRANSPARENT:
            return FallbackPolicy.TRANSPARENT
        return self.fallback_overrides.get(endpoint_key, declared)


def get_config_path() -> Path:
    """Get the full path to the gateway config file.

    Returns:
        Path to config.json in the OS-appropriate app directory.
    """
    return Path(click.get_app_dir(APP_NAME)) / "config.json"


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for field in _ENV_FIELDS:
        value = environ.get(f"{CONFIG_ENV_PREFIX}{field.upper()}")
        if value:
            overrides[field] = value
    return overrides


def _read_config_file(config_path: Path) -> dict[str, Any]:
    with config_path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("config root must be a JSON object")
    return data


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> GatewayConfig:
    """Load gateway configuration.

    Missing file means defaults. Invalid JSON or invalid values fall back
    to defaults (still honoring environment overrides) with a warning.

    Args:
        config_path: Config file to read (defaults to get_config_path()).
        environ: Environment mapping (defaults to os.environ).

    Returns:
        GatewayConfig: Loaded or default configuration.
    """
    config_path = config_path or get_config_path()
    env = _env_overrides(os.environ if environ is None else environ)

    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            data = _read_config_file(config_path)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            _logger.warning(
                {
                    "event": "config_read_failed",
                    "message": f"Failed to read gateway config, using defaults: {e}",
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "details": {"config_path": str(config_path)},
                }
            )
            data = {}

    try:
        return GatewayConfig.model_validate({**data, **env})
    except ValidationError as e:
        _logger.warning(
            {
                "event": "config_validation_failed",
                "message": f"Invalid gateway config values, using defaults: {e}",
                "error_type": type(e).__name__,
                "error_message": str(e),
                "details": {"config_path": str(config_path)},
            }
        )
        try:
            return GatewayConfig.model_validate(env)
        except ValidationError:
            return GatewayConfig()


def load_config_strict(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> GatewayConfig:
    """Load gateway configuration, raising on any error.

    A missing file is allowed (defaults plus environment), but unreadable
    files, invalid JSON, and invalid values raise.

    Args:
        config_path: Config file to read (defaults to get_config_path()).
        environ: Environment mapping (defaults to os.environ).

    Returns:
        GatewayConfig: Validated configuration.

    Raises:
        ConfigurationError: If the file or any value is invalid.
    """
    config_path = config_path or get_config_path()
    env = _env_overrides(os.environ if environ is None else environ)

    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            data = _read_config_file(config_path)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e
        except ValueError as e:
            raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

    try:
        return GatewayConfig.model_validate({**data, **env})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e


def save_config(config: GatewayConfig, config_path: Path | None = None) -> Path:
    """Save gateway configuration to file.

    Args:
        config: Configuration to save.
        config_path: Destination (defaults to get_config_path()).

    Returns:
        Path the config was written to.

    Raises:
        OSError: If unable to write config file.
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with config_path.open("w", encoding="utf-8") as f:
        json.dump(config.model_dump(mode="json"), f, indent=2)
        f.write("\n")

    return config_path
