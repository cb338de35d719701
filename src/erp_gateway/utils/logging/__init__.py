"""Logging utilities and helpers.

This package provides logging infrastructure for erp-gateway:
- iso_formatter: ISO 8601 timestamp formatting for JSONL logs
- logger_setup: Factory functions for creating configured loggers

Import directly from submodules to avoid circular imports:
    from erp_gateway.utils.logging.logger_setup import configure_gateway_logging
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
