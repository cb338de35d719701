"""Command-line interface for erp-gateway.

Provides the server command and client commands that read and delete
records through a running gateway.
"""

from .main import cli, main

__all__ = ["cli", "main"]
