"""Terminal styling for erp-gateway command output.

Config sections get cyan headers, record tables end with a page footer,
and the serve banner shows where requests are forwarded. Colors are
dropped automatically when output is not a terminal.
"""

from __future__ import annotations

__all__ = [
    "style_dim",
    "style_error",
    "style_forwarding",
    "style_header",
    "style_label",
    "style_page_footer",
    "style_success",
    "style_warning",
]

import click


def style_header(title: str) -> str:
    """Config section header, e.g. "--- Backend ---"."""
    return click.style(f"--- {title} ---", fg="cyan", bold=True)


def style_label(label: str) -> str:
    return click.style(f"{label}:", fg="cyan", bold=True)


def style_page_footer(page: int, total_pages: int, matching: int) -> str:
    """Footer printed under a record table.

    Example:
        >>> click.echo(style_page_footer(2, 3, 20))
        Page: 2/3 (20 matching)
    """
    return style_label("Page") + f" {page}/{total_pages} " + style_dim(f"({matching} matching)")


def style_forwarding(listen_url: str, backend_url: str) -> str:
    """Serve banner: "Forwarding <gateway> -> <backend>"."""
    return style_dim("Forwarding ") + listen_url + style_dim(" -> ") + click.style(backend_url, fg="cyan")


def style_success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green")


def style_error(message: str) -> str:
    return click.style(f"✗ {message}", fg="red")


def style_dim(message: str) -> str:
    return click.style(message, dim=True)


def style_warning(message: str) -> str:
    # Shown by `config show` when transparent mode disables fallback data
    return click.style(f"Warning: {message}", fg="yellow", bold=True)
