"""Main CLI entry point for erp-gateway.

Commands:
    serve   - Run the gateway server
    config  - Configuration (show, path, set)
    list    - List records through a running gateway
    show    - Show one record
    delete  - Delete one record

Subcommand help:
    erp-gateway COMMAND -h     Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import click

from erp_gateway import __version__

from .commands.config import config
from .commands.records import delete, list_records, show
from .commands.serve import serve


class ReorderedGroup(click.Group):
    """Group that appends usage examples after the command list."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        formatter.write(
            """
Examples:
  erp-gateway serve --backend-url https://erp.example.com
  erp-gateway serve --fallback-mode transparent
  erp-gateway config set backend_url https://erp.example.com
  erp-gateway list customers --search acme --status active
  erp-gateway show suppliers 3
  erp-gateway delete customers 12 --yes

Client commands read ERP_GATEWAY_URL and ERP_GATEWAY_TOKEN.
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """erp-gateway: proxy and fallback layer for the ERP backend."""
    if version:
        click.echo(f"erp-gateway {__version__}")
        ctx.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(serve)
cli.add_command(config)
cli.add_command(list_records)
cli.add_command(show)
cli.add_command(delete)


def main() -> None:
    """CLI entry point."""
    cli()
