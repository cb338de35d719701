"""Record commands for erp-gateway CLI: list, show, delete.

These talk to a running gateway through the client service layer, the
same way the dashboard does.
"""

from __future__ import annotations

__all__ = ["LIST_RESOURCES", "delete", "list_records", "show"]

import json
from dataclasses import dataclass
from typing import Any

import click

from erp_gateway.client.services import SERVICES, service_for
from erp_gateway.dashboard.list_view import MAX_ITEMS_PER_PAGE, ListView, StatusFilter, extract_items
from erp_gateway.proxy.endpoints import Action
from erp_gateway.resources import get_resource

from ..options import GatewayTarget, gateway_options, open_client, run_async
from ..styling import style_dim, style_page_footer, style_success


@dataclass(frozen=True)
class TableSpec:
    search_fields: tuple[str, ...]
    status_field: str | None = None


TABLES: dict[str, TableSpec] = {
    "branches": TableSpec(("branch_name", "branch_code", "address"), "status"),
    "customers": TableSpec(("full_name", "customer_code", "phone", "business_name"), "status"),
    "suppliers": TableSpec(("name", "supplier_code", "contact_person", "contact_email"), "status"),
    "stock-items": TableSpec(("name", "stock_number", "category")),
    "containers": TableSpec(("container_number", "status")),
    "container-items": TableSpec(("description", "stock_number")),
    "purchase-orders": TableSpec(("po_number", "supplier_name", "status")),
    "invoices": TableSpec(("invoice_number", "customer_name", "status")),
    "roles": TableSpec(("name", "slug", "description")),
    "permissions": TableSpec(("name", "slug", "module")),
    "users": TableSpec(("username", "email", "full_name"), "is_active"),
}

RESOURCE_CHOICE = click.Choice(sorted(SERVICES))

# Only resources the gateway mounts a collection route for can be listed
LIST_RESOURCES = tuple(
    sorted(name for name in TABLES if get_resource(name).endpoint(Action.LIST) is not None)
)


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    text = str(value)
    return text if len(text) <= 32 else text[:31] + "…"


def _render_table(rows: list[dict[str, Any]], columns: tuple[str, ...]) -> None:
    widths = [max([len(col)] + [len(_cell(r.get(col))) for r in rows]) for col in columns]
    click.echo("  ".join(click.style(col.ljust(w), bold=True) for col, w in zip(columns, widths)))
    for row in rows:
        click.echo("  ".join(_cell(row.get(col)).ljust(w) for col, w in zip(columns, widths)))


@click.command("list")
@click.argument("resource", type=click.Choice(LIST_RESOURCES))
@click.option("--search", "-s", default="", help="Case-insensitive search over key fields")
@click.option(
    "--status",
    type=click.Choice([f.value for f in StatusFilter]),
    default=StatusFilter.ALL.value,
    show_default=True,
    help="Filter by active status",
)
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Page to display")
@click.option("--json", "as_json", is_flag=True, help="Output the page as JSON")
@gateway_options
def list_records(
    target: GatewayTarget,
    resource: str,
    search: str,
    status: str,
    page: int,
    as_json: bool,
) -> None:
    """List RESOURCE records, one page at a time."""
    table = TABLES[resource]
    if status != StatusFilter.ALL.value and table.status_field is None:
        raise click.UsageError(f"{resource} has no status field to filter on")

    async def fetch() -> Any:
        async with open_client(target) as client:
            return await service_for(resource, client).get_all()

    view = ListView(
        extract_items(run_async(fetch())),
        table.search_fields,
        status_field=table.status_field,
        items_per_page=MAX_ITEMS_PER_PAGE,
    )
    view.search_query = search
    view.status_filter = status
    view.set_page(page)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "items": view.page_items,
                    "page": view.page,
                    "total_pages": view.total_pages,
                    "total": len(view.filtered),
                },
                indent=2,
            )
        )
        return

    if not view.page_items:
        click.echo(style_dim(f"No {resource} found."))
        return

    columns = ("id", *table.search_fields)
    if table.status_field and table.status_field not in columns:
        columns = (*columns, table.status_field)
    _render_table(view.page_items, columns)
    click.echo()
    click.echo(style_page_footer(view.page, view.total_pages, len(view.filtered)))


@click.command()
@click.argument("resource", type=RESOURCE_CHOICE)
@click.argument("item_id", type=int)
@gateway_options
def show(target: GatewayTarget, resource: str, item_id: int) -> None:
    """Show one RESOURCE record as JSON."""

    async def fetch() -> Any:
        async with open_client(target) as client:
            return await service_for(resource, client).get_by_id(item_id)

    click.echo(json.dumps(run_async(fetch()), indent=2))


@click.command()
@click.argument("resource", type=RESOURCE_CHOICE)
@click.argument("item_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@gateway_options
def delete(target: GatewayTarget, resource: str, item_id: int, yes: bool) -> None:
    """Delete one RESOURCE record."""
    if not yes:
        click.confirm(f"Delete {resource} {item_id}?", abort=True)

    async def remove() -> Any:
        async with open_client(target) as client:
            return await service_for(resource, client).delete(item_id)

    result = run_async(remove())
    message = result.get("message") if isinstance(result, dict) else None
    click.echo(style_success(message or f"Deleted {resource} {item_id}"))
