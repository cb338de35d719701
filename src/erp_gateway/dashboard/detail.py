"""Loaders for detail pages that combine several gateway reads."""

from __future__ import annotations

__all__ = ["ContainerDetail", "load_container_detail"]

import asyncio
from dataclasses import dataclass, field
from typing import Any

from erp_gateway.client.services import ContainerItemService, ContainerService
from erp_gateway.dashboard.list_view import extract_items


@dataclass(frozen=True)
class ContainerDetail:
    container: dict[str, Any]
    items: list[dict[str, Any]] = field(default_factory=list)


async def load_container_detail(
    containers: ContainerService,
    container_items: ContainerItemService,
    container_id: int,
) -> ContainerDetail:
    """Fetch a container and its items concurrently.

    A failing read cancels the other one before the error is raised.

    Raises:
        GatewayAPIError: If either read fails.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            container_task = tg.create_task(containers.get_by_id(container_id))
            items_task = tg.create_task(container_items.get_all(container_id=container_id))
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return ContainerDetail(container=container_task.result() or {}, items=extract_items(items_task.result()))
