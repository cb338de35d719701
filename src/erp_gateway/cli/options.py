"""Shared options and helpers for commands that talk to a running gateway."""

from __future__ import annotations

__all__ = ["GatewayTarget", "gateway_options", "open_client", "run_async"]

import asyncio
import functools
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, TypeVar

import click
import httpx

from erp_gateway.client.api import GatewayClient
from erp_gateway.constants import DEFAULT_HOST, DEFAULT_PORT

T = TypeVar("T")

DEFAULT_GATEWAY_URL = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"


@dataclass(frozen=True)
class GatewayTarget:
    url: str
    token: str | None
    transport: httpx.AsyncBaseTransport | None = None


def gateway_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --gateway-url/--token and pass a GatewayTarget as ``target``."""

    @click.option(
        "--gateway-url",
        envvar="ERP_GATEWAY_URL",
        default=DEFAULT_GATEWAY_URL,
        show_default=True,
        help="Gateway base URL (env: ERP_GATEWAY_URL)",
    )
    @click.option(
        "--token",
        envvar="ERP_GATEWAY_TOKEN",
        default=None,
        help="Bearer token (env: ERP_GATEWAY_TOKEN)",
    )
    @click.pass_context
    @functools.wraps(func)
    def wrapper(ctx: click.Context, gateway_url: str, token: str | None, **kwargs: Any) -> Any:
        # Tests put an httpx transport on ctx.obj to avoid real sockets
        transport = (ctx.obj or {}).get("transport") if isinstance(ctx.obj, dict) else None
        target = GatewayTarget(url=gateway_url, token=token, transport=transport)
        return func(target=target, **kwargs)

    return wrapper


def open_client(target: GatewayTarget) -> GatewayClient:
    return GatewayClient(target.url, token=target.token, transport=target.transport)


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)
