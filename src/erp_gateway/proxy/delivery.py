"""Ordered DELETE delivery strategies.

Some backend resources accept the identifier of a DELETE in different
places depending on deployment: in the path, in the query string, or in
a JSON body. A resource declares an ordered tuple of strategies; they are
tried in sequence and the first response that is not a 422 (validation
failure, i.e. the backend rejects that calling convention) is returned.
"""

from __future__ import annotations

__all__ = [
    "BODY",
    "DeliveryAttempt",
    "DeliveryKind",
    "DeliveryStrategy",
    "PATH",
    "PATH_DELIVERY",
    "QUERY",
    "RETRY_STATUSES",
    "deliver",
]

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Sequence

import httpx

from erp_gateway.constants import APP_NAME

_logger = logging.getLogger(f"{APP_NAME}.proxy.delivery")

# Statuses meaning "try the next calling convention"
RETRY_STATUSES = frozenset({422})


class DeliveryKind(str, Enum):
    """Where the identifier is placed."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


PATH = DeliveryKind.PATH
QUERY = DeliveryKind.QUERY
BODY = DeliveryKind.BODY


@dataclass(frozen=True)
class DeliveryAttempt:
    """Concrete outbound request shape for one strategy."""

    kind: DeliveryKind
    path: str
    params: dict[str, str] | None = None
    content: bytes | None = None


@dataclass(frozen=True)
class DeliveryStrategy:
    """Place a resource identifier in the path, query string or body.

    Attributes:
        kind: Where the identifier goes.
        id_field: Query/body field name (unused for PATH).
    """

    kind: DeliveryKind
    id_field: str = "id"

    def prepare(self, collection_path: str, resource_id: int) -> DeliveryAttempt:
        """Build the attempt for a collection path and identifier.

        Args:
            collection_path: Collection path without trailing slash
                (e.g., "api/customers").
            resource_id: Validated identifier.

        Returns:
            DeliveryAttempt for this strategy.
        """
        if self.kind is DeliveryKind.PATH:
            return DeliveryAttempt(self.kind, f"{collection_path}/{resource_id}")
        if self.kind is DeliveryKind.QUERY:
            return DeliveryAttempt(self.kind, collection_path, params={self.id_field: str(resource_id)})
        return DeliveryAttempt(
            self.kind,
            collection_path,
            content=json.dumps({self.id_field: resource_id}).encode("utf-8"),
        )


PATH_DELIVERY = DeliveryStrategy(DeliveryKind.PATH)


async def deliver(
    send: Callable[[DeliveryAttempt], Awaitable[httpx.Response]],
    strategies: Sequence[DeliveryStrategy],
    collection_path: str,
    resource_id: int,
) -> httpx.Response:
    """Try each strategy in order until one is not rejected with 422.

    Transport errors propagate to the caller on the attempt that raised;
    later strategies are not tried.

    Args:
        send: Coroutine issuing one outbound attempt.
        strategies: Ordered strategies (at least one).
        collection_path: Collection path without trailing slash.
        resource_id: Validated identifier.

    Returns:
        The first non-422 response, or the last response if all were 422.

    Raises:
        ValueError: If no strategies are given.
    """
    if not strategies:
        raise ValueError("At least one delivery strategy is required")

    response: httpx.Response | None = None
    for index, strategy in enumerate(strategies):
        attempt = strategy.prepare(collection_path, resource_id)
        response = await send(attempt)
        if response.status_code not in RETRY_STATUSES:
            return response

        if index + 1 < len(strategies):
            _logger.info(
                {
                    "event": "delivery_retry",
                    "message": (
                        f"Backend rejected {attempt.kind.value} delivery with "
                        f"{response.status_code}, trying {strategies[index + 1].kind.value}"
                    ),
                    "path": collection_path,
                    "resource_id": resource_id,
                    "rejected": attempt.kind.value,
                    "status_code": response.status_code,
                }
            )

    assert response is not None
    return response
