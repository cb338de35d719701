"""Create/edit form state backed by a ResourceService."""

from __future__ import annotations

__all__ = ["FormState"]

import logging
from typing import Any, Iterable

from erp_gateway.client.api import GatewayAPIError
from erp_gateway.client.services import ResourceService
from erp_gateway.constants import APP_NAME

_logger = logging.getLogger(f"{APP_NAME}.dashboard")


class FormState:
    """Flat field dict for one create or edit form.

    Numeric fields arrive as text from inputs and are coerced before
    submit; an empty input becomes None.

    Args:
        fields: Initial field values.
        int_fields: Keys coerced to int on submit.
        float_fields: Keys coerced to float on submit.
    """

    def __init__(
        self,
        fields: dict[str, Any] | None = None,
        *,
        int_fields: Iterable[str] = (),
        float_fields: Iterable[str] = (),
    ) -> None:
        self.fields: dict[str, Any] = dict(fields or {})
        self.int_fields = frozenset(int_fields)
        self.float_fields = frozenset(float_fields)
        self.error: str | None = None
        self.submitting = False

    def set(self, name: str, value: Any) -> None:
        self.fields[name] = value
        self.error = None

    def payload(self) -> dict[str, Any]:
        """Field values with numeric coercion applied.

        Raises:
            ValueError: If a numeric field holds non-numeric text.
        """
        data = dict(self.fields)
        for name in self.int_fields | self.float_fields:
            if name not in data:
                continue
            value = data[name]
            if value is None or (isinstance(value, str) and not value.strip()):
                data[name] = None
                continue
            try:
                data[name] = int(value) if name in self.int_fields else float(value)
            except (TypeError, ValueError):
                raise ValueError(f"{name} must be a number") from None
        return data

    async def submit(self, service: ResourceService, item_id: int | str | None = None) -> Any:
        """Create (no item_id) or update the record.

        Returns:
            The service result, or None when submission failed; the failure
            message is then in self.error.
        """
        self.error = None
        self.submitting = True
        try:
            data = self.payload()
            if item_id is None:
                return await service.create(data)
            return await service.update(item_id, data)
        except ValueError as e:
            self.error = str(e)
        except GatewayAPIError as e:
            self.error = e.detail
            _logger.info(
                {
                    "event": "form_submit_failed",
                    "message": f"Saving {service.resource} failed: {e.detail}",
                    "resource": service.resource,
                    "status_code": e.status_code,
                }
            )
        finally:
            self.submitting = False
        return None
