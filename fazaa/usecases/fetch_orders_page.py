"""Use case fetching one page of orders through the order-query port."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from fazaa.domain.orders import OrdersPage
from fazaa.domain.ports import OrderQueryPort, UseCaseError


@dataclass
class FetchOrdersPage:
    """Callable ``(status, page, limit) -> OrdersPage`` backed by ``OrderQueryPort``.

    Adapter exceptions propagate unchanged so the caller can classify them.
    """

    order_port: OrderQueryPort
    _log: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__), repr=False
    )

    def __call__(self, status: Optional[str], page: int, limit: int) -> OrdersPage:
        if page < 1:
            raise UseCaseError("INVALID_PAGE", f"Page must be >= 1 (got {page}).")
        if limit < 1:
            raise UseCaseError("INVALID_LIMIT", f"Limit must be > 0 (got {limit}).")

        self._log.debug("Fetching orders status=%s page=%d limit=%d", status or "all", page, limit)
        raw = self.order_port.fetch_orders(status, page, limit)

        if isinstance(raw, OrdersPage):
            return raw
        # Ports returning the raw response body are decoded here.
        return OrdersPage.from_payload(raw, page=page, limit=limit)


__all__ = ["FetchOrdersPage"]
