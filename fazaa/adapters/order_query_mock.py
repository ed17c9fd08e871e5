from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fazaa.domain.orders import Order, OrderAddress, OrderStatus, OrdersPage
from fazaa.domain.ports import OrderQueryPort

_STREETS = (
    "King Fahd Rd",
    "Olaya St",
    "Tahlia St",
    "Prince Sultan Rd",
    "Al Urubah Rd",
)
_SERVICES = ("AC maintenance", "Plumbing", "Electrical", "Cleaning", "Moving")


def _demo_orders(count: int) -> List[Order]:
    statuses = list(OrderStatus)
    orders: List[Order] = []
    for idx in range(1, count + 1):
        status = statuses[idx % len(statuses)]
        orders.append(
            Order(
                id=idx,
                title=_SERVICES[idx % len(_SERVICES)],
                order_no=f"{10000 + idx}",
                status=status,
                dt_date=f"2025-09-{(idx % 28) + 1:02d}",
                dt_time=f"{8 + idx % 12:02d}:{(idx * 7) % 60:02d}",
                address=OrderAddress(address=f"{idx} {_STREETS[idx % len(_STREETS)]}"),
            )
        )
    return orders


@dataclass
class OrderQueryMock(OrderQueryPort):
    """Offline substitute for ``OrderRestAdapter`` with deterministic responses.

    ``failures`` maps ``(status, page)`` to an exception raised once for that
    request; ``latency_s`` delays every call to make loading states visible.
    """

    orders: List[Order] = field(default_factory=lambda: _demo_orders(87))
    latency_s: float = 0.0
    failures: Dict[Tuple[Optional[str], int], Exception] = field(default_factory=dict)
    calls: List[Tuple[Optional[str], int, int]] = field(default_factory=list)

    # ---------- OrderQueryPort ----------

    def fetch_orders(self, status: Optional[str], page: int, limit: int) -> OrdersPage:
        self.calls.append((status, page, limit))
        if self.latency_s > 0:
            time.sleep(self.latency_s)
        failure = self.failures.pop((status, page), None)
        if failure is not None:
            raise failure

        matching = [
            order for order in self.orders if status is None or order.status.wire_value == status
        ]
        total_pages = -(-len(matching) // limit) if limit > 0 else 0
        start = (page - 1) * limit
        return OrdersPage.from_orders(matching[start:start + limit], total_pages)


__all__ = ["OrderQueryMock"]
