from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest

from fazaa.adapters.api_errors import ApiServerError
from fazaa.domain.orders import OrdersPage
from fazaa.domain.ports import UseCaseError
from fazaa.usecases.fetch_orders_page import FetchOrdersPage
from fazaa.tests.unit.usecases.helpers import make_orders


class _PortStub:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: List[Tuple[Optional[str], int, int]] = []

    def fetch_orders(self, status: Optional[str], page: int, limit: int) -> Any:
        self.calls.append((status, page, limit))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def test_returns_page_from_port() -> None:
    page = OrdersPage.from_orders(make_orders(3), total_pages=1)
    port = _PortStub(page)

    assert FetchOrdersPage(port)("canceled", 1, 20) is page
    assert port.calls == [("canceled", 1, 20)]


def test_decodes_raw_payload_from_port() -> None:
    port = _PortStub({"orders": [{"id": 1}, {"id": 2}], "total": 45})

    page = FetchOrdersPage(port)(None, 2, 20)

    assert [order.id for order in page.orders] == [1, 2]
    assert page.total_pages == 3


def test_adapter_errors_propagate() -> None:
    port = _PortStub(ApiServerError("down", status=500))

    with pytest.raises(ApiServerError):
        FetchOrdersPage(port)(None, 1, 20)


@pytest.mark.parametrize("page, limit, code", [(0, 20, "INVALID_PAGE"), (1, 0, "INVALID_LIMIT")])
def test_rejects_invalid_arguments(page: int, limit: int, code: str) -> None:
    port = _PortStub(OrdersPage())

    with pytest.raises(UseCaseError) as excinfo:
        FetchOrdersPage(port)(None, page, limit)

    assert excinfo.value.code == code
    assert port.calls == []
