from __future__ import annotations

import pytest

from fazaa.adapters.order_query_mock import OrderQueryMock
from fazaa.domain.orders import Order, OrderStatus


def test_default_data_paginates_all_orders() -> None:
    mock = OrderQueryMock()

    first = mock.fetch_orders(None, 1, 20)
    last = mock.fetch_orders(None, 5, 20)

    assert first.total_pages == 5
    assert len(first.orders) == 20
    assert len(last.orders) == 7
    assert mock.calls == [(None, 1, 20), (None, 5, 20)]


def test_status_filter_uses_wire_value() -> None:
    mock = OrderQueryMock(
        orders=[
            Order(id=1, status=OrderStatus.EN_ROUTE),
            Order(id=2, status=OrderStatus.NEW),
            Order(id=3, status=OrderStatus.EN_ROUTE),
        ]
    )

    page = mock.fetch_orders("way", 1, 20)

    assert [order.id for order in page.orders] == [1, 3]
    assert page.total_pages == 1


def test_scripted_failure_is_raised_once() -> None:
    mock = OrderQueryMock(failures={(None, 2): TimeoutError("offline")})

    with pytest.raises(TimeoutError):
        mock.fetch_orders(None, 2, 20)

    assert len(mock.fetch_orders(None, 2, 20).orders) == 20


def test_empty_dataset_reports_zero_pages() -> None:
    page = OrderQueryMock(orders=[]).fetch_orders(None, 1, 20)

    assert page.orders == ()
    assert page.total_pages == 0
