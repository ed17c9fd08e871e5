from __future__ import annotations

import pytest

from fazaa.domain.errors import ErrorKind
from fazaa.domain.orders import FilterSelection, Order, OrderAddress, OrderStatus, OrdersPage
from fazaa.domain.pagination import PaginationState


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("way", OrderStatus.EN_ROUTE),
        ("enRoute", OrderStatus.EN_ROUTE),
        ("in_progress", OrderStatus.IN_PROGRESS),
        ("progress", OrderStatus.IN_PROGRESS),
        ("preFinished", OrderStatus.PRE_FINISHED),
        ("CANCELLED", OrderStatus.CANCELED),
        (" finished ", OrderStatus.FINISHED),
        (None, OrderStatus.NEW),
        ("archived", OrderStatus.NEW),
    ],
)
def test_order_status_parse(raw, expected) -> None:
    assert OrderStatus.parse(raw) is expected


def test_filter_all_cases_order_and_params() -> None:
    cases = FilterSelection.all_cases()

    assert cases[0] == FilterSelection.all()
    assert cases[0].status_param is None
    assert [case.status for case in cases[1:]] == list(OrderStatus)
    assert [case.status_param for case in cases[1:]] == [
        "new",
        "accepted",
        "started",
        "way",
        "progress",
        "updated",
        "prefinished",
        "finished",
        "canceled",
    ]


def test_filter_selection_keys_round_trip() -> None:
    assert FilterSelection.from_key("all").is_all
    assert FilterSelection.from_key(None).is_all
    assert FilterSelection.from_key("way") == FilterSelection.of(OrderStatus.EN_ROUTE)
    assert FilterSelection.of("canceled").key == "canceled"
    assert str(FilterSelection.all()) == "all"


def test_order_from_payload_accepts_camel_case_keys() -> None:
    order = Order.from_payload(
        {
            "id": "42",
            "title": "AC maintenance",
            "orderNo": 1042,
            "status": "way",
            "dtDate": "2025-09-25",
            "dtTime": "10:30",
            "address": {"address": "12 Olaya St", "lat": "24.7", "lng": 46.6},
        }
    )

    assert order.id == 42
    assert order.order_no == "1042"
    assert order.status is OrderStatus.EN_ROUTE
    assert order.dt_date == "2025-09-25"
    assert order.address == OrderAddress(address="12 Olaya St", lat=24.7, lng=46.6)


def test_order_from_payload_tolerates_missing_fields() -> None:
    order = Order.from_payload({"address": "  ", "title": ""})

    assert order.id is None
    assert order.title is None
    assert order.status is OrderStatus.NEW
    assert order.address == OrderAddress(address=None)


def test_order_from_payload_rejects_non_mapping() -> None:
    with pytest.raises(ValueError):
        Order.from_payload(["not", "an", "order"])  # type: ignore[arg-type]


def test_diff_key_prefers_server_id() -> None:
    first = Order(id=7, title="A")
    renamed = Order(id=7, title="B")
    anonymous = Order(title="A")

    assert first.diff_key == renamed.diff_key
    assert anonymous.diff_key == Order(title="A").diff_key
    assert anonymous.diff_key != Order(title="B").diff_key


@pytest.mark.parametrize(
    "payload",
    [
        {"orders": [{"id": 1}, {"id": 2}], "total_pages": 4},
        {"data": [{"id": 1}, {"id": 2}], "meta": {"last_page": 4}},
        {"data": {"orders": [{"id": 1}, {"id": 2}], "totalPages": "4"}},
        {"data": {"items": [{"id": 1}, {"id": 2}], "pagination": {"total": 31}}},
    ],
)
def test_orders_page_from_envelopes(payload) -> None:
    page = OrdersPage.from_payload(payload, page=1, limit=10)

    assert [order.id for order in page.orders] == [1, 2]
    assert page.total_pages == 4


def test_orders_page_bare_list_defaults_to_current_page() -> None:
    page = OrdersPage.from_payload([{"id": 1}], page=3, limit=10)

    assert page.total_pages == 3
    assert len(page.orders) == 1


def test_orders_page_rejects_unusable_payload() -> None:
    with pytest.raises(ValueError):
        OrdersPage.from_payload({"message": "ok"}, page=1, limit=10)
    with pytest.raises(ValueError):
        OrdersPage.from_payload({"orders": ["bad"]}, page=1, limit=10)
    with pytest.raises(ValueError):
        OrdersPage(orders=(), total_pages=-1)


def test_pagination_state_derived_views() -> None:
    orders = (Order(id=1),)
    loading = PaginationState(is_loading_initial=True)
    loaded = PaginationState(items=orders, total_pages=2)
    last = PaginationState(items=orders, current_page=2, total_pages=2)
    failed = PaginationState(last_error=ErrorKind.NETWORK_ERROR)

    assert loading.show_skeleton is True
    assert loading.is_empty is False
    assert loaded.can_load_more is True
    assert loaded.is_empty is False
    assert last.can_load_more is False
    assert failed.is_empty is True
    assert failed.active_filter == FilterSelection.all()


def test_pagination_state_rejects_overlapping_loads() -> None:
    with pytest.raises(ValueError):
        PaginationState(is_loading_initial=True, is_loading_more=True)
    with pytest.raises(ValueError):
        PaginationState(current_page=0)
    with pytest.raises(ValueError):
        PaginationState(page_size=0)
