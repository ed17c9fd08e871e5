"""Order value objects shared by adapters, use cases, and view models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Iterable, Mapping, Optional, Tuple, Union

OrderKey = Union[int, str]


class OrderStatus(str, Enum):
    """Closed set of order lifecycle states.

    Member values are the wire values used by the orders API for the
    ``status`` query parameter and in order payloads.
    """

    NEW = "new"
    ACCEPTED = "accepted"
    STARTED = "started"
    EN_ROUTE = "way"
    IN_PROGRESS = "progress"
    UPDATED = "updated"
    PRE_FINISHED = "prefinished"
    FINISHED = "finished"
    CANCELED = "canceled"

    @property
    def wire_value(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: Any) -> "OrderStatus":
        """Resolve wire values, member names, and known aliases.

        Missing or unknown values resolve to ``NEW`` so decoding never fails
        on a status the client does not know yet.
        """
        if isinstance(raw, OrderStatus):
            return raw
        if raw is None:
            return cls.NEW
        text = str(raw).strip()
        if not text:
            return cls.NEW
        key = text.replace("-", "").replace("_", "").replace(" ", "").lower()
        return _STATUS_ALIASES.get(key, cls.NEW)


_STATUS_ALIASES = {
    "new": OrderStatus.NEW,
    "accepted": OrderStatus.ACCEPTED,
    "started": OrderStatus.STARTED,
    "way": OrderStatus.EN_ROUTE,
    "enroute": OrderStatus.EN_ROUTE,
    "onway": OrderStatus.EN_ROUTE,
    "progress": OrderStatus.IN_PROGRESS,
    "inprogress": OrderStatus.IN_PROGRESS,
    "updated": OrderStatus.UPDATED,
    "prefinished": OrderStatus.PRE_FINISHED,
    "finished": OrderStatus.FINISHED,
    "canceled": OrderStatus.CANCELED,
    "cancelled": OrderStatus.CANCELED,
}


@dataclass(frozen=True)
class FilterSelection:
    """Either every order (``status is None``) or one specific status."""

    status: Optional[OrderStatus] = None

    @classmethod
    def all(cls) -> "FilterSelection":
        return cls(None)

    @classmethod
    def of(cls, status: Union[OrderStatus, str]) -> "FilterSelection":
        return cls(OrderStatus.parse(status))

    @classmethod
    def all_cases(cls) -> Tuple["FilterSelection", ...]:
        """Return ``all`` followed by one selection per status, in enum order."""
        return (cls.all(),) + tuple(cls(status) for status in OrderStatus)

    @classmethod
    def from_key(cls, key: Optional[str]) -> "FilterSelection":
        """Inverse of ``key``; blank or ``"all"`` selects every order."""
        text = (key or "").strip().lower()
        if not text or text == "all":
            return cls.all()
        return cls.of(text)

    @property
    def is_all(self) -> bool:
        return self.status is None

    @property
    def status_param(self) -> Optional[str]:
        """Query parameter value for the orders API (``None`` for ``all``)."""
        return None if self.status is None else self.status.wire_value

    @property
    def key(self) -> str:
        return self.status_param or "all"

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class OrderAddress:
    """Delivery address attached to an order."""

    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["OrderAddress"]:
        if payload is None:
            return None
        if isinstance(payload, str):
            text = payload.strip()
            return cls(address=text or None)
        if not isinstance(payload, Mapping):
            return None
        return cls(
            address=_as_text(payload, "address", "full_address", "name"),
            lat=_as_float(payload, "lat", "latitude"),
            lng=_as_float(payload, "lng", "lon", "longitude"),
        )


@dataclass(frozen=True)
class Order:
    """Immutable order row as returned by the orders API."""

    id: Optional[OrderKey] = None
    title: Optional[str] = None
    order_no: Optional[str] = None
    status: OrderStatus = OrderStatus.NEW
    dt_date: Optional[str] = None
    dt_time: Optional[str] = None
    address: Optional[OrderAddress] = None

    @property
    def diff_key(self) -> Hashable:
        """Identity used for list diffing: server id when present, else the value."""
        if self.id is not None:
            return ("id", self.id)
        return ("value", self)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Order":
        """Build an order from one API payload entry."""
        if not isinstance(payload, Mapping):
            raise ValueError("Order payload must be an object.")
        return cls(
            id=_as_key(payload, "id", "order_id", "orderId"),
            title=_as_text(payload, "title", "name", "service_name"),
            order_no=_as_text(payload, "order_no", "orderNo", "number"),
            status=OrderStatus.parse(_first(payload, "status", "order_status", "orderStatus")),
            dt_date=_as_text(payload, "dt_date", "dtDate", "date"),
            dt_time=_as_text(payload, "dt_time", "dtTime", "time"),
            address=OrderAddress.from_payload(payload.get("address")),
        )


@dataclass(frozen=True)
class OrdersPage:
    """One successfully fetched page of orders."""

    orders: Tuple[Order, ...] = ()
    total_pages: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.orders, tuple):
            object.__setattr__(self, "orders", tuple(self.orders))
        if isinstance(self.total_pages, bool) or not isinstance(self.total_pages, int):
            raise TypeError("OrdersPage.total_pages must be an integer.")
        if self.total_pages < 0:
            raise ValueError("OrdersPage.total_pages must be non-negative.")

    @classmethod
    def from_orders(cls, orders: Iterable[Order], total_pages: int) -> "OrdersPage":
        return cls(orders=tuple(orders), total_pages=int(total_pages))

    @classmethod
    def from_payload(cls, payload: Any, *, page: int, limit: int) -> "OrdersPage":
        """Decode a list response envelope into a typed page.

        Accepted shapes: a bare list, ``{"orders": [...]}``, ``{"data": [...]}``
        and ``{"data": {"orders"|"items"|"data": [...]}}``. Page metadata is
        looked up at the top level, under ``data`` and under
        ``meta``/``pagination``. Without a page count, the total item count is
        divided by ``limit``; without either, ``page`` is taken as the last
        page.

        Raises:
            ValueError: If no order list can be located or an entry is not an
                object.
        """
        entries, containers = _locate_orders(payload)
        if entries is None:
            raise ValueError("Response does not contain an order list.")
        orders = tuple(Order.from_payload(entry) for entry in entries)

        total_pages = _find_int(containers, _TOTAL_PAGES_KEYS)
        if total_pages is None:
            total_items = _find_int(containers, _TOTAL_ITEMS_KEYS)
            if total_items is not None and limit > 0:
                total_pages = -(-total_items // limit)
        if total_pages is None:
            total_pages = page
        return cls(orders=orders, total_pages=max(0, total_pages))


_LIST_KEYS = ("orders", "items", "data", "results")
_META_KEYS = ("meta", "pagination", "paginate")
_TOTAL_PAGES_KEYS = ("total_pages", "totalPages", "last_page", "lastPage", "pages")
_TOTAL_ITEMS_KEYS = ("total", "total_count", "totalCount", "count")


def _locate_orders(payload: Any) -> Tuple[Optional[list], list]:
    """Return the order entries plus every mapping that may hold page metadata."""
    if isinstance(payload, list):
        return payload, []
    if not isinstance(payload, Mapping):
        return None, []
    containers: list = [payload]
    for key in _META_KEYS:
        meta = payload.get(key)
        if isinstance(meta, Mapping):
            containers.append(meta)
    data = payload.get("data")
    if isinstance(data, Mapping):
        containers.append(data)
        for key in _META_KEYS:
            meta = data.get(key)
            if isinstance(meta, Mapping):
                containers.append(meta)
        for key in _LIST_KEYS:
            if isinstance(data.get(key), list):
                return data[key], containers
        return None, containers
    for key in _LIST_KEYS:
        if isinstance(payload.get(key), list):
            return payload[key], containers
    return None, containers


def _find_int(containers: Iterable[Mapping[str, Any]], keys: Tuple[str, ...]) -> Optional[int]:
    for container in containers:
        for key in keys:
            value = container.get(key)
            if value is None or isinstance(value, bool):
                continue
            try:
                return int(value)
            except (TypeError, ValueError):
                continue
    return None


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _as_text(payload: Mapping[str, Any], *keys: str) -> Optional[str]:
    value = _first(payload, *keys)
    if value is None or isinstance(value, (Mapping, list)):
        return None
    text = str(value).strip()
    return text or None


def _as_key(payload: Mapping[str, Any], *keys: str) -> Optional[OrderKey]:
    value = _first(payload, *keys)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    return int(text) if text.isdigit() else text


def _as_float(payload: Mapping[str, Any], *keys: str) -> Optional[float]:
    value = _first(payload, *keys)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


__all__ = [
    "FilterSelection",
    "Order",
    "OrderAddress",
    "OrderKey",
    "OrderStatus",
    "OrdersPage",
]
