"""Status, filter, and error display mapping for the orders list.

Call context:
    ``OrdersListVM`` calls these helpers to turn domain enums into labels,
    colours, and icon names; the Tk theme reuses ``status_style`` for row tags.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fazaa.domain.errors import ErrorKind
from fazaa.domain.orders import FilterSelection, OrderStatus

ALL_FILTER_TITLE = "All"
ORDER_DETAILS_TITLE = "Order details"
NO_ORDERS_MESSAGE = "No orders found"
SKELETON_ROW_COUNT = 6


@dataclass(frozen=True)
class StatusStyle:
    """Display attributes for one order status."""
    title: str
    foreground: str
    background: str
    icon: str


_STATUS_STYLES = {
    OrderStatus.NEW: StatusStyle("New", "#2457ff", "#e6edff", "order_new"),
    OrderStatus.ACCEPTED: StatusStyle("Accepted", "#0e7490", "#e0f7fa", "order_accepted"),
    OrderStatus.STARTED: StatusStyle("Started", "#7c3aed", "#f1e9ff", "order_started"),
    OrderStatus.EN_ROUTE: StatusStyle("On the way", "#c2410c", "#fff1e6", "order_way"),
    OrderStatus.IN_PROGRESS: StatusStyle("In progress", "#b45309", "#fff7db", "order_progress"),
    OrderStatus.UPDATED: StatusStyle("Updated", "#4338ca", "#eceefe", "order_updated"),
    OrderStatus.PRE_FINISHED: StatusStyle("Almost done", "#0f766e", "#e3f8f4", "order_prefinished"),
    OrderStatus.FINISHED: StatusStyle("Finished", "#15803d", "#e7f8ec", "order_finished"),
    OrderStatus.CANCELED: StatusStyle("Canceled", "#b91c1c", "#fdecec", "order_canceled"),
}

_ERROR_MESSAGES = {
    ErrorKind.NETWORK_ERROR: "No connection. Check your network and try again.",
    ErrorKind.SERVER_ERROR: "The server could not load your orders. Try again.",
    ErrorKind.DECODE_ERROR: "Received an unexpected response from the server.",
    ErrorKind.UNKNOWN: "Something went wrong. Try again.",
}


def status_style(status: OrderStatus) -> StatusStyle:
    return _STATUS_STYLES[status]


def status_title(status: OrderStatus) -> str:
    return _STATUS_STYLES[status].title


def filter_title(selection: FilterSelection) -> str:
    if selection.status is None:
        return ALL_FILTER_TITLE
    return status_title(selection.status)


def error_message(kind: Optional[ErrorKind]) -> Optional[str]:
    """User-facing message for a fetch failure, ``None`` when there is none."""
    if kind is None:
        return None
    return _ERROR_MESSAGES.get(kind, _ERROR_MESSAGES[ErrorKind.UNKNOWN])


__all__ = [
    "ALL_FILTER_TITLE",
    "NO_ORDERS_MESSAGE",
    "ORDER_DETAILS_TITLE",
    "SKELETON_ROW_COUNT",
    "StatusStyle",
    "error_message",
    "filter_title",
    "status_style",
    "status_title",
]
