"""Domain package exports for value objects and aggregates."""

from .errors import ErrorKind
from .orders import (
    FilterSelection,
    Order,
    OrderAddress,
    OrderKey,
    OrderStatus,
    OrdersPage,
)
from .pagination import DEFAULT_PAGE_SIZE, PaginationState

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ErrorKind",
    "FilterSelection",
    "Order",
    "OrderAddress",
    "OrderKey",
    "OrderStatus",
    "OrdersPage",
    "PaginationState",
]
