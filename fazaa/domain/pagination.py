"""Immutable pagination snapshot observed by the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import ErrorKind
from .orders import FilterSelection, Order

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class PaginationState:
    """Snapshot of one order list session.

    Instances are replaced, never mutated; the controller publishes a new
    snapshot after every transition.
    """

    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    items: Tuple[Order, ...] = ()
    total_pages: int = 0
    is_loading_initial: bool = False
    is_loading_more: bool = False
    active_filter: FilterSelection = field(default_factory=FilterSelection.all)
    last_error: Optional[ErrorKind] = None

    def __post_init__(self) -> None:
        if self.current_page < 1:
            raise ValueError("current_page must be >= 1.")
        if self.page_size < 1:
            raise ValueError("page_size must be > 0.")
        if self.total_pages < 0:
            raise ValueError("total_pages must be >= 0.")
        if self.is_loading_initial and self.is_loading_more:
            raise ValueError("Initial and incremental loads cannot overlap.")

    @property
    def is_loading(self) -> bool:
        return self.is_loading_initial or self.is_loading_more

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.is_loading_initial

    @property
    def show_skeleton(self) -> bool:
        return self.is_loading_initial and not self.items

    @property
    def can_load_more(self) -> bool:
        return self.current_page < self.total_pages


__all__ = ["DEFAULT_PAGE_SIZE", "PaginationState"]
