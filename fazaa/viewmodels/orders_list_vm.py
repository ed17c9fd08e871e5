"""Orders list projection and intent surface for ``OrdersListView``.

Call context:
    ``fazaa/app/main.py`` binds this view model to one ``OrderListController``
    and forwards its ``on_changed`` notifications to the Tk view.

The view model never mutates pagination state itself; every intent is
forwarded to the controller and rendering reads the controller snapshot.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from fazaa.domain.orders import FilterSelection, Order, OrderKey
from fazaa.domain.pagination import PaginationState
from fazaa.usecases.order_list_controller import OrderListController

from .status_format import (
    NO_ORDERS_MESSAGE,
    ORDER_DETAILS_TITLE,
    StatusStyle,
    error_message,
    filter_title,
    status_style,
)

ScheduleFn = Callable[[int, Callable[[], None]], object]


@dataclass
class OrderRow:
    """Display row model consumed by the orders list widget."""
    key: str
    order_id: Optional[OrderKey]
    title: str
    order_no: str
    status: str
    status_key: str
    style: StatusStyle
    date: str
    time: str
    address: str


@dataclass(frozen=True)
class FilterChip:
    """One entry of the horizontal filter selector."""
    selection: FilterSelection
    label: str
    selected: bool


class OrdersListVM:
    """Renders controller state into rows and forwards user intents."""

    def __init__(
        self,
        controller: OrderListController,
        *,
        page_size: Optional[int] = None,
        refresh_min_duration_ms: int = 600,
        schedule: Optional[ScheduleFn] = None,
        clock: Callable[[], float] = time.monotonic,
        on_changed: Optional[Callable[["OrdersListVM"], None]] = None,
        on_open_order: Optional[Callable[[Order], None]] = None,
    ) -> None:
        """Bind to ``controller`` and start observing its state.

        Args:
            controller: Owner of the pagination state.
            page_size: ``limit`` for every fetch; defaults to the controller's.
            refresh_min_duration_ms: Minimum time the pull-to-refresh
                indicator stays visible.
            schedule: ``after(delay_ms, callback)``-compatible timer used to
                hide the refresh indicator once the minimum time has passed.
                Without it the indicator hides as soon as loading ends.
            clock: Monotonic time source in seconds.
            on_changed: Called with this view model after every state change.
            on_open_order: Called with the order picked for detail drill-down.
        """
        self._log = logging.getLogger(__name__)
        self._controller = controller
        self.page_size = page_size or controller.state.page_size
        self.refresh_min_duration_ms = max(0, int(refresh_min_duration_ms))
        self._schedule = schedule
        self._clock = clock
        self.on_changed = on_changed
        self.on_open_order = on_open_order

        self.is_refreshing = False
        self._refresh_started_at: Optional[float] = None
        self._rows_by_key: Dict[str, Order] = {}
        self._last_row_key: Optional[str] = None
        self._unsubscribe = controller.subscribe(self._on_state)

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------
    @property
    def state(self) -> PaginationState:
        return self._controller.state

    @property
    def active_filter(self) -> FilterSelection:
        return self.state.active_filter

    @property
    def show_skeleton(self) -> bool:
        return self.state.show_skeleton

    @property
    def is_empty(self) -> bool:
        return self.state.is_empty

    @property
    def show_footer_spinner(self) -> bool:
        state = self.state
        return state.is_loading_more and state.can_load_more

    @property
    def empty_message(self) -> Optional[str]:
        state = self.state
        if state.is_empty and state.last_error is None:
            return NO_ORDERS_MESSAGE
        return None

    @property
    def error_message(self) -> Optional[str]:
        return error_message(self.state.last_error)

    def rows(self) -> List[OrderRow]:
        """Return one row per accumulated order, in server order."""
        rows: List[OrderRow] = []
        by_key: Dict[str, Order] = {}
        for index, order in enumerate(self.state.items):
            key = self._row_key(order, index)
            if key in by_key:
                key = f"{key}#{index}"
            by_key[key] = order
            rows.append(self._to_row(key, order))
        self._rows_by_key = by_key
        self._last_row_key = rows[-1].key if rows else None
        return rows

    def filter_chips(self) -> List[FilterChip]:
        active = self.active_filter
        return [
            FilterChip(selection=selection, label=filter_title(selection), selected=selection == active)
            for selection in FilterSelection.all_cases()
        ]

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def appear(self) -> None:
        """Initial load when the screen is shown with nothing loaded yet."""
        state = self.state
        if not state.items and not state.is_loading:
            self._controller.load(state.active_filter, 1, self.page_size)

    def select_filter(self, selection: FilterSelection) -> None:
        self._controller.refresh(selection, self.page_size)

    def scrolled_near_end(self) -> None:
        """Request the next page unless the last fetch failed.

        A failed page is only fetched again through ``retry``.
        """
        if self.state.last_error is not None:
            return
        self._controller.load_more(self.active_filter, self.page_size)

    def row_appeared(self, key: str) -> None:
        """Infinite-scroll trigger: the last rendered row became visible."""
        if self._last_row_key is not None and key == self._last_row_key:
            self.scrolled_near_end()

    def pull_to_refresh(self) -> None:
        self.is_refreshing = True
        self._refresh_started_at = self._clock()
        self._controller.refresh(self.active_filter, self.page_size)
        self._settle_refresh()

    def retry(self) -> None:
        self._controller.retry(self.page_size)

    def open_order(self, key: str) -> None:
        order = self._rows_by_key.get(key)
        if order is None:
            self._log.debug("open_order: unknown row key %s", key)
            return
        if self.on_open_order:
            self.on_open_order(order)

    def close(self) -> None:
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_state(self, _state: PaginationState) -> None:
        self._settle_refresh()
        if self.on_changed:
            self.on_changed(self)

    def _settle_refresh(self) -> None:
        """Hide the refresh indicator once loading ended and the minimum time passed."""
        if not self.is_refreshing or self.state.is_loading:
            return
        started = self._refresh_started_at or 0.0
        remaining_ms = int(self.refresh_min_duration_ms - (self._clock() - started) * 1000)
        if remaining_ms > 0 and self._schedule is not None:
            self._schedule(remaining_ms, self._on_refresh_timer)
            return
        self.is_refreshing = False
        self._refresh_started_at = None

    def _on_refresh_timer(self) -> None:
        was_refreshing = self.is_refreshing
        self._settle_refresh()
        if was_refreshing and not self.is_refreshing and self.on_changed:
            self.on_changed(self)

    @staticmethod
    def _row_key(order: Order, index: int) -> str:
        if order.id is not None:
            return f"id:{order.id}"
        return f"row:{index}"

    @staticmethod
    def _to_row(key: str, order: Order) -> OrderRow:
        style = status_style(order.status)
        address = order.address.address if order.address and order.address.address else ""
        return OrderRow(
            key=key,
            order_id=order.id,
            title=order.title or ORDER_DETAILS_TITLE,
            order_no=f"#{order.order_no or ''}",
            status=style.title,
            status_key=order.status.wire_value,
            style=style,
            date=order.dt_date or "",
            time=order.dt_time or "",
            address=address,
        )


__all__ = ["FilterChip", "OrderRow", "OrdersListVM"]
