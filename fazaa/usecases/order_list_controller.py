"""Pagination and filter-refresh state machine for the orders list.

The controller owns one ``PaginationState`` and is the only writer of it.
Fetches run through an injected background runner; their completions are
marshalled back through an injected ``dispatch`` callable and applied under a
lock. Every fetch carries a ``FetchTicket``; a completion whose ticket is no
longer the in-flight one, or whose filter is no longer active, is discarded
without touching state.
"""

from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from functools import partial
from typing import Callable, List, Optional

from fazaa.domain.errors import ErrorKind
from fazaa.domain.orders import FilterSelection, OrdersPage
from fazaa.domain.pagination import DEFAULT_PAGE_SIZE, PaginationState
from fazaa.usecases.error_mapping import ErrorMapper, map_api_error

FetchOrders = Callable[[Optional[str], int, int], OrdersPage]
Job = Callable[[], None]
Runner = Callable[[Job], None]
Listener = Callable[[PaginationState], None]

log = logging.getLogger(__name__)


def _call_inline(job: Job) -> None:
    job()


@dataclass(frozen=True)
class FetchTicket:
    """Tag identifying one outstanding fetch."""

    selection: FilterSelection
    page: int
    limit: int
    seq: int


class OrderListController:
    """Owns order list pagination state and exposes load/refresh intents."""

    def __init__(
        self,
        fetch_orders: FetchOrders,
        *,
        map_error: ErrorMapper = map_api_error,
        page_size: int = DEFAULT_PAGE_SIZE,
        initial_filter: Optional[FilterSelection] = None,
        run_in_background: Optional[Runner] = None,
        dispatch: Optional[Runner] = None,
    ) -> None:
        """Create an empty controller.

        Args:
            fetch_orders: Blocking order-query collaborator
                ``(status, page, limit) -> OrdersPage``; raises on failure.
            map_error: Classifies collaborator exceptions into ``ErrorKind``.
            page_size: Default ``limit`` for fetches of this session.
            initial_filter: Active filter before the first intent.
            run_in_background: Schedules fetch jobs. Defaults to a private
                thread pool that ``close`` shuts down.
            dispatch: Runs completion jobs on the state owner's context
                (for example the UI thread). Defaults to running inline.
        """
        self._fetch_orders = fetch_orders
        self._map_error = map_error
        self._lock = threading.RLock()
        self._state = PaginationState(
            page_size=page_size,
            active_filter=initial_filter or FilterSelection.all(),
        )
        self._in_flight: Optional[FetchTicket] = None
        self._last_failed: Optional[FetchTicket] = None
        self._seq = itertools.count(1)
        self._listeners: List[Listener] = []
        self._closed = False

        self._executor: Optional[ThreadPoolExecutor] = None
        if run_in_background is None:
            self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="orders-fetch")
            run_in_background = self._submit_to_executor
        self._run_in_background = run_in_background
        self._dispatch = dispatch or _call_inline

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    @property
    def state(self) -> PaginationState:
        with self._lock:
            return self._state

    @property
    def in_flight(self) -> Optional[FetchTicket]:
        with self._lock:
            return self._in_flight

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state snapshots; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def load(
        self,
        selection: FilterSelection,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> None:
        """Fetch ``page`` for ``selection``.

        No-op while a fetch for the same filter is in flight. Page 1 for a
        filter other than the active one starts a new session.

        Raises:
            ValueError: If ``page < 1``, ``limit < 1``, or ``page > 1`` is
                requested for a filter that is not active.
        """
        if page < 1:
            raise ValueError(f"page must be >= 1 (got {page})")
        with self._lock:
            size = self._resolve_limit(limit)
            if self._closed:
                return
            if selection != self._state.active_filter:
                if page != 1:
                    raise ValueError(
                        f"Cannot load page {page} for inactive filter '{selection}'."
                    )
                self._start_session_locked(selection)
            ticket = self._begin_locked(selection, page, size)
        self._launch(ticket)

    def refresh(self, selection: FilterSelection, limit: Optional[int] = None) -> None:
        """Start a new session for ``selection`` and fetch its first page.

        Any in-flight fetch is superseded and its response discarded. Repeating
        a refresh while the same first page is already loading does nothing.
        """
        with self._lock:
            size = self._resolve_limit(limit)
            if self._closed:
                return
            current = self._in_flight
            if (
                current is not None
                and current.page == 1
                and current.selection == selection
                and self._state.active_filter == selection
                and not self._state.items
            ):
                log.debug("Refresh for '%s' already in flight", selection)
                return
            self._start_session_locked(selection)
            ticket = self._begin_locked(selection, 1, size)
        self._launch(ticket)

    def load_more(
        self,
        selection: Optional[FilterSelection] = None,
        limit: Optional[int] = None,
    ) -> None:
        """Fetch the next page of the active session when one is known to exist."""
        with self._lock:
            size = self._resolve_limit(limit)
            state = self._state
            target = selection or state.active_filter
            if (
                self._closed
                or state.is_loading
                or self._in_flight is not None
                or state.total_pages == 0
                or state.current_page >= state.total_pages
                or target != state.active_filter
            ):
                return
            ticket = self._begin_locked(target, state.current_page + 1, size)
        self._launch(ticket)

    def retry(self, limit: Optional[int] = None) -> None:
        """Re-issue the last failed fetch of the active session."""
        with self._lock:
            failed = self._last_failed
            state = self._state
            if (
                self._closed
                or failed is None
                or state.is_loading
                or failed.selection != state.active_filter
            ):
                return
            size = self._resolve_limit(limit) if limit is not None else failed.limit
            ticket = self._begin_locked(failed.selection, failed.page, size)
        self._launch(ticket)

    def close(self) -> None:
        """Tear down: ignore later intents and pending results, stop the pool."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._in_flight = None
            self._listeners.clear()
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _resolve_limit(self, limit: Optional[int]) -> int:
        size = self._state.page_size if limit is None else int(limit)
        if size < 1:
            raise ValueError(f"limit must be > 0 (got {limit})")
        return size

    def _start_session_locked(self, selection: FilterSelection) -> None:
        if self._in_flight is not None:
            log.debug("Superseding in-flight fetch %s", self._in_flight)
        self._in_flight = None
        self._last_failed = None
        self._state = replace(
            self._state,
            active_filter=selection,
            items=(),
            current_page=1,
            total_pages=0,
            last_error=None,
            is_loading_initial=False,
            is_loading_more=False,
        )

    def _begin_locked(
        self, selection: FilterSelection, page: int, limit: int
    ) -> Optional[FetchTicket]:
        current = self._in_flight
        if current is not None and current.selection == selection:
            log.debug("Fetch for '%s' already in flight (page %d)", selection, current.page)
            return None
        ticket = FetchTicket(selection=selection, page=page, limit=limit, seq=next(self._seq))
        self._in_flight = ticket
        self._state = replace(
            self._state,
            is_loading_initial=page == 1,
            is_loading_more=page != 1,
        )
        log.debug("Issuing fetch %s", ticket)
        return ticket

    def _launch(self, ticket: Optional[FetchTicket]) -> None:
        if ticket is None:
            return
        self._notify()
        self._run_in_background(partial(self._execute, ticket))

    def _submit_to_executor(self, job: Job) -> None:
        # close() clears the executor under the same lock.
        with self._lock:
            if self._executor is None:
                log.debug("Dropping fetch job submitted after close")
                return
            self._executor.submit(job)

    def _execute(self, ticket: FetchTicket) -> None:
        """Run one fetch and hand its outcome to ``dispatch``."""
        try:
            result = self._fetch_orders(ticket.selection.status_param, ticket.page, ticket.limit)
        except Exception as exc:
            kind = self._classify(exc)
            log.warning(
                "Fetching orders failed (filter=%s page=%d): %s [%s]",
                ticket.selection,
                ticket.page,
                exc,
                kind.value,
            )
            self._dispatch(partial(self._apply_failure, ticket, kind))
            return
        self._dispatch(partial(self._apply_success, ticket, result))

    def _classify(self, exc: Exception) -> ErrorKind:
        try:
            return self._map_error(exc)
        except Exception:
            log.exception("Error mapper failed for %r", exc)
            return ErrorKind.UNKNOWN

    def _is_current_locked(self, ticket: FetchTicket) -> bool:
        if self._closed or self._in_flight != ticket:
            log.debug("Discarding superseded response %s", ticket)
            return False
        if ticket.selection != self._state.active_filter:
            log.debug("Discarding stale response %s", ticket)
            return False
        return True

    def _apply_success(self, ticket: FetchTicket, result: OrdersPage) -> None:
        with self._lock:
            if not self._is_current_locked(ticket):
                return
            state = self._state
            items = result.orders if ticket.page == 1 else state.items + result.orders
            self._in_flight = None
            self._last_failed = None
            self._state = replace(
                state,
                items=items,
                current_page=ticket.page,
                total_pages=result.total_pages,
                last_error=None,
                is_loading_initial=False,
                is_loading_more=False,
            )
        self._notify()

    def _apply_failure(self, ticket: FetchTicket, kind: ErrorKind) -> None:
        with self._lock:
            if not self._is_current_locked(ticket):
                return
            self._in_flight = None
            self._last_failed = ticket
            self._state = replace(
                self._state,
                last_error=kind,
                is_loading_initial=False,
                is_loading_more=False,
            )
        self._notify()

    def _notify(self) -> None:
        with self._lock:
            snapshot = self._state
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                log.exception("Order list listener failed")


__all__ = ["FetchTicket", "OrderListController"]
