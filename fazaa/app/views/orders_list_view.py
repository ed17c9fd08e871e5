"""Orders list view: filter bar, paginated table, and status messages.

The view renders DTOs from ``OrdersListVM`` and emits filter/scroll/refresh/
retry/open callbacks to the app layer. It holds no pagination state.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, List, Optional, Sequence

from . import theme

_FOOTER_IID = "__footer__"
_NEAR_END_FRACTION = 0.95


class OrdersListView(ttk.Frame):
    """Scrollable orders table with a horizontal filter selector."""

    def __init__(
        self,
        parent,
        *,
        on_select_filter: Optional[Callable[[object], None]] = None,
        on_near_end: Optional[Callable[[], None]] = None,
        on_refresh: Optional[Callable[[], None]] = None,
        on_retry: Optional[Callable[[], None]] = None,
        on_open_row: Optional[Callable[[str], None]] = None,
        **kwargs,
    ) -> None:
        """Build filter bar, table, and message area.

        Args:
            parent: Parent widget.
            on_select_filter: Called with the ``FilterSelection`` of a tapped chip.
            on_near_end: Called when the table is scrolled to its last rows.
            on_refresh: Called for the refresh button and ``F5``.
            on_retry: Called from the retry button shown with errors.
            on_open_row: Called with the row key on double-click or ``Return``.
            **kwargs: Additional frame options forwarded to ``ttk.Frame``.
        """
        super().__init__(parent, **kwargs)
        self.on_select_filter = on_select_filter
        self.on_near_end = on_near_end
        self.on_refresh = on_refresh
        self.on_retry = on_retry
        self.on_open_row = on_open_row

        header = ttk.Frame(self)
        header.pack(side=tk.TOP, fill=tk.X, padx=8, pady=(8, 0))
        ttk.Label(header, text="My orders", style="Title.TLabel").pack(side=tk.LEFT)
        self.btn_refresh = ttk.Button(header, text="Refresh", command=self._on_refresh_click)
        self.btn_refresh.pack(side=tk.RIGHT)

        self.filter_bar = ttk.Frame(self)
        self.filter_bar.pack(side=tk.TOP, fill=tk.X, padx=8, pady=8)
        self._chip_buttons: List[ttk.Button] = []

        body = ttk.Frame(self)
        body.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        columns = ("order_no", "status", "date", "time", "address")
        self.tree = ttk.Treeview(body, columns=columns, show="tree headings", selectmode="browse")
        self.tree.heading("#0", text="Order")
        self.tree.column("#0", width=220, anchor=tk.W, stretch=True)
        for column, width in (
            ("order_no", 90),
            ("status", 110),
            ("date", 100),
            ("time", 70),
            ("address", 240),
        ):
            self.tree.heading(column, text=column.replace("_", " ").title())
            self.tree.column(column, width=width, anchor=tk.W, stretch=column == "address")
        theme.configure_row_tags(self.tree)

        self._last_scroll = 0.0
        self._vsb = ttk.Scrollbar(body, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=self._on_yscroll)
        self.tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self._vsb.pack(side=tk.RIGHT, fill=tk.Y)

        self.message_frame = ttk.Frame(self)
        self.message_label = ttk.Label(self.message_frame, style="Subtle.TLabel")
        self.message_label.pack(side=tk.LEFT, padx=(0, 8))
        self.btn_retry = ttk.Button(self.message_frame, text="Retry", command=self._on_retry_click)

        self.tree.bind("<Double-1>", self._on_open)
        self.tree.bind("<Return>", self._on_open)
        self.bind_all("<F5>", lambda _event: self._on_refresh_click())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_filter_chips(self, chips: Sequence) -> None:
        """Rebuild the filter bar from ``FilterChip`` DTOs."""
        for button in self._chip_buttons:
            button.destroy()
        self._chip_buttons = []
        for chip in chips:
            button = ttk.Button(
                self.filter_bar,
                text=chip.label,
                style="ChipSelected.TButton" if chip.selected else "Chip.TButton",
                command=lambda selection=chip.selection: self._on_chip_click(selection),
            )
            button.pack(side=tk.LEFT, padx=(0, 6))
            self._chip_buttons.append(button)

    def show_skeleton(self, count: int) -> None:
        """Replace the table with placeholder rows while the first page loads."""
        self._clear()
        self._last_scroll = 0.0
        for idx in range(count):
            self.tree.insert(
                "",
                tk.END,
                iid=f"__skeleton_{idx}__",
                text="█" * 18,
                values=("█" * 5, "█" * 6, "", "", "█" * 14),
                tags=("skeleton",),
            )
        self.tree.state(["disabled"])

    def set_rows(self, rows: Sequence, *, footer_spinner: bool = False) -> None:
        """Replace table rows with ``OrderRow`` DTOs, keeping the selection."""
        selected = self.selected_key()
        self._clear()
        for row in rows:
            self.tree.insert(
                "",
                tk.END,
                iid=row.key,
                text=row.title,
                values=(row.order_no, row.status, row.date, row.time, row.address),
                tags=(f"status-{row.status_key}",),
            )
        if footer_spinner:
            self.tree.insert("", tk.END, iid=_FOOTER_IID, text="Loading more…", tags=("footer",))
        if selected and self.tree.exists(selected):
            self.tree.selection_set(selected)

    def set_message(self, text: Optional[str], *, retry: bool = False) -> None:
        """Show an empty/error message under the table, or hide it for ``None``."""
        if not text:
            self.message_frame.pack_forget()
            return
        self.message_label.configure(text=text)
        if retry:
            self.btn_retry.pack(side=tk.LEFT)
        else:
            self.btn_retry.pack_forget()
        self.message_frame.pack(side=tk.BOTTOM, fill=tk.X, padx=8, pady=8)

    def set_refreshing(self, refreshing: bool) -> None:
        self.btn_refresh.configure(
            state="disabled" if refreshing else "normal",
            text="Refreshing…" if refreshing else "Refresh",
        )

    def selected_key(self) -> Optional[str]:
        selection = self.tree.selection()
        if not selection or selection[0] == _FOOTER_IID:
            return None
        return selection[0]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _clear(self) -> None:
        self.tree.state(["!disabled"])
        self.tree.delete(*self.tree.get_children())

    def _on_yscroll(self, first: str, last: str) -> None:
        self._vsb.set(first, last)
        position = float(last)
        crossed = self._last_scroll < _NEAR_END_FRACTION <= position
        self._last_scroll = position
        # Re-renders also report the scroll position; only a move into the
        # last rows counts as reaching the end.
        if crossed and self.tree.get_children() and self.on_near_end:
            self.on_near_end()

    def _on_chip_click(self, selection) -> None:
        if self.on_select_filter:
            self.on_select_filter(selection)

    def _on_refresh_click(self) -> None:
        if self.on_refresh:
            self.on_refresh()

    def _on_retry_click(self) -> None:
        if self.on_retry:
            self.on_retry()

    def _on_open(self, _event=None) -> None:
        key = self.selected_key()
        if key and not key.startswith("__skeleton") and self.on_open_row:
            self.on_open_row(key)


__all__ = ["OrdersListView"]
