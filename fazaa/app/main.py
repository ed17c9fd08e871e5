# fazaa/app/main.py
from __future__ import annotations

import logging
import os
import tkinter as tk
from tkinter import messagebox
from typing import Optional

# ---- Views (UI-only) ----
from .dispatch import TkDispatcher
from .views.orders_list_view import OrdersListView
from .views.theme import apply_theme

# ---- ViewModels ----
from ..viewmodels.orders_list_vm import OrdersListVM
from ..viewmodels.settings_vm import SettingsVM, default_settings_payload
from ..viewmodels.status_format import ORDER_DETAILS_TITLE, SKELETON_ROW_COUNT, status_title

# ---- UseCases & Adapters ----
from ..adapters.order_query_mock import OrderQueryMock
from ..adapters.order_rest import OrderRestAdapter
from ..adapters.storage_local import StorageLocal
from ..domain.orders import Order
from ..domain.ports import OrderQueryPort
from ..usecases.fetch_orders_page import FetchOrdersPage
from ..usecases.order_list_controller import OrderListController
from ..utils import logging as logging_utils

logging_utils.configure_root()

SETTINGS_DIR_ENV = "FAZAA_SETTINGS_DIR"


def default_settings_dir() -> str:
    return os.getenv(SETTINGS_DIR_ENV) or os.path.join(os.path.expanduser("~"), ".fazaa")


class App:
    """Bootstrap: wire the orders view <-> view model, controller, and adapter."""

    def __init__(self, *, settings_dir: Optional[str] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.storage = StorageLocal(root_dir=settings_dir or default_settings_dir())
        self.settings_vm = SettingsVM()
        self._load_user_settings()
        self._apply_logging_preferences()
        cfg = self.settings_vm.config

        self.root = tk.Tk()
        self.root.title("Fazaa Driver | Orders")
        self.root.geometry("980x640")
        apply_theme(self.root)

        # Completions from fetch workers are applied on the Tk thread.
        self.dispatcher = TkDispatcher(self.root.after, self.root.after_cancel)

        self.controller = OrderListController(
            FetchOrdersPage(self._build_order_port()),
            page_size=cfg.page_size,
            dispatch=self.dispatcher.dispatch,
        )
        self.orders_vm = OrdersListVM(
            self.controller,
            page_size=cfg.page_size,
            refresh_min_duration_ms=cfg.refresh_min_duration_ms,
            schedule=self.root.after,
            on_changed=lambda _vm: self._render(),
            on_open_order=self._on_open_order,
        )
        self.view = OrdersListView(
            self.root,
            on_select_filter=self.orders_vm.select_filter,
            on_near_end=self.orders_vm.scrolled_near_end,
            on_refresh=self.orders_vm.pull_to_refresh,
            on_retry=self.orders_vm.retry,
            on_open_row=self.orders_vm.open_order,
        )
        self.view.pack(fill="both", expand=True)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        self.dispatcher.start()
        self._render()
        self.orders_vm.appear()

    def run(self) -> None:
        self.root.mainloop()

    # ------------------------------------------------------------------
    # Wiring helpers
    # ------------------------------------------------------------------
    def _load_user_settings(self) -> None:
        if not os.path.exists(self.storage.settings_path):
            self._write_default_settings()
            return
        try:
            payload = self.storage.load_user_settings()
            if payload:
                self.settings_vm.apply_dict(payload)
        except (OSError, ValueError) as exc:
            self._log.warning("Ignoring unreadable settings at %s: %s", self.storage.settings_path, exc)

    def _write_default_settings(self) -> None:
        """First run: leave an editable settings file with every key."""
        path = self.storage.settings_path
        try:
            self.storage.save_user_settings(default_settings_payload())
        except OSError as exc:
            self._log.warning("Could not write default settings to %s: %s", path, exc)
            return
        self._log.info("Wrote default settings to %s", path)

    def _apply_logging_preferences(self) -> None:
        logging_utils.apply_preferences(self.settings_vm.config.debug_logging)

    def _build_order_port(self) -> OrderQueryPort:
        cfg = self.settings_vm.config
        if self.settings_vm.use_mock_api:
            self._log.info("No orders API configured; using offline demo data.")
            return OrderQueryMock(latency_s=0.4)
        return OrderRestAdapter(
            cfg.api_base_url,
            auth_token=cfg.auth_token or None,
            request_timeout_s=cfg.request_timeout_s,
            retries=cfg.retries,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render(self) -> None:
        vm = self.orders_vm
        self.view.set_filter_chips(vm.filter_chips())
        if vm.show_skeleton:
            self.view.show_skeleton(SKELETON_ROW_COUNT)
        else:
            self.view.set_rows(vm.rows(), footer_spinner=vm.show_footer_spinner)
        if vm.error_message:
            self.view.set_message(vm.error_message, retry=not vm.state.is_loading)
        else:
            self.view.set_message(vm.empty_message)
        self.view.set_refreshing(vm.is_refreshing)

    def _on_open_order(self, order: Order) -> None:
        if order.id is None:
            messagebox.showinfo(ORDER_DETAILS_TITLE, ORDER_DETAILS_TITLE, parent=self.root)
            return
        lines = [
            f"Order #{order.order_no or order.id}",
            f"Status: {status_title(order.status)}",
        ]
        if order.dt_date or order.dt_time:
            lines.append(f"Scheduled: {order.dt_date or ''} {order.dt_time or ''}".rstrip())
        if order.address and order.address.address:
            lines.append(f"Address: {order.address.address}")
        messagebox.showinfo(order.title or ORDER_DETAILS_TITLE, "\n".join(lines), parent=self.root)

    def _on_close(self) -> None:
        self.orders_vm.close()
        self.controller.close()
        self.dispatcher.stop()
        self.root.destroy()


def main() -> None:
    App().run()


if __name__ == "__main__":
    main()
