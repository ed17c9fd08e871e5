from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from .orders import OrdersPage


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class OrderQueryPort(Protocol):
    """Paginated order listing against the orders API.

    Implementations raise adapter errors (see ``fazaa.adapters.api_errors``)
    on transport, HTTP, or decoding failures.
    """

    def fetch_orders(
        self, status: Optional[str], page: int, limit: int
    ) -> OrdersPage: ...


class SettingsStoragePort(Protocol):
    """Persistence for user settings."""

    def load_user_settings(self) -> Dict[str, Any]: ...
    def save_user_settings(self, payload: Dict[str, Any]) -> None: ...
