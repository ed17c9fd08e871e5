from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fazaa.domain.orders import OrdersPage
from fazaa.domain.ports import OrderQueryPort

from .api_errors import ApiDecodeError, error_for_response
from .http_client import HttpConfig, RetryingSession


class OrderRestAdapter(OrderQueryPort):
    """REST adapter for the paginated ``/orders`` listing endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        auth_token: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        base = str(base_url or "").strip()
        if not base:
            raise ValueError("OrderRestAdapter requires a base URL")

        self.base_url = base.rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(auth_token, self.cfg)
        self._log = logging.getLogger(__name__)

    def fetch_orders(self, status: Optional[str], page: int, limit: int) -> OrdersPage:
        url = self._make_url("/orders")
        params: Dict[str, Any] = {"page": int(page), "limit": int(limit)}
        if status:
            params["status"] = status
        ctx = f"orders[status={status or 'all'} page={page}]"

        resp = self.session.get(url, params=params)
        err = error_for_response(resp, ctx)
        if err is not None:
            raise err
        payload = self._json_any(resp, ctx)
        try:
            result = OrdersPage.from_payload(payload, page=int(page), limit=int(limit))
        except (TypeError, ValueError) as exc:
            raise ApiDecodeError(f"{ctx}: {exc}", payload=payload, context=ctx) from exc
        self._log.debug(
            "%s -> %d orders, total_pages=%d", ctx, len(result.orders), result.total_pages
        )
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _json_any(resp: Any, ctx: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            snippet = (getattr(resp, "text", "") or "")[:400]
            raise ApiDecodeError(
                f"{ctx}: invalid JSON response: {snippet}", payload=snippet, context=ctx
            ) from exc


__all__ = ["OrderRestAdapter"]
