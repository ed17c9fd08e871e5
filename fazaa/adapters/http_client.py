"""Shared HTTP transport for the orders REST adapter.

This module wraps ``requests.Session`` so the adapter gets one place for
timeout policy, retry behavior, and auth header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``fazaa.adapters.api_errors.ApiTimeoutError`` for typed transport failures.

Call context:
    - Constructed by ``fazaa/adapters/order_rest.py``.
    - Used only inside adapter methods; use cases interact through ports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from fazaa.adapters.api_errors import ApiError, ApiTimeoutError

log = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for JSON API calls. This bounds
            how long a list fetch can keep the loading indicator up.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Requests wrapper with bearer-token headers and a transport retry loop.

    Only timeouts and connection errors are retried. HTTP status handling is
    left to the caller.
    """

    def __init__(self, auth_token: Optional[str], cfg: HttpConfig) -> None:
        """Create a retry-enabled session.

        Args:
            auth_token: Token placed in ``Authorization: Bearer`` headers, or ``None``.
            cfg: Shared timeout and retry settings.
        """
        self.session = requests.Session()
        self.auth_token = auth_token
        self.cfg = cfg

    def _headers(self, accept: str = "application/json") -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        accept: str = "application/json",
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures.

        Args:
            url: Absolute endpoint URL.
            params: Optional query parameter mapping.
            accept: ``Accept`` header value.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` from the first attempt that reached the server.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
            ApiError: For any other ``requests`` failure.
        """
        context = f"GET {url}"
        attempts = self.cfg.retries + 1
        last_err: Optional[ApiTimeoutError] = None
        for attempt in range(1, attempts + 1):
            try:
                return self.session.get(
                    url,
                    params=params,
                    headers=self._headers(accept=accept),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                log.debug("%s failed (attempt %d/%d): %s", context, attempt, attempts, exc)
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        raise last_err


__all__ = ["HttpConfig", "RetryingSession"]
