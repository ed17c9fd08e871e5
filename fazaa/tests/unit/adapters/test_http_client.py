from __future__ import annotations

import types
from typing import Any, Dict, List

import pytest
from requests import exceptions as req_exc

from fazaa.adapters.api_errors import ApiError, ApiTimeoutError
from fazaa.adapters.http_client import HttpConfig, RetryingSession


class _FlakySession:
    def __init__(self, outcomes: List[Any]) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any):
        self.calls.append({"url": url, **kwargs})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _session(outcomes: List[Any], *, token: str = None, retries: int = 2) -> RetryingSession:
    session = RetryingSession(token, HttpConfig(request_timeout_s=7, retries=retries))
    session.session = _FlakySession(outcomes)
    return session


def test_get_sends_bearer_token_and_timeout() -> None:
    ok = types.SimpleNamespace(status_code=200)
    session = _session([ok], token="abc")

    assert session.get("http://api.local/orders", params={"page": 1}) is ok

    call = session.session.calls[0]
    assert call["headers"] == {"Accept": "application/json", "Authorization": "Bearer abc"}
    assert call["timeout"] == 7
    assert call["params"] == {"page": 1}


def test_get_without_token_has_no_auth_header() -> None:
    session = _session([types.SimpleNamespace(status_code=200)])

    session.get("http://api.local/orders")

    assert "Authorization" not in session.session.calls[0]["headers"]


def test_get_retries_transport_failures() -> None:
    ok = types.SimpleNamespace(status_code=200)
    session = _session([req_exc.Timeout("slow"), req_exc.ConnectionError("reset"), ok])

    assert session.get("http://api.local/orders") is ok
    assert len(session.session.calls) == 3


def test_get_gives_up_with_timeout_error() -> None:
    session = _session([req_exc.Timeout("slow"), req_exc.Timeout("slow")], retries=1)

    with pytest.raises(ApiTimeoutError) as excinfo:
        session.get("http://api.local/orders")

    assert excinfo.value.context == "GET http://api.local/orders"
    assert len(session.session.calls) == 2


def test_other_request_errors_are_not_retried() -> None:
    session = _session([req_exc.InvalidURL("bad url")])

    with pytest.raises(ApiError) as excinfo:
        session.get("http://api.local/orders")

    assert not isinstance(excinfo.value, ApiTimeoutError)
    assert len(session.session.calls) == 1
