"""Typed adapter failures and best-effort error payload helpers."""

from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for orders API adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the orders API (including auth failures)."""

    @property
    def is_auth_failure(self) -> bool:
        return self.status in (401, 403)


class ApiServerError(ApiError):
    """HTTP 5xx from the orders API."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


class ApiDecodeError(ApiError):
    """2xx response whose body is not JSON or has an unusable shape."""

    def __init__(
        self,
        message: str,
        *,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, payload=payload, context=context)


def error_for_response(resp: Any, ctx: str) -> Optional[ApiError]:
    """Return the typed error for a non-2xx response, or ``None`` when ok."""
    status = int(getattr(resp, "status_code", 0) or 0)
    if 200 <= status < 300:
        return None
    payload = parse_error_payload(resp)
    message = build_error_message(ctx, status, payload)
    kwargs = dict(
        status=status,
        code=extract_error_code(payload),
        hint=extract_error_hint(payload),
        payload=payload,
        context=ctx,
    )
    if 400 <= status < 500:
        return ApiClientError(message, **kwargs)
    if 500 <= status < 600:
        return ApiServerError(message, **kwargs)
    return ApiError(message, **kwargs)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "") or ""
        return snippet[:400] or None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = first_string(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def extract_error_code(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    for key in ("code", "error_code", "error"):
        value = payload.get(key)
        if value is None or isinstance(value, (dict, list)):
            continue
        return str(value)
    return None


def extract_error_hint(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("hint", "errors", "details", "messages"):
            if key in payload:
                text = stringify(payload[key])
                if text:
                    return text
        return None
    if isinstance(payload, list):
        return stringify(payload)
    if isinstance(payload, str):
        return payload.strip() or None
    return None


def first_string(payload: Any) -> Optional[str]:
    """Return the first human readable message found in an error payload."""
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, dict):
        for key in ("message", "detail", "error", "title", "msg"):
            value = payload.get(key)
            if isinstance(value, str):
                if value.strip():
                    return value.strip()
                continue
            if isinstance(value, (dict, list)):
                candidate = first_string(value)
                if candidate:
                    return candidate
        return None
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item)
            if candidate:
                return candidate
    return None


def stringify(data: Any, *, limit: int = 200) -> Optional[str]:
    if data is None:
        return None
    if isinstance(data, str):
        text = data.strip()
    elif isinstance(data, list):
        parts = [part for part in (stringify(item, limit=limit) for item in data) if part]
        text = "; ".join(parts[:3])
    elif isinstance(data, dict):
        pairs = []
        for key, value in list(data.items())[:4]:
            value_text = stringify(value, limit=limit)
            if value_text:
                pairs.append(f"{key}={value_text}")
        text = ", ".join(pairs)
    else:
        text = str(data).strip()
    return text[:limit] if text else None


__all__ = [
    "ApiClientError",
    "ApiDecodeError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "build_error_message",
    "error_for_response",
    "extract_error_code",
    "extract_error_hint",
    "first_string",
    "parse_error_payload",
    "stringify",
]
