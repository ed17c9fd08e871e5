"""Translate adapter errors into the ``ErrorKind`` taxonomy."""

from __future__ import annotations

import json
from typing import Callable

from requests import exceptions as req_exc

from fazaa.adapters.api_errors import (
    ApiClientError,
    ApiDecodeError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
)
from fazaa.domain.errors import ErrorKind

ErrorMapper = Callable[[BaseException], ErrorKind]


def map_api_error(exc: BaseException) -> ErrorKind:
    """Map a fetch failure onto a stable ``ErrorKind``.

    Args:
        exc: Exception raised by the order-query collaborator.

    Returns:
        ErrorKind: ``NETWORK_ERROR`` for transport failures, ``SERVER_ERROR``
        for non-2xx responses (auth failures included), ``DECODE_ERROR`` for
        malformed bodies, and ``UNKNOWN`` otherwise.
    """
    if isinstance(exc, ApiTimeoutError):
        return ErrorKind.NETWORK_ERROR
    if isinstance(exc, ApiDecodeError):
        return ErrorKind.DECODE_ERROR
    if isinstance(exc, (ApiClientError, ApiServerError)):
        return ErrorKind.SERVER_ERROR
    if isinstance(exc, ApiError):
        return ErrorKind.SERVER_ERROR if exc.status else ErrorKind.UNKNOWN
    if isinstance(exc, (req_exc.Timeout, req_exc.ConnectionError, ConnectionError, TimeoutError)):
        return ErrorKind.NETWORK_ERROR
    if isinstance(exc, (json.JSONDecodeError, ValueError, TypeError, KeyError)):
        return ErrorKind.DECODE_ERROR
    return ErrorKind.UNKNOWN


__all__ = ["ErrorMapper", "map_api_error"]
