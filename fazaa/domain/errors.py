"""Domain-level error taxonomy for order list fetches.

Adapter exceptions are translated into ``ErrorKind`` before they reach
controller state, so view models never see transport-specific types.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Recoverable failure classes surfaced to the presentation layer."""

    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"
    DECODE_ERROR = "decode_error"
    UNKNOWN = "unknown"


__all__ = ["ErrorKind"]
