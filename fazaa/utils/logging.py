"""Root logger setup for the orders client.

The effective level is taken from ``FAZAA_LOG_LEVEL`` (a level name or
number) when set, else DEBUG when ``FAZAA_DEBUG`` or ``FAZAA_DEBUG_LOGGING``
is truthy, else from the persisted ``debug_logging`` preference.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

_TRUTHY = {"1", "true", "yes", "on"}


def env_level() -> Optional[int]:
    """Level forced through the environment, ``None`` when nothing is forced."""
    raw = os.getenv("FAZAA_LOG_LEVEL", "").strip()
    if raw:
        level = int(raw) if raw.isdigit() else logging.getLevelName(raw.upper())
        if isinstance(level, int):
            return level
    for flag in ("FAZAA_DEBUG", "FAZAA_DEBUG_LOGGING"):
        if os.getenv(flag, "").strip().lower() in _TRUTHY:
            return logging.DEBUG
    return None


def configure_root(debug: bool = False) -> int:
    """Install the console handler once and set the root level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    return apply_preferences(debug)


def apply_preferences(debug_enabled: bool) -> int:
    """Set the root level from settings; environment overrides win."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


__all__ = ["apply_preferences", "configure_root", "env_level"]
