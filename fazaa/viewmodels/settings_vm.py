from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from fazaa.domain.pagination import DEFAULT_PAGE_SIZE

from ..utils.logging import env_level


def _default_debug_logging() -> bool:
    level = env_level()
    return level is not None and level <= logging.DEBUG


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    api_base_url: str = ""
    auth_token: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    page_size: int = DEFAULT_PAGE_SIZE
    refresh_min_duration_ms: int = 600
    use_mock_api: bool = False
    debug_logging: bool = field(default_factory=_default_debug_logging)


_INT_LIMITS = {
    "request_timeout_s": 1,
    "retries": 0,
    "page_size": 1,
    "refresh_min_duration_ms": 0,
}
_BOOL_KEYS = {"use_mock_api", "debug_logging"}
_STR_KEYS = {"api_base_url", "auth_token"}


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(self, *, config: Optional[SettingsConfig] = None) -> None:
        self.config = config or SettingsConfig()

    @property
    def use_mock_api(self) -> bool:
        """Offline mode is forced when no API base URL is configured."""
        return self.config.use_mock_api or not self.config.api_base_url

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model.

        Raises:
            ValueError: For non-mapping payloads, unknown keys, or values that
                cannot be coerced.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {f.name for f in fields(SettingsConfig)}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates = {key: self._coerce_config_value(key, value) for key, value in payload.items()}
        if updates:
            self.config = replace(self.config, **updates)

    def to_dict(self) -> dict:
        return asdict(self.config)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key in _INT_LIMITS:
            return self._coerce_int(key, raw, minimum=_INT_LIMITS[key])
        if key in _BOOL_KEYS:
            return self._coerce_bool(raw)
        if key in _STR_KEYS:
            return self._coerce_optional_str(raw)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: int) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except ValueError as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if coerced < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return coerced


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM().to_dict()


__all__ = ["SettingsConfig", "SettingsVM", "default_settings_payload"]
