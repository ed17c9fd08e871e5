from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict

from fazaa.domain.ports import SettingsStoragePort

log = logging.getLogger(__name__)


class StorageLocal(SettingsStoragePort):
    """Local filesystem storage for user settings (JSON)."""

    FILENAME = "user_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, self.FILENAME)

    def load_user_settings(self) -> Dict[str, Any]:
        path = self.settings_path
        if not os.path.exists(path):
            return {}
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: settings file must contain a JSON object.")
        return data

    def save_user_settings(self, payload: Dict[str, Any]) -> None:
        os.makedirs(self.root, exist_ok=True)
        path = self.settings_path
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2, sort_keys=True)
        log.debug("Saved user settings to %s", path)


__all__ = ["StorageLocal"]
