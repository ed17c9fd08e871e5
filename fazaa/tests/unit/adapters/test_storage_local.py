from __future__ import annotations

import json

import pytest

from fazaa.adapters.storage_local import StorageLocal


def test_missing_settings_file_loads_empty(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path / "nowhere"))

    assert storage.load_user_settings() == {}


def test_save_then_load_user_settings(tmp_path) -> None:
    root = tmp_path / "settings"
    storage = StorageLocal(root_dir=str(root))
    payload = {"api_base_url": "http://api.local", "page_size": 25}

    storage.save_user_settings(payload)

    assert (root / "user_settings.json").exists()
    assert storage.load_user_settings() == payload


def test_non_object_settings_are_rejected(tmp_path) -> None:
    (tmp_path / "user_settings.json").write_text(json.dumps([1, 2]), encoding="utf-8")

    with pytest.raises(ValueError):
        StorageLocal(root_dir=str(tmp_path)).load_user_settings()
