from __future__ import annotations

from pathlib import Path

import pytest

from fazaa.adapters.storage_local import StorageLocal
from fazaa.viewmodels.settings_vm import SettingsVM, default_settings_payload


def test_apply_dict_updates_flat_keys() -> None:
    vm = SettingsVM()
    vm.apply_dict(
        {
            "api_base_url": "  https://api.example.test/v1 ",
            "auth_token": "secret-token",
            "request_timeout_s": "12",
            "retries": 0,
            "page_size": 30,
            "refresh_min_duration_ms": 250,
            "use_mock_api": "no",
            "debug_logging": "on",
        }
    )

    cfg = vm.config
    assert cfg.api_base_url == "https://api.example.test/v1"
    assert cfg.auth_token == "secret-token"
    assert cfg.request_timeout_s == 12
    assert cfg.retries == 0
    assert cfg.page_size == 30
    assert cfg.refresh_min_duration_ms == 250
    assert cfg.use_mock_api is False
    assert cfg.debug_logging is True
    assert vm.use_mock_api is False


def test_mock_api_is_forced_without_base_url() -> None:
    vm = SettingsVM()

    assert vm.use_mock_api is True

    vm.apply_dict({"api_base_url": "https://api.example.test", "use_mock_api": True})
    assert vm.use_mock_api is True


@pytest.mark.parametrize(
    "payload",
    [
        {"unknown_key": 1},
        {"page_size": 0},
        {"retries": -1},
        {"request_timeout_s": "soon"},
        {"page_size": True},
        {"refresh_min_duration_ms": [600]},
    ],
)
def test_apply_dict_rejects_invalid_payloads(payload) -> None:
    vm = SettingsVM()
    before = vm.to_dict()

    with pytest.raises(ValueError):
        vm.apply_dict(payload)

    assert vm.to_dict() == before


def test_settings_roundtrip_through_storage(tmp_path: Path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    assert storage.load_user_settings() == {}

    vm = SettingsVM()
    vm.apply_dict({"api_base_url": "https://orders.example", "page_size": 15})
    storage.save_user_settings(vm.to_dict())

    restored = SettingsVM()
    restored.apply_dict(storage.load_user_settings())

    assert restored.config == vm.config
    assert set(default_settings_payload()) == set(vm.to_dict())
