"""Tests for settings loading."""

import json

import pytest

import config as config_module
from config import DEFAULT_CATALOG_API_URL, DEFAULT_USER_ID, StorefrontConfig


read_settings = config_module._load_settings_file


ENV_KEYS = [
    "SECRET_KEY",
    "DATABASE_URL",
    "CATALOG_API_URL",
    "CATALOG_TIMEOUT",
    "STOREFRONT_USER_ID",
    "LOG_LEVEL",
    "HOST",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setattr(config_module, "_load_settings_file", lambda path: {})


class TestLoad:
    def test_defaults(self):
        cfg = StorefrontConfig.load()
        assert cfg.catalog_api_url == DEFAULT_CATALOG_API_URL
        assert cfg.catalog_timeout == 3.0
        assert cfg.default_user_id == DEFAULT_USER_ID
        assert cfg.port == 5000
        assert cfg.database_url.startswith("sqlite:///")
        assert cfg.product_data_file.name == "products.json"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CATALOG_API_URL", "http://catalog.local/")
        monkeypatch.setenv("CATALOG_TIMEOUT", "1.5")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        cfg = StorefrontConfig.load()
        assert cfg.catalog_api_url == "http://catalog.local"
        assert cfg.catalog_timeout == 1.5
        assert cfg.port == 8080
        assert cfg.log_level == "DEBUG"

    def test_empty_catalog_url_disables_remote(self, monkeypatch):
        monkeypatch.setenv("CATALOG_API_URL", "")
        assert StorefrontConfig.load().catalog_api_url == ""

    def test_settings_file_wins_over_environment(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_USER_ID", "from-env")
        monkeypatch.setattr(config_module, "_load_settings_file", lambda path: {"STOREFRONT_USER_ID": "from-file"})
        assert StorefrontConfig.load().default_user_id == "from-file"

    @pytest.mark.parametrize("key,value", [("PORT", "http"), ("PORT", "70000"), ("CATALOG_TIMEOUT", "0")])
    def test_invalid_numbers(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        with pytest.raises(ValueError):
            StorefrontConfig.load()


class TestSettingsFile:
    def test_reads_object(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"PORT": 9000}), encoding="utf-8")
        assert read_settings(path) == {"PORT": 9000}

    def test_missing_file_is_empty(self, tmp_path):
        assert read_settings(tmp_path / "missing.json") == {}

    @pytest.mark.parametrize("content", ["[1, 2]", "{not json"])
    def test_rejects_bad_content(self, tmp_path, content):
        path = tmp_path / "settings.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValueError):
            read_settings(path)
