"""Tests for install_reporter.data.settings — SettingsDB SQLite operations."""

from __future__ import annotations

import os

from install_reporter.data.settings import SettingsDB


# ── Config ────────────────────────────────────────────────────────────


class TestConfig:
    """get_config / set_config / set."""

    def test_get_config_missing_key_returns_none(self, temp_settings: SettingsDB):
        assert temp_settings.get_config("nonexistent_key") is None

    def test_set_config_creates_new_key(self, temp_settings: SettingsDB):
        temp_settings.set_config("opencuts-url", "https://example.org")
        assert temp_settings.get_config("opencuts-url") == "https://example.org"

    def test_set_config_overwrites_existing(self, temp_settings: SettingsDB):
        temp_settings.set_config("opencuts_token", "one")
        temp_settings.set_config("opencuts_token", "two")
        assert temp_settings.get_config("opencuts_token") == "two"

    def test_set_is_set_config(self, temp_settings: SettingsDB):
        temp_settings.set("opencuts_token", "asdf")
        assert temp_settings.get_config("opencuts_token") == "asdf"


class TestPersistence:
    def test_survives_reopen(self, tmp_path):
        db_path = str(tmp_path / "settings.db")
        store = SettingsDB(db_path=db_path)
        store.set("opencuts_token", "asdf")
        store.close()

        reopened = SettingsDB(db_path=db_path)
        assert reopened.get_config("opencuts_token") == "asdf"
        reopened.close()

    def test_creates_parent_directory(self, tmp_path):
        db_path = str(tmp_path / "nested" / "dir" / "settings.db")
        store = SettingsDB(db_path=db_path)
        assert os.path.isdir(os.path.dirname(db_path))
        store.close()

    def test_close_is_idempotent(self, temp_settings: SettingsDB):
        temp_settings.close()
        temp_settings.close()
        # Connection is reopened lazily
        assert temp_settings.get_config("anything") is None
