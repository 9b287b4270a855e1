"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

from chatlog.config import Settings, get_settings, reset_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CHATLOG_STORAGE_DIR", raising=False)
        settings = Settings(_env_file=None)
        assert settings.storage_dir == Path(".chatlog")
        assert settings.preview_chars == 50
        assert settings.outline_chars == 60

    def test_derived_paths(self, tmp_path):
        settings = Settings(storage_dir=tmp_path)
        assert settings.db_path == tmp_path / "library.db"
        assert settings.prefs_path == tmp_path / "prefs.json"

    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CHATLOG_STORAGE_DIR", str(tmp_path))
        monkeypatch.setenv("CHATLOG_PREVIEW_CHARS", "20")
        settings = Settings(_env_file=None)
        assert settings.storage_dir == tmp_path
        assert settings.preview_chars == 20

    def test_ensure_storage_dir(self, tmp_path):
        settings = Settings(storage_dir=tmp_path / "a" / "b")
        settings.ensure_storage_dir()
        assert settings.storage_dir.is_dir()

    def test_get_settings_cached(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CHATLOG_STORAGE_DIR", str(tmp_path))
        reset_settings()
        try:
            assert get_settings() is get_settings()
            assert get_settings().storage_dir == tmp_path
        finally:
            reset_settings()
