"""Tests for implindex.core.settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from implindex.core.settings import ImplIndexSettings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("IMPLINDEX_LOG_LEVEL", raising=False)
        settings = ImplIndexSettings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.fragments_dir == Path("implementors")
        assert settings.fragment_suffixes == [".js", ".json"]
        assert settings.strict_fragments is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("IMPLINDEX_LOG_LEVEL", "debug")
        monkeypatch.setenv("IMPLINDEX_LOG_FORMAT", "json")
        monkeypatch.setenv("IMPLINDEX_STRICT_FRAGMENTS", "true")
        settings = ImplIndexSettings()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.strict_fragments is True

    def test_invalid_level(self, monkeypatch):
        monkeypatch.setenv("IMPLINDEX_LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            ImplIndexSettings()

    def test_get_settings_caches(self):
        assert get_settings() is get_settings()
        assert get_settings(_force_reload=True) is not None
