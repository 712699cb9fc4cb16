"""Unit tests for config/settings.py."""

import pytest

from config.settings import Settings, get_settings
from core.exceptions import ConfigurationError


class TestResolvedDefaultCountry:
    def test_default(self):
        assert Settings(default_country="us").resolved_default_country == "us"

    def test_lowercased(self):
        assert Settings(default_country=" GB ").resolved_default_country == "gb"

    def test_blank_falls_back_to_us(self):
        assert Settings(default_country="").resolved_default_country == "us"

    @pytest.mark.parametrize("value", ["usa", "u", "1a"])
    def test_invalid_raises(self, value):
        with pytest.raises(ConfigurationError):
            Settings(default_country=value).resolved_default_country


class TestSettingsFromEnv:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("ITUNES_RESULT_LIMIT", "25")
        monkeypatch.setenv("DEFAULT_COUNTRY", "jp")
        s = Settings()
        assert s.itunes_result_limit == 25
        assert s.resolved_default_country == "jp"


class TestGetSettings:
    def test_returns_settings_instance(self):
        get_settings.cache_clear()
        s = get_settings()
        assert isinstance(s, Settings)

    def test_caches_result(self):
        get_settings.cache_clear()
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2
        get_settings.cache_clear()
