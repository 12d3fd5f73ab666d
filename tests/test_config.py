"""Tests for configuration validation."""
import os
import pytest
from unittest.mock import patch

from lexisent.config import Settings, get_settings, reload_settings


class TestSettingsValidation:
    """Tests for Settings validation."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.lexicon_path == ""
        assert settings.max_keywords == 5
        assert settings.explanation_keywords == 3
        assert settings.max_words == 500
        assert settings.trend_threshold == 1.0

    def test_log_level_normalized(self):
        """Test that log level is upper-cased."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_unknown(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValueError, match="log_level must be one of"):
            Settings(log_level="LOUD")

    def test_limits_must_be_positive(self):
        """Test that keyword and word limits must be >= 1."""
        with pytest.raises(ValueError, match="must be >= 1"):
            Settings(max_keywords=0)

        with pytest.raises(ValueError, match="must be >= 1"):
            Settings(explanation_keywords=-2)

        with pytest.raises(ValueError, match="must be >= 1"):
            Settings(max_words=0)

    def test_trend_threshold_non_negative(self):
        """Test trend threshold range."""
        Settings(trend_threshold=0.0)

        with pytest.raises(ValueError, match="must be >= 0"):
            Settings(trend_threshold=-0.5)


class TestSettingsFromEnvironment:
    """Tests for loading settings from environment variables."""

    def test_load_from_env(self):
        """Test that settings are loaded from environment."""
        env = {
            "LOG_LEVEL": "warning",
            "LOG_JSON": "true",
            "LEXICON_PATH": "/tmp/lexicon.json",
            "MAX_KEYWORDS": "3",
            "MAX_WORDS": "50",
        }

        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.log_level == "WARNING"
        assert settings.log_json is True
        assert settings.lexicon_path == "/tmp/lexicon.json"
        assert settings.max_keywords == 3
        assert settings.max_words == 50

    def test_get_settings_is_cached(self):
        """Test that get_settings returns the same instance until reloaded."""
        with patch.dict(os.environ, {"MAX_WORDS": "42"}):
            first = get_settings()
            assert get_settings() is first
            assert first.max_words == 42

            reloaded = reload_settings()
            assert reloaded is not first
            assert get_settings() is reloaded
