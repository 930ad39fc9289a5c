"""
Tests for application settings.

Tests for:
- Defaults
- Environment variable loading with nested delimiters
- Validation of limits, thresholds, emoji alphabets and log level
- Settings cache
"""

import pytest
from pydantic import ValidationError

from spotify_queue_bot.config.settings import (
    DEFAULT_OPTION_EMOJIS,
    OptionSettings,
    QueueSettings,
    Settings,
    SpotifySettings,
    VotingSettings,
    clear_settings_cache,
    get_settings,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test without a .env file or leaked configuration."""
    monkeypatch.chdir(tmp_path)
    for key in ("DISCORD__TOKEN", "SPOTIFY__CLIENT_ID", "SPOTIFY__CLIENT_SECRET", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        """Should use the documented defaults."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.queue.default_track_limit == 100
        assert settings.queue.max_track_limit == 500
        assert settings.queue.default_volume_delta == 10
        assert settings.queue.max_volume_delta == 20
        assert settings.voting.skip_threshold == 1
        assert settings.options.emojis == DEFAULT_OPTION_EMOJIS
        assert settings.discord.broadcast_channel_id is None
        assert settings.spotify.has_credentials is False


class TestEnvironment:
    """Tests for loading from environment variables."""

    def test_nested_variables(self, monkeypatch):
        """Should read nested groups using the double underscore delimiter."""
        monkeypatch.setenv("DISCORD__TOKEN", "abc")
        monkeypatch.setenv("DISCORD__BROADCAST_CHANNEL_ID", "123")
        monkeypatch.setenv("SPOTIFY__CLIENT_ID", "id")
        monkeypatch.setenv("SPOTIFY__CLIENT_SECRET", "secret")
        monkeypatch.setenv("VOTING__SKIP_THRESHOLD", "3")

        settings = Settings()

        assert settings.discord.token.get_secret_value() == "abc"
        assert settings.discord.broadcast_channel_id == 123
        assert settings.spotify.has_credentials is True
        assert settings.voting.skip_threshold == 3

    def test_get_settings_is_cached(self):
        """Should return the same instance until the cache is cleared."""
        first = get_settings()

        assert get_settings() is first
        clear_settings_cache()
        assert get_settings() is not first


class TestValidation:
    """Tests for settings validation."""

    def test_log_level_normalised(self):
        """Should upper-case valid log levels."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Should reject unknown log levels."""
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_threshold_at_least_one(self):
        """Should reject a zero skip threshold."""
        with pytest.raises(ValidationError):
            VotingSettings(skip_threshold=0)

    def test_default_limit_within_max(self):
        """Should reject a default track limit above the maximum."""
        with pytest.raises(ValidationError):
            QueueSettings(default_track_limit=10, max_track_limit=5)

    def test_default_volume_step_within_max(self):
        """Should reject a default volume step above the maximum."""
        with pytest.raises(ValidationError):
            QueueSettings(default_volume_delta=30, max_volume_delta=20)

    def test_search_limit_bounds(self):
        """Should keep the search limit between 1 and 10."""
        with pytest.raises(ValidationError):
            SpotifySettings(search_limit=0)

    def test_emojis_from_comma_string(self):
        """Should accept a comma separated emoji alphabet."""
        assert OptionSettings(emojis="a, b ,c").emojis == ("a", "b", "c")

    def test_empty_emojis(self):
        """Should reject an empty alphabet."""
        with pytest.raises(ValidationError):
            OptionSettings(emojis=[])

    def test_duplicate_emojis(self):
        """Should reject duplicate emojis."""
        with pytest.raises(ValidationError):
            OptionSettings(emojis=["a", "a"])

    def test_settings_are_frozen(self):
        """Should not allow mutation after creation."""
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.debug = True
