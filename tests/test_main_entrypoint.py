"""
Tests for main.py - Main Entry Point

Tests for the main entry point including:
- Logging configuration
- Credential validation
- Container and client creation
- Error handling
"""

import json
import logging
from unittest.mock import MagicMock, mock_open, patch

from pydantic import SecretStr

from spotify_queue_bot.main import main, setup_logging


class TestLoggingSetup:
    """Tests for logging configuration."""

    def _make_valid_config(self) -> dict:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": {},
            "loggers": {"spotipy": {"level": "WARNING"}},
            "root": {"level": "INFO", "handlers": []},
        }

    def test_dictconfig_called_when_json_exists(self):
        """Should call dictConfig when logging_config.json exists."""
        config = self._make_valid_config()
        with (
            patch("builtins.open", mock_open(read_data=json.dumps(config))),
            patch("logging.config.dictConfig") as mock_dc,
        ):
            setup_logging()

            mock_dc.assert_called_once_with(config)

    def test_fallback_to_basicconfig_when_json_missing(self):
        """Should fallback to basicConfig when logging_config.json is missing."""
        with (
            patch("builtins.open", side_effect=FileNotFoundError),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging("DEBUG")

            mock_bc.assert_called_once()
            assert mock_bc.call_args[1]["level"] == logging.DEBUG

    def test_fallback_to_basicconfig_when_json_malformed(self):
        """Should fallback to basicConfig when JSON is malformed."""
        with (
            patch("builtins.open", mock_open(read_data="{invalid json")),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()


def _settings(token: str = "token", client_id: str = "id", client_secret: str = "secret"):
    settings = MagicMock()
    settings.log_level = "INFO"
    settings.environment = "test"
    settings.discord.token = SecretStr(token)
    settings.spotify.has_credentials = bool(client_id and client_secret)
    return settings


class TestMain:
    """Tests for main()."""

    def test_missing_token_returns_error(self):
        """Should exit with 1 when the Discord token is missing."""
        with (
            patch("spotify_queue_bot.config.settings.get_settings", return_value=_settings(token="")),
            patch("spotify_queue_bot.main.setup_logging"),
        ):
            assert main() == 1

    def test_missing_spotify_credentials_returns_error(self):
        """Should exit with 1 when Spotify credentials are missing."""
        with (
            patch(
                "spotify_queue_bot.config.settings.get_settings",
                return_value=_settings(client_secret=""),
            ),
            patch("spotify_queue_bot.main.setup_logging"),
        ):
            assert main() == 1

    def test_runs_client(self):
        """Should build the container and client, then run until shutdown."""
        settings = _settings()
        client = MagicMock()
        with (
            patch("spotify_queue_bot.config.settings.get_settings", return_value=settings),
            patch("spotify_queue_bot.main.setup_logging"),
            patch("spotify_queue_bot.config.container.create_container") as mock_container,
            patch(
                "spotify_queue_bot.infrastructure.discord.bot.create_client", return_value=client
            ) as mock_client,
        ):
            assert main() == 0

            mock_container.assert_called_once_with(settings)
            mock_client.assert_called_once_with(mock_container.return_value, settings)
            client.run_with_graceful_shutdown.assert_called_once()

    def test_keyboard_interrupt_exits_cleanly(self):
        """Should return 0 on KeyboardInterrupt."""
        client = MagicMock()
        client.run_with_graceful_shutdown.side_effect = KeyboardInterrupt
        with (
            patch("spotify_queue_bot.config.settings.get_settings", return_value=_settings()),
            patch("spotify_queue_bot.main.setup_logging"),
            patch("spotify_queue_bot.config.container.create_container"),
            patch("spotify_queue_bot.infrastructure.discord.bot.create_client", return_value=client),
        ):
            assert main() == 0

    def test_fatal_error_returns_error(self):
        """Should return 1 when the client crashes."""
        client = MagicMock()
        client.run_with_graceful_shutdown.side_effect = RuntimeError("boom")
        with (
            patch("spotify_queue_bot.config.settings.get_settings", return_value=_settings()),
            patch("spotify_queue_bot.main.setup_logging"),
            patch("spotify_queue_bot.config.container.create_container"),
            patch("spotify_queue_bot.infrastructure.discord.bot.create_client", return_value=client),
        ):
            assert main() == 1
