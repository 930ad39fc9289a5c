"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization and are handed to components through the container.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.messages import ErrorMessages

DEFAULT_OPTION_EMOJIS: tuple[str, ...] = (
    "1️⃣",
    "2️⃣",
    "3️⃣",
    "4️⃣",
    "5️⃣",
    "6️⃣",
    "7️⃣",
    "8️⃣",
    "9️⃣",
    "0️⃣",
)


class SpotifySettings(BaseModel):
    """Spotify Web API configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    client_id: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("client_id", "spotify_client_id"),
    )
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("client_secret", "spotify_client_secret"),
    )
    redirect_uri: str = "http://localhost:8080/callback"
    cache_path: str = ".spotify_cache"
    open_browser: bool = False
    market: str = "from_token"
    search_limit: int = Field(default=3, ge=1, le=10)

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id.get_secret_value() and self.client_secret.get_secret_value())


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    broadcast_channel_id: int | None = Field(
        default=None,
        ge=1,
        validation_alias=AliasChoices("broadcast_channel_id", "broadcast_channel"),
    )


class QueueSettings(BaseModel):
    """Queue and playback control configuration."""

    model_config = SettingsConfigDict(frozen=True)

    default_track_limit: int = Field(default=100, ge=1)
    max_track_limit: int = Field(default=500, ge=1)
    default_volume_delta: int = Field(default=10, ge=1, le=100)
    max_volume_delta: int = Field(default=20, ge=1, le=100)
    initial_volume: int = Field(default=50, ge=0, le=100)
    auto_select_device: bool = True

    @model_validator(mode="after")
    def validate_limits(self) -> QueueSettings:
        """Defaults must not exceed their maximums."""
        if self.default_track_limit > self.max_track_limit:
            raise ValueError(ErrorMessages.TRACK_LIMIT_EXCEEDS_MAX)
        if self.default_volume_delta > self.max_volume_delta:
            raise ValueError(ErrorMessages.VOLUME_DELTA_EXCEEDS_MAX)
        return self


class VotingSettings(BaseModel):
    """Voting configuration."""

    model_config = SettingsConfigDict(frozen=True)

    skip_threshold: int = Field(default=1, ge=1)


class OptionSettings(BaseModel):
    """Reaction prompt configuration."""

    model_config = SettingsConfigDict(frozen=True)

    emojis: tuple[str, ...] = DEFAULT_OPTION_EMOJIS

    @field_validator("emojis", mode="before")
    @classmethod
    def validate_emojis(cls, v: tuple[str, ...] | list[str] | str) -> tuple[str, ...]:
        """Accept comma-separated strings and lists; reject empty or duplicate alphabets."""
        if isinstance(v, str):
            v = [part.strip() for part in v.split(",") if part.strip()]
        v = tuple(v)
        if not v:
            raise ValueError(ErrorMessages.EMPTY_EMOJI_ALPHABET)
        if len(set(v)) != len(v):
            raise ValueError(ErrorMessages.DUPLICATE_EMOJI)
        return v


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__BROADCAST_CHANNEL_ID (nested with prefix)
    - SPOTIFY__CLIENT_ID, SPOTIFY__CLIENT_SECRET, SPOTIFY__REDIRECT_URI
    - QUEUE__DEFAULT_TRACK_LIMIT, VOTING__SKIP_THRESHOLD, OPTIONS__EMOJIS
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    spotify: SpotifySettings = Field(default_factory=SpotifySettings)
    queue: QueueSettings = Field(default_factory=QueueSettings)
    voting: VotingSettings = Field(default_factory=VotingSettings)
    options: OptionSettings = Field(default_factory=OptionSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels))
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
