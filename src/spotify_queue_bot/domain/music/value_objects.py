"""Immutable value objects for the music bounded context."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

_URL_PATTERN = re.compile(
    r"^open\.spotify\.com/(?:intl-[a-z]+/)?(?P<type>track|album|playlist)/(?P<id>[A-Za-z0-9]+)(?:[/?#].*)?$"
)
_URI_PATTERN = re.compile(r"^spotify:(?P<type>track|album|playlist):(?P<id>[A-Za-z0-9]+)$")
_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


class ResourceType(str, Enum):
    """Kinds of Spotify objects that can be queued."""

    TRACK = "track"
    ALBUM = "album"
    PLAYLIST = "playlist"

    @property
    def is_group(self) -> bool:
        return self is not ResourceType.TRACK


@dataclass(frozen=True)
class SpotifyResource:
    """A reference to a Spotify track, album or playlist."""

    type: ResourceType
    id: str

    @property
    def uri(self) -> str:
        return f"spotify:{self.type.value}:{self.id}"

    @classmethod
    def parse(cls, text: str) -> SpotifyResource | None:
        """Parse a share link or URI.

        Accepts ``https://open.spotify.com/<type>/<id>`` (query strings are
        ignored) and ``spotify:<type>:<id>``, optionally wrapped in ``<...>``
        as chat clients do to suppress embeds. Returns None when the text is
        not a recognised resource.
        """
        cleaned = text.strip().lstrip("<").rstrip(">")
        cleaned = _SCHEME_PATTERN.sub("", cleaned)
        if cleaned.startswith("www."):
            cleaned = cleaned[4:]

        match = _URL_PATTERN.match(cleaned) or _URI_PATTERN.match(cleaned)
        if match is None:
            return None
        return cls(type=ResourceType(match.group("type")), id=match.group("id"))


class PlaybackInfo(BaseModel):
    """What the playback service reports is currently happening."""

    model_config = ConfigDict(frozen=True)

    is_playing: bool = False
    progress_ms: int | None = Field(default=None, ge=0)
    track_uri: str | None = None


class Device(BaseModel):
    """A playback device exposed by the music service."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str = "Unknown"
    is_active: bool = False


class SearchResult(BaseModel):
    """A single search hit that can be queued."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ResourceType
    id: str

    @property
    def resource(self) -> SpotifyResource:
        return SpotifyResource(type=self.type, id=self.id)
