"""Display names and metadata conversion for Spotify API objects."""

from __future__ import annotations

from typing import Any

from spotify_queue_bot.domain.music.entities import TrackInfo

MAX_ARTISTS = 3
UNKNOWN_ARTIST = "Unknown"


def spotify_object_name(obj: dict[str, Any]) -> str:
    """Name a track or album as ``"<name> by <artist>, <artist>"``.

    At most three artists are listed; objects without artists are credited
    to "Unknown".
    """
    artists = [artist.get("name", "") for artist in (obj.get("artists") or [])[:MAX_ARTISTS]]
    artists_text = ", ".join(artists) if artists else UNKNOWN_ARTIST
    return f"{obj.get('name', '')} by {artists_text}"


def track_info(obj: dict[str, Any]) -> TrackInfo:
    return TrackInfo(
        name=spotify_object_name(obj),
        uri=obj["uri"],
        duration_ms=obj.get("duration_ms") or 0,
        is_playable=obj.get("is_playable", True) is not False,
    )
