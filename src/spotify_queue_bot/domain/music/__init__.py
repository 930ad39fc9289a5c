"""
Music Bounded Context

Queue entries, resolved track metadata and Spotify resource references.
"""

from spotify_queue_bot.domain.music.entities import AddResult, GroupInfo, QueueEntry, TrackInfo
from spotify_queue_bot.domain.music.value_objects import (
    Device,
    PlaybackInfo,
    ResourceType,
    SearchResult,
    SpotifyResource,
)

__all__ = [
    "AddResult",
    "GroupInfo",
    "QueueEntry",
    "TrackInfo",
    "Device",
    "PlaybackInfo",
    "ResourceType",
    "SearchResult",
    "SpotifyResource",
]
