"""Spotify Web API adapter built on spotipy."""

from spotify_queue_bot.infrastructure.spotify.adapter import SpotipyPlaybackAdapter
from spotify_queue_bot.infrastructure.spotify.names import spotify_object_name

__all__ = ["SpotipyPlaybackAdapter", "spotify_object_name"]
