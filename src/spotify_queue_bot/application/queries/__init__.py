"""
Application Queries

Read-only views over the playback queue.
"""

from spotify_queue_bot.application.queries.now_playing import NowPlayingQuery, format_entry

__all__ = ["NowPlayingQuery", "format_entry"]
