"""
Tests for the status query and reply helpers.

Tests for:
- NowPlayingQuery rendering
- format_duration_ms / mention
"""

import pytest

from spotify_queue_bot.application.queries.now_playing import NowPlayingQuery, format_entry
from spotify_queue_bot.domain.music.value_objects import ResourceType, SpotifyResource
from spotify_queue_bot.utils.reply import format_duration_ms, mention

from conftest import make_group

ALBUM = SpotifyResource(type=ResourceType.ALBUM, id="album")


class TestNowPlaying:
    """Tests for NowPlayingQuery.get."""

    def test_idle(self, queue):
        """Test an idle queue shows nothing."""
        assert NowPlayingQuery(queue=queue).get() == "*Paused:* Nothing\n*Queue:*"

    @pytest.mark.asyncio
    async def test_playing_with_queue(self, queue):
        """Test the current entry and numbered queue are shown."""
        await queue.add(ALBUM, creator_id=7, track_limit=2)
        await queue.next_track()

        text = NowPlayingQuery(queue=queue).get()

        assert text == (
            "*Now Playing:* Track 0 - 1:00 (<@7>)\n"
            "*Queue:*\n"
            "1: Track 1 - 1:00 (<@7>)"
        )

    @pytest.mark.asyncio
    async def test_long_queue_is_truncated(self, queue, adapter):
        """Test entries beyond the preview are summarised."""
        adapter.resolve_album.return_value = make_group(count=5)
        await queue.add(ALBUM, creator_id=7)

        lines = NowPlayingQuery(queue=queue, preview_size=2).get().splitlines()

        assert lines[-1] == "+3 more"
        assert len(lines) == 5


class TestReplyHelpers:
    """Tests for reply formatting helpers."""

    @pytest.mark.parametrize(
        "ms,expected",
        [(None, "–"), (0, "0:00"), (61_000, "1:01"), (3_725_000, "1:02:05")],
    )
    def test_format_duration(self, ms, expected):
        """Test durations render as m:ss or h:mm:ss."""
        assert format_duration_ms(ms) == expected

    def test_mention(self):
        """Test user mentions."""
        assert mention(42) == "<@42>"

    @pytest.mark.asyncio
    async def test_format_entry(self, queue):
        """Test a queue entry line."""
        await queue.add(ALBUM, creator_id=3, track_limit=1)

        assert format_entry(queue.get_queue()[0]) == "Track 0 - 1:00 (<@3>)"
