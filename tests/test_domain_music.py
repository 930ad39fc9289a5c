"""
Tests for the music domain.

Tests for:
- SpotifyResource parsing from links and URIs
- QueueEntry helpers
- GroupInfo playable filtering
"""

import pytest

from spotify_queue_bot.domain.music import GroupInfo, QueueEntry, ResourceType, SpotifyResource

from conftest import make_track


class TestSpotifyResourceParse:
    """Tests for SpotifyResource.parse."""

    @pytest.mark.parametrize(
        "text,type,id",
        [
            ("https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC", ResourceType.TRACK, "4uLU6hMCjMI75M1A2tKUQC"),
            ("https://open.spotify.com/album/abc123?si=xyz", ResourceType.ALBUM, "abc123"),
            ("http://open.spotify.com/playlist/P1", ResourceType.PLAYLIST, "P1"),
            ("open.spotify.com/intl-de/track/T1", ResourceType.TRACK, "T1"),
            ("https://www.open.spotify.com/track/T2", ResourceType.TRACK, "T2"),
            ("<https://open.spotify.com/track/T3>", ResourceType.TRACK, "T3"),
            ("spotify:album:A1", ResourceType.ALBUM, "A1"),
        ],
    )
    def test_valid_resources(self, text, type, id):
        """Should accept share links and URIs."""
        assert SpotifyResource.parse(text) == SpotifyResource(type=type, id=id)

    @pytest.mark.parametrize(
        "text",
        [
            "https://open.spotify.com/artist/X1",
            "https://example.com/track/X1",
            "spotify:episode:E1",
            "not a link",
            "",
        ],
    )
    def test_invalid_resources(self, text):
        """Should reject anything that is not a track, album or playlist."""
        assert SpotifyResource.parse(text) is None

    def test_uri(self):
        """Should render the canonical URI."""
        assert SpotifyResource(type=ResourceType.PLAYLIST, id="P1").uri == "spotify:playlist:P1"

    def test_group_types(self):
        """Should treat albums and playlists as groups."""
        assert ResourceType.ALBUM.is_group
        assert ResourceType.PLAYLIST.is_group
        assert not ResourceType.TRACK.is_group


class TestQueueEntry:
    """Tests for QueueEntry."""

    def _entry(self, **overrides) -> QueueEntry:
        return QueueEntry.from_track(
            make_track(duration_ms=10_000), creator_id=7, queue_id=1, group_id=1, **overrides
        )

    def test_remaining_from_start(self):
        """Should report the full duration when never paused."""
        assert self._entry().remaining_ms() == 10_000

    def test_remaining_from_paused_position(self):
        """Should measure from the paused position."""
        assert self._entry().with_paused_progress(4_000).remaining_ms() == 6_000

    def test_entries_are_immutable(self):
        """Should not allow mutation."""
        entry = self._entry()

        with pytest.raises(Exception):
            entry.queue_id = 5


class TestGroupInfo:
    """Tests for GroupInfo."""

    def test_playable_tracks(self):
        """Should filter out unplayable tracks in order."""
        group = GroupInfo(
            name="G",
            type=ResourceType.ALBUM,
            tracks=(
                make_track(name="a"),
                make_track(name="b", is_playable=False),
                make_track(name="c"),
            ),
        )

        assert [t.name for t in group.playable_tracks] == ["a", "c"]
