"""Core domain entities for the music bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from spotify_queue_bot.domain.music.value_objects import ResourceType


class TrackInfo(BaseModel):
    """Track metadata resolved by the playback adapter."""

    model_config = ConfigDict(frozen=True)

    name: str
    uri: str
    duration_ms: int = Field(ge=0)
    is_playable: bool = True


class GroupInfo(BaseModel):
    """An album or playlist and its tracks."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ResourceType
    tracks: tuple[TrackInfo, ...] = ()

    @property
    def playable_tracks(self) -> tuple[TrackInfo, ...]:
        return tuple(track for track in self.tracks if track.is_playable)


class QueueEntry(BaseModel):
    """Immutable snapshot of one queue slot.

    ``queue_id`` is unique for the lifetime of the process and never reused.
    Every entry inserted by the same add call shares one ``group_id``;
    ``group_name`` is only set for album and playlist entries.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    play_uri: str
    duration_ms: int = Field(ge=0)
    is_playable: bool = True
    creator_id: int
    queue_id: int = Field(ge=1)
    group_id: int = Field(ge=1)
    group_name: str | None = None
    paused_progress_ms: int | None = Field(default=None, ge=0)

    def remaining_ms(self) -> int:
        """Time left in the track, measured from the paused position if any."""
        return max(0, self.duration_ms - (self.paused_progress_ms or 0))

    def with_paused_progress(self, progress_ms: int | None) -> QueueEntry:
        return self.model_copy(update={"paused_progress_ms": progress_ms})

    @classmethod
    def from_track(
        cls,
        track: TrackInfo,
        *,
        creator_id: int,
        queue_id: int,
        group_id: int,
        group_name: str | None = None,
    ) -> QueueEntry:
        return cls(
            name=track.name,
            play_uri=track.uri,
            duration_ms=track.duration_ms,
            is_playable=track.is_playable,
            creator_id=creator_id,
            queue_id=queue_id,
            group_id=group_id,
            group_name=group_name,
        )


class AddResult(BaseModel):
    """Outcome of queueing one resource."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ResourceType
    creator_id: int
    group_id: int
    tracks_added: int = Field(ge=0)
