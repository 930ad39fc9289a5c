"""Port interface for the remote playback service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.entities import GroupInfo, TrackInfo
    from ...domain.music.value_objects import Device, PlaybackInfo, SearchResult


class PlaybackAdapter(ABC):
    """Interface for controlling playback on the music service.

    Every call may fail with an exception; none of them are assumed to be
    idempotent.
    """

    @property
    @abstractmethod
    def volume(self) -> int:
        """Last volume percentage applied to the player."""
        ...

    @abstractmethod
    async def resolve_track(self, track_id: str) -> TrackInfo:
        """Fetch metadata for a single track."""
        ...

    @abstractmethod
    async def resolve_album(self, album_id: str) -> GroupInfo:
        """Fetch an album and its tracks."""
        ...

    @abstractmethod
    async def resolve_playlist(self, playlist_id: str) -> GroupInfo:
        """Fetch a playlist and its tracks."""
        ...

    @abstractmethod
    async def play(self, uri: str, position_ms: int | None = None) -> None:
        """Start playing *uri*, optionally from *position_ms*."""
        ...

    @abstractmethod
    async def pause(self) -> None:
        """Pause playback."""
        ...

    @abstractmethod
    async def current_playback_info(self) -> PlaybackInfo:
        """Report what the service is playing and how far in."""
        ...

    @abstractmethod
    async def list_available_devices(self) -> list[Device]:
        """List devices that can be selected for playback."""
        ...

    @abstractmethod
    async def select_device(self, device: Device) -> None:
        """Transfer playback to *device*."""
        ...

    @abstractmethod
    async def set_volume(self, percent: int) -> None:
        """Set the player volume (0-100)."""
        ...

    @abstractmethod
    async def search(self, query: str) -> list[SearchResult]:
        """Search tracks and albums."""
        ...
