"""Spotify playback adapter.

spotipy is synchronous, so every Web API call runs in a worker thread via
``asyncio.to_thread``. Authorization uses the OAuth authorization code
flow with a file token cache; the first run prints an authorization URL
and waits for the redirect URL to be pasted back.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import spotipy
from spotipy.cache_handler import CacheFileHandler
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOAuth

from spotify_queue_bot.application.interfaces.playback_adapter import PlaybackAdapter
from spotify_queue_bot.domain.music.entities import GroupInfo, TrackInfo
from spotify_queue_bot.domain.music.value_objects import (
    Device,
    PlaybackInfo,
    ResourceType,
    SearchResult,
)
from spotify_queue_bot.domain.shared.exceptions import DeviceUnavailableError, PlaybackAdapterError
from spotify_queue_bot.domain.shared.messages import LogTemplates

from .names import spotify_object_name, track_info

if TYPE_CHECKING:
    from ...config.settings import SpotifySettings

logger = logging.getLogger(__name__)

SCOPES = (
    "user-read-playback-state",
    "user-read-currently-playing",
    "user-modify-playback-state",
)

R = TypeVar("R")


def create_spotify_client(settings: SpotifySettings) -> spotipy.Spotify:
    auth_manager = SpotifyOAuth(
        client_id=settings.client_id.get_secret_value(),
        client_secret=settings.client_secret.get_secret_value(),
        redirect_uri=settings.redirect_uri,
        scope=" ".join(SCOPES),
        cache_handler=CacheFileHandler(cache_path=settings.cache_path),
        open_browser=settings.open_browser,
    )
    return spotipy.Spotify(auth_manager=auth_manager)


class SpotipyPlaybackAdapter(PlaybackAdapter):
    def __init__(
        self,
        settings: SpotifySettings,
        *,
        client: spotipy.Spotify | None = None,
        initial_volume: int = 50,
    ) -> None:
        self._settings = settings
        self._client = client
        self._volume = initial_volume
        self._device_id: str | None = None

    @property
    def client(self) -> spotipy.Spotify:
        if self._client is None:
            self._client = create_spotify_client(self._settings)
        return self._client

    @property
    def volume(self) -> int:
        return self._volume

    @property
    def device_id(self) -> str | None:
        return self._device_id

    async def authorize(self) -> None:
        """Make sure a usable token is cached before the bot starts taking commands."""
        await self._call("current_user", self.client.current_user)

    # === Catalogue ===

    async def resolve_track(self, track_id: str) -> TrackInfo:
        obj = await self._call("track", self.client.track, track_id, market=self._settings.market)
        return track_info(obj)

    async def resolve_album(self, album_id: str) -> GroupInfo:
        obj = await self._call("album", self.client.album, album_id, market=self._settings.market)
        items = await self._collect_pages(obj["tracks"])
        return GroupInfo(
            name=spotify_object_name(obj),
            type=ResourceType.ALBUM,
            tracks=tuple(track_info(item) for item in items if item),
        )

    async def resolve_playlist(self, playlist_id: str) -> GroupInfo:
        obj = await self._call(
            "playlist", self.client.playlist, playlist_id, market=self._settings.market
        )
        items = await self._collect_pages(obj["tracks"])
        # Removed and local tracks come back with a null or URI-less track object.
        tracks = [item["track"] for item in items if item and item.get("track")]
        return GroupInfo(
            name=obj.get("name", ""),
            type=ResourceType.PLAYLIST,
            tracks=tuple(track_info(track) for track in tracks if track.get("uri")),
        )

    async def search(self, query: str) -> list[SearchResult]:
        response = await self._call(
            "search",
            self.client.search,
            query,
            limit=self._settings.search_limit,
            type="track,album",
            market=self._settings.market,
        )
        results = [
            SearchResult(name=spotify_object_name(item), type=ResourceType.TRACK, id=item["id"])
            for item in response.get("tracks", {}).get("items", [])
            if item
        ]
        results.extend(
            SearchResult(name=spotify_object_name(item), type=ResourceType.ALBUM, id=item["id"])
            for item in response.get("albums", {}).get("items", [])
            if item
        )
        return results

    # === Playback ===

    async def play(self, uri: str, position_ms: int | None = None) -> None:
        logger.debug("Playing %s from %s", uri, position_ms)
        await self._call("repeat", self.client.repeat, "off", device_id=self._device_id)
        await self._call("volume", self.client.volume, self._volume, device_id=self._device_id)
        await self._call(
            "start_playback",
            self.client.start_playback,
            device_id=self._device_id,
            uris=[uri],
            position_ms=position_ms,
        )

    async def pause(self) -> None:
        await self._call("pause_playback", self.client.pause_playback, device_id=self._device_id)

    async def set_volume(self, percent: int) -> None:
        self._volume = percent
        await self._call("volume", self.client.volume, percent, device_id=self._device_id)

    async def current_playback_info(self) -> PlaybackInfo:
        response = await self._call("current_user_playing_track", self.client.current_user_playing_track)
        if not response:
            return PlaybackInfo(is_playing=False)
        item = response.get("item") or {}
        return PlaybackInfo(
            is_playing=bool(response.get("is_playing")),
            progress_ms=response.get("progress_ms"),
            track_uri=item.get("uri"),
        )

    # === Devices ===

    async def list_available_devices(self) -> list[Device]:
        response = await self._call("devices", self.client.devices)
        return [
            Device(
                id=device["id"],
                name=device.get("name", ""),
                type=device.get("type", "Unknown"),
                is_active=bool(device.get("is_active")),
            )
            for device in response.get("devices", [])
            if device.get("id") and not device.get("is_restricted")
        ]

    async def select_device(self, device: Device) -> None:
        available = await self.list_available_devices()
        if not any(candidate.id == device.id for candidate in available):
            raise DeviceUnavailableError(device.name)

        self._device_id = device.id
        logger.info("Set playback device to %s (%s)", device.name, device.id)
        await self._call(
            "transfer_playback", self.client.transfer_playback, device.id, force_play=False
        )

    # === Helpers ===

    async def _collect_pages(self, page: dict[str, Any] | None) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        while page:
            items.extend(page.get("items") or [])
            if not page.get("next"):
                break
            page = await self._call("next", self.client.next, page)
        return items

    async def _call(self, name: str, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except SpotifyException as e:
            logger.warning(LogTemplates.SPOTIFY_CALL_FAILED, name, e)
            raise PlaybackAdapterError(e.msg or str(e)) from e
