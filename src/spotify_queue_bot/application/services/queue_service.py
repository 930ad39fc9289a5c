"""Playback Queue and Synchronizer

Owns the ordered list of pending entries, the current entry and the
playing flag, and keeps them in step with the playback service. The
service can only be polled, so after each track starts a check is
scheduled for when it should have finished; the check confirms the track
really is over before advancing, and retries on adapter errors.

State machine: Idle (no current entry) -> Playing <-> Paused -> Idle.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from spotify_queue_bot.domain.music.entities import AddResult, QueueEntry
from spotify_queue_bot.domain.music.value_objects import ResourceType, SpotifyResource
from spotify_queue_bot.domain.shared.exceptions import (
    AlreadyPlayingError,
    NoCurrentEntryError,
    NoProgressError,
    NotPlayingError,
    PlaybackNotActiveError,
    WrongTrackError,
)
from spotify_queue_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...config.settings import QueueSettings
    from ..interfaces.playback_adapter import PlaybackAdapter
    from .scheduler import TaskScheduler

logger = logging.getLogger(__name__)

PLAYBACK_CHECK_KEY = "playback-check"
CHECK_RETRY_DELAY_MS = 2000
MIN_RECHECK_DELAY_MS = 1000


class PlaybackQueue:
    """The single playback queue of a running bot."""

    def __init__(
        self,
        *,
        playback_adapter: PlaybackAdapter,
        scheduler: TaskScheduler,
        settings: QueueSettings,
    ) -> None:
        self._adapter = playback_adapter
        self._scheduler = scheduler
        self._settings = settings

        self._entries: list[QueueEntry] = []
        self._current: QueueEntry | None = None
        self._playing = False
        self._queue_ids = itertools.count(1)
        self._group_ids = itertools.count(1)

    # === Queries ===

    @property
    def is_playing(self) -> bool:
        return self._playing

    def get_queue(self) -> tuple[QueueEntry, ...]:
        return tuple(self._entries)

    def get_current_entry(self) -> QueueEntry | None:
        return self._current

    # === Mutations ===

    async def add(
        self,
        resource: SpotifyResource,
        creator_id: int,
        track_limit: int | None = None,
    ) -> AddResult:
        """Resolve *resource* and append its playable tracks.

        Exactly one group id is allocated per call, even when nothing ends up
        playable. Playback is never started here.
        """
        group_id = next(self._group_ids)

        if resource.type is ResourceType.TRACK:
            track = await self._adapter.resolve_track(resource.id)
            name = track.name
            group_name = None
            tracks = [track] if track.is_playable else []
        else:
            if resource.type is ResourceType.ALBUM:
                group = await self._adapter.resolve_album(resource.id)
            else:
                group = await self._adapter.resolve_playlist(resource.id)
            name = group_name = group.name
            tracks = list(group.playable_tracks[: self._effective_limit(track_limit)])

        entries = [
            QueueEntry.from_track(
                track,
                creator_id=creator_id,
                queue_id=next(self._queue_ids),
                group_id=group_id,
                group_name=group_name,
            )
            for track in tracks
        ]
        self._entries.extend(entries)

        logger.info(
            LogTemplates.QUEUE_ADDED, len(entries), resource.type.value, name, group_id, creator_id
        )
        return AddResult(
            name=name,
            type=resource.type,
            creator_id=creator_id,
            group_id=group_id,
            tracks_added=len(entries),
        )

    async def next_track(self) -> QueueEntry | None:
        """Pop the front entry and play it.

        On an empty queue the current entry is cleared and playback is marked
        stopped; the adapter is left alone. If the adapter fails to play, the
        popped entry is gone for good and the error propagates.
        """
        if not self._entries:
            self._scheduler.cancel(PLAYBACK_CHECK_KEY)
            self._current = None
            self._playing = False
            logger.info(LogTemplates.QUEUE_DRAINED)
            return None

        entry = self._entries.pop(0)
        try:
            await self._adapter.play(entry.play_uri)
        except Exception:
            logger.warning(LogTemplates.QUEUE_PLAY_FAILED, entry.name, entry.queue_id)
            raise

        self._current = entry
        self._playing = True
        self._schedule_check(entry, entry.duration_ms)
        logger.info(LogTemplates.QUEUE_PLAYING, entry.name, entry.queue_id)
        return entry

    async def pause(self) -> None:
        if not self._playing:
            raise NotPlayingError()

        entry = self._current
        if entry is None:
            self._playing = False
            return

        info = await self._adapter.current_playback_info()
        if not info.is_playing:
            raise PlaybackNotActiveError()
        if info.track_uri != entry.play_uri:
            raise WrongTrackError(entry.play_uri, info.track_uri)
        if not info.progress_ms:
            raise NoProgressError()

        await self._adapter.pause()
        self._scheduler.cancel(PLAYBACK_CHECK_KEY)

        paused_at = info.progress_ms if entry.duration_ms - info.progress_ms > 0 else None
        self._current = entry.with_paused_progress(paused_at)
        self._playing = False
        logger.info(LogTemplates.QUEUE_PAUSED, entry.name, paused_at)

    async def resume(self) -> QueueEntry:
        if self._playing:
            raise AlreadyPlayingError()

        entry = self._current
        if entry is None:
            raise NoCurrentEntryError()

        await self._adapter.play(entry.play_uri, entry.paused_progress_ms)

        remaining_ms = entry.remaining_ms()
        resumed = entry.with_paused_progress(None)
        self._current = resumed
        self._playing = True
        self._schedule_check(resumed, remaining_ms)
        logger.info(LogTemplates.QUEUE_RESUMED, entry.name, entry.paused_progress_ms or 0)
        return resumed

    async def remove_tracks(self, queue_ids: Iterable[int]) -> None:
        """Drop entries by queue id, advancing if the current entry is among them."""
        ids = set(queue_ids)
        if not ids:
            return

        self._entries = [entry for entry in self._entries if entry.queue_id not in ids]
        logger.info(LogTemplates.QUEUE_REMOVED, sorted(ids))

        if self._current is not None and self._current.queue_id in ids:
            was_playing = self._playing
            if await self.next_track() is None and was_playing:
                await self._stop_quietly()

    async def stop(self) -> None:
        """Pause the playback service regardless of queue state."""
        await self._adapter.pause()

    def clear(self) -> None:
        """Drop every pending entry. The current entry is kept."""
        self._entries.clear()

    def shutdown(self) -> None:
        self._scheduler.cancel(PLAYBACK_CHECK_KEY)

    # === Reconciliation ===

    def _schedule_check(self, entry: QueueEntry, delay_ms: int) -> None:
        self._scheduler.schedule(
            PLAYBACK_CHECK_KEY, delay_ms, lambda: self._advance_if_over(entry)
        )

    def _is_current(self, entry: QueueEntry) -> bool:
        return (
            self._playing
            and self._current is not None
            and self._current.queue_id == entry.queue_id
        )

    async def _advance_if_over(self, entry: QueueEntry) -> None:
        if not self._is_current(entry):
            logger.debug(LogTemplates.QUEUE_CHECK_STALE, entry.queue_id)
            return

        try:
            info = await self._adapter.current_playback_info()
        except Exception as e:
            logger.warning(LogTemplates.QUEUE_CHECK_FAILED, entry.queue_id, CHECK_RETRY_DELAY_MS, e)
            self._schedule_check(entry, CHECK_RETRY_DELAY_MS)
            return

        if not self._is_current(entry) or info.track_uri != entry.play_uri:
            logger.debug(LogTemplates.QUEUE_CHECK_STALE, entry.queue_id)
            return

        # Missing progress means the service has stopped: treat the track as finished.
        time_left = entry.duration_ms - info.progress_ms if info.progress_ms else 0
        if time_left > 0:
            delay_ms = max(MIN_RECHECK_DELAY_MS, time_left)
            logger.debug(LogTemplates.QUEUE_CHECK_RESCHEDULE, entry.name, time_left, delay_ms)
            self._schedule_check(entry, delay_ms)
            return

        # A failed play drops only the popped entry; no retry is scheduled.
        try:
            started = await self.next_track()
        except Exception as e:
            logger.error(LogTemplates.QUEUE_CHECK_ADVANCE_FAILED, entry.queue_id, e)
            return
        if started is None:
            await self._stop_quietly()

    async def _stop_quietly(self) -> None:
        try:
            await self._adapter.pause()
        except Exception as e:
            logger.warning(LogTemplates.QUEUE_STOP_FAILED, e)

    def _effective_limit(self, track_limit: int | None) -> int:
        if not track_limit or track_limit < 0:
            return self._settings.default_track_limit
        return min(track_limit, self._settings.max_track_limit)
