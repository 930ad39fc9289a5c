"""
Playback Controller

User-facing playback actions: add, play, pause and volume. Every action
returns an ActionResult; adapter failures are logged and reported back
to the user instead of raised.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spotify_queue_bot.domain.music.value_objects import SpotifyResource
from spotify_queue_bot.domain.shared.messages import ReplyMessages
from spotify_queue_bot.utils.reply import mention

from ..services.results import ActionResult

if TYPE_CHECKING:
    from ...config.settings import QueueSettings
    from ..interfaces.playback_adapter import PlaybackAdapter
    from ..services.queue_service import PlaybackQueue

logger = logging.getLogger(__name__)


def player_error_message(prefix: str, error: Exception) -> str:
    """Append the error text to *prefix* when there is any."""
    detail = str(error)
    if not detail:
        return prefix
    return ReplyMessages.PLAYER_ERROR.format(prefix=prefix, error=detail)


class PlaybackController:
    def __init__(
        self,
        *,
        queue: PlaybackQueue,
        playback_adapter: PlaybackAdapter,
        settings: QueueSettings,
    ) -> None:
        self._queue = queue
        self._adapter = playback_adapter
        self._settings = settings

    async def add(self, creator_id: int, resource_text: str, limit: int | None = None) -> ActionResult:
        resource = SpotifyResource.parse(resource_text)
        if resource is None:
            return ActionResult.fail(ReplyMessages.INVALID_RESOURCE)

        try:
            result = await self._queue.add(resource, creator_id, limit)
        except Exception:
            logger.exception("Failed to add %s", resource.uri)
            return ActionResult.fail(ReplyMessages.ADD_FAILED)

        if result.tracks_added == 0:
            return ActionResult.fail(ReplyMessages.NO_PLAYABLE_TRACK)
        if result.type.is_group:
            return ActionResult.ok(
                ReplyMessages.ADDED_GROUP.format(
                    creator=mention(creator_id),
                    count=result.tracks_added,
                    type=result.type.value,
                    name=result.name,
                )
            )
        return ActionResult.ok(ReplyMessages.ADDED_TRACK.format(creator=mention(creator_id), name=result.name))

    async def play(self, user_id: int) -> ActionResult:
        if self._queue.is_playing:
            return ActionResult.fail(ReplyMessages.ALREADY_PLAYING)

        try:
            if self._queue.get_current_entry() is None:
                if not self._queue.get_queue():
                    return ActionResult.fail(ReplyMessages.QUEUE_EMPTY)
                entry = await self._queue.next_track()
            else:
                entry = await self._queue.resume()
        except Exception as e:
            logger.exception("Failed to start playback")
            return ActionResult.fail(player_error_message(ReplyMessages.PLAY_FAILED, e))

        if entry is None:
            return ActionResult.fail(ReplyMessages.QUEUE_EMPTY)
        return ActionResult.ok(ReplyMessages.NOW_PLAYING.format(user=mention(user_id), name=entry.name))

    async def pause(self, user_id: int) -> ActionResult:
        if not self._queue.is_playing:
            try:
                await self._queue.stop()
            except Exception as e:
                logger.exception("Failed to stop playback")
                return ActionResult.fail(player_error_message(ReplyMessages.STOP_FAILED, e))
            return ActionResult.ok(ReplyMessages.NOT_PLAYING_STOPPED)

        try:
            await self._queue.pause()
        except Exception as e:
            logger.warning("Failed to pause playback: %s", e)
            return ActionResult.fail(player_error_message(ReplyMessages.PAUSE_FAILED, e))
        return ActionResult.ok(ReplyMessages.PAUSED.format(user=mention(user_id)))

    async def change_volume(self, user_id: int, up: bool, amount: int | None = None) -> ActionResult:
        """Step the volume up or down, clamped to 0-100.

        A custom *amount* is capped at the configured maximum step; without
        one (or with zero) the default step is used.
        """
        step = (
            min(amount, self._settings.max_volume_delta)
            if amount
            else self._settings.default_volume_delta
        )
        volume = self._adapter.volume
        new_volume = min(100, max(0, volume + (step if up else -step)))
        if new_volume == volume:
            return ActionResult.fail(ReplyMessages.VOLUME_AT_MAX if up else ReplyMessages.VOLUME_AT_MIN)

        try:
            await self._adapter.set_volume(new_volume)
        except Exception as e:
            logger.exception("Failed to set volume to %d", new_volume)
            return ActionResult.fail(player_error_message(ReplyMessages.VOLUME_FAILED, e))
        return ActionResult.ok(ReplyMessages.VOLUME_SET.format(user=mention(user_id), volume=new_volume))
