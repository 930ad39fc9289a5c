"""Search prompt: list tracks and albums, queue the one picked by reaction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spotify_queue_bot.domain.music.value_objects import ResourceType
from spotify_queue_bot.domain.shared.messages import ReplyMessages
from spotify_queue_bot.utils.reply import mention

from ..services.results import ActionResult
from .command_types import CommandResponse, OptionCallback, OptionPrompt

if TYPE_CHECKING:
    from ...config.settings import OptionSettings
    from ...domain.music.value_objects import SearchResult
    from ..interfaces.playback_adapter import PlaybackAdapter
    from ..services.queue_service import PlaybackQueue

logger = logging.getLogger(__name__)


class SearchHandler:
    def __init__(
        self,
        *,
        playback_adapter: PlaybackAdapter,
        queue: PlaybackQueue,
        settings: OptionSettings,
    ) -> None:
        self._adapter = playback_adapter
        self._queue = queue
        self._emojis = settings.emojis

    async def search(self, query: str) -> CommandResponse:
        try:
            results = await self._adapter.search(query)
        except Exception:
            logger.exception("Search for %r failed", query)
            return CommandResponse.error(ReplyMessages.SEARCH_FAILED)

        # Tracks are listed before albums, and emoji order follows display order.
        tracks = [result for result in results if result.type is ResourceType.TRACK]
        albums = [result for result in results if result.type is ResourceType.ALBUM]
        ordered = (tracks + albums)[: len(self._emojis)]
        if not ordered:
            return CommandResponse.error(ReplyMessages.NO_SEARCH_RESULTS.format(query=query))

        return CommandResponse.dm(
            self._format(query, ordered),
            prompt=OptionPrompt(choices=tuple(ordered), on_select=self._make_callback(ordered)),
        )

    def _format(self, query: str, results: list[SearchResult]) -> str:
        lines = [ReplyMessages.SEARCH_HEADER.format(query=query)]
        heading = None
        for index, result in enumerate(results):
            if result.type is not heading:
                heading = result.type
                lines.append(
                    ReplyMessages.SEARCH_TRACKS
                    if heading is ResourceType.TRACK
                    else ReplyMessages.SEARCH_ALBUMS
                )
            lines.append(f"{self._emojis[index]} {result.name}")
        lines.append(ReplyMessages.SEARCH_FOOTER)
        return "\n".join(lines)

    def _make_callback(self, results: list[SearchResult]) -> OptionCallback:
        async def queue_result(index: int, creator_id: int) -> ActionResult:
            result = results[index]
            try:
                added = await self._queue.add(result.resource, creator_id)
            except Exception:
                logger.exception("Failed to queue search result %s", result.name)
                return ActionResult.fail(ReplyMessages.SEARCH_QUEUE_FAILED)

            if added.tracks_added == 0:
                return ActionResult.fail(
                    ReplyMessages.SEARCH_NOT_PLAYABLE.format(type=added.type.value, name=added.name)
                )
            return ActionResult.ok(
                ReplyMessages.ADDED_GROUP.format(
                    creator=mention(creator_id),
                    count=added.tracks_added,
                    type=added.type.value,
                    name=added.name,
                )
            )

        return queue_result
