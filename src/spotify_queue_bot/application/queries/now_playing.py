"""
Now Playing Query

Renders the current entry and the first few queued entries as chat text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spotify_queue_bot.domain.shared.messages import ReplyMessages
from spotify_queue_bot.utils.reply import format_duration_ms, mention

if TYPE_CHECKING:
    from ...domain.music.entities import QueueEntry
    from ..services.queue_service import PlaybackQueue

STATUS_QUEUE_PREVIEW = 10


def format_entry(entry: QueueEntry) -> str:
    return f"{entry.name} - {format_duration_ms(entry.duration_ms)} ({mention(entry.creator_id)})"


class NowPlayingQuery:
    def __init__(self, *, queue: PlaybackQueue, preview_size: int = STATUS_QUEUE_PREVIEW) -> None:
        self._queue = queue
        self._preview_size = preview_size

    def get(self) -> str:
        current = self._queue.get_current_entry()
        pending = self._queue.get_queue()

        header = ReplyMessages.STATUS_PLAYING if self._queue.is_playing else ReplyMessages.STATUS_PAUSED
        lines = [
            f"{header} {format_entry(current) if current else ReplyMessages.STATUS_NOTHING}",
            ReplyMessages.STATUS_QUEUE,
        ]

        preview = pending[: self._preview_size]
        lines.extend(f"{position}: {format_entry(entry)}" for position, entry in enumerate(preview, start=1))

        remaining = len(pending) - len(preview)
        if remaining > 0:
            lines.append(ReplyMessages.STATUS_MORE.format(count=remaining))
        return "\n".join(lines)
