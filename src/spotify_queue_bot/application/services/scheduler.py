"""Keyed, cancellable delayed tasks on the running event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable

from spotify_queue_bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

ScheduledCallback = Callable[[], Awaitable[None]]


class TaskScheduler:
    """Runs callbacks after a delay, at most one pending callback per key.

    Scheduling under a key that already has a pending callback replaces it.
    A callback is removed from the registry just before it runs, so it may
    schedule a follow-up under its own key. Exceptions raised by callbacks
    are logged and never propagate.
    """

    def __init__(self) -> None:
        self._tasks: dict[Hashable, asyncio.Task[None]] = {}

    def now_ms(self) -> float:
        """Current event loop time in milliseconds."""
        return asyncio.get_running_loop().time() * 1000

    def schedule(self, key: Hashable, delay_ms: float, callback: ScheduledCallback) -> None:
        self.cancel(key)
        task = asyncio.get_running_loop().create_task(
            self._run(key, max(0.0, delay_ms), callback), name=f"scheduled:{key}"
        )
        self._tasks[key] = task

    def cancel(self, key: Hashable) -> bool:
        """Cancel the pending callback for *key*. Returns True if one was pending."""
        task = self._tasks.pop(key, None)
        if task is None:
            return False
        task.cancel()
        return True

    def is_scheduled(self, key: Hashable) -> bool:
        return key in self._tasks

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    async def shutdown(self) -> None:
        """Cancel every pending callback and wait for the tasks to finish."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _run(self, key: Hashable, delay_ms: float, callback: ScheduledCallback) -> None:
        await asyncio.sleep(delay_ms / 1000)

        if self._tasks.get(key) is asyncio.current_task():
            del self._tasks[key]

        try:
            await callback()
        except Exception as e:
            logger.exception(LogTemplates.SCHEDULED_TASK_FAILED, key, e)
