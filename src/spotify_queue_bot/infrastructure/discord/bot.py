"""Discord client that hosts the queue bot and owns its lifecycle."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING

import discord

from spotify_queue_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...config.container import Container
    from ...config.settings import Settings

logger = logging.getLogger(__name__)


class SpotifyQueueClient(discord.Client):
    def __init__(
        self,
        container: Container,
        settings: Settings,
        **kwargs,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        intents.dm_messages = True
        intents.dm_reactions = True

        super().__init__(intents=intents, **kwargs)

        self.container = container
        self.settings = settings
        container.set_client(self)

    async def setup_hook(self) -> None:
        await self.container.initialize()
        if self.settings.queue.auto_select_device:
            await self._auto_select_device()

    async def _auto_select_device(self) -> None:
        adapter = self.container.playback_adapter
        try:
            devices = await adapter.list_available_devices()
            if not devices:
                logger.warning(LogTemplates.AUTO_SELECT_DEVICE_NONE)
                return
            device = next((d for d in devices if d.is_active), devices[0])
            await adapter.select_device(device)
            logger.info(LogTemplates.AUTO_SELECT_DEVICE, device.name)
        except Exception as e:
            logger.warning(LogTemplates.AUTO_SELECT_DEVICE_FAILED, e)

    async def on_ready(self) -> None:
        logger.info(LogTemplates.BOT_CONNECTED, self.user)
        activity = discord.Activity(type=discord.ActivityType.listening, name="DMs - send 'help'")
        await self.change_presence(activity=activity)

    async def on_message(self, message: discord.Message) -> None:
        await self.container.chat_transport.handle_message(message)

    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        await self.container.chat_transport.handle_reaction(payload)

    async def close(self) -> None:
        try:
            await self.container.shutdown()
        except Exception as e:
            logger.warning("Error during container shutdown: %s", e)

        await super().close()
        logger.info(LogTemplates.BOT_SHUTDOWN_COMPLETE)

    def run_with_graceful_shutdown(self, *, shutdown_timeout: float = 30.0) -> None:
        async def runner():
            async with self:
                loop = asyncio.get_running_loop()

                async def _graceful_close(sig: signal.Signals) -> None:
                    logger.info(LogTemplates.BOT_SHUTDOWN_SIGNAL, sig.name)
                    try:
                        await asyncio.wait_for(self.close(), timeout=shutdown_timeout)
                    except TimeoutError:
                        logger.warning("Shutdown timed out after %ss", shutdown_timeout)

                for sig in (signal.SIGINT, signal.SIGTERM):
                    loop.add_signal_handler(sig, lambda s=sig: asyncio.create_task(_graceful_close(s)))
                await self.container.message_router.listen()

        asyncio.run(runner())


def create_client(container: Container, settings: Settings) -> SpotifyQueueClient:
    return SpotifyQueueClient(container=container, settings=settings)
