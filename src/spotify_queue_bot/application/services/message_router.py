"""
Message Router

Connects the chat transport to the command pipeline: every direct message
is dispatched, its reply is delivered, and the request is marked with a
success or failure reaction. Replies that carry a prompt get an option
binding, and the results of picks are delivered the same way.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spotify_queue_bot.domain.shared.messages import LogTemplates, ReplyMessages

from ..commands.command_types import CommandResponse, ResponseType

if TYPE_CHECKING:
    from ...config.settings import DiscordSettings
    from ...domain.shared.signal import SignalConnection
    from ..commands.command_types import OptionPrompt
    from ..commands.dispatcher import CommandDispatcher
    from ..interfaces.chat_transport import ChatMessage, ChatTransport
    from .option_protocol import OptionProtocol
    from .results import ActionResult

logger = logging.getLogger(__name__)


class MessageRouter:
    def __init__(
        self,
        *,
        transport: ChatTransport,
        dispatcher: CommandDispatcher,
        option_protocol: OptionProtocol,
        settings: DiscordSettings,
    ) -> None:
        self._transport = transport
        self._dispatcher = dispatcher
        self._options = option_protocol
        self._broadcast_channel_id = settings.broadcast_channel_id
        self._connection: SignalConnection | None = None

    def subscribe(self) -> None:
        if self._connection is None:
            self._connection = self._transport.on_direct_message(self.handle_message)

    async def listen(self) -> None:
        """Subscribe to direct messages, then connect the transport."""
        self.subscribe()
        await self._transport.connect()

    def stop(self) -> None:
        if self._connection is not None:
            self._connection.disconnect()
            self._connection = None
        self._options.shutdown()

    async def handle_message(self, message: ChatMessage) -> None:
        try:
            response = await self._dispatcher.dispatch(message.author_id, message.text)
        except Exception as e:
            logger.exception(LogTemplates.COMMAND_FAILED, message.text, e)
            response = CommandResponse.error(ReplyMessages.COMMAND_ERROR)

        await self.deliver(message.channel_id, response)
        await self._send_status(message, response)

    async def deliver(self, channel_id: int, response: CommandResponse) -> ChatMessage | None:
        """Send a reply to the requester or the broadcast channel.

        Broadcasts are dropped when no broadcast channel is configured.
        """
        if not response.message:
            return None

        if response.type is ResponseType.DM:
            target = channel_id
        else:
            target = self._broadcast_channel_id
        if target is None:
            logger.debug(LogTemplates.BROADCAST_DISABLED)
            return None

        try:
            sent = await self._transport.send_message(target, response.message)
        except Exception as e:
            logger.exception(LogTemplates.SEND_FAILED, target, e)
            return None

        if response.prompt is not None:
            await self._listen_to_options(channel_id, sent, response.prompt)
        return sent

    async def _listen_to_options(self, channel_id: int, sent: ChatMessage, prompt: OptionPrompt) -> None:
        async def on_result(result: ActionResult) -> None:
            await self.deliver(channel_id, CommandResponse.from_result(result))

        binding = self._options.register(sent, prompt.choices, prompt.on_select, on_result)

        # One reaction per choice, in alphabet order.
        try:
            for emoji in self._options.emojis[: len(binding.choices)]:
                await self._transport.react_to(sent, emoji)
        except Exception as e:
            logger.warning(LogTemplates.OPTION_REACTIONS_FAILED, sent.id, e)

    async def _send_status(self, message: ChatMessage, response: CommandResponse) -> None:
        emoji = ReplyMessages.REACTION_SUCCESS if response.success else ReplyMessages.REACTION_FAILURE
        try:
            await self._transport.react_to(message, emoji)
        except Exception as e:
            logger.error(LogTemplates.REACT_FAILED, message.id, e)
