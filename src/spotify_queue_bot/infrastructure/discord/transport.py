"""Discord implementation of the chat transport.

The Discord client forwards ``on_message`` and ``on_raw_reaction_add``
events here; direct messages and reactions are republished on signals
so the application layer never touches discord.py objects.
"""

from __future__ import annotations

import logging

import discord

from spotify_queue_bot.application.interfaces.chat_transport import (
    ChatMessage,
    ChatReaction,
    ChatTransport,
    MessageHandler,
    ReactionHandler,
)
from spotify_queue_bot.domain.shared.messages import LogTemplates
from spotify_queue_bot.domain.shared.signal import Signal, SignalConnection

logger = logging.getLogger(__name__)


class DiscordChatTransport(ChatTransport):
    def __init__(self, client: discord.Client, token: str) -> None:
        self._client = client
        self._token = token
        self._messages: Signal[[ChatMessage]] = Signal()
        self._reactions: Signal[[ChatReaction]] = Signal()
        self._channels: dict[int, discord.abc.Messageable] = {}

    async def connect(self) -> None:
        """Log in and run the gateway connection until the client closes."""
        await self._client.start(self._token)

    async def close(self) -> None:
        await self._client.close()

    def on_direct_message(self, handler: MessageHandler) -> SignalConnection:
        return self._messages.connect(handler)

    def on_reaction_to(self, message: ChatMessage, handler: ReactionHandler) -> SignalConnection:
        async def filtered(reaction: ChatReaction) -> None:
            if reaction.message_id == message.id:
                await handler(reaction)

        return self._reactions.connect(filtered)

    async def send_message(self, channel_id: int, text: str) -> ChatMessage:
        channel = await self._resolve_channel(channel_id)
        sent = await channel.send(text)
        return ChatMessage(id=sent.id, channel_id=channel_id, author_id=sent.author.id, text=text)

    async def react_to(self, message: ChatMessage, emoji: str) -> None:
        channel = await self._resolve_channel(message.channel_id)
        await channel.get_partial_message(message.id).add_reaction(emoji)

    # === Gateway events ===

    async def handle_message(self, message: discord.Message) -> None:
        if message.author.bot or not isinstance(message.channel, discord.DMChannel):
            return

        self._channels[message.channel.id] = message.channel
        logger.debug(LogTemplates.DISCORD_DM_RECEIVED, message.author.id, message.content)
        await self._messages.fire(
            ChatMessage(
                id=message.id,
                channel_id=message.channel.id,
                author_id=message.author.id,
                text=message.content,
            )
        )

    async def handle_reaction(self, payload: discord.RawReactionActionEvent) -> None:
        user = self._client.user
        if user is not None and payload.user_id == user.id:
            return

        await self._reactions.fire(
            ChatReaction(
                message_id=payload.message_id,
                channel_id=payload.channel_id,
                user_id=payload.user_id,
                emoji=str(payload.emoji),
            )
        )

    async def _resolve_channel(self, channel_id: int):
        channel = self._channels.get(channel_id) or self._client.get_channel(channel_id)
        if channel is None:
            channel = await self._client.fetch_channel(channel_id)
        self._channels[channel_id] = channel
        return channel
