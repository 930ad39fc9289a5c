"""
Tests for the Discord chat transport.

Tests for:
- Forwarding DMs and filtering guild/bot messages
- Forwarding reactions and ignoring the bot's own
- Sending messages and reactions through resolved channels
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

import discord

from spotify_queue_bot.application.interfaces.chat_transport import ChatMessage
from spotify_queue_bot.infrastructure.discord.transport import DiscordChatTransport

BOT_USER_ID = 1


@pytest.fixture
def client():
    mock = MagicMock()
    mock.user.id = BOT_USER_ID
    mock.start = AsyncMock()
    mock.close = AsyncMock()
    mock.fetch_channel = AsyncMock()
    mock.get_channel.return_value = None
    return mock


@pytest.fixture
def transport(client):
    return DiscordChatTransport(client, "token")


def dm_message(content="play", author_id=42, bot=False, channel=None):
    message = MagicMock()
    message.id = 1000
    message.content = content
    message.author.id = author_id
    message.author.bot = bot
    message.channel = channel or MagicMock(spec=discord.DMChannel)
    message.channel.id = 500
    return message


def reaction_payload(user_id=42, emoji="1️⃣"):
    payload = MagicMock()
    payload.message_id = 2000
    payload.channel_id = 500
    payload.user_id = user_id
    payload.emoji = emoji
    return payload


# ============================================================================
# Inbound Tests
# ============================================================================


class TestInbound:
    """Tests for gateway events forwarded by the client."""

    @pytest.mark.asyncio
    async def test_dm_is_forwarded(self, transport):
        """Test direct messages reach subscribers as ChatMessage."""
        handler = AsyncMock()
        transport.on_direct_message(handler)

        await transport.handle_message(dm_message())

        handler.assert_awaited_once_with(
            ChatMessage(id=1000, channel_id=500, author_id=42, text="play")
        )

    @pytest.mark.asyncio
    async def test_guild_messages_are_ignored(self, transport):
        """Test messages outside DMs are ignored."""
        handler = AsyncMock()
        transport.on_direct_message(handler)

        await transport.handle_message(dm_message(channel=MagicMock(spec=discord.TextChannel)))

        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bot_messages_are_ignored(self, transport):
        """Test messages from bots are ignored."""
        handler = AsyncMock()
        transport.on_direct_message(handler)

        await transport.handle_message(dm_message(bot=True))

        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reaction_on_watched_message(self, transport):
        """Test reactions are routed to the watcher of that message only."""
        watched = AsyncMock()
        other = AsyncMock()
        transport.on_reaction_to(ChatMessage(id=2000, channel_id=500, author_id=1), watched)
        transport.on_reaction_to(ChatMessage(id=3000, channel_id=500, author_id=1), other)

        await transport.handle_reaction(reaction_payload())

        watched.assert_awaited_once()
        assert watched.await_args.args[0].emoji == "1️⃣"
        other.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_own_reactions_are_ignored(self, transport):
        """Test the bot's own reactions are not forwarded."""
        handler = AsyncMock()
        transport.on_reaction_to(ChatMessage(id=2000, channel_id=500, author_id=1), handler)

        await transport.handle_reaction(reaction_payload(user_id=BOT_USER_ID))

        handler.assert_not_awaited()


# ============================================================================
# Outbound Tests
# ============================================================================


class TestOutbound:
    """Tests for sending through Discord."""

    @pytest.mark.asyncio
    async def test_send_to_cached_dm_channel(self, transport, client):
        """Test replies reuse the channel the DM came from."""
        message = dm_message()
        sent = MagicMock(id=3000)
        sent.author.id = BOT_USER_ID
        message.channel.send = AsyncMock(return_value=sent)
        await transport.handle_message(message)

        result = await transport.send_message(500, "hi")

        message.channel.send.assert_awaited_once_with("hi")
        assert result == ChatMessage(id=3000, channel_id=500, author_id=BOT_USER_ID, text="hi")
        client.fetch_channel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_fetches_unknown_channel(self, transport, client):
        """Test unknown channels are fetched from the API."""
        channel = MagicMock()
        sent = MagicMock(id=3001)
        sent.author.id = BOT_USER_ID
        channel.send = AsyncMock(return_value=sent)
        client.fetch_channel.return_value = channel

        await transport.send_message(77, "broadcast")

        client.fetch_channel.assert_awaited_once_with(77)
        channel.send.assert_awaited_once_with("broadcast")

    @pytest.mark.asyncio
    async def test_react_to_message(self, transport, client):
        """Test reactions are added through a partial message."""
        channel = MagicMock()
        partial = MagicMock()
        partial.add_reaction = AsyncMock()
        channel.get_partial_message.return_value = partial
        client.get_channel.return_value = channel

        await transport.react_to(ChatMessage(id=3000, channel_id=500, author_id=1), "✅")

        channel.get_partial_message.assert_called_once_with(3000)
        partial.add_reaction.assert_awaited_once_with("✅")

    @pytest.mark.asyncio
    async def test_connect_and_close(self, transport, client):
        """Test connect starts the client with the token and close closes it."""
        await transport.connect()
        await transport.close()

        client.start.assert_awaited_once_with("token")
        client.close.assert_awaited_once()
