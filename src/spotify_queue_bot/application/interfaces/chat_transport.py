"""Port interface for the chat surface users talk to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from pydantic import BaseModel, ConfigDict

from spotify_queue_bot.domain.shared.signal import SignalConnection


class ChatMessage(BaseModel):
    """A message sent or received through the transport."""

    model_config = ConfigDict(frozen=True)

    id: int
    channel_id: int
    author_id: int
    text: str = ""


class ChatReaction(BaseModel):
    """A reaction added to a message."""

    model_config = ConfigDict(frozen=True)

    message_id: int
    channel_id: int
    user_id: int
    emoji: str


MessageHandler = Callable[[ChatMessage], Awaitable[None]]
ReactionHandler = Callable[[ChatReaction], Awaitable[None]]


class ChatTransport(ABC):
    """Interface for receiving commands and replying to users."""

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the chat service."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Disconnect from the chat service."""
        ...

    @abstractmethod
    def on_direct_message(self, handler: MessageHandler) -> SignalConnection:
        """Subscribe to direct messages sent to the bot."""
        ...

    @abstractmethod
    def on_reaction_to(self, message: ChatMessage, handler: ReactionHandler) -> SignalConnection:
        """Subscribe to reactions added to *message*."""
        ...

    @abstractmethod
    async def send_message(self, channel_id: int, text: str) -> ChatMessage:
        """Send *text* to a channel and return the sent message."""
        ...

    @abstractmethod
    async def react_to(self, message: ChatMessage, emoji: str) -> None:
        """Add a reaction to *message*."""
        ...
