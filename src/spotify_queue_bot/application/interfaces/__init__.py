"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from spotify_queue_bot.application.interfaces.chat_transport import (
    ChatMessage,
    ChatReaction,
    ChatTransport,
)
from spotify_queue_bot.application.interfaces.playback_adapter import PlaybackAdapter

__all__ = [
    "ChatMessage",
    "ChatReaction",
    "ChatTransport",
    "PlaybackAdapter",
]
