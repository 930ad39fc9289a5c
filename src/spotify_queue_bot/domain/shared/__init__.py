"""
Shared Domain Kernel

Contains exceptions, message constants and the signal primitive shared across
all bounded contexts.
"""

from spotify_queue_bot.domain.shared.exceptions import (
    AlreadyPlayingError,
    DeviceUnavailableError,
    DomainError,
    InvalidOperationError,
    NoCurrentEntryError,
    NoProgressError,
    NotPlayingError,
    PlaybackAdapterError,
    PlaybackNotActiveError,
    WrongTrackError,
)
from spotify_queue_bot.domain.shared.signal import Signal, SignalConnection

__all__ = [
    "DomainError",
    "InvalidOperationError",
    "NotPlayingError",
    "AlreadyPlayingError",
    "NoCurrentEntryError",
    "PlaybackNotActiveError",
    "WrongTrackError",
    "NoProgressError",
    "PlaybackAdapterError",
    "DeviceUnavailableError",
    "Signal",
    "SignalConnection",
]
