"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state


# === Playback state preconditions ===


class NotPlayingError(InvalidOperationError):
    """The queue is not playing."""

    def __init__(self, operation: str = "pause") -> None:
        super().__init__(operation, "paused", "Queue is not playing")


class AlreadyPlayingError(InvalidOperationError):
    """The queue is already playing."""

    def __init__(self, operation: str = "resume") -> None:
        super().__init__(operation, "playing", "Queue is already playing")


class NoCurrentEntryError(InvalidOperationError):
    """There is no current entry to act on."""

    def __init__(self, operation: str = "resume") -> None:
        super().__init__(operation, "idle", "No current track")


class PlaybackNotActiveError(InvalidOperationError):
    """The playback service reports that nothing is playing."""

    def __init__(self, operation: str = "pause") -> None:
        super().__init__(operation, "playing", "Spotify is not playing")


class WrongTrackError(InvalidOperationError):
    """The playback service is playing a different track than the queue expects."""

    def __init__(self, expected_uri: str, actual_uri: str | None, operation: str = "pause") -> None:
        super().__init__(operation, "playing", "Spotify is playing a different track")
        self.expected_uri = expected_uri
        self.actual_uri = actual_uri


class NoProgressError(InvalidOperationError):
    """The playback service reported no progress for the current track."""

    def __init__(self, operation: str = "pause") -> None:
        super().__init__(operation, "playing", "Spotify reported no track progress")


# === Adapter errors ===


class PlaybackAdapterError(DomainError):
    """Raised by playback adapters when the remote service call fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PLAYBACK_ADAPTER_ERROR")


class DeviceUnavailableError(PlaybackAdapterError):
    """The requested playback device is not available."""

    def __init__(self, device_name: str) -> None:
        super().__init__(f"Device {device_name} is not available")
        self.device_name = device_name
