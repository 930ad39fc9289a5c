import itertools

import pytest
from unittest.mock import AsyncMock

from spotify_queue_bot.application.interfaces.chat_transport import (
    ChatMessage,
    ChatReaction,
    ChatTransport,
)
from spotify_queue_bot.application.interfaces.playback_adapter import PlaybackAdapter
from spotify_queue_bot.config.settings import OptionSettings, QueueSettings, VotingSettings
from spotify_queue_bot.domain.music.entities import GroupInfo, TrackInfo
from spotify_queue_bot.domain.music.value_objects import PlaybackInfo, ResourceType
from spotify_queue_bot.domain.shared.signal import Signal

# ============================================================================
# Scheduler Fake
# ============================================================================


class FakeScheduler:
    """Deterministic stand-in for TaskScheduler.

    Nothing runs on its own; tests fire scheduled callbacks explicitly and
    control the clock through ``now``.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.pending: dict = {}

    def now_ms(self) -> float:
        return self.now

    def schedule(self, key, delay_ms, callback) -> None:
        self.pending[key] = (self.now + delay_ms, delay_ms, callback)

    def cancel(self, key) -> bool:
        return self.pending.pop(key, None) is not None

    def is_scheduled(self, key) -> bool:
        return key in self.pending

    def delay_of(self, key) -> float:
        return self.pending[key][1]

    async def fire(self, key) -> None:
        due, _, callback = self.pending.pop(key)
        self.now = max(self.now, due)
        await callback()

    async def shutdown(self) -> None:
        self.pending.clear()


# ============================================================================
# Builders
# ============================================================================


def make_track(
    name: str = "Song by Artist",
    uri: str = "spotify:track:song",
    duration_ms: int = 10_000,
    is_playable: bool = True,
) -> TrackInfo:
    return TrackInfo(name=name, uri=uri, duration_ms=duration_ms, is_playable=is_playable)


def make_group(
    name: str = "Album by Artist",
    type: ResourceType = ResourceType.ALBUM,
    count: int = 3,
    unplayable: tuple[int, ...] = (),
) -> GroupInfo:
    return GroupInfo(
        name=name,
        type=type,
        tracks=tuple(
            make_track(
                name=f"Track {i}",
                uri=f"spotify:track:t{i}",
                duration_ms=60_000,
                is_playable=i not in unplayable,
            )
            for i in range(count)
        ),
    )


def make_message(
    id: int = 1000, channel_id: int = 500, author_id: int = 42, text: str = ""
) -> ChatMessage:
    return ChatMessage(id=id, channel_id=channel_id, author_id=author_id, text=text)


def make_reaction(
    message_id: int = 1000, user_id: int = 42, emoji: str = "1️⃣", channel_id: int = 500
) -> ChatReaction:
    return ChatReaction(message_id=message_id, channel_id=channel_id, user_id=user_id, emoji=emoji)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def queue_settings():
    return QueueSettings()


@pytest.fixture
def voting_settings():
    return VotingSettings()


@pytest.fixture
def option_settings():
    return OptionSettings()


@pytest.fixture
def adapter():
    """Playback adapter mock that plays everything and reports idle."""
    mock = AsyncMock(spec=PlaybackAdapter)
    mock.volume = 50
    mock.resolve_track.return_value = make_track()
    mock.resolve_album.return_value = make_group()
    mock.resolve_playlist.return_value = make_group(name="Mix", type=ResourceType.PLAYLIST)
    mock.current_playback_info.return_value = PlaybackInfo(is_playing=False)
    mock.list_available_devices.return_value = []
    mock.search.return_value = []
    return mock


@pytest.fixture
def queue(adapter, scheduler, queue_settings):
    from spotify_queue_bot.application.services.queue_service import PlaybackQueue

    return PlaybackQueue(playback_adapter=adapter, scheduler=scheduler, settings=queue_settings)


@pytest.fixture
def votes(queue, voting_settings):
    from spotify_queue_bot.application.services.vote_service import SkipVotes

    return SkipVotes(queue=queue, settings=voting_settings)


# ============================================================================
# Transport Fake
# ============================================================================


class FakeTransport(ChatTransport):
    """In-memory chat transport recording everything sent."""

    def __init__(self) -> None:
        self.messages: Signal = Signal()
        self.reactions: Signal = Signal()
        self.sent: list[ChatMessage] = []
        self.reacted: list[tuple[int, str]] = []
        self.connected = False
        self._ids = itertools.count(9000)

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    def on_direct_message(self, handler):
        return self.messages.connect(handler)

    def on_reaction_to(self, message, handler):
        async def filtered(reaction):
            if reaction.message_id == message.id:
                await handler(reaction)

        return self.reactions.connect(filtered)

    async def send_message(self, channel_id, text):
        message = ChatMessage(id=next(self._ids), channel_id=channel_id, author_id=1, text=text)
        self.sent.append(message)
        return message

    async def react_to(self, message, emoji):
        self.reacted.append((message.id, emoji))

    def texts_to(self, channel_id) -> list[str]:
        return [m.text for m in self.sent if m.channel_id == channel_id]


@pytest.fixture
def transport():
    return FakeTransport()
