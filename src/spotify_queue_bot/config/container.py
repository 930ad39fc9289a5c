"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the scheduler, adapters, services and command
handlers. Components are created on first access and cached; each receives
only the settings group it needs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import discord

    from ..application.commands.controller import PlaybackController
    from ..application.commands.device_selector import DeviceSelector
    from ..application.commands.dispatcher import CommandDispatcher
    from ..application.commands.search_handler import SearchHandler
    from ..application.interfaces.playback_adapter import PlaybackAdapter
    from ..application.queries.now_playing import NowPlayingQuery
    from ..application.services.message_router import MessageRouter
    from ..application.services.option_protocol import OptionProtocol
    from ..application.services.queue_service import PlaybackQueue
    from ..application.services.scheduler import TaskScheduler
    from ..application.services.vote_service import SkipVotes
    from ..infrastructure.discord.transport import DiscordChatTransport
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _client: discord.Client | None = None

    # Infrastructure
    _scheduler: TaskScheduler | None = None
    _playback_adapter: PlaybackAdapter | None = None
    _chat_transport: DiscordChatTransport | None = None

    # Application services
    _queue: PlaybackQueue | None = None
    _votes: SkipVotes | None = None
    _option_protocol: OptionProtocol | None = None
    _message_router: MessageRouter | None = None

    # Command handlers and queries
    _controller: PlaybackController | None = None
    _device_selector: DeviceSelector | None = None
    _search_handler: SearchHandler | None = None
    _now_playing: NowPlayingQuery | None = None
    _dispatcher: CommandDispatcher | None = None

    def set_client(self, client: discord.Client) -> None:
        """Set the Discord client instance."""
        self._client = client

    @property
    def client(self) -> discord.Client:
        if self._client is None:
            raise RuntimeError(ErrorMessages.CLIENT_NOT_INITIALIZED)
        return self._client

    # === Infrastructure ===

    @property
    def scheduler(self) -> TaskScheduler:
        if self._scheduler is None:
            from ..application.services.scheduler import TaskScheduler

            self._scheduler = TaskScheduler()
        return self._scheduler

    @property
    def playback_adapter(self) -> PlaybackAdapter:
        if self._playback_adapter is None:
            from ..infrastructure.spotify.adapter import SpotipyPlaybackAdapter

            self._playback_adapter = SpotipyPlaybackAdapter(
                self.settings.spotify, initial_volume=self.settings.queue.initial_volume
            )
        return self._playback_adapter

    @property
    def chat_transport(self) -> DiscordChatTransport:
        if self._chat_transport is None:
            from ..infrastructure.discord.transport import DiscordChatTransport

            self._chat_transport = DiscordChatTransport(
                self.client, self.settings.discord.token.get_secret_value()
            )
        return self._chat_transport

    # === Application Services ===

    @property
    def queue(self) -> PlaybackQueue:
        if self._queue is None:
            from ..application.services.queue_service import PlaybackQueue

            self._queue = PlaybackQueue(
                playback_adapter=self.playback_adapter,
                scheduler=self.scheduler,
                settings=self.settings.queue,
            )
        return self._queue

    @property
    def votes(self) -> SkipVotes:
        if self._votes is None:
            from ..application.services.vote_service import SkipVotes

            self._votes = SkipVotes(queue=self.queue, settings=self.settings.voting)
        return self._votes

    @property
    def option_protocol(self) -> OptionProtocol:
        if self._option_protocol is None:
            from ..application.services.option_protocol import OptionProtocol

            self._option_protocol = OptionProtocol(
                transport=self.chat_transport,
                scheduler=self.scheduler,
                settings=self.settings.options,
            )
        return self._option_protocol

    @property
    def message_router(self) -> MessageRouter:
        if self._message_router is None:
            from ..application.services.message_router import MessageRouter

            self._message_router = MessageRouter(
                transport=self.chat_transport,
                dispatcher=self.dispatcher,
                option_protocol=self.option_protocol,
                settings=self.settings.discord,
            )
        return self._message_router

    # === Command Handlers ===

    @property
    def controller(self) -> PlaybackController:
        if self._controller is None:
            from ..application.commands.controller import PlaybackController

            self._controller = PlaybackController(
                queue=self.queue,
                playback_adapter=self.playback_adapter,
                settings=self.settings.queue,
            )
        return self._controller

    @property
    def device_selector(self) -> DeviceSelector:
        if self._device_selector is None:
            from ..application.commands.device_selector import DeviceSelector

            self._device_selector = DeviceSelector(
                playback_adapter=self.playback_adapter, settings=self.settings.options
            )
        return self._device_selector

    @property
    def search_handler(self) -> SearchHandler:
        if self._search_handler is None:
            from ..application.commands.search_handler import SearchHandler

            self._search_handler = SearchHandler(
                playback_adapter=self.playback_adapter,
                queue=self.queue,
                settings=self.settings.options,
            )
        return self._search_handler

    @property
    def now_playing(self) -> NowPlayingQuery:
        if self._now_playing is None:
            from ..application.queries.now_playing import NowPlayingQuery

            self._now_playing = NowPlayingQuery(queue=self.queue)
        return self._now_playing

    @property
    def dispatcher(self) -> CommandDispatcher:
        if self._dispatcher is None:
            from ..application.commands.dispatcher import CommandDispatcher

            self._dispatcher = CommandDispatcher(
                controller=self.controller,
                votes=self.votes,
                device_selector=self.device_selector,
                search_handler=self.search_handler,
                now_playing=self.now_playing,
            )
        return self._dispatcher

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Authorize with Spotify and wire the message router to the transport."""
        authorize = getattr(self.playback_adapter, "authorize", None)
        if authorize is not None:
            await authorize()
        self.message_router.subscribe()
        logger.info(LogTemplates.CONTAINER_INITIALIZED)

    async def shutdown(self) -> None:
        """Stop routing, cancel scheduled checks and prompt expiries."""
        try:
            if self._message_router is not None:
                self._message_router.stop()
        except Exception as exc:
            logger.warning("Failed stopping message router: %r", exc)

        if self._queue is not None:
            self._queue.shutdown()

        if self._scheduler is not None:
            await self._scheduler.shutdown()

        logger.info(LogTemplates.CONTAINER_SHUTDOWN)


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
