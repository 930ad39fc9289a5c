"""
Command Dispatcher

Parses DM text into a CommandName and runs the one handler registered for
that name. Input problems (missing resource, non-numeric limit, unknown
command) are answered with a failed DM response.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from spotify_queue_bot.domain.shared.messages import LogTemplates, ReplyMessages
from spotify_queue_bot.domain.voting.value_objects import SkipScope

from .command_types import CommandResponse
from .parser import CommandName, ParsedCommand, parse_command, parse_number

if TYPE_CHECKING:
    from ..queries.now_playing import NowPlayingQuery
    from ..services.vote_service import SkipVotes
    from .controller import PlaybackController
    from .device_selector import DeviceSelector
    from .search_handler import SearchHandler

logger = logging.getLogger(__name__)

CommandHandler = Callable[[int, ParsedCommand], Awaitable[CommandResponse]]


class CommandDispatcher:
    def __init__(
        self,
        *,
        controller: PlaybackController,
        votes: SkipVotes,
        device_selector: DeviceSelector,
        search_handler: SearchHandler,
        now_playing: NowPlayingQuery,
    ) -> None:
        self._controller = controller
        self._votes = votes
        self._device_selector = device_selector
        self._search_handler = search_handler
        self._now_playing = now_playing

        self._handlers: dict[CommandName, CommandHandler] = {
            CommandName.ADD: self._add,
            CommandName.PLAY: self._play,
            CommandName.PAUSE: self._pause,
            CommandName.VOLUME: self._volume,
            CommandName.SKIP: self._skip,
            CommandName.STATUS: self._status,
            CommandName.DEVICES: self._devices,
            CommandName.SEARCH: self._search,
            CommandName.HELP: self._help,
            CommandName.UNRECOGNIZED: self._unrecognized,
        }

    async def dispatch(self, user_id: int, text: str) -> CommandResponse:
        command = parse_command(text)
        logger.info(LogTemplates.COMMAND_RECEIVED, command.name.value, user_id)
        return await self._handlers[command.name](user_id, command)

    async def _add(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        resource = command.param(0)
        if not resource:
            return CommandResponse.error(ReplyMessages.NO_RESOURCE_GIVEN)

        limit = None
        limit_text = command.param(1)
        if limit_text:
            limit = parse_number(limit_text)
            if limit is None:
                return CommandResponse.error(ReplyMessages.LIMIT_NOT_A_NUMBER)

        return CommandResponse.from_result(await self._controller.add(user_id, resource, limit))

    async def _play(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        return CommandResponse.from_result(await self._controller.play(user_id))

    async def _pause(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        return CommandResponse.from_result(await self._controller.pause(user_id))

    async def _volume(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        direction = command.param(0)
        if direction not in ("up", "down"):
            return CommandResponse.error(ReplyMessages.INVALID_DIRECTION)

        amount = None
        amount_text = command.param(1)
        if amount_text:
            amount = parse_number(amount_text.replace("%", ""))
            if amount is None:
                return CommandResponse.error(ReplyMessages.AMOUNT_NOT_A_NUMBER)

        return CommandResponse.from_result(
            await self._controller.change_volume(user_id, direction == "up", amount)
        )

    async def _skip(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        scope = SkipScope.from_argument(command.param(0))
        if scope is None:
            return CommandResponse.error(ReplyMessages.INVALID_PARAMETER)
        return CommandResponse.from_result(
            await self._votes.skip_current(user_id, as_group=scope is SkipScope.GROUP)
        )

    async def _status(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        return CommandResponse.dm(self._now_playing.get())

    async def _devices(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        return await self._device_selector.prompt_selection()

    async def _search(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        if not command.params:
            return CommandResponse.error(ReplyMessages.NO_SEARCH_QUERY)
        return await self._search_handler.search(" ".join(command.params))

    async def _help(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        return CommandResponse.dm(ReplyMessages.HELP)

    async def _unrecognized(self, user_id: int, command: ParsedCommand) -> CommandResponse:
        return CommandResponse.error(ReplyMessages.INVALID_COMMAND.format(command=command.raw_name))
