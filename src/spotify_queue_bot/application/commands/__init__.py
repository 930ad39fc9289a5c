"""
Application Commands

Parsing, dispatch and handlers for the chat commands users send.
"""

from spotify_queue_bot.application.commands.command_types import (
    CommandResponse,
    OptionPrompt,
    ResponseType,
)
from spotify_queue_bot.application.commands.controller import PlaybackController
from spotify_queue_bot.application.commands.device_selector import DeviceSelector
from spotify_queue_bot.application.commands.dispatcher import CommandDispatcher
from spotify_queue_bot.application.commands.parser import (
    CommandName,
    ParsedCommand,
    parse_command,
)
from spotify_queue_bot.application.commands.search_handler import SearchHandler

__all__ = [
    "CommandResponse",
    "OptionPrompt",
    "ResponseType",
    "PlaybackController",
    "DeviceSelector",
    "CommandDispatcher",
    "CommandName",
    "ParsedCommand",
    "parse_command",
    "SearchHandler",
]
