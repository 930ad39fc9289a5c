"""
Application Services

The playback queue synchronizer, skip votes, reaction option prompts,
keyed task scheduling and message routing.
"""

from spotify_queue_bot.application.services.option_protocol import OptionBinding, OptionProtocol
from spotify_queue_bot.application.services.queue_service import PlaybackQueue
from spotify_queue_bot.application.services.results import ActionResult
from spotify_queue_bot.application.services.scheduler import TaskScheduler
from spotify_queue_bot.application.services.vote_service import SkipVotes

__all__ = [
    "OptionBinding",
    "OptionProtocol",
    "PlaybackQueue",
    "ActionResult",
    "TaskScheduler",
    "SkipVotes",
]
