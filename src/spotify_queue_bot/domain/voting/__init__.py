"""
Voting Bounded Context

Skip votes keyed by queue entry.
"""

from spotify_queue_bot.domain.voting.entities import Vote
from spotify_queue_bot.domain.voting.value_objects import SkipScope

__all__ = ["Vote", "SkipScope"]
