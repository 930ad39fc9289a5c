"""Skip Vote Consensus

Votes are keyed by queue id, so re-adding the same song starts a fresh
vote. A vote passes when enough distinct users have voted, or at once when
the voter is the one who queued the entry. Passed entries are removed from
the queue in a single ``remove_tracks`` call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from spotify_queue_bot.domain.shared.messages import LogTemplates, ReplyMessages
from spotify_queue_bot.domain.voting.entities import Vote
from spotify_queue_bot.domain.voting.value_objects import SkipScope
from spotify_queue_bot.utils.reply import mention

from .results import ActionResult

if TYPE_CHECKING:
    from ...config.settings import VotingSettings
    from ...domain.music.entities import QueueEntry
    from .queue_service import PlaybackQueue

logger = logging.getLogger(__name__)


class SkipVotes:
    """Registry of in-progress skip votes."""

    def __init__(self, *, queue: PlaybackQueue, settings: VotingSettings) -> None:
        self._queue = queue
        self._threshold = settings.skip_threshold
        self._votes: dict[int, Vote] = {}

    @property
    def threshold(self) -> int:
        return self._threshold

    def get_vote(self, queue_id: int) -> Vote | None:
        return self._votes.get(queue_id)

    def can_vote_on_track(self, user_id: int, queue_id: int) -> bool:
        vote = self._votes.get(queue_id)
        return vote is None or not vote.has_voted(user_id)

    async def vote_on_tracks(self, user_id: int, queue_ids: Iterable[int]) -> list[Vote]:
        """Vote on each entry; returns the votes this call took part in."""
        self._prune()
        creators = {entry.queue_id: entry.creator_id for entry in self._live_entries()}

        participated: list[Vote] = []
        passed_ids: list[int] = []
        for queue_id in queue_ids:
            vote = self._votes.get(queue_id) or Vote(queue_id=queue_id)
            if vote.has_voted(user_id):
                continue

            vote = vote.with_voter(
                user_id,
                threshold=self._threshold,
                is_creator=creators.get(queue_id) == user_id,
            )
            logger.info(LogTemplates.VOTE_CAST, user_id, queue_id, vote.vote_count, self._threshold)

            if vote.passed:
                self._votes.pop(queue_id, None)
                passed_ids.append(queue_id)
                logger.info(LogTemplates.VOTE_PASSED, queue_id)
            else:
                self._votes[queue_id] = vote
            participated.append(vote)

        if passed_ids:
            await self._queue.remove_tracks(passed_ids)
        return participated

    def get_tracks_in_group(self, group_id: int) -> list[int]:
        return [entry.queue_id for entry in self._live_entries() if entry.group_id == group_id]

    def can_vote_on_group(self, user_id: int, group_id: int) -> bool:
        return any(
            self.can_vote_on_track(user_id, queue_id)
            for queue_id in self.get_tracks_in_group(group_id)
        )

    async def vote_on_group(self, user_id: int, group_id: int) -> list[Vote]:
        return await self.vote_on_tracks(user_id, self.get_tracks_in_group(group_id))

    async def skip_current(self, user_id: int, as_group: bool = False) -> ActionResult:
        """Vote to skip the current entry, or every entry added along with it."""
        current = self._queue.get_current_entry()
        if current is None:
            return ActionResult.fail(ReplyMessages.NO_ACTIVE_TRACK)

        if as_group:
            if not self.can_vote_on_group(user_id, current.group_id):
                return ActionResult.fail(ReplyMessages.ALREADY_VOTED.format(scope=SkipScope.GROUP.label))

            votes = await self.vote_on_group(user_id, current.group_id)
            passed = sum(1 for vote in votes if vote.passed)
            message = ReplyMessages.VOTED_GROUP.format(
                user=mention(user_id), count=len(votes), name=current.group_name or current.name
            )
            if passed:
                message += ReplyMessages.NOW_SKIPPING_GROUP.format(count=passed)
            return ActionResult.ok(message)

        if not self.can_vote_on_track(user_id, current.queue_id):
            return ActionResult.fail(ReplyMessages.ALREADY_VOTED.format(scope=SkipScope.TRACK.label))

        votes = await self.vote_on_tracks(user_id, [current.queue_id])
        message = ReplyMessages.VOTED_TRACK.format(user=mention(user_id), name=current.name)
        if any(vote.passed for vote in votes):
            message += ReplyMessages.NOW_SKIPPING_TRACK
        return ActionResult.ok(message)

    def _live_entries(self) -> list[QueueEntry]:
        current = self._queue.get_current_entry()
        pending = list(self._queue.get_queue())
        return [current, *pending] if current is not None else pending

    def _prune(self) -> None:
        """Forget votes for entries that have already left the queue."""
        live_ids = {entry.queue_id for entry in self._live_entries()}
        for queue_id in [qid for qid in self._votes if qid not in live_ids]:
            del self._votes[queue_id]
