"""Core domain entities for the voting bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Vote(BaseModel):
    """Immutable snapshot of the skip vote for one queue entry."""

    model_config = ConfigDict(frozen=True)

    queue_id: int
    users_for: frozenset[int] = Field(default_factory=frozenset)
    passed: bool = False

    @property
    def vote_count(self) -> int:
        return len(self.users_for)

    def has_voted(self, user_id: int) -> bool:
        return user_id in self.users_for

    def with_voter(self, user_id: int, *, threshold: int, is_creator: bool = False) -> Vote:
        """Return the vote with ``user_id`` counted.

        The vote passes once the threshold is reached, or immediately when the
        voter is the one who queued the entry.
        """
        users_for = self.users_for | {user_id}
        passed = len(users_for) >= threshold or is_creator
        return self.model_copy(update={"users_for": users_for, "passed": passed})
