"""
Voting Domain Value Objects

Immutable value objects for the voting bounded context.
"""

from __future__ import annotations

from enum import Enum


class SkipScope(Enum):
    """What a skip vote applies to."""

    TRACK = "track"  # Only the current entry
    GROUP = "group"  # Every entry added with the current one

    @property
    def label(self) -> str:
        """Get the noun used in replies."""
        return self.value

    @classmethod
    def from_argument(cls, argument: str | None) -> SkipScope | None:
        """Map a skip command argument to a scope, or None if it is not recognised."""
        if argument is None or argument == "":
            return cls.TRACK
        if argument.lower() in {"group", "album", "playlist"}:
            return cls.GROUP
        return None
