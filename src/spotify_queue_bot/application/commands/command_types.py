"""
Command Response Types

What a handled command hands back to the message router: the reply text,
where it should go, and optionally a reaction prompt to attach to it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..services.results import ActionResult

OptionCallback = Callable[[int, int], Awaitable[ActionResult]]


class ResponseType(str, Enum):
    """Where a reply is delivered."""

    DM = "dm"  # Back to the channel the command came from
    BROADCAST = "broadcast"  # To the configured broadcast channel


@dataclass(frozen=True)
class OptionPrompt:
    """Choices offered through reactions, and what to do with a pick."""

    choices: tuple[Any, ...]
    on_select: OptionCallback


@dataclass(frozen=True)
class CommandResponse:
    success: bool
    message: str
    type: ResponseType = ResponseType.DM
    prompt: OptionPrompt | None = None

    @classmethod
    def from_result(cls, result: ActionResult) -> CommandResponse:
        """Broadcast successful state changes; send failures back to the requester."""
        return cls(
            success=result.success,
            message=result.message,
            type=ResponseType.BROADCAST if result.success else ResponseType.DM,
        )

    @classmethod
    def dm(cls, message: str, *, success: bool = True, prompt: OptionPrompt | None = None) -> CommandResponse:
        return cls(success=success, message=message, type=ResponseType.DM, prompt=prompt)

    @classmethod
    def error(cls, message: str) -> CommandResponse:
        return cls(success=False, message=message, type=ResponseType.DM)
