"""Reaction Option Protocol

Turns reactions on one outgoing message into ``(index, user_id)`` calls.
Emojis come from a fixed ordered alphabet: the n-th emoji selects the n-th
choice. Choices beyond the alphabet are dropped before display, and
reactions with an unknown emoji or an index past the last choice are
ignored.

A binding is torn down when its callback reports success, when it is
disconnected, or when its fixed ten minute window runs out. A reaction
handled at or after the expiry instant is rejected, even if the expiry
task has not run yet.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Generic, TypeVar

from spotify_queue_bot.domain.shared.messages import LogTemplates

from .results import ActionResult

if TYPE_CHECKING:
    from ...config.settings import OptionSettings
    from ..interfaces.chat_transport import ChatMessage, ChatReaction, ChatTransport
    from .scheduler import TaskScheduler

logger = logging.getLogger(__name__)

OPTION_TIMEOUT_MS = 600_000
_VARIATION_SELECTOR = "\ufe0f"

T = TypeVar("T")

SelectCallback = Callable[[int, int], Awaitable[ActionResult]]
ResultCallback = Callable[[ActionResult], Awaitable[None]]


def _normalize(emoji: str) -> str:
    return emoji.replace(_VARIATION_SELECTOR, "")


class OptionBinding(Generic[T]):
    """A live prompt attached to one message."""

    def __init__(
        self,
        *,
        protocol: OptionProtocol,
        binding_id: int,
        message: ChatMessage,
        choices: tuple[T, ...],
        on_select: SelectCallback,
        on_result: ResultCallback | None,
        expires_at_ms: float,
    ) -> None:
        self._protocol = protocol
        self.binding_id = binding_id
        self.message = message
        self.choices = choices
        self.on_select = on_select
        self.on_result = on_result
        self.expires_at_ms = expires_at_ms
        self.bound = True
        self._connection = None

    def disconnect(self) -> None:
        """Tear the binding down. Safe to call more than once."""
        if not self.bound:
            return
        self.bound = False
        if self._connection is not None:
            self._connection.disconnect()
            self._connection = None
        self._protocol._forget(self)


class OptionProtocol:
    """Registers reaction prompts and routes reactions to their callbacks."""

    def __init__(
        self,
        *,
        transport: ChatTransport,
        scheduler: TaskScheduler,
        settings: OptionSettings,
        timeout_ms: int = OPTION_TIMEOUT_MS,
    ) -> None:
        self._transport = transport
        self._scheduler = scheduler
        self._emojis = tuple(settings.emojis)
        self._index_of = {_normalize(emoji): index for index, emoji in enumerate(self._emojis)}
        self._timeout_ms = timeout_ms
        self._bindings: dict[int, OptionBinding] = {}
        self._ids = itertools.count(1)

    @property
    def emojis(self) -> tuple[str, ...]:
        return self._emojis

    @property
    def active_count(self) -> int:
        return len(self._bindings)

    def index_of(self, emoji: str) -> int | None:
        return self._index_of.get(_normalize(emoji))

    def register(
        self,
        message: ChatMessage,
        choices: Sequence[T],
        on_select: SelectCallback,
        on_result: ResultCallback | None = None,
    ) -> OptionBinding[T]:
        binding: OptionBinding[T] = OptionBinding(
            protocol=self,
            binding_id=next(self._ids),
            message=message,
            choices=tuple(choices)[: len(self._emojis)],
            on_select=on_select,
            on_result=on_result,
            expires_at_ms=self._scheduler.now_ms() + self._timeout_ms,
        )
        self._bindings[binding.binding_id] = binding

        async def handle(reaction: ChatReaction) -> None:
            await self._handle_reaction(binding, reaction)

        async def expire() -> None:
            if binding.bound:
                logger.debug(LogTemplates.OPTION_EXPIRED, binding.binding_id)
                binding.disconnect()

        binding._connection = self._transport.on_reaction_to(message, handle)
        self._scheduler.schedule(self._expiry_key(binding), self._timeout_ms, expire)
        logger.debug(LogTemplates.OPTION_REGISTERED, binding.binding_id, len(binding.choices))
        return binding

    async def _handle_reaction(self, binding: OptionBinding, reaction: ChatReaction) -> None:
        if not binding.bound:
            return

        if self._scheduler.now_ms() >= binding.expires_at_ms:
            logger.debug(LogTemplates.OPTION_EXPIRED, binding.binding_id)
            binding.disconnect()
            return

        index = self.index_of(reaction.emoji)
        if index is None or index >= len(binding.choices):
            logger.debug(LogTemplates.OPTION_IGNORED, reaction.emoji, binding.binding_id)
            return

        if not binding.bound:
            return
        result = await binding.on_select(index, reaction.user_id)

        if result.success and binding.bound:
            logger.debug(LogTemplates.OPTION_COMPLETED, binding.binding_id)
            binding.disconnect()
        if binding.on_result is not None:
            await binding.on_result(result)

    def shutdown(self) -> None:
        for binding in list(self._bindings.values()):
            binding.disconnect()

    def _forget(self, binding: OptionBinding) -> None:
        self._bindings.pop(binding.binding_id, None)
        self._scheduler.cancel(self._expiry_key(binding))

    @staticmethod
    def _expiry_key(binding: OptionBinding) -> tuple[str, int]:
        return ("option-expiry", binding.binding_id)
