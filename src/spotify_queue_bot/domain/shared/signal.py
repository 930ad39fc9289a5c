"""Ordered async publish/subscribe primitive.

Handlers are stored in an id-keyed arena so that disconnecting removes
exactly one subscription, even when the same callable was connected twice.
``fire`` awaits every handler to completion, in connection order, before the
next one runs. Handler exceptions propagate to the caller of ``fire``.
"""

from __future__ import annotations

import itertools
from collections.abc import Awaitable, Callable
from typing import Generic, ParamSpec

P = ParamSpec("P")


class SignalConnection:
    """Handle returned by :meth:`Signal.connect`."""

    __slots__ = ("_signal", "_id")

    def __init__(self, signal: Signal, subscription_id: int) -> None:
        self._signal: Signal | None = signal
        self._id = subscription_id

    @property
    def id(self) -> int:
        return self._id

    @property
    def connected(self) -> bool:
        return self._signal is not None and self._signal._has(self._id)

    def disconnect(self) -> None:
        """Remove the handler. Safe to call more than once."""
        if self._signal is None:
            return
        self._signal._remove(self._id)
        self._signal = None


class Signal(Generic[P]):
    """Sequential async signal."""

    def __init__(self) -> None:
        self._handlers: dict[int, Callable[P, Awaitable[None]]] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._handlers)

    def connect(self, handler: Callable[P, Awaitable[None]]) -> SignalConnection:
        subscription_id = next(self._ids)
        self._handlers[subscription_id] = handler
        return SignalConnection(self, subscription_id)

    async def fire(self, *args: P.args, **kwargs: P.kwargs) -> None:
        # Snapshot ids, then re-check membership so handlers disconnected mid-fire are skipped.
        for subscription_id in list(self._handlers):
            handler = self._handlers.get(subscription_id)
            if handler is None:
                continue
            await handler(*args, **kwargs)

    def _has(self, subscription_id: int) -> bool:
        return subscription_id in self._handlers

    def _remove(self, subscription_id: int) -> None:
        self._handlers.pop(subscription_id, None)
