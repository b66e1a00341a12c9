"""One-shot hand-off of a live session from its producer to its consumer."""

from __future__ import annotations

import asyncio
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class HandOffError(RuntimeError):
    """Raised when a holder is resolved or consumed more than once."""


class SessionHolder(Generic[T]):
    """Single-producer, single-consumer future resolved exactly once.

    The producer calls :meth:`capture` (or :meth:`fail`) once the session is
    available, the consumer awaits :meth:`get` once. Create holders inside a
    running event loop.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._consumed = False

    @property
    def is_resolved(self) -> bool:
        return self._future.done()

    def capture(self, value: T) -> None:
        """Publish the session to the consumer."""

        if self._future.done():
            raise HandOffError("Session was already handed off")
        self._future.set_result(value)

    def fail(self, exc: BaseException) -> None:
        """Report that the session could not be produced."""

        if self._future.done():
            raise HandOffError("Session was already handed off")
        self._future.set_exception(exc)

    async def get(self, timeout: Optional[float] = None) -> T:
        """Wait for the session. Only one call is allowed."""

        if self._consumed:
            raise HandOffError("Session was already taken")
        self._consumed = True
        # shield so a timeout does not cancel the producer's future
        return await asyncio.wait_for(asyncio.shield(self._future), timeout)
