"""Write-then-close value stream from a tool call to a live UI surface."""

import asyncio
from collections.abc import AsyncIterator

DONE_SENTINEL = "done"


class StreamClosedError(RuntimeError):
    """Raised on any write after the stream has been closed."""


class StreamableValue:
    """A single evolving string value.

    The producer calls ``update()`` zero or more times and ``done()`` exactly
    once. Consumers read ``value`` or iterate ``updates()`` to render each
    state as it arrives, before the producer finishes.
    """

    def __init__(self, initial: str | None = None):
        self._history: list[str] = [] if initial is None else [initial]
        self._closed = False
        self._final_payload: str | None = None
        self._changed = asyncio.Event()

    @property
    def value(self) -> str | None:
        return self._history[-1] if self._history else None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def final(self) -> str | None:
        """Terminal value: the payload passed to done(), DONE_SENTINEL if none, None while open."""
        if not self._closed:
            return None
        return self._final_payload if self._final_payload is not None else DONE_SENTINEL

    @property
    def has_payload(self) -> bool:
        return self._closed and self._final_payload is not None

    def update(self, value: str) -> None:
        if self._closed:
            raise StreamClosedError("cannot update a closed stream")
        self._history.append(value)
        self._notify()

    def done(self, value: str | None = None) -> None:
        if self._closed:
            raise StreamClosedError("stream already closed")
        self._closed = True
        if value is not None:
            self._final_payload = value
            self._history.append(value)
        self._notify()

    def _notify(self) -> None:
        # Wake current waiters; later waiters block on a fresh event.
        self._changed.set()
        self._changed = asyncio.Event()

    async def updates(self) -> AsyncIterator[str]:
        """Yield every value pushed so far and then each new one until close."""
        index = 0
        while True:
            while index < len(self._history):
                yield self._history[index]
                index += 1
            if self._closed:
                return
            await self._changed.wait()
