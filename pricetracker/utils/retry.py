"""Retry helpers: cancellation token and cancellable backoff waits."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable


class RetryCancelled(RuntimeError):
    """Raised when a retry loop is stopped through its :class:`CancelToken`."""


class CancelToken:
    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RetryCancelled("Retry loop cancelled")

    async def race(self, awaitable: Awaitable[object]) -> None:
        """Await ``awaitable`` unless the token fires first; raise :class:`RetryCancelled` if it did."""
        self.raise_if_cancelled()
        work = asyncio.ensure_future(awaitable)
        signal = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({work, signal}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (work, signal):
                if not task.done():
                    task.cancel()
            await asyncio.gather(work, signal, return_exceptions=True)
        self.raise_if_cancelled()
        work.result()

    async def sleep(self, delay: float) -> None:
        await self.race(asyncio.sleep(delay))


async def backoff_sleep(delay: float, cancel: CancelToken | None = None, *, sleep=asyncio.sleep) -> None:
    if cancel is None:
        await sleep(delay)
    else:
        await cancel.race(sleep(delay))
