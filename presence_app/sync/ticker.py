"""
Local one-second ticker.

Optimistically accrues time into the active status bucket between
authoritative resyncs. It never contacts the remote authority and stops
as soon as its Session lifetime is cancelled.
"""

import asyncio
from typing import Optional

from ..state.store import Lifetime, StatusStore


class Ticker:
    """Repeating task calling `increment_active` once per interval."""

    def __init__(self, store: StatusStore, lifetime: Lifetime, interval_seconds: float = 1.0):
        self.store = store
        self.lifetime = lifetime
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> None:
        """Apply one speculative increment if the Session is still alive."""
        if self.lifetime.alive:
            self.store.increment_active()

    def start(self) -> asyncio.Task:
        """Schedule the ticking loop on the running event loop."""
        if self.running:
            return self._task  # type: ignore[return-value]
        self._task = asyncio.get_running_loop().create_task(self._run(), name="presence-ticker")
        return self._task

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while self.lifetime.alive:
            await asyncio.sleep(self.interval_seconds)
            self.tick()
