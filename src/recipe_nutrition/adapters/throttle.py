"""Request throttle shared by outbound API calls."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field


@dataclass
class RequestThrottle:
    """Keeps consecutive requests at least min_interval_seconds apart.

    The timing decision is serialized by a lock so concurrent callers cannot
    both observe a stale last-request time. Requests themselves run
    concurrently once released.
    """

    min_interval_seconds: float = 0.1
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    _last_request_at: float | None = field(default=None, init=False, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def wait(self) -> None:
        """Suspend until the next request is allowed, then record it."""
        async with self._lock:
            if self._last_request_at is not None:
                elapsed = self.clock() - self._last_request_at
                if elapsed < self.min_interval_seconds:
                    await self.sleep(self.min_interval_seconds - elapsed)
            self._last_request_at = self.clock()
