import asyncio
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, Optional

from osintkit.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


@dataclass
class RateLimitEntry:
    last_request_at: float = 0.0
    count_in_window: int = 0
    window_start: float = 0.0
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)


class SourceRateLimiter:
    """
    Per-source throttle shared by every scan in the process.

    Each source gets a rolling quota (``max_requests`` per ``window_seconds``)
    and an optional minimum spacing between requests. Exceeding the quota
    raises immediately; spacing is enforced by sleeping.
    """

    def __init__(
        self,
        max_requests: int = 60,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.max_requests = max_requests
        self.window_ms = window_seconds * 1000
        self._clock = clock
        self._sleep = sleep
        self._store: dict[str, RateLimitEntry] = {}

    def _now_ms(self) -> float:
        return self._clock() * 1000

    def _entry(self, source: str) -> RateLimitEntry:
        # No await between lookup and insert, so this is atomic on the loop.
        entry = self._store.get(source)
        if entry is None:
            now = self._now_ms()
            entry = RateLimitEntry(last_request_at=now - self.window_ms, window_start=now)
            self._store[source] = entry
        return entry

    async def wait(self, source: str, min_interval_ms: Optional[float] = None) -> None:
        """Block until ``source`` may be called, or raise RateLimitExceeded."""
        entry = self._entry(source)

        async with entry.lock:
            now = self._now_ms()

            if now - entry.window_start > self.window_ms:
                entry.count_in_window = 0
                entry.window_start = now

            if entry.count_in_window >= self.max_requests:
                wait_ms = int(self.window_ms - (now - entry.window_start))
                logger.warning("Rate limit hit for %s, %d ms left in window", source, wait_ms)
                raise RateLimitExceeded(source, max(wait_ms, 0))

            if min_interval_ms:
                elapsed = now - entry.last_request_at
                if elapsed < min_interval_ms:
                    delay = min_interval_ms - elapsed
                    logger.debug("Throttling %s for %.0f ms", source, delay)
                    await self._sleep(delay / 1000)

            entry.last_request_at = self._now_ms()
            entry.count_in_window += 1

    def remaining(self, source: str) -> int:
        entry = self._store.get(source)
        if entry is None or self._now_ms() - entry.window_start > self.window_ms:
            return self.max_requests
        return max(self.max_requests - entry.count_in_window, 0)

    def snapshot(self, source: str) -> Optional[RateLimitEntry]:
        entry = self._store.get(source)
        return replace(entry, lock=asyncio.Lock()) if entry else None

    def reset(self, source: Optional[str] = None):
        if source is None:
            self._store.clear()
        else:
            self._store.pop(source, None)
