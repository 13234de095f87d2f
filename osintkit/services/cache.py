"""In-memory TTL cache for normalized source responses."""

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    inserted_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now - self.inserted_at > self.ttl


class ResultCache:
    """
    Key/value store with a global TTL.

    Keys come from ``generate_key(source, params)`` so that the same request
    maps to the same entry whatever order its parameters were passed in.
    Expired entries are dropped lazily on read.
    """

    def __init__(self, ttl_hours: float = 2, clock: Callable[[], float] = time.time):
        self.ttl = ttl_hours * 3600
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._lock = Lock()

    @staticmethod
    def generate_key(source: str, params: dict[str, Any]) -> str:
        canonical = json.dumps(
            {"source": source, "params": params},
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )
        digest = hashlib.sha256(canonical.encode()).hexdigest()[:32]
        return f"{source}:{digest}"

    def entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.expired(self._clock()):
            with self._lock:
                # Another writer may have refreshed it meanwhile.
                if self._store.get(key) is entry:
                    del self._store[key]
            logger.debug("Cache entry expired: %s", key)
            return None
        return entry

    def has(self, key: str) -> bool:
        return self.entry(key) is not None

    def get(self, key: str) -> Any:
        entry = self.entry(key)
        return entry.value if entry else None

    def set(self, key: str, value: Any) -> CacheEntry:
        entry = CacheEntry(key=key, value=value, inserted_at=self._clock(), ttl=self.ttl)
        with self._lock:
            self._store[key] = entry
        return entry

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [k for k, v in self._store.items() if v.expired(now)]
            for k in expired:
                del self._store[k]
        return len(expired)

    def clear(self):
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
