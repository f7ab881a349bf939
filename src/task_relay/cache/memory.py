"""In-process response cache with per-entry expiry and a size bound."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from task_relay.cache.models import CachedResponse

DEFAULT_MAX_ENTRIES = 1024


class InMemoryResponseCache:
    """Process-local cache; entries expire ``ttl_s`` seconds after ``put``.

    Expired entries are dropped on every write. When the cache is still full,
    the entry closest to expiry is evicted.
    """

    def __init__(
        self,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._max_entries = max(1, max_entries)
        self._entries: dict[str, tuple[float, CachedResponse]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> CachedResponse | None:
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            expires_at, response = item
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return response.model_copy(deep=True)

    def put(self, key: str, response: CachedResponse, *, ttl_s: float) -> None:
        if ttl_s <= 0:
            return
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries.pop(key, None)
            while len(self._entries) >= self._max_entries:
                oldest = min(self._entries, key=lambda name: self._entries[name][0])
                del self._entries[oldest]
            self._entries[key] = (now + ttl_s, response.model_copy(deep=True))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
