"""Cache interface for rendered relay responses keyed by request URL."""

from __future__ import annotations

from typing import Protocol

from task_relay.cache.models import CachedResponse


class ResponseCache(Protocol):
    def get(self, key: str) -> CachedResponse | None: ...

    def put(self, key: str, response: CachedResponse, *, ttl_s: float) -> None: ...
