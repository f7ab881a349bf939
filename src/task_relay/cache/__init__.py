"""Response cache backends and models."""

from task_relay.cache.base import ResponseCache
from task_relay.cache.memory import InMemoryResponseCache
from task_relay.cache.models import CachedResponse

__all__ = [
    "CachedResponse",
    "InMemoryResponseCache",
    "ResponseCache",
]
