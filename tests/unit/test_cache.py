from task_relay.cache.memory import InMemoryResponseCache
from task_relay.cache.models import CachedResponse


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache = InMemoryResponseCache(clock=clock)
    cache.put("https://relay.test/a", CachedResponse(body="x", media_type="text/plain"), ttl_s=60)

    clock.now += 59
    assert cache.get("https://relay.test/a").body == "x"

    clock.now += 1
    assert cache.get("https://relay.test/a") is None


def test_zero_ttl_is_not_stored() -> None:
    cache = InMemoryResponseCache()
    cache.put("k", CachedResponse(body="x", media_type="text/plain"), ttl_s=0)

    assert cache.get("k") is None


def test_cached_copies_are_isolated() -> None:
    cache = InMemoryResponseCache()
    cache.put("k", CachedResponse(body="x", media_type="text/plain", headers={"a": "1"}), ttl_s=10)

    cache.get("k").headers["a"] = "changed"

    assert cache.get("k").headers == {"a": "1"}
    cache.clear()
    assert cache.get("k") is None


def test_expired_entries_are_dropped_on_write() -> None:
    clock = FakeClock()
    cache = InMemoryResponseCache(clock=clock)
    for index in range(1000):
        cache.put(
            f"https://relay.test/dogs?page={index}",
            CachedResponse(body="x", media_type="text/plain"),
            ttl_s=1,
        )
    assert len(cache) == 1000

    clock.now += 10
    cache.put(
        "https://relay.test/dogs",
        CachedResponse(body="fresh", media_type="text/plain"),
        ttl_s=1,
    )

    assert len(cache) == 1
    assert cache.get("https://relay.test/dogs").body == "fresh"


def test_size_bound_evicts_entry_closest_to_expiry() -> None:
    clock = FakeClock()
    cache = InMemoryResponseCache(max_entries=2, clock=clock)
    cache.put("short", CachedResponse(body="a", media_type="text/plain"), ttl_s=10)
    cache.put("long", CachedResponse(body="b", media_type="text/plain"), ttl_s=100)
    cache.put("newest", CachedResponse(body="c", media_type="text/plain"), ttl_s=50)

    assert len(cache) == 2
    assert cache.get("short") is None
    assert cache.get("long").body == "b"
    assert cache.get("newest").body == "c"
