"""CacheInvalidator tests: tenant-wide purge across tiers, failure tolerance."""

import logging
from unittest.mock import MagicMock

from dealer_inventory.core.constants import CACHE_PREFIX_SALE_LIST, CACHE_PREFIX_VEHICLE_LIST
from dealer_inventory.infrastructure.cache.cache_aside import CacheAside
from dealer_inventory.infrastructure.cache.cache_protocol import KeyScanningCacheProtocol
from dealer_inventory.infrastructure.cache.invalidator import CacheInvalidator
from dealer_inventory.infrastructure.cache.local_cache import LocalCache
from dealer_inventory.infrastructure.cache.redis_cache import RedisCache

PAGE = {"rows": [], "total_count": 0, "page": 1, "limit": 10}


def _key(tenant: str, page: int, prefix: str = CACHE_PREFIX_VEHICLE_LIST) -> str:
    return CacheAside.list_key(prefix, tenant, {"page": page, "filter": None})


async def _populate(cache: CacheAside, tenant: str, pages: int, prefix: str = CACHE_PREFIX_VEHICLE_LIST):
    for page in range(1, pages + 1):
        await cache.set(tenant, _key(tenant, page, prefix), PAGE, ttl=60)


async def test_purge_removes_every_page_of_tenant_only(shared_cache) -> None:
    local = LocalCache(max_entries=100, default_ttl=60)
    cache = CacheAside(local, shared_cache)
    await _populate(cache, "d1", 3)
    await _populate(cache, "d2", 2)
    invalidator = CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, local, shared_cache)

    removed = await invalidator.purge("d1")

    assert removed >= 3
    for page in range(1, 4):
        assert await cache.get("d1", _key("d1", page)) is None
    for page in range(1, 3):
        assert await cache.get("d2", _key("d2", page)) == PAGE


async def test_purge_leaves_other_prefix_untouched(shared_cache) -> None:
    local = LocalCache(max_entries=100, default_ttl=60)
    cache = CacheAside(local, shared_cache)
    await _populate(cache, "d1", 1)
    await _populate(cache, "d1", 1, prefix=CACHE_PREFIX_SALE_LIST)

    await CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, local, shared_cache).purge("d1")

    assert await cache.get("d1", _key("d1", 1, CACHE_PREFIX_SALE_LIST)) == PAGE


async def test_purge_with_no_keys_is_noop(shared_cache) -> None:
    invalidator = CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, None, shared_cache)
    assert await invalidator.purge("d1") == 0


async def test_scan_failure_is_logged_not_raised(shared_cache, caplog) -> None:
    shared_cache.data[_key("d1", 1)] = PAGE
    shared_cache.scan_result_override = None
    invalidator = CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, None, shared_cache)
    with caplog.at_level(logging.ERROR):
        assert await invalidator.purge("d1") == 0
    assert "could not enumerate" in caplog.text
    assert _key("d1", 1) in shared_cache.data


async def test_shared_exception_is_swallowed(shared_cache) -> None:
    """The write already committed; a broken cache must not fail it."""
    local = LocalCache(max_entries=10, default_ttl=60)
    await local.set(_key("d1", 1), PAGE)
    shared_cache.fail = True
    invalidator = CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, local, shared_cache)
    assert await invalidator.purge("d1") == 1
    assert await local.get(_key("d1", 1)) is None


async def test_unavailable_shared_tier_still_purges_local(shared_cache) -> None:
    local = LocalCache(max_entries=10, default_ttl=60)
    await local.set(_key("d1", 1), PAGE)
    shared_cache.available = False
    invalidator = CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, local, shared_cache)
    assert await invalidator.purge("d1") == 1


async def test_backend_without_scan_warns_at_construction(caplog) -> None:
    class NoScan:
        supports_key_scan = False

        def is_available(self) -> bool:
            return True

    with caplog.at_level(logging.WARNING):
        invalidator = CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, None, NoScan())
    assert invalidator.shared_scan_supported is False
    assert "cannot enumerate keys" in caplog.text
    assert await invalidator.purge("d1") == 0


async def test_disabled_invalidator_does_nothing(shared_cache) -> None:
    shared_cache.data[_key("d1", 1)] = PAGE
    invalidator = CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, None, shared_cache, enabled=False)
    assert await invalidator.purge("d1") == 0
    assert _key("d1", 1) in shared_cache.data


async def test_populate_racing_purge_is_bounded_by_ttl() -> None:
    """A page loaded before a purge but stored after it stays until its TTL."""
    now = [0.0]
    local = LocalCache(max_entries=10, default_ttl=60, clock=lambda: now[0])
    cache = CacheAside(local, None, local_ttl=30)
    invalidator = CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, local, None)
    key = _key("d1", 1)

    stale = {"rows": [{"price": "100"}], "total_count": 1, "page": 1, "limit": 10}
    await invalidator.purge("d1")
    await cache.set("d1", key, stale, ttl=30)
    assert await cache.get("d1", key) == stale
    now[0] = 31.0
    assert await cache.get("d1", key) is None


async def test_other_worker_serves_local_copy_for_at_most_local_ttl(shared_cache) -> None:
    """A purge clears the shared tier and this worker's local tier, not other workers' local tiers."""
    local_a = LocalCache(max_entries=10, default_ttl=5, clock=shared_cache.clock)
    local_b = LocalCache(max_entries=10, default_ttl=5, clock=shared_cache.clock)
    worker_a = CacheAside(local_a, shared_cache, local_ttl=5)
    worker_b = CacheAside(local_b, shared_cache, local_ttl=5)
    key = _key("d1", 1)
    await worker_b.set("d1", key, PAGE, ttl=60)

    await CacheInvalidator(CACHE_PREFIX_VEHICLE_LIST, local_a, shared_cache).purge("d1")

    assert key not in shared_cache.data
    shared_cache.now = 1.0
    assert await worker_a.get("d1", key) is None
    assert await worker_b.get("d1", key) == PAGE
    shared_cache.now = 5.0
    assert await worker_b.get("d1", key) is None


def test_shared_backends_support_key_scanning() -> None:
    assert isinstance(RedisCache(MagicMock()), KeyScanningCacheProtocol)
    assert isinstance(LocalCache(), KeyScanningCacheProtocol)
