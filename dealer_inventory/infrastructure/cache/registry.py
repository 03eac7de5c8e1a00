"""Process-wide cache wiring: one CacheAside plus one invalidator per entity.

Built once at startup (see core.lifespan) and injected into services
through API dependencies; nothing looks the cache up ad hoc.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dealer_inventory.core.config import Settings
from dealer_inventory.core.constants import CACHE_PREFIX_SALE_LIST, CACHE_PREFIX_VEHICLE_LIST
from dealer_inventory.infrastructure.cache.cache_aside import CacheAside
from dealer_inventory.infrastructure.cache.cache_protocol import KeyScanningCacheProtocol
from dealer_inventory.infrastructure.cache.invalidator import CacheInvalidator
from dealer_inventory.infrastructure.cache.local_cache import LocalCache


@dataclass
class CacheRegistry:
    """Cache tiers and the per-prefix invalidators that share them."""

    local: LocalCache
    shared: KeyScanningCacheProtocol | None
    cache: CacheAside
    invalidators: dict[str, CacheInvalidator] = field(default_factory=dict)

    def invalidator(self, prefix: str) -> CacheInvalidator:
        return self.invalidators[prefix]


def build_cache_registry(
    settings: Settings, shared: KeyScanningCacheProtocol | None
) -> CacheRegistry:
    """Wire local tier, optional shared tier, CacheAside and invalidators from settings."""
    local = LocalCache(
        max_entries=settings.local_cache_max_entries,
        default_ttl=settings.local_cache_ttl_seconds,
    )
    cache = CacheAside(
        local,
        shared,
        local_ttl=settings.local_cache_ttl_seconds,
        operation_timeout=settings.cache_operation_timeout_seconds,
    )
    invalidators = {
        prefix: CacheInvalidator(
            prefix,
            local,
            shared,
            enabled=settings.cache_invalidation_enabled,
            operation_timeout=settings.cache_operation_timeout_seconds,
        )
        for prefix in (CACHE_PREFIX_VEHICLE_LIST, CACHE_PREFIX_SALE_LIST)
    }
    return CacheRegistry(local=local, shared=shared, cache=cache, invalidators=invalidators)
