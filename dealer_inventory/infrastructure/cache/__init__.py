"""Cache: two-tier cache-aside for list queries and tenant-scoped invalidation.

Local tier (LocalCache) in front of the shared Redis tier (RedisCache);
key format lives in keys.py.
"""

from dealer_inventory.infrastructure.cache.cache_aside import CacheAside
from dealer_inventory.infrastructure.cache.cache_protocol import (
    CacheProtocol,
    KeyScanningCacheProtocol,
)
from dealer_inventory.infrastructure.cache.invalidator import CacheInvalidator
from dealer_inventory.infrastructure.cache.keys import (
    list_query_key,
    tenant_key_pattern,
    tenant_key_prefix,
)
from dealer_inventory.infrastructure.cache.local_cache import LocalCache
from dealer_inventory.infrastructure.cache.redis_cache import RedisCache
from dealer_inventory.infrastructure.cache.registry import CacheRegistry, build_cache_registry

__all__ = [
    "CacheAside",
    "CacheInvalidator",
    "CacheProtocol",
    "CacheRegistry",
    "KeyScanningCacheProtocol",
    "LocalCache",
    "RedisCache",
    "build_cache_registry",
    "list_query_key",
    "tenant_key_pattern",
    "tenant_key_prefix",
]
