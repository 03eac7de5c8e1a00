"""Tenant-scoped purge of cached list pages.

Keys embed arbitrary query parameters, so a mutation cannot address the
affected pages individually. purge(tenant) enumerates every key under the
tenant's prefix in the shared tier and deletes each from both tiers; the
local tier is also swept by prefix. One write therefore drops every cached
list page of that tenant for the entity type.

The shared tier is purged for every worker, but the local sweep reaches
only this process. Other workers keep serving their local copy of a
purged page until it expires, which is at most the local TTL
(local_cache_ttl_seconds, a few seconds by default).

Purging runs after the write has committed. A read that lands between the
commit and the purge can still be served (or repopulate the cache) with
pre-mutation data; that entry lives until the purge finishes, or until its
TTL when the purge fails. A populate that started before a purge and
finishes after it leaves stale data for at most one TTL as well.

Purge errors are logged and never raised: the write already succeeded.
"""

from __future__ import annotations

import asyncio

from dealer_inventory.infrastructure.cache.cache_protocol import KeyScanningCacheProtocol
from dealer_inventory.infrastructure.cache.keys import tenant_key_pattern, tenant_key_prefix
from dealer_inventory.infrastructure.cache.local_cache import LocalCache
from dealer_inventory.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class CacheInvalidator:
    """Purges every cached list page of one tenant for one key prefix."""

    def __init__(
        self,
        prefix: str,
        local: LocalCache | None,
        shared: KeyScanningCacheProtocol | None,
        *,
        enabled: bool = True,
        operation_timeout: float = 0.5,
    ) -> None:
        self.prefix = prefix
        self.local = local
        self.shared = shared
        self.enabled = enabled
        self.operation_timeout = operation_timeout
        self.shared_scan_supported = bool(
            shared is not None and getattr(shared, "supports_key_scan", False)
        )
        if not enabled:
            logger.warning(
                "Cache invalidation disabled for %s: list staleness bounded by TTL only",
                prefix,
            )
        elif shared is not None and not self.shared_scan_supported:
            logger.warning(
                "Shared cache backend %s cannot enumerate keys; %s pages in the shared "
                "tier expire by TTL only",
                type(shared).__name__,
                prefix,
            )

    async def purge(self, tenant_id: str) -> int:
        """Delete all cached list pages for tenant_id. Returns keys removed.

        Never raises for cache-side failures.
        """
        if not self.enabled:
            return 0
        removed = 0
        if self.local is not None:
            removed += await self.local.delete_prefix(tenant_key_prefix(self.prefix, tenant_id))
        if self.shared is None or not self.shared_scan_supported:
            return removed
        if not self.shared.is_available():
            logger.warning(
                "Shared cache unavailable; skipping purge of %s for tenant %s",
                self.prefix,
                tenant_id,
            )
            return removed
        pattern = tenant_key_pattern(self.prefix, tenant_id)
        try:
            keys = await asyncio.wait_for(
                self.shared.scan_keys(pattern), timeout=self.operation_timeout
            )
            if keys is None:
                logger.error("Cache purge failed: could not enumerate %s", pattern)
                return removed
            if not keys:
                logger.info("No cache entries to purge for %s", pattern)
                return removed
            deleted = await asyncio.wait_for(
                self.shared.delete_many(keys), timeout=self.operation_timeout
            )
            if self.local is not None:
                await self.local.delete_many(keys)
        except TimeoutError:
            logger.error("Cache purge timed out for %s; stale pages expire by TTL", pattern)
            return removed
        except Exception:
            logger.exception("Cache purge failed for %s; stale pages expire by TTL", pattern)
            return removed
        logger.info(
            "Cache INVALIDATE: %s (%s shared keys) for tenant %s",
            pattern,
            deleted,
            tenant_id,
        )
        return removed + deleted
