"""Cache-aside read path over two tiers.

Lookup order is local tier, then shared tier. A shared hit back-fills the
local tier for the shorter of the shared entry's remaining lifetime and
the local TTL, so a back-filled copy never outlives the entry it came
from. A miss in both tiers means the caller loads from the store and
populates both tiers (the local copy is capped by the local TTL).

A page can therefore be served at most one list TTL after it was loaded,
whether or not a purge reached it.

Shared-tier calls run under a timeout. Any error or timeout is logged and
treated as a miss (reads) or ignored (writes): a broken cache never fails
a request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from dealer_inventory.core.constants import CACHE_KEY_SEP
from dealer_inventory.infrastructure.cache.cache_protocol import CacheProtocol
from dealer_inventory.infrastructure.cache.keys import list_query_key
from dealer_inventory.infrastructure.cache.local_cache import LocalCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheAside:
    """Two-tier cache-aside for tenant-scoped list pages.

    Values are JSON-compatible dicts; callers convert to and from their DTOs.
    """

    def __init__(
        self,
        local: LocalCache | None,
        shared: CacheProtocol | None,
        *,
        local_ttl: int = 5,
        operation_timeout: float = 0.5,
    ) -> None:
        self.local = local
        self.shared = shared
        self.local_ttl = local_ttl
        self.operation_timeout = operation_timeout

    @staticmethod
    def list_key(prefix: str, tenant_id: str, params: dict[str, Any]) -> str:
        """Canonical key for one list-query page of tenant_id."""
        return list_query_key(prefix, tenant_id, params)

    @staticmethod
    def _check_scope(tenant_id: str, key: str) -> None:
        """Reject keys that do not carry the caller's tenant segment."""
        if f"{CACHE_KEY_SEP}{tenant_id}{CACHE_KEY_SEP}" not in key:
            raise ValueError(f"Cache key is not scoped to tenant {tenant_id!r}")

    def _shared_usable(self) -> bool:
        return self.shared is not None and self.shared.is_available()

    async def _shared_call(self, op: str, key: str, call: Awaitable[T]) -> T | None:
        """Run one shared-tier call with timeout; None on any failure."""
        try:
            return await asyncio.wait_for(call, timeout=self.operation_timeout)
        except TimeoutError:
            logger.warning("Shared cache %s timed out for key %s; failing open", op, key)
        except Exception:
            logger.warning(
                "Shared cache %s failed for key %s; failing open", op, key, exc_info=True
            )
        return None

    async def get(self, tenant_id: str, key: str) -> dict[str, Any] | None:
        """Return the cached page for key, or None on a miss in both tiers."""
        self._check_scope(tenant_id, key)
        if self.local is not None:
            value = await self.local.get(key)
            if value is not None:
                logger.debug("Cache HIT (local): %s", key)
                return value
        if self._shared_usable():
            found = await self._shared_call("get", key, self.shared.get_with_ttl(key))
            value, remaining = found if found is not None else (None, None)
            if value is not None:
                logger.debug("Cache HIT (shared): %s", key)
                if self.local is not None:
                    ttl = self.local_ttl if remaining is None else min(remaining, self.local_ttl)
                    await self.local.set(key, value, ttl)
                return value
        logger.debug("Cache MISS: %s", key)
        return None

    async def set(self, tenant_id: str, key: str, value: dict[str, Any], ttl: int) -> None:
        """Populate both tiers with value."""
        self._check_scope(tenant_id, key)
        if self.local is not None:
            await self.local.set(key, value, min(ttl, self.local_ttl))
        if self._shared_usable():
            await self._shared_call("set", key, self.shared.set(key, value, ttl))
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def get_or_load(
        self,
        tenant_id: str,
        key: str,
        loader: Callable[[], Awaitable[dict[str, Any]]],
        ttl: int,
    ) -> dict[str, Any]:
        """Return cached value or load it from the store and populate the cache.

        Loader errors (store failures) propagate; cache errors never do.
        """
        cached = await self.get(tenant_id, key)
        if cached is not None:
            return cached
        value = await loader()
        await self.set(tenant_id, key, value, ttl)
        return value
