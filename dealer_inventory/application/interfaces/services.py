"""Service interfaces (ports) for the application layer.

Protocols for the list cache and its per-prefix invalidator (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol


# List cache interface
class IListCache(Protocol):
    """Protocol for the tenant-scoped read-through list cache."""

    def list_key(self, prefix: str, tenant_id: str, params: dict[str, Any]) -> str:
        """Return the canonical key for one list-query page of tenant_id."""

    async def get_or_load(
        self,
        tenant_id: str,
        key: str,
        loader: Callable[[], Awaitable[dict[str, Any]]],
        ttl: int,
    ) -> dict[str, Any]:
        """Return the cached value for key or load, store and return it."""


# Cache invalidator interface
class ICacheInvalidator(Protocol):
    """Protocol for purging one cache prefix for one tenant."""

    prefix: str

    async def purge(self, tenant_id: str) -> int:
        """Remove every cached entry under prefix for tenant; return entries removed."""
