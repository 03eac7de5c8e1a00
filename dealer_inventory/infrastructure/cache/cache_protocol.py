"""Cache protocols for the two cache tiers.

Both tiers expose the same get/set/delete surface; only the shared tier
may additionally support key enumeration (needed for tenant purges).
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheProtocol(Protocol):
    """Exact-key cache backend with TTL (local or shared tier)."""

    def is_available(self) -> bool:
        """Return True if the backend is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def get_with_ttl(self, key: str) -> tuple[Any, float | None]:
        """Return (value, seconds left to live), or (None, None) on a miss.

        Seconds left is None when the entry has no expiry.
        """
        ...

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value with TTL in seconds. Returns True on success."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True on success."""
        ...


@runtime_checkable
class KeyScanningCacheProtocol(CacheProtocol, Protocol):
    """Shared-tier backend that can enumerate keys by glob pattern.

    supports_key_scan is a capability flag: backends that cannot
    enumerate keys report False and tenant purges fall back to TTL-only
    staleness bounds.
    """

    supports_key_scan: bool

    async def scan_keys(self, pattern: str) -> list[str] | None:
        """Return keys matching pattern, or None if enumeration failed."""
        ...

    async def delete_many(self, keys: list[str]) -> int:
        """Delete keys; return number deleted."""
        ...
