"""In-process cache tier: bounded LRU with per-entry TTL.

Process-local accelerator in front of the shared Redis tier. Thread-safe
(one lock around the OrderedDict); expiry uses a monotonic clock so wall
clock changes do not extend or cut entry lifetimes.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)


class LocalCache:
    """Size-bounded LRU cache with TTL. Async surface matches CacheProtocol."""

    supports_key_scan = True

    def __init__(
        self,
        max_entries: int = 5000,
        default_ttl: int = 5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = max_entries
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = Lock()

    def is_available(self) -> bool:
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def get(self, key: str) -> Any | None:
        """Return value if present and not expired; refresh its LRU position."""
        value, _ = await self.get_with_ttl(key)
        return value

    async def get_with_ttl(self, key: str) -> tuple[Any | None, float | None]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None, None
            expires_at, value = entry
            if expires_at <= now:
                del self._entries[key]
                return None, None
            self._entries.move_to_end(key)
            return value, expires_at - now

    async def set(self, key: str, value: Any, ttl: float | None = None) -> bool:
        """Store value; evict least recently used entries beyond capacity."""
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= 0:
            return False
        expires_at = self._clock() + ttl
        with self._lock:
            self._entries[key] = (expires_at, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Local cache EVICT: %s", evicted)
        return True

    async def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    async def scan_keys(self, pattern: str) -> list[str]:
        """Return live keys matching a trailing-'*' prefix pattern."""
        prefix = pattern[:-1] if pattern.endswith("*") else pattern
        now = self._clock()
        with self._lock:
            return [
                k
                for k, (expires_at, _) in self._entries.items()
                if k.startswith(prefix) and expires_at > now
            ]

    async def delete_many(self, keys: list[str]) -> int:
        with self._lock:
            return sum(1 for k in keys if self._entries.pop(k, None) is not None)

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every key starting with prefix (expired ones included)."""
        with self._lock:
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for k in doomed:
                del self._entries[k]
        return len(doomed)

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()
