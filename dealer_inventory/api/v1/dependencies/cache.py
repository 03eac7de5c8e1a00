"""Cache dependencies: the process-wide registry built at startup."""

from __future__ import annotations

from fastapi import Request

from dealer_inventory.infrastructure.cache.registry import CacheRegistry


def get_cache_registry(request: Request) -> CacheRegistry | None:
    """CacheAside and invalidators from app.state (None when startup did not run)."""
    return getattr(request.app.state, "cache_registry", None)
