"""Shared utilities: datetime helpers."""

from dealer_inventory.shared.utils.datetime import ensure_utc, utc_now

__all__ = [
    "ensure_utc",
    "utc_now",
]
