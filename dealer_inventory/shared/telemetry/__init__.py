"""Shared telemetry: logging setup with request context."""

from dealer_inventory.shared.telemetry.logging import (
    RequestContextFilter,
    get_logger,
    setup_logging,
)

__all__ = [
    "RequestContextFilter",
    "get_logger",
    "setup_logging",
]
