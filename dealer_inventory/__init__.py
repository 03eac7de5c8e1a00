"""Dealer inventory: multi-tenant vehicle and sale record service."""

__version__ = "1.0.0"
