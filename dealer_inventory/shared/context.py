"""Request context management using contextvars.

Holds request-scoped values that log records pick up: the request id
(set by RequestIDMiddleware) and the dealership id (set once the bearer
token has been verified).
"""

from contextvars import ContextVar

_current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)
_current_tenant_id: ContextVar[str | None] = ContextVar("current_tenant_id", default=None)


def set_request_id(request_id: str | None) -> None:
    _current_request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return _current_request_id.get()


def set_current_tenant(tenant_id: str | None) -> None:
    """Set the dealership for this request. Call after authentication."""
    _current_tenant_id.set(tenant_id)


def get_current_tenant() -> str | None:
    """Return the current dealership id, or None if not authenticated."""
    return _current_tenant_id.get()


def clear_request_context() -> None:
    """Clear request id and tenant."""
    _current_request_id.set(None)
    _current_tenant_id.set(None)
