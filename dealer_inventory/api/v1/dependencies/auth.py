"""Bearer-token tenant resolution (composition root).

The dealership id comes only from a verified token claim, never from a
header or query parameter the client could set freely.
"""

from __future__ import annotations

import re
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dealer_inventory.core.config import get_settings
from dealer_inventory.domain.exceptions import AuthenticationException
from dealer_inventory.infrastructure.security.jwt import verify_token
from dealer_inventory.shared.context import set_current_tenant

# Tenant ids become cache-key segments and SCAN patterns.
TENANT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

_http_bearer = HTTPBearer(auto_error=False)


def is_valid_tenant_id_format(value: str) -> bool:
    """True for 1-64 alphanumeric, hyphen or underscore characters."""
    return bool(TENANT_ID_PATTERN.match(value))


async def get_tenant_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str:
    """Return the dealership id from the bearer token; raise 401 if absent or invalid."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Invalid or expired token") from e
    tenant_id = payload.get(get_settings().tenant_claim)
    if not isinstance(tenant_id, str) or not is_valid_tenant_id_format(tenant_id):
        raise AuthenticationException("Token carries no valid dealership")
    set_current_tenant(tenant_id)
    return tenant_id
