"""Cache key builders. Single place for key format.

List-query keys are `{prefix}:{tenant_id}:{canonical params}` so that all
pages of one tenant share the `{prefix}:{tenant_id}:` prefix and can be
purged together. Tenant ids must not contain the separator or glob
metacharacters, otherwise one tenant's purge pattern could match another
tenant's keys.
"""

import json
from typing import Any

from dealer_inventory.core.constants import CACHE_KEY_SEP

_GLOB_CHARS = frozenset("*?[]\\")


def _validate_tenant_component(tenant_id: str) -> None:
    """Raise ValueError if tenant_id is empty or unsafe inside a key or SCAN pattern."""
    if not tenant_id:
        raise ValueError("Cache key component 'tenant_id' must be non-empty")
    if CACHE_KEY_SEP in tenant_id or _GLOB_CHARS.intersection(tenant_id):
        raise ValueError(
            f"Cache key component 'tenant_id' must not contain {CACHE_KEY_SEP!r} "
            "or glob characters"
        )


def canonical_params(params: dict[str, Any]) -> str:
    """Stable serialization of query parameters (sorted keys, compact)."""
    return json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)


def tenant_key_prefix(prefix: str, tenant_id: str) -> str:
    """Prefix shared by every list key of one tenant (e.g. 'vehicle_list:d1:')."""
    _validate_tenant_component(tenant_id)
    return f"{prefix}{CACHE_KEY_SEP}{tenant_id}{CACHE_KEY_SEP}"


def tenant_key_pattern(prefix: str, tenant_id: str) -> str:
    """SCAN match pattern for every list key of one tenant."""
    return f"{tenant_key_prefix(prefix, tenant_id)}*"


def list_query_key(prefix: str, tenant_id: str, params: dict[str, Any]) -> str:
    """Cache key for one list-query page.

    Identical (tenant, params) produce the same key; any differing
    parameter produces a different key.
    """
    return f"{tenant_key_prefix(prefix, tenant_id)}{canonical_params(params)}"
