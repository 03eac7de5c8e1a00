"""Core constants: cache key prefixes and list-query defaults.

Single source of truth for cache key structure. Used by
infrastructure.cache.keys and the list services.
"""

# Cache key prefixes for list-query pages (one per cached entity type)
CACHE_PREFIX_VEHICLE_LIST = "vehicle_list"
CACHE_PREFIX_SALE_LIST = "sale_list"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# List-query defaults
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT_FIELD = "created_at"
