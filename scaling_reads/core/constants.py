"""Core constants: cache key structure and cache-aside defaults.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache and the album read pipeline.
"""

# Prefix for keys of cached read endpoints (endpoint:<route>:<digest>)
CACHE_PREFIX_ENDPOINT = "endpoint"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Default time-to-live for cache-aside entries, in seconds
DEFAULT_CACHE_TTL_SECONDS = 60

# TTL for album reads (GET /albums/{id})
ALBUM_CACHE_TTL_SECONDS = 120
