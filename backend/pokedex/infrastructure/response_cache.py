"""Response Cache - transient in-memory TTL caches for upstream payloads and datasets.

Invariants:
    - Entries older than ttl_seconds are never returned
    - ttl_seconds <= 0 disables caching: the factory returns None
    - Process-local only; contents are lost on restart

Design Decisions:
    - cachetools.TTLCache: expiry and size-bounded eviction come from the library
    - Timer injectable so tests can expire entries without sleeping
"""

import time
from collections.abc import Callable

from cachetools import TTLCache


def response_cache(
    ttl_seconds: float,
    max_entries: int = 5000,
    timer: Callable[[], float] = time.monotonic,
) -> TTLCache | None:
    """TTL cache for validated payloads, or None when caching is disabled."""
    if ttl_seconds <= 0:
        return None
    return TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=timer)
