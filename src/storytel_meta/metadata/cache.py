# ABOUTME: TTL-bounded in-memory cache for search results, keyed by query/author/locale.
# ABOUTME: Injectable per provider instance instead of a process-wide store.

import time
from collections.abc import Callable

from cachetools import TTLCache

from storytel_meta.metadata.types import SearchResultSet

SEARCH_CACHE_TTL = 600

CacheKey = tuple[str, str, str]


class SearchCache:
    """Memoizes SearchResultSets for a fixed time after they are written.

    Reads and writes are single dict operations, so concurrent searches on one
    event loop need no locking. Two searches racing on the same key both write;
    the last one wins. Entries are copied on the way in and out, so callers may
    modify the result sets they get back.
    """

    def __init__(
        self,
        ttl: float = SEARCH_CACHE_TTL,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: TTLCache[CacheKey, SearchResultSet] = TTLCache(
            maxsize=maxsize, ttl=ttl, timer=timer
        )

    def get(self, key: CacheKey) -> SearchResultSet | None:
        """Return a copy of the cached result set, or None on a miss or expiry."""
        cached = self._entries.get(key)
        if cached is None:
            return None
        return SearchResultSet(matches=list(cached.matches))

    def set(self, key: CacheKey, value: SearchResultSet) -> None:
        self._entries[key] = SearchResultSet(matches=list(value.matches))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
