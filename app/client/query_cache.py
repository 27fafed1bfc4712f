import threading
import time
import logging
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]


def make_key(path: str, *params: Any) -> QueryKey:
    """Build a cache key from an endpoint path plus its identifier/filter parameters."""
    parts = []
    for param in params:
        if isinstance(param, dict):
            # Missing and None filters key the same entry
            param = tuple(sorted((k, v) for k, v in param.items() if v is not None))
        parts.append(param)
    return (path, *parts)


class QueryCache:
    """Keyed result cache for API queries.

    Concurrent `fetch` calls for the same key share a single load. Entries live
    until a mutation invalidates them; there is no expiry.
    """

    def __init__(self):
        self._entries: Dict[QueryKey, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._key_locks: Dict[QueryKey, threading.Lock] = {}

    def _key_lock(self, key: QueryKey) -> threading.Lock:
        with self._lock:
            return self._key_locks.setdefault(key, threading.Lock())

    def get(self, key: QueryKey) -> Optional[Any]:
        with self._lock:
            item = self._entries.get(key)
            return item["value"] if item else None

    def contains(self, key: QueryKey) -> bool:
        with self._lock:
            return key in self._entries

    def set(self, key: QueryKey, value: Any) -> None:
        with self._lock:
            self._entries[key] = {"value": value, "created_at": time.time()}

    def fetch(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        with self._key_lock(key):
            with self._lock:
                if key in self._entries:
                    logger.debug(f"Query cache HIT for key: {key}")
                    return self._entries[key]["value"]

            logger.debug(f"Query cache MISS for key: {key}")
            value = loader()
            self.set(key, value)
            return value

    def invalidate(self, path: str) -> int:
        """Drop every entry, and its load lock, whose key starts with `path`."""
        with self._lock:
            stale = [key for key in self._entries if key[0] == path]
            for key in stale:
                del self._entries[key]
            for key in [key for key in self._key_locks if key[0] == path]:
                del self._key_locks[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached queries for {path}")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()
