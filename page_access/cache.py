"""
Short-lived memoization for store round-trips (role lookups, employee directory).

Entries are `{"value": ..., "time": ...}`; an entry older than its TTL is treated
as absent. There is no locking: concurrent writers overwrite each other and
staleness is bounded by the TTL.
"""
import time
from typing import Any, Callable, Dict, Hashable, Optional

from .logging_config import create_logger

logger = create_logger("services.cache")

# Key used by unkeyed (singleton) caches such as the employee directory
SINGLETON = "__singleton__"

_MISSING = object()


class TTLCache:
    def __init__(self, ttl: float, name: str = "cache", clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.name = name
        self._clock = clock
        self._entries: Dict[Hashable, Dict[str, Any]] = {}

    def _lookup(self, key: Hashable, ttl: float) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        if self._clock() - entry["time"] < ttl:
            return entry["value"]
        return _MISSING

    def get(self, key: Hashable = SINGLETON, default: Any = None) -> Any:
        value = self._lookup(key, self.ttl)
        return default if value is _MISSING else value

    def set(self, key: Hashable, value: Any, stamp: Optional[float] = None) -> None:
        self._entries[key] = {"value": value, "time": self._clock() if stamp is None else stamp}

    def get_or_fetch(self, key: Hashable, fetch_fn: Callable[[], Any], ttl: Optional[float] = None) -> Any:
        """Return the cached value, or call `fetch_fn` and remember its result.

        The entry is stamped with the time the fetch started. Exceptions from
        `fetch_fn` propagate and nothing is stored.
        """
        effective_ttl = self.ttl if ttl is None else ttl
        value = self._lookup(key, effective_ttl)
        if value is not _MISSING:
            logger.debug(f"{self.name}: hit for {key}")
            return value

        logger.debug(f"{self.name}: miss for {key}, fetching")
        started = self._clock()
        value = fetch_fn()
        self.set(key, value, stamp=started)
        return value

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        """Drop one entry, or every entry when no key is given."""
        if key is None:
            self._entries.clear()
            logger.info(f"{self.name}: cleared all entries")
        else:
            self._entries.pop(key, None)
            logger.info(f"{self.name}: cleared entry {key}")

    def __contains__(self, key: Hashable) -> bool:
        return self._lookup(key, self.ttl) is not _MISSING

    def __len__(self) -> int:
        return len(self._entries)
