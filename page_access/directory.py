"""
Cached employee directory listing.
"""
from typing import Any, Dict, List, Optional

from .cache import SINGLETON, TTLCache
from .config import DIRECTORY_CACHE_TTL
from .models import scan_all_employees


class EmployeeDirectory:
    def __init__(self, cache: Optional[TTLCache] = None):
        self.cache = cache if cache is not None else TTLCache(DIRECTORY_CACHE_TTL, name="directory_cache")

    def get_cached_employees(self) -> List[Dict[str, Any]]:
        return self.cache.get_or_fetch(SINGLETON, scan_all_employees)

    def clear_employees_cache(self) -> None:
        self.cache.invalidate()
