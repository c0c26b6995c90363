# src/storage/result_cache.py

"""In-memory TTL cache for paged flight search results."""

import json
import logging
import time
from dataclasses import asdict, dataclass
from typing import Any

from src.clustering.exceptions import CacheClosedError
from src.config.settings import Settings
from src.models.search_params import SearchParams

logger = logging.getLogger("flight_offers.cache")

# List-valued slice fields whose order carries no meaning
_UNORDERED_SLICE_FIELDS = (
    "origins",
    "destinations",
    "departure_preferred_times",
    "return_preferred_times",
)


@dataclass
class CacheEntry:
    """One cached result page for a logical search."""

    data: Any
    timestamp: float
    page_num: int


@dataclass
class CacheStats:
    """Counts of cached searches and pages (stale pages included)."""

    total_keys: int
    total_pages: int


class ResultCache:
    """Page cache keyed by a canonical search descriptor.

    An entry is served while its age is at most the TTL.  Stale entries
    are evicted lazily when read; there is no background sweep.  Not
    thread-safe: concurrent callers must serialise access.
    """

    def __init__(self, ttl: float | None = None) -> None:
        self._entries: dict[str, dict[int, CacheEntry]] = {}
        self._ttl: float = (
            Settings.RESULT_CACHE_TTL if ttl is None else ttl
        )
        self._closed = False

    @property
    def ttl(self) -> float:
        return self._ttl

    @staticmethod
    def cache_key(params: SearchParams) -> str:
        """Canonical JSON for *params*, insensitive to list ordering."""
        payload = asdict(params)
        for slice_params in payload["slices"]:
            for name in _UNORDERED_SLICE_FIELDS:
                slice_params[name] = sorted(slice_params[name])
        return json.dumps(payload, sort_keys=True, separators=(",", ":"))

    def _check_open(self) -> None:
        if self._closed:
            raise CacheClosedError("result cache has been closed")

    def set(self, params: SearchParams, page_num: int, data: Any) -> None:
        """Store *data* as page *page_num* of the search *params*."""
        self._check_open()
        key = self.cache_key(params)
        self._entries.setdefault(key, {})[page_num] = CacheEntry(
            data=data,
            timestamp=time.time(),
            page_num=page_num,
        )
        logger.info("Cached page %d for key %s", page_num, key[:100])

    def get(self, params: SearchParams, page_num: int) -> Any | None:
        """Return the cached page, or ``None`` on a miss or stale entry."""
        self._check_open()
        key = self.cache_key(params)
        pages = self._entries.get(key)
        entry = pages.get(page_num) if pages else None
        if pages is None or entry is None:
            logger.debug("Cache miss for page %d", page_num)
            return None

        age = time.time() - entry.timestamp
        if age > self._ttl:
            del pages[page_num]
            if not pages:
                del self._entries[key]
            logger.info(
                "Cache expired for page %d (age: %ds)", page_num, round(age)
            )
            return None

        logger.debug("Cache hit for page %d (age: %ds)", page_num, round(age))
        return entry.data

    def cached_pages(self, params: SearchParams) -> list[int]:
        """Page numbers still within the TTL for *params*, ascending."""
        self._check_open()
        pages = self._entries.get(self.cache_key(params), {})
        now = time.time()
        return sorted(
            num
            for num, entry in pages.items()
            if now - entry.timestamp <= self._ttl
        )

    def clear(self, params: SearchParams) -> int:
        """Drop every page of one logical search.

        Returns the number of pages removed.
        """
        self._check_open()
        pages = self._entries.pop(self.cache_key(params), None)
        count = len(pages) if pages else 0
        if count:
            logger.info("Cleared %d cached pages for one search", count)
        return count

    def clear_all(self) -> int:
        """Purge all cached pages and return how many were removed."""
        self._check_open()
        count = sum(len(pages) for pages in self._entries.values())
        self._entries.clear()
        logger.info("Cache manually purged (%d pages removed)", count)
        return count

    def stats(self) -> CacheStats:
        self._check_open()
        return CacheStats(
            total_keys=len(self._entries),
            total_pages=sum(len(p) for p in self._entries.values()),
        )

    def close(self) -> None:
        """Flush the cache; any further use raises ``CacheClosedError``."""
        if self._closed:
            return
        self._entries.clear()
        self._closed = True
        logger.debug("Result cache closed")
