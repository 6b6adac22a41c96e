"""
Freshness cache with a fixed TTL per record kind.
"""
import threading
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Callable, Any, Tuple

from .core import CacheEntry, CacheKind
from .ttl_policies import get_ttl_for_kind

logger = logging.getLogger("cache.manager")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheManager:
    """
    Keyed time-to-live store shared by the aggregator and prediction engine.

    - One independent keyspace per CacheKind
    - Expired entries behave as misses and are evicted on lookup
    - Thread-safe; concurrent writes to the same key are last-write-wins
    """

    def __init__(
        self,
        ttl_config: Optional[Dict[CacheKind, int]] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the cache manager.

        Args:
            ttl_config: Per-kind TTL in seconds (defaults to TTL_CONFIG)
            clock: Returns the current time; replaced in tests
        """
        self._ttl_config = ttl_config
        self._clock = clock
        self._cache: Dict[Tuple[CacheKind, str], CacheEntry] = {}
        self._cache_lock = threading.RLock()

        # Stats tracking
        self._stats = {
            "hits": 0,
            "misses": 0,
            "expired": 0,
        }

    def ttl_for(self, kind: CacheKind) -> int:
        return get_ttl_for_kind(kind, self._ttl_config)

    def get(self, kind: CacheKind, key: str) -> Optional[Any]:
        """
        Look up a fresh value.

        Args:
            kind: Record kind (selects keyspace and TTL)
            key: Cache key within the kind

        Returns:
            The stored value, or None when missing or expired. Stored
            falsy values such as [] or False are returned as hits. The
            object itself is returned, not a copy; callers must not mutate it.
        """
        now = self._clock()
        with self._cache_lock:
            entry = self._cache.get((kind, key))

            if entry is None:
                logger.debug(f"CACHE MISS: {kind.value}:{key}")
                self._stats["misses"] += 1
                return None

            if entry.is_expired(now):
                del self._cache[(kind, key)]
                logger.info(
                    f"CACHE EXPIRED: {kind.value}:{key} "
                    f"[age={entry.age_seconds(now):.1f}s]"
                )
                self._stats["expired"] += 1
                self._stats["misses"] += 1
                return None

            logger.debug(
                f"CACHE HIT: {kind.value}:{key} [age={entry.age_seconds(now):.1f}s]"
            )
            self._stats["hits"] += 1
            return entry.data

    def set(self, kind: CacheKind, key: str, value: Any) -> None:
        """Store a value, replacing any previous entry for the key."""
        entry = CacheEntry(
            data=value,
            fetched_at=self._clock(),
            ttl_seconds=self.ttl_for(kind),
        )
        with self._cache_lock:
            self._cache[(kind, key)] = entry

    def invalidate(self, kind: CacheKind, key: str) -> bool:
        """
        Invalidate a specific cache entry.

        Returns:
            True if entry was found and removed
        """
        with self._cache_lock:
            if (kind, key) in self._cache:
                del self._cache[(kind, key)]
                logger.info(f"Invalidated cache: {kind.value}:{key}")
                return True
            return False

    def purge_expired(self) -> int:
        """
        Remove every expired entry without waiting for a lookup.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._cache_lock:
            to_delete = [k for k, entry in self._cache.items() if entry.is_expired(now)]
            for cache_key in to_delete:
                del self._cache[cache_key]
            if to_delete:
                logger.info(f"Purged {len(to_delete)} expired entries")
            self._stats["expired"] += len(to_delete)
            return len(to_delete)

    def clear(self) -> int:
        """
        Clear all cache entries.

        Returns:
            Number of entries cleared
        """
        with self._cache_lock:
            count = len(self._cache)
            self._cache.clear()
            logger.info(f"Cleared {count} cache entries")
            return count

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._cache_lock:
            total_requests = self._stats["hits"] + self._stats["misses"]
            hit_rate = (self._stats["hits"] / total_requests * 100) if total_requests > 0 else 0

            by_kind = {kind.value: 0 for kind in CacheKind}
            for kind, _ in self._cache:
                by_kind[kind.value] += 1

            return {
                "entries": len(self._cache),
                "entries_by_kind": by_kind,
                "hits": self._stats["hits"],
                "misses": self._stats["misses"],
                "expired": self._stats["expired"],
                "hit_rate_percent": round(hit_rate, 1),
                "ttl_seconds": {kind.value: self.ttl_for(kind) for kind in CacheKind},
            }
