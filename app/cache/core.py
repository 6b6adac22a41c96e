"""
Core cache data structures.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from enum import Enum


class CacheKind(Enum):
    """Record kinds held by the cache, each with its own freshness window."""
    DAY = "day"                   # Day fixture listings, 10 minutes
    LEAGUES = "leagues"           # Day league summaries, 15 minutes
    INJURIES = "injuries"         # Injury lists per fixture, 30 minutes
    LINEUPS = "lineups"           # Lineup-confirmed flags per fixture, 30 minutes
    TEAM_STATS = "team_stats"     # Team statistics snapshots, 24 hours


@dataclass
class CacheEntry:
    """
    A cached value with the time it was stored and its freshness window.
    """
    data: Any
    fetched_at: datetime
    ttl_seconds: int

    def age_seconds(self, now: datetime) -> float:
        """Seconds since data was stored."""
        return (now - self.fetched_at).total_seconds()

    def is_expired(self, now: datetime) -> bool:
        """An entry stays usable up to and including its TTL."""
        return self.age_seconds(now) > self.ttl_seconds
