"""
TTL configuration per cache kind.
"""
from typing import Dict, Optional

from config.settings import Settings
from .core import CacheKind


# TTL Configuration by kind (in seconds)
TTL_CONFIG: Dict[CacheKind, int] = {
    CacheKind.DAY: 600,             # 10 minutes
    CacheKind.LEAGUES: 900,         # 15 minutes
    CacheKind.INJURIES: 1800,       # 30 minutes
    CacheKind.LINEUPS: 1800,        # 30 minutes
    CacheKind.TEAM_STATS: 86400,    # 24 hours
}


def ttl_config_from_settings(settings: Settings) -> Dict[CacheKind, int]:
    """
    Build the per-kind TTL table from application settings.

    Args:
        settings: Application settings carrying ttl_*_seconds overrides

    Returns:
        Mapping of cache kind to TTL in seconds
    """
    return {
        CacheKind.DAY: settings.ttl_day_seconds,
        CacheKind.LEAGUES: settings.ttl_leagues_seconds,
        CacheKind.INJURIES: settings.ttl_injuries_seconds,
        CacheKind.LINEUPS: settings.ttl_lineups_seconds,
        CacheKind.TEAM_STATS: settings.ttl_team_stats_seconds,
    }


def get_ttl_for_kind(
    kind: CacheKind,
    ttl_config: Optional[Dict[CacheKind, int]] = None,
) -> int:
    """
    Get the TTL in seconds for a cache kind.

    Kinds missing from a custom table fall back to the defaults above.
    """
    config = ttl_config or TTL_CONFIG
    return config.get(kind, TTL_CONFIG[kind])
