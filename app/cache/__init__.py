"""
Freshness cache with a fixed time-to-live per record kind.
"""
from .core import CacheEntry, CacheKind
from .ttl_policies import (
    TTL_CONFIG,
    get_ttl_for_kind,
    ttl_config_from_settings,
)
from .manager import CacheManager

__all__ = [
    # Core types
    "CacheEntry",
    "CacheKind",
    # TTL policies
    "TTL_CONFIG",
    "get_ttl_for_kind",
    "ttl_config_from_settings",
    # Manager
    "CacheManager",
]
