"""
Fixture listings: per-day matches, league summaries and fixture details.
"""

from .models import (
    FixtureRecord,
    LeagueSummary,
)
from .aggregator import (
    FixtureAggregator,
    build_league_summaries,
    fallback_window,
    parse_day,
)

__all__ = [
    # Models
    "FixtureRecord",
    "LeagueSummary",
    # Aggregator
    "FixtureAggregator",
    "build_league_summaries",
    "fallback_window",
    "parse_day",
]
