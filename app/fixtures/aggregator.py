"""
Per-day fixture listings, league summaries and fixture detail enrichment.

Builds the day views from raw provider fixtures, with a ±1 day fallback
window when the exact-date query comes back empty.
"""
import copy
import logging
from datetime import date, datetime, timedelta
from typing import Optional, Dict, Any, List, Tuple

from app.api_client import ApiFootballClient
from app.cache import CacheManager, CacheKind
from app.errors import UpstreamUnavailable, InvalidDate
from .models import FixtureRecord, LeagueSummary

logger = logging.getLogger("fixtures.aggregator")


def parse_day(day: str) -> date:
    """Parse a YYYY-MM-DD day string, raising InvalidDate otherwise."""
    try:
        parsed = datetime.strptime(day, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise InvalidDate(day) from None
    # strptime also takes unpadded fields such as 2024-5-1
    if parsed.isoformat() != day:
        raise InvalidDate(day)
    return parsed


def fallback_window(day: str) -> Tuple[str, str]:
    """Inclusive (from, to) range spanning the day before to the day after."""
    parsed = parse_day(day)
    return (
        (parsed - timedelta(days=1)).isoformat(),
        (parsed + timedelta(days=1)).isoformat(),
    )


def build_league_summaries(fixtures: List[Dict[str, Any]]) -> List[LeagueSummary]:
    """
    Group fixtures by (league id, season) and sort by country, then name.

    The first fixture seen for a group supplies its name and country.
    Fixtures without a league id are skipped.
    """
    groups: Dict[Tuple[int, Any], LeagueSummary] = {}
    for fixture in fixtures:
        league = fixture.get("league") or {}
        league_id = league.get("id")
        if not league_id:
            continue
        group_key = (league_id, league.get("season"))
        if group_key not in groups:
            groups[group_key] = LeagueSummary(
                id=league_id,
                name=league.get("name"),
                country=league.get("country"),
                season=league.get("season"),
            )

    return sorted(groups.values(), key=lambda summary: summary.sort_key)


class FixtureAggregator:
    """
    Serves day listings, league summaries and fixture details.

    Every upstream failure here degrades to an empty result; nothing is
    raised for provider errors.
    """

    def __init__(self, client: ApiFootballClient, cache: CacheManager):
        self.client = client
        self.cache = cache

    def fetch_fixtures_for_day(self, day: str) -> List[Dict[str, Any]]:
        """
        Fetch raw fixtures for a day.

        Queries the exact date first; if that yields nothing (or fails),
        retries with the inclusive window day-1..day+1.

        Args:
            day: ISO date (YYYY-MM-DD)

        Returns:
            Raw fixture records, possibly empty
        """
        from_date, to_date = fallback_window(day)

        fixtures: List[Dict[str, Any]] = []
        try:
            fixtures = self.client.list_fixtures(date=day)
            logger.info(f"fixtures(date) {day} = {len(fixtures)}")
        except UpstreamUnavailable as e:
            logger.warning(f"fixtures(date) {day} failed: {e}")

        if not fixtures:
            try:
                fixtures = self.client.list_fixtures(from_date=from_date, to_date=to_date)
                logger.info(f"fixtures(from/to) {day} ±1 = {len(fixtures)}")
            except UpstreamUnavailable as e:
                logger.warning(f"fixtures(from/to) {day} failed: {e}")

        return fixtures

    def get_leagues_for_day(self, day: str) -> Dict[str, Any]:
        """
        Get the leagues with fixtures on a day.

        Returns:
            Dict with date, count and leagues (sorted by country, then name)
        """
        cache_key = f"L_{day}"
        cached = self.cache.get(CacheKind.LEAGUES, cache_key)
        if cached is not None:
            return copy.deepcopy(cached)

        fixtures = self.fetch_fixtures_for_day(day)
        leagues = [summary.to_dict() for summary in build_league_summaries(fixtures)]

        payload = {"date": day, "count": len(leagues), "leagues": leagues}
        self.cache.set(CacheKind.LEAGUES, cache_key, payload)
        return copy.deepcopy(payload)

    def get_day_view(self, day: str, league_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Get the matches for a day, optionally restricted to one league.

        Matches are listed without enrichment: lineups unconfirmed and
        empty availability. Injuries and lineups come from
        get_fixture_details().

        Returns:
            Dict with date, matches and meta
        """
        cache_key = f"D_{day}" + (f"_L{league_id}" if league_id else "")
        cached = self.cache.get(CacheKind.DAY, cache_key)
        if cached is not None:
            return copy.deepcopy(cached)

        fixtures = self.fetch_fixtures_for_day(day)
        if league_id:
            fixtures = [
                f for f in fixtures
                if _as_int((f.get("league") or {}).get("id")) == league_id
            ]

        matches = [
            {
                "match": FixtureRecord.from_api(fixture).to_dict(),
                "lineupsConfirmed": False,
                "availability": [],
            }
            for fixture in fixtures
        ]

        payload = {
            "date": day,
            "matches": matches,
            "meta": {"leagueFilter": league_id or None},
        }
        self.cache.set(CacheKind.DAY, cache_key, payload)
        return copy.deepcopy(payload)

    def get_fixture_details(self, fixture_id: int) -> Dict[str, Any]:
        """
        Get injuries and lineup confirmation for a fixture.

        Served from cache when both values are fresh. Otherwise both are
        fetched; a failed fetch degrades to [] / False and the two results
        are cached independently.

        Returns:
            Dict with injuries (raw records) and lineupsConfirmed
        """
        cache_key = str(fixture_id)
        cached_injuries = self.cache.get(CacheKind.INJURIES, cache_key)
        cached_lineups = self.cache.get(CacheKind.LINEUPS, cache_key)
        if cached_injuries is not None and cached_lineups is not None:
            return {"injuries": copy.deepcopy(cached_injuries), "lineupsConfirmed": cached_lineups}

        injuries: List[Dict[str, Any]] = []
        try:
            injuries = self.client.list_injuries(fixture_id)
        except UpstreamUnavailable as e:
            logger.warning(f"injuries for fixture {fixture_id} unavailable: {e}")

        lineups_confirmed = False
        try:
            lineups = self.client.list_lineups(fixture_id)
            lineups_confirmed = len(lineups) > 0
        except UpstreamUnavailable as e:
            logger.warning(f"lineups for fixture {fixture_id} unavailable: {e}")

        self.cache.set(CacheKind.INJURIES, cache_key, injuries)
        self.cache.set(CacheKind.LINEUPS, cache_key, lineups_confirmed)
        return {"injuries": copy.deepcopy(injuries), "lineupsConfirmed": lineups_confirmed}


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
