"""
Shared test fixtures: an in-memory upstream client and a controllable clock.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from app.cache import CacheManager
from app.errors import UpstreamUnavailable
from config.settings import Settings


class FakeClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self):
        self.now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeApiClient:
    """
    Stands in for ApiFootballClient with canned responses.

    Operation names listed in ``failing`` raise UpstreamUnavailable.
    Every call is recorded in ``calls``.
    """

    base_url = "https://upstream.test"

    def __init__(self):
        self.fixtures_by_date: Dict[str, List[Dict[str, Any]]] = {}
        self.fixtures_by_range: Dict[tuple, List[Dict[str, Any]]] = {}
        self.fixtures_by_id: Dict[int, Dict[str, Any]] = {}
        self.team_stats: Dict[int, Optional[Dict[str, Any]]] = {}
        self.injuries: Dict[int, List[Dict[str, Any]]] = {}
        self.lineups: Dict[int, List[Dict[str, Any]]] = {}
        self.failing: set = set()
        self.calls: List[tuple] = []

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise UpstreamUnavailable(operation, status_code=503, detail="simulated outage")

    def list_fixtures(self, date=None, from_date=None, to_date=None, fixture_id=None):
        if fixture_id is not None:
            self.calls.append(("fixture", fixture_id))
            self._check("fixture")
            found = self.fixtures_by_id.get(fixture_id)
            return [found] if found else []
        if date:
            self.calls.append(("fixtures_date", date))
            self._check("fixtures_date")
            return list(self.fixtures_by_date.get(date, []))
        self.calls.append(("fixtures_range", from_date, to_date))
        self._check("fixtures_range")
        return list(self.fixtures_by_range.get((from_date, to_date), []))

    def get_team_statistics(self, team_id, league_id, season):
        self.calls.append(("team_stats", team_id, league_id, season))
        self._check("team_stats")
        return self.team_stats.get(team_id)

    def list_injuries(self, fixture_id):
        self.calls.append(("injuries", fixture_id))
        self._check("injuries")
        return list(self.injuries.get(fixture_id, []))

    def list_lineups(self, fixture_id):
        self.calls.append(("lineups", fixture_id))
        self._check("lineups")
        return list(self.lineups.get(fixture_id, []))

    def check_status(self):
        self.calls.append(("status",))
        if "status" in self.failing:
            return {"ok": False, "status_http": 503, "error_detail": "simulated outage"}
        return {"ok": True, "status_http": 200, "error_detail": None}

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)


def make_fixture(
    fixture_id: int,
    league_id: int = 39,
    league_name: str = "Premier League",
    country: Optional[str] = "England",
    season: int = 2023,
    home: tuple = (40, "Liverpool"),
    away: tuple = (50, "Manchester City"),
    kickoff: str = "2024-05-01T19:00:00+00:00",
) -> Dict[str, Any]:
    """Raw API-Football fixture record."""
    return {
        "fixture": {"id": fixture_id, "date": kickoff},
        "league": {
            "id": league_id,
            "name": league_name,
            "country": country,
            "season": season,
        },
        "teams": {
            "home": {"id": home[0], "name": home[1]},
            "away": {"id": away[0], "name": away[1]},
        },
    }


def make_stats(
    for_home=None,
    for_away=None,
    against_home=None,
    against_away=None,
) -> Dict[str, Any]:
    """Raw teams/statistics response with goal averages as strings."""
    def fmt(value):
        return None if value is None else f"{value}"

    return {
        "goals": {
            "for": {"average": {"home": fmt(for_home), "away": fmt(for_away)}},
            "against": {"average": {"home": fmt(against_home), "away": fmt(against_away)}},
        }
    }


def make_injury(team_id: int, player_id: int) -> Dict[str, Any]:
    return {
        "player": {"id": player_id, "name": f"Player {player_id}", "type": "Missing Fixture"},
        "team": {"id": team_id},
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Fresh cache per test, on the fake clock."""
    return CacheManager(clock=clock)


@pytest.fixture
def fake_client():
    return FakeApiClient()


@pytest.fixture
def test_settings():
    return Settings(af_api_key="test-key")
