"""
Data models for fixture listings.
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class FixtureRecord:
    """
    A normalized fixture built from one raw provider record.
    """
    fixture_id: Optional[int]
    league_id: Optional[int]
    league_name: Optional[str]
    country: Optional[str]
    season: Optional[int]
    home_id: Optional[int]
    home_name: Optional[str]
    away_id: Optional[int]
    away_name: Optional[str]
    kickoff: Optional[str]  # ISO timestamp from the provider

    @classmethod
    def from_api(cls, fixture: Dict[str, Any]) -> "FixtureRecord":
        """Create from a raw API-Football fixture record."""
        fixture_info = fixture.get("fixture") or {}
        league = fixture.get("league") or {}
        teams = fixture.get("teams") or {}
        home = teams.get("home") or {}
        away = teams.get("away") or {}

        return cls(
            fixture_id=fixture_info.get("id"),
            league_id=league.get("id"),
            league_name=league.get("name"),
            country=league.get("country"),
            season=league.get("season"),
            home_id=home.get("id"),
            home_name=home.get("name"),
            away_id=away.get("id"),
            away_name=away.get("name"),
            kickoff=fixture_info.get("date"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the match payload used by the day view."""
        return {
            "id": str(self.fixture_id) if self.fixture_id is not None else None,
            "home": self.home_name,
            "away": self.away_name,
            "homeId": self.home_id,
            "awayId": self.away_id,
            "league": self.league_name,
            "leagueId": self.league_id,
            "season": self.season,
            "country": self.country or None,
            "time": self.kickoff,
            "dateISO": self.kickoff,
        }


@dataclass(frozen=True)
class LeagueSummary:
    """A league (id + season) appearing in a day's fixtures."""
    id: int
    name: Optional[str]
    country: Optional[str]
    season: Optional[int]

    @property
    def sort_key(self):
        """Country then name, missing values sorting as empty strings."""
        return (self.country or "", self.name or "")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "season": self.season,
        }
