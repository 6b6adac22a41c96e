"""
Data models for the match outcome model.

Defines team statistics snapshots, injury impact and prediction results.
"""
import math
from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum


# Label reported with every prediction
MODEL_NOTE = "Poisson + AIS"

# League-average fallbacks used when a statistic is missing
FALLBACK_HOME_GOALS_FOR = 1.2
FALLBACK_HOME_GOALS_AGAINST = 1.0
FALLBACK_AWAY_GOALS_FOR = 1.1
FALLBACK_AWAY_GOALS_AGAINST = 1.1


class Outcome(Enum):
    """Match outcome picked by the model."""
    HOME = "HOME"
    DRAW = "DRAW"
    AWAY = "AWAY"


def _to_average(value: Any) -> Optional[float]:
    """
    Parse a provider average ("1.5", 1.5, None).

    Zero, missing and non-numeric values all come back as None so the
    caller's league-average fallback applies.
    """
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(parsed) or parsed == 0:
        return None
    return parsed


@dataclass(frozen=True)
class TeamStatsSnapshot:
    """
    Average goals for/against split by venue, for one (team, league, season).
    """
    team_id: Optional[int]
    goals_for_home: Optional[float] = None
    goals_for_away: Optional[float] = None
    goals_against_home: Optional[float] = None
    goals_against_away: Optional[float] = None

    @classmethod
    def from_api(cls, team_id: Optional[int], data: Optional[Dict[str, Any]]) -> "TeamStatsSnapshot":
        """Create from a raw teams/statistics response (None gives an empty snapshot)."""
        goals = (data or {}).get("goals") or {}
        goals_for = (goals.get("for") or {}).get("average") or {}
        goals_against = (goals.get("against") or {}).get("average") or {}

        return cls(
            team_id=team_id,
            goals_for_home=_to_average(goals_for.get("home")),
            goals_for_away=_to_average(goals_for.get("away")),
            goals_against_home=_to_average(goals_against.get("home")),
            goals_against_away=_to_average(goals_against.get("away")),
        )


@dataclass(frozen=True)
class InjuryImpact:
    """
    Injury-driven dampening applied to each side's expected goals.

    ``degraded`` is set when the injury fetch failed and zero impact was
    assumed instead.
    """
    home: float = 0.0
    away: float = 0.0
    home_count: int = 0
    away_count: int = 0
    degraded: bool = False


@dataclass
class PredictionResult:
    """Outcome probabilities for one fixture. Computed per request."""
    fixture_id: int
    league_id: Optional[int]
    season: Optional[int]
    home: float          # Percentages, one decimal
    draw: float
    away: float
    lambda_home: float
    lambda_away: float
    injury_impact: InjuryImpact
    pick: Outcome

    @property
    def probabilities(self) -> Dict[str, float]:
        return {"home": self.home, "draw": self.draw, "away": self.away}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "fixtureId": str(self.fixture_id),
            "leagueId": self.league_id,
            "season": self.season,
            "prob": {
                **self.probabilities,
                "lambdaHome": round(self.lambda_home, 2),
                "lambdaAway": round(self.lambda_away, 2),
                "ais": {
                    "home": round(self.injury_impact.home, 2),
                    "away": round(self.injury_impact.away, 2),
                },
            },
            "pick": self.pick.value,
            "note": MODEL_NOTE,
        }
