"""
Prediction engine for match outcomes.

Combines cached team statistics and fixture injuries into expected-goals
parameters and runs the Poisson scoreline model over them.
"""
import logging
from collections import defaultdict
from typing import Optional, Dict, Any, List, Tuple

from app.api_client import ApiFootballClient
from app.cache import CacheManager, CacheKind
from app.errors import FixtureNotFound, UpstreamUnavailable
from app.fixtures.models import FixtureRecord
from config.settings import Settings
from .models import (
    TeamStatsSnapshot,
    InjuryImpact,
    PredictionResult,
    FALLBACK_HOME_GOALS_FOR,
    FALLBACK_HOME_GOALS_AGAINST,
    FALLBACK_AWAY_GOALS_FOR,
    FALLBACK_AWAY_GOALS_AGAINST,
)
from .poisson import outcome_probabilities, to_percentages, pick_outcome

logger = logging.getLogger("prediction.engine")


def expected_goals(
    home_stats: TeamStatsSnapshot,
    away_stats: TeamStatsSnapshot,
) -> Tuple[float, float]:
    """
    Baseline expected goals for each side.

    lambda_home averages the home side's scoring at home with the away
    side's conceding away; lambda_away mirrors it.
    """
    home_goals_for = home_stats.goals_for_home or FALLBACK_HOME_GOALS_FOR
    home_goals_against = home_stats.goals_against_home or FALLBACK_HOME_GOALS_AGAINST
    away_goals_for = away_stats.goals_for_away or FALLBACK_AWAY_GOALS_FOR
    away_goals_against = away_stats.goals_against_away or FALLBACK_AWAY_GOALS_AGAINST

    lambda_home = (home_goals_for + away_goals_against) / 2
    lambda_away = (away_goals_for + home_goals_against) / 2
    return lambda_home, lambda_away


def count_injuries_by_team(injuries: List[Dict[str, Any]]) -> Dict[int, int]:
    """Count injury records per team id, skipping records without a team."""
    counts: Dict[int, int] = defaultdict(int)
    for item in injuries:
        team_id = (item.get("team") or {}).get("id")
        if not team_id:
            continue
        counts[team_id] += 1
    return dict(counts)


def apply_impact(lam: float, impact: float, floor: float = 0.1) -> float:
    """Dampen expected goals by the injury impact, never below floor."""
    return max(floor, lam * (1 - impact))


class PredictionEngine:
    """
    Poisson outcome model with injury adjustment.

    Statistics and injury fetch failures degrade to defaults; only an
    unknown fixture (or a failed fixture lookup) reaches the caller.
    """

    def __init__(
        self,
        client: ApiFootballClient,
        cache: CacheManager,
        settings: Settings,
    ):
        self.client = client
        self.cache = cache
        self.injury_weight = settings.injury_weight
        self.max_goals = settings.max_goals
        self.lambda_floor = settings.lambda_floor

    def predict(self, fixture_id: int) -> PredictionResult:
        """
        Predict the outcome of a fixture.

        Args:
            fixture_id: The fixture ID

        Returns:
            PredictionResult with percentages, lambdas, injury impact and pick

        Raises:
            FixtureNotFound: the provider has no such fixture
            UpstreamUnavailable: the fixture lookup itself failed
        """
        fixture = self._get_fixture(fixture_id)

        home_stats = self._get_team_stats(fixture.home_id, fixture.league_id, fixture.season)
        away_stats = self._get_team_stats(fixture.away_id, fixture.league_id, fixture.season)
        lambda_home, lambda_away = expected_goals(home_stats, away_stats)

        impact = self._get_injury_impact(
            fixture.fixture_id if fixture.fixture_id is not None else fixture_id,
            fixture.home_id,
            fixture.away_id,
        )
        lambda_home = apply_impact(lambda_home, impact.home, self.lambda_floor)
        lambda_away = apply_impact(lambda_away, impact.away, self.lambda_floor)

        home, draw, away = to_percentages(
            *outcome_probabilities(lambda_home, lambda_away, self.max_goals)
        )
        pick = pick_outcome(home, draw, away)

        logger.info(
            f"Predicted fixture {fixture_id}: H={home} D={draw} A={away} "
            f"(lambda {lambda_home:.2f}/{lambda_away:.2f}, "
            f"ais {impact.home:.2f}/{impact.away:.2f} "
            f"from {impact.home_count}/{impact.away_count} injured"
            f"{', injuries degraded' if impact.degraded else ''}) -> {pick.value}"
        )

        return PredictionResult(
            fixture_id=fixture.fixture_id if fixture.fixture_id is not None else fixture_id,
            league_id=fixture.league_id,
            season=fixture.season,
            home=home,
            draw=draw,
            away=away,
            lambda_home=lambda_home,
            lambda_away=lambda_away,
            injury_impact=impact,
            pick=pick,
        )

    def _get_fixture(self, fixture_id: int) -> FixtureRecord:
        """Single-fixture lookup; bypasses the day cache."""
        fixtures = self.client.list_fixtures(fixture_id=fixture_id)
        if not fixtures:
            logger.info(f"Fixture {fixture_id} not found")
            raise FixtureNotFound(fixture_id)
        return FixtureRecord.from_api(fixtures[0])

    def _get_team_stats(
        self,
        team_id: Optional[int],
        league_id: Optional[int],
        season: Optional[int],
    ) -> TeamStatsSnapshot:
        """
        Cached statistics for a team, fetched on miss.

        A failed or empty fetch returns an empty snapshot (so fallbacks
        apply) and is not cached.
        """
        cache_key = f"{team_id}_{league_id}_{season}"
        cached = self.cache.get(CacheKind.TEAM_STATS, cache_key)
        if cached is not None:
            return cached

        if team_id is None or league_id is None or season is None:
            return TeamStatsSnapshot(team_id=team_id)

        try:
            data = self.client.get_team_statistics(team_id, league_id, season)
        except UpstreamUnavailable as e:
            logger.warning(f"Team statistics {cache_key} unavailable, using fallbacks: {e}")
            return TeamStatsSnapshot(team_id=team_id)

        if data is None:
            logger.info(f"No team statistics for {cache_key}, using fallbacks")
            return TeamStatsSnapshot(team_id=team_id)

        snapshot = TeamStatsSnapshot.from_api(team_id, data)
        self.cache.set(CacheKind.TEAM_STATS, cache_key, snapshot)
        return snapshot

    def _get_injury_impact(
        self,
        fixture_id: int,
        home_id: Optional[int],
        away_id: Optional[int],
    ) -> InjuryImpact:
        """
        Injury impact per side: count of injury records times the weight.

        A failed fetch gives zero impact with the degraded flag set.
        """
        try:
            injuries = self.client.list_injuries(fixture_id)
        except UpstreamUnavailable as e:
            logger.warning(f"Injuries for fixture {fixture_id} unavailable, assuming none: {e}")
            return InjuryImpact(degraded=True)

        counts = count_injuries_by_team(injuries)
        home_count = counts.get(home_id, 0) if home_id else 0
        away_count = counts.get(away_id, 0) if away_id else 0
        return InjuryImpact(
            home=home_count * self.injury_weight,
            away=away_count * self.injury_weight,
            home_count=home_count,
            away_count=away_count,
        )
