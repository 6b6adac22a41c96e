"""
Match outcome prediction - Poisson scoreline model with injury adjustment.

This module provides:
- Expected goals from venue-split team statistics
- Injury impact dampening (AIS)
- Home/draw/away probabilities and a pick
"""

from .models import (
    TeamStatsSnapshot,
    InjuryImpact,
    PredictionResult,
    Outcome,
    MODEL_NOTE,
)
from .poisson import (
    factorial_table,
    poisson_pmf,
    outcome_probabilities,
    to_percentages,
    pick_outcome,
)
from .engine import (
    PredictionEngine,
    expected_goals,
    count_injuries_by_team,
    apply_impact,
)

__all__ = [
    # Models
    "TeamStatsSnapshot",
    "InjuryImpact",
    "PredictionResult",
    "Outcome",
    "MODEL_NOTE",
    # Poisson model
    "factorial_table",
    "poisson_pmf",
    "outcome_probabilities",
    "to_percentages",
    "pick_outcome",
    # Engine
    "PredictionEngine",
    "expected_goals",
    "count_injuries_by_team",
    "apply_impact",
]
