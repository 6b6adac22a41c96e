"""
Independent Poisson scoreline model.
"""
import math
from typing import List, Tuple

from .models import Outcome

DEFAULT_MAX_GOALS = 10


def factorial_table(max_goals: int = DEFAULT_MAX_GOALS) -> List[int]:
    """Factorials 0!..max_goals!, built iteratively."""
    table = [1]
    for k in range(1, max_goals + 1):
        table.append(table[-1] * k)
    return table


_FACTORIALS = factorial_table(DEFAULT_MAX_GOALS)


def poisson_pmf(k: int, lam: float, factorials: List[int] = _FACTORIALS) -> float:
    """P(k; lam) = e^-lam * lam^k / k!"""
    return math.exp(-lam) * (lam ** k) / factorials[k]


def outcome_probabilities(
    lambda_home: float,
    lambda_away: float,
    max_goals: int = DEFAULT_MAX_GOALS,
) -> Tuple[float, float, float]:
    """
    Home/draw/away probabilities from every scoreline 0..max_goals a side.

    Joint scoreline probability is the product of the two marginals. The
    three buckets are normalised by their sum.

    Returns:
        (home, draw, away) as fractions summing to 1
    """
    factorials = _FACTORIALS if max_goals == DEFAULT_MAX_GOALS else factorial_table(max_goals)
    home_pmf = [poisson_pmf(k, lambda_home, factorials) for k in range(max_goals + 1)]
    away_pmf = [poisson_pmf(k, lambda_away, factorials) for k in range(max_goals + 1)]

    p_home = 0.0
    p_draw = 0.0
    p_away = 0.0
    for home_goals, ph in enumerate(home_pmf):
        for away_goals, pa in enumerate(away_pmf):
            p = ph * pa
            if home_goals > away_goals:
                p_home += p
            elif home_goals == away_goals:
                p_draw += p
            else:
                p_away += p

    total = p_home + p_draw + p_away
    if total <= 0:
        total = 1.0
    return p_home / total, p_draw / total, p_away / total


def to_percentages(home: float, draw: float, away: float) -> Tuple[float, float, float]:
    """Fractions to percentages rounded to one decimal."""
    return round(home * 100, 1), round(draw * 100, 1), round(away * 100, 1)


def pick_outcome(home: float, draw: float, away: float) -> Outcome:
    """
    Pick the most likely outcome.

    Starts from DRAW, then HOME if home equals the max, then AWAY if away
    equals the max. A home/away tie therefore picks AWAY.
    """
    best = max(home, draw, away)
    pick = Outcome.DRAW
    if home == best:
        pick = Outcome.HOME
    if away == best:
        pick = Outcome.AWAY
    return pick
