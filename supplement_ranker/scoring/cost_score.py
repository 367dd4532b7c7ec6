"""
Cost evaluator: converts a product's daily cost into a 0–100 score and a
coarse efficiency rating, computed together by the same branch.

Budget-relative regime (user stated ``budget_per_day`` > 0)
-----------------------------------------------------------
    within budget: score = round(100 - (cost_per_day / budget) * 50)
                   ratio <= 0.6 excellent, <= 0.8 good, else fair
    over budget:   ratio = (cost_per_day - budget) / budget
                   score = max(5, round(50 - ratio * 40)), rating poor

    The floor of 5 keeps a real product's score above 0.

Absolute regime (no budget)
---------------------------
    Step tariff over cost_per_day (upper bounds inclusive):
        <=20 → 100   <=40 → 95   <=60 → 88   <=80 → 80   <=100 → 72
        <=120 → 64   <=150 → 55  <=180 → 46  <=200 → 38  <=250 → 28
        >250 → 15
"""

from __future__ import annotations

from dataclasses import dataclass

from supplement_ranker.config import (
    DEFAULT_SCORING_CONFIG,
    CostModelConfig,
    CostScoringConfig,
)
from supplement_ranker.models.product import Product
from supplement_ranker.scoring.cost_model import (
    CostCalculation,
    calculate_comprehensive_cost,
)
from supplement_ranker.taxonomy.goal_taxonomy import CostEfficiencyRating
from supplement_ranker.utils.numeric import round_half_up


@dataclass(frozen=True)
class CostDetails:
    """Cost evaluation for one product.

    Attributes:
        score:                  0–100, cheaper is better.
        cost_efficiency_rating: Bucket produced by the same branch as ``score``.
        cost_per_day:           Daily cost used for scoring.
        cost_calculation:       Full per-unit cost figures.
        budget_per_day:         Budget that selected the regime, or ``None``.
    """

    score:                  int
    cost_efficiency_rating: CostEfficiencyRating
    cost_per_day:           float
    cost_calculation:       CostCalculation
    budget_per_day:         float | None


def score_cost_per_day(
    cost_per_day:   float,
    budget_per_day: float | None = None,
    config:         CostScoringConfig | None = None,
) -> tuple[int, CostEfficiencyRating]:
    """Return ``(score, rating)`` for a daily cost under the applicable regime."""
    cfg = config or DEFAULT_SCORING_CONFIG.cost_scoring

    if budget_per_day is not None and budget_per_day > 0:
        if cost_per_day <= budget_per_day:
            ratio = cost_per_day / budget_per_day
            score = round_half_up(cfg.within_budget_ceiling - ratio * cfg.within_budget_span)
            if ratio <= cfg.excellent_budget_ratio:
                rating = CostEfficiencyRating.EXCELLENT
            elif ratio <= cfg.good_budget_ratio:
                rating = CostEfficiencyRating.GOOD
            else:
                rating = CostEfficiencyRating.FAIR
            return score, rating

        over_ratio = (cost_per_day - budget_per_day) / budget_per_day
        score = round_half_up(cfg.over_budget_base - over_ratio * cfg.over_budget_slope)
        return max(cfg.over_budget_floor, score), CostEfficiencyRating.POOR

    for band in cfg.absolute_tariff:
        if band.max_cost_per_day is None or cost_per_day <= band.max_cost_per_day:
            return band.score, band.rating

    # Unreachable: the config validator guarantees an open-ended last band.
    last = cfg.absolute_tariff[-1]
    return last.score, last.rating


def evaluate_cost(
    product:        Product,
    budget_per_day: float | None = None,
    config:         CostScoringConfig | None = None,
    cost_config:    CostModelConfig | None = None,
) -> CostDetails:
    """Score one product's daily cost for a user's budget (or lack of one)."""
    calculation = calculate_comprehensive_cost(product, cost_config)
    score, rating = score_cost_per_day(calculation.cost_per_day, budget_per_day, config)

    return CostDetails(
        score=score,
        cost_efficiency_rating=rating,
        cost_per_day=calculation.cost_per_day,
        cost_calculation=calculation,
        budget_per_day=budget_per_day,
    )
