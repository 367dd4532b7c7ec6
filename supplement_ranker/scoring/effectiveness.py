"""
Effectiveness evaluator: how well a product's ingredients cover the user's
declared health goals, weighted by evidence strength.

    no goals stated → neutral score 50 (absence of goals is not "ineffective")

    matched_goals   = set of user goals hit by any ingredient's related goals
                      (a goal matched by three ingredients counts once)
    goal_match_rate = |matched_goals| / |user_goals|
    avg_evidence    = mean evidence score over all ingredients (unknown → 50)
    score           = round(goal_match_rate * 70 + avg_evidence * 0.3)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from supplement_ranker.config import (
    DEFAULT_SCORING_CONFIG,
    EffectivenessConfig,
    EvidenceConfig,
)
from supplement_ranker.models.product import Ingredient
from supplement_ranker.scoring.evidence import evidence_level_to_score
from supplement_ranker.taxonomy.goal_taxonomy import HealthGoal
from supplement_ranker.utils.numeric import round_half_up


@dataclass(frozen=True)
class EffectivenessDetails:
    """Effectiveness evaluation for one product.

    ``matched_goals`` is ordered by first discovery: ingredient order, then
    the user's goal order within an ingredient.
    """

    score:                  int
    matched_goals:          tuple[HealthGoal, ...]
    goal_match_rate:        float
    average_evidence_score: float


def evaluate_effectiveness(
    ingredients:     Sequence[Ingredient],
    goals:           Sequence[HealthGoal],
    config:          EffectivenessConfig | None = None,
    evidence_config: EvidenceConfig | None = None,
) -> EffectivenessDetails:
    """Score goal coverage of a product for one user."""
    cfg = config or DEFAULT_SCORING_CONFIG.effectiveness
    ev_cfg = evidence_config or DEFAULT_SCORING_CONFIG.evidence

    if not goals:
        return EffectivenessDetails(
            score=cfg.neutral_score,
            matched_goals=(),
            goal_match_rate=0.0,
            average_evidence_score=float(ev_cfg.default_score),
        )

    matched: dict[HealthGoal, None] = {}
    evidence_total = 0
    for ingredient in ingredients:
        for goal in goals:
            if goal in ingredient.related_goals:
                matched.setdefault(goal, None)
        evidence_total += evidence_level_to_score(ingredient.evidence_level, ev_cfg)

    goal_match_rate = len(matched) / len(goals)
    average_evidence = (
        evidence_total / len(ingredients) if ingredients else float(ev_cfg.default_score)
    )

    score = round_half_up(
        goal_match_rate * cfg.goal_match_weight + average_evidence * cfg.evidence_weight
    )

    return EffectivenessDetails(
        score=score,
        matched_goals=tuple(matched),
        goal_match_rate=goal_match_rate,
        average_evidence_score=average_evidence,
    )
