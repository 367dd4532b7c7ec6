"""
Aggregator: combines the four sub-scores into one overall score, a letter
grade, and a recommendation level.

Weight table (rows sum to 1.0)
------------------------------
    priority       effectiveness  safety  cost  evidence
    effectiveness      0.40        0.25   0.25    0.10
    safety             0.10        0.50   0.30    0.10
    cost               0.10        0.25   0.60    0.05
    evidence           0.15        0.25   0.30    0.30
    balanced           0.10        0.30   0.50    0.10

    overall = round(sum(score_i * weight_i)), clamped to [0, 100]

Grades:  >=90 S, >=80 A, >=70 B, >=60 C, else D.

Recommendation level
--------------------
    safety < 30          → not-recommended   (checked first; hard gate)
    overall >= 80        → highly-recommended
    overall >= 60        → recommended
    overall >= 40        → acceptable
    otherwise            → not-recommended
"""

from __future__ import annotations

from dataclasses import dataclass

from supplement_ranker.config import (
    DEFAULT_SCORING_CONFIG,
    GradingConfig,
    PriorityWeights,
    ScoringConfig,
    WeightsConfig,
)
from supplement_ranker.models.product import Product
from supplement_ranker.models.profile import UserProfile
from supplement_ranker.scoring.cost_score import CostDetails, evaluate_cost
from supplement_ranker.scoring.effectiveness import (
    EffectivenessDetails,
    evaluate_effectiveness,
)
from supplement_ranker.scoring.evidence import EvidenceDetails, evaluate_evidence
from supplement_ranker.scoring.safety_checker import (
    SafetyCheckResult,
    score_safety_check,
)
from supplement_ranker.scoring.safety_policy import RankingSafetyPolicy
from supplement_ranker.taxonomy.goal_taxonomy import (
    LetterGrade,
    Priority,
    RecommendationLevel,
)
from supplement_ranker.utils.numeric import clamp, round_half_up


@dataclass(frozen=True)
class SafetyDetails:
    """Ranking-path safety outcome for one product and one user."""

    score:                 int
    safety_check_result:   SafetyCheckResult
    has_contraindications: bool


@dataclass(frozen=True)
class FourScoreEvaluation:
    """The four sub-scores, the overall score, and their breakdowns.

    Attributes:
        effectiveness_score:   0–100 goal coverage.
        safety_score:          0–100 ranking-path safety.
        cost_score:            0–100, cheaper is better.
        evidence_score:        0–100 evidence strength.
        overall_score:         Priority-weighted sum, rounded and clamped.
        effectiveness_details: Matched goals and evidence mean.
        safety_details:        Alerts and risk level.
        cost_details:          Cost figures and efficiency rating.
        evidence_details:      Evidence grade and quality flag.
    """

    effectiveness_score:   int
    safety_score:          int
    cost_score:            int
    evidence_score:        int
    overall_score:         int
    effectiveness_details: EffectivenessDetails
    safety_details:        SafetyDetails
    cost_details:          CostDetails
    evidence_details:      EvidenceDetails


def get_weights(
    priority: Priority,
    config:   WeightsConfig | None = None,
) -> PriorityWeights:
    return (config or DEFAULT_SCORING_CONFIG.weights).for_priority(priority)


def calculate_overall_score(
    effectiveness_score: float,
    safety_score:        float,
    cost_score:          float,
    evidence_score:      float,
    weights:             PriorityWeights,
) -> int:
    """Weighted sum of the sub-scores, rounded half-up and clamped to [0, 100]."""
    raw = (
        effectiveness_score * weights.effectiveness
        + safety_score      * weights.safety
        + cost_score        * weights.cost
        + evidence_score    * weights.evidence
    )
    return int(clamp(round_half_up(raw), 0, 100))


def letter_grade(
    overall_score: float,
    config:        GradingConfig | None = None,
) -> LetterGrade:
    cfg = config or DEFAULT_SCORING_CONFIG.grading
    return cfg.overall_grade_thresholds.grade(overall_score)


def recommendation_level(
    overall_score: float,
    safety_score:  float,
    config:        GradingConfig | None = None,
) -> RecommendationLevel:
    """Map scores to a recommendation level; the safety gate overrides everything."""
    cfg = config or DEFAULT_SCORING_CONFIG.grading

    if safety_score < cfg.safety_gate:
        return RecommendationLevel.NOT_RECOMMENDED
    if overall_score >= cfg.highly_recommended_min:
        return RecommendationLevel.HIGHLY_RECOMMENDED
    if overall_score >= cfg.recommended_min:
        return RecommendationLevel.RECOMMENDED
    if overall_score >= cfg.acceptable_min:
        return RecommendationLevel.ACCEPTABLE
    return RecommendationLevel.NOT_RECOMMENDED


def evaluate_product(
    product: Product,
    profile: UserProfile,
    config:  ScoringConfig | None = None,
) -> FourScoreEvaluation:
    """Run all four evaluators for one product and aggregate them.

    Pure: reads only ``product``, ``profile`` and ``config``.

    Args:
        product: Fully resolved product (tags attached).
        profile: The user being ranked for.
        config:  Scoring policy; defaults to the built-in policy.

    Returns:
        FourScoreEvaluation with every sub-score and its breakdown.
    """
    cfg = config or DEFAULT_SCORING_CONFIG

    effectiveness = evaluate_effectiveness(
        product.ingredients, profile.goals, cfg.effectiveness, cfg.evidence
    )

    policy = RankingSafetyPolicy(cfg.safety)
    check = policy.check(product, profile)
    safety = SafetyDetails(
        score=score_safety_check(check, cfg.safety),
        safety_check_result=check,
        has_contraindications=bool(check.alerts),
    )

    cost = evaluate_cost(product, profile.budget_per_day, cfg.cost_scoring, cfg.cost_model)
    evidence = evaluate_evidence(product.ingredients, cfg.evidence)

    overall = calculate_overall_score(
        effectiveness.score,
        safety.score,
        cost.score,
        evidence.score,
        get_weights(profile.priority, cfg.weights),
    )

    return FourScoreEvaluation(
        effectiveness_score=effectiveness.score,
        safety_score=safety.score,
        cost_score=cost.score,
        evidence_score=evidence.score,
        overall_score=overall,
        effectiveness_details=effectiveness,
        safety_details=safety,
        cost_details=cost,
        evidence_details=evidence,
    )
