"""
Justification generator: human-readable reasons and warnings derived from
an already-computed ``FourScoreEvaluation``.

A pure view projection.  Nothing here feeds back into scores or ranks.

Reasons (in this order)
-----------------------
  1. effectiveness >= 70 and at least one matched goal
  2. high-quality evidence (any ingredient graded A or S)
  3. safety >= 90
  4. cost rating excellent, or cost rating good
  Fallback when none apply: a single generic reason.

Warnings (in this order)
------------------------
  1. the safety summary, verbatim, when any alert was raised
  2. daily cost note when the cost rating is poor
  3. limited-evidence note when the evidence score is below 50

A detailed-assessment boost above the configured minimum puts
``build_boost_reason`` ahead of every other reason.
"""

from __future__ import annotations

from supplement_ranker.recommendations.aggregator import FourScoreEvaluation
from supplement_ranker.taxonomy.goal_taxonomy import (
    CostEfficiencyRating,
    health_goal_label,
)
from supplement_ranker.utils.numeric import round_half_up

FALLBACK_REASON = "Recommended based on the overall evaluation"

_EFFECTIVENESS_REASON_MIN = 70
_SAFETY_REASON_MIN = 90
_LIMITED_EVIDENCE_MAX = 50


def build_reasons(evaluation: FourScoreEvaluation) -> list[str]:
    reasons: list[str] = []

    if evaluation.effectiveness_score >= _EFFECTIVENESS_REASON_MIN:
        goals = evaluation.effectiveness_details.matched_goals
        if goals:
            goals_text = ", ".join(health_goal_label(g) for g in goals)
            reasons.append(f"Contains ingredients effective for {goals_text}")

    evidence = evaluation.evidence_details
    if evidence.has_high_quality_evidence:
        reasons.append(
            "Backed by high-quality scientific evidence "
            f"(level {evidence.overall_evidence_level})"
        )

    if evaluation.safety_score >= _SAFETY_REASON_MIN:
        reasons.append(
            "No contraindications for the selected health conditions; highly safe"
        )

    cost = evaluation.cost_details
    per_day = round_half_up(cost.cost_per_day)
    if cost.cost_efficiency_rating == CostEfficiencyRating.EXCELLENT:
        reasons.append(f"About {per_day} per day, outstanding value for money")
    elif cost.cost_efficiency_rating == CostEfficiencyRating.GOOD:
        reasons.append(f"About {per_day} per day, a fair price")

    return reasons or [FALLBACK_REASON]


def build_warnings(evaluation: FourScoreEvaluation) -> list[str]:
    warnings: list[str] = []

    safety = evaluation.safety_details
    if safety.has_contraindications:
        warnings.append(safety.safety_check_result.summary)

    cost = evaluation.cost_details
    if cost.cost_efficiency_rating == CostEfficiencyRating.POOR:
        warnings.append(
            f"{round_half_up(cost.cost_per_day)} per day, on the expensive side"
        )

    if evaluation.evidence_score < _LIMITED_EVIDENCE_MAX:
        warnings.append("Scientific evidence is limited")

    return warnings


def build_boost_reason(boost: int) -> str:
    """Lead reason for a product the detailed assessment boosted."""
    return (
        "Your detailed assessment marks this product as an especially good fit "
        f"(+{boost} points)"
    )
