"""
Goal, priority and grading vocabularies for the recommendation engine.

  - ``HealthGoal``         : user-declared outcome matched against ingredient claims.
  - ``Priority``           : user emphasis that selects the aggregation weight row.
  - ``EvidenceLevel``      : ordinal scientific-support grade (S > A > B > C > D).
  - ``LetterGrade``        : S–D bucket applied to evidence and overall scores.
  - ``RecommendationLevel``: final verdict shown next to each ranked product.
  - ``CostEfficiencyRating``: coarse cost bucket used by the justification text.

Legacy evidence labels (``高``, ``中``, ``低``) are still present in older
catalog exports; ``normalize_evidence_level`` maps them onto A / B / D.

This module has NO imports from any other ``supplement_ranker`` package.
"""

from __future__ import annotations

from enum import StrEnum


class HealthGoal(StrEnum):
    """Desired outcome a user can select."""

    IMMUNE_BOOST = "immune-boost"
    SKIN_HEALTH = "skin-health"
    ENERGY_RECOVERY = "energy-recovery"
    MUSCLE_GROWTH = "muscle-growth"
    BONE_HEALTH = "bone-health"
    HEART_HEALTH = "heart-health"
    BRAIN_FUNCTION = "brain-function"
    SLEEP_QUALITY = "sleep-quality"
    STRESS_RELIEF = "stress-relief"
    DIGESTIVE_HEALTH = "digestive-health"
    EYE_HEALTH = "eye-health"
    ANTI_AGING = "anti-aging"
    WEIGHT_MANAGEMENT = "weight-management"
    JOINT_HEALTH = "joint-health"
    GENERAL_WELLNESS = "general-wellness"


HEALTH_GOAL_LABELS: dict[HealthGoal, str] = {
    HealthGoal.IMMUNE_BOOST:      "immune support",
    HealthGoal.SKIN_HEALTH:       "skin health",
    HealthGoal.ENERGY_RECOVERY:   "energy and recovery",
    HealthGoal.MUSCLE_GROWTH:     "muscle strength",
    HealthGoal.BONE_HEALTH:       "bone health",
    HealthGoal.HEART_HEALTH:      "cardiovascular health",
    HealthGoal.BRAIN_FUNCTION:    "cognitive function",
    HealthGoal.SLEEP_QUALITY:     "sleep quality",
    HealthGoal.STRESS_RELIEF:     "stress relief",
    HealthGoal.DIGESTIVE_HEALTH:  "digestive health",
    HealthGoal.EYE_HEALTH:        "eye health",
    HealthGoal.ANTI_AGING:        "healthy aging",
    HealthGoal.WEIGHT_MANAGEMENT: "weight management",
    HealthGoal.JOINT_HEALTH:      "joint health",
    HealthGoal.GENERAL_WELLNESS:  "general wellness",
}


class Priority(StrEnum):
    """Which dimension the user wants the ranking to emphasise."""

    EFFECTIVENESS = "effectiveness"
    SAFETY = "safety"
    COST = "cost"
    EVIDENCE = "evidence"
    BALANCED = "balanced"


class EvidenceLevel(StrEnum):
    """Strength of scientific support for an ingredient's claimed effect."""

    S = "S"
    """Multiple large RCTs / meta-analyses with consistent results."""

    A = "A"
    """At least one high-quality RCT or a consistent body of trials."""

    B = "B"
    """Limited or mixed trial evidence."""

    C = "C"
    """Observational or preliminary data only."""

    D = "D"
    """Anecdotal, animal-only, or contradicted evidence."""


LEGACY_EVIDENCE_ALIASES: dict[str, EvidenceLevel] = {
    "高": EvidenceLevel.A,
    "中": EvidenceLevel.B,
    "低": EvidenceLevel.D,
}


class LetterGrade(StrEnum):
    """S–D bucket for aggregate scores."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class RecommendationLevel(StrEnum):
    """Final verdict attached to every ranked product."""

    HIGHLY_RECOMMENDED = "highly-recommended"
    RECOMMENDED = "recommended"
    ACCEPTABLE = "acceptable"
    NOT_RECOMMENDED = "not-recommended"


class CostEfficiencyRating(StrEnum):
    """Coarse cost bucket, computed alongside the numeric cost score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


def normalize_evidence_level(value: object) -> object:
    """Map legacy evidence labels onto the S–D scale; pass anything else through."""
    if isinstance(value, str):
        stripped = value.strip()
        if stripped in LEGACY_EVIDENCE_ALIASES:
            return LEGACY_EVIDENCE_ALIASES[stripped]
        return stripped
    return value


def health_goal_label(goal: HealthGoal) -> str:
    """Return the English display label for a goal (falls back to the slug)."""
    return HEALTH_GOAL_LABELS.get(goal, str(goal))
