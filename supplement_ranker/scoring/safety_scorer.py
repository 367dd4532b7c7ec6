"""
Detailed safety scorer: a standalone, itemized 100-point safety report for a
single product.

This is NOT the ranking-path safety score (see ``safety_checker``).  It takes
richer, optional inputs (QA certifications, label warnings, side effects,
ingredient-pair interactions, manufacturing origin and age) and is used for
per-product safety display only.

Score formula (base 100, clamped to [0, 100])
---------------------------------------------
    - contraindications  critical 40 each (cap 60)
                         warning  20 each (cap 30)
                         info      5 each (cap 10)
                         count-only input: 20 each (cap 60), confidence × 0.8
    - label warnings     10 each (cap 30)
    - side effects        8 each (cap 20)
    - interactions       high 25 / medium 10 each (cap 40)
    + quality            third-party tested +10, GMP +5, organic +5
    + origin             trusted manufacturing country +5 … +10
    - age                > 3 years old: -min(2 × age, 10)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Optional, Sequence

from supplement_ranker.config import DEFAULT_SCORING_CONFIG, SafetyConfig
from supplement_ranker.models.product import Ingredient
from supplement_ranker.taxonomy.contraindication_taxonomy import (
    AlertSeverity,
    ContraindicationTag,
)
from supplement_ranker.taxonomy.goal_taxonomy import LetterGrade
from supplement_ranker.utils.numeric import clamp

InteractionRiskLevel = Literal["low", "medium", "high"]

# Per-tag deduction and per-category cap, keyed by severity
_CONTRAINDICATION_DEDUCTION: dict[AlertSeverity, int] = {
    AlertSeverity.CRITICAL: 40,
    AlertSeverity.WARNING:  20,
    AlertSeverity.INFO:      5,
}
_CONTRAINDICATION_CAP: dict[AlertSeverity, int] = {
    AlertSeverity.CRITICAL: 60,
    AlertSeverity.WARNING:  30,
    AlertSeverity.INFO:     10,
}
_COUNT_ONLY_DEDUCTION = 20
_COUNT_ONLY_CAP = 60
_COUNT_ONLY_CONFIDENCE = 0.8

_WARNING_DEDUCTION, _WARNING_CAP = 10, 30
_SIDE_EFFECT_DEDUCTION, _SIDE_EFFECT_CAP = 8, 20
_INTERACTION_DEDUCTION: dict[str, int] = {"high": 25, "medium": 10, "low": 0}
_INTERACTION_CAP = 40

_THIRD_PARTY_BONUS = 10
_GMP_BONUS = 5
_ORGANIC_BONUS = 5

_AGE_GRACE_YEARS = 3
_AGE_DEDUCTION_PER_YEAR = 2
_AGE_DEDUCTION_CAP = 10

# Lowercased country name → origin bonus
MANUFACTURING_COUNTRY_BONUS: dict[str, int] = {
    "japan":         10,
    "germany":       10,
    "switzerland":   10,
    "usa":            8,
    "united states":  8,
    "canada":         8,
    "korea":          5,
    "south korea":    5,
    "australia":      5,
    "new zealand":    5,
}


@dataclass(frozen=True)
class KnownInteraction:
    """A known risky ingredient pair, identified by ingredient slugs."""

    slugs:       frozenset[str]
    risk_level:  InteractionRiskLevel
    description: str


KNOWN_INTERACTIONS: tuple[KnownInteraction, ...] = (
    KnownInteraction(
        slugs=frozenset({"calcium", "iron"}),
        risk_level="medium",
        description="Taking calcium and iron together may reduce absorption.",
    ),
    KnownInteraction(
        slugs=frozenset({"st-johns-wort", "ssri"}),
        risk_level="high",
        description="Combining St. John's wort with SSRIs is dangerous.",
    ),
    KnownInteraction(
        slugs=frozenset({"vitamin-k", "warfarin"}),
        risk_level="high",
        description="Vitamin K weakens the effect of anticoagulants.",
    ),
    KnownInteraction(
        slugs=frozenset({"ginkgo", "aspirin"}),
        risk_level="high",
        description="May increase the risk of bleeding.",
    ),
)


@dataclass(frozen=True)
class InteractionRisk:
    """A detected risky pair within one product."""

    ingredient_1: str
    ingredient_2: str
    risk_level:   InteractionRiskLevel
    description:  str


@dataclass
class SafetyScoreInput:
    """Everything the detailed scorer can use; every field is optional.

    ``contraindication_tags`` takes precedence over ``contraindication_count``;
    the count is only an estimate used when tag detail is unavailable.
    """

    contraindication_tags:  list[ContraindicationTag] = field(default_factory=list)
    contraindication_count: int = 0
    warnings:               list[str] = field(default_factory=list)
    side_effects:           list[str] = field(default_factory=list)
    third_party_tested:     bool = False
    gmp_certified:          bool = False
    organic_certified:      bool = False
    interaction_risks:      list[InteractionRisk] = field(default_factory=list)
    manufacturing_country:  Optional[str] = None
    manufacturing_year:     Optional[int] = None


@dataclass(frozen=True)
class SafetyScoreBreakdown:
    """Itemized points behind ``SafetyScoreResult.total_score``."""

    base_score:                 int = 100
    contraindication_deduction: int = 0
    warning_deduction:          int = 0
    side_effect_deduction:      int = 0
    quality_bonus:              int = 0
    interaction_deduction:      int = 0
    manufacturing_bonus:        int = 0   # origin bonus minus age deduction


@dataclass(frozen=True)
class SafetyScoreResult:
    """Detailed safety report for one product."""

    total_score:     int
    breakdown:       SafetyScoreBreakdown
    details:         tuple[str, ...]
    recommendations: tuple[str, ...]
    confidence:      float


@dataclass(frozen=True)
class SafetyGrade:
    grade: LetterGrade
    label: str


def calculate_safety_score(
    data:         SafetyScoreInput,
    current_year: int | None = None,
    config:       SafetyConfig | None = None,
) -> SafetyScoreResult:
    """Compute the detailed 100-point safety score.

    Args:
        data:         Optional safety signals for one product.
        current_year: Year used to age the product; defaults to today's year.
            Pass it explicitly to keep the result reproducible.
        config:       Supplies the tag → severity map.

    Returns:
        SafetyScoreResult with total, breakdown, detail lines,
        recommendation lines and a confidence factor (1.0 or 0.8).
    """
    severity_map = (config or DEFAULT_SCORING_CONFIG.safety).severity_map
    year = current_year if current_year is not None else date.today().year

    details: list[str] = []
    recommendations: list[str] = []
    confidence = 1.0

    # ── 1. Contraindications ──────────────────────────────────────────────────
    contraindication_deduction = 0
    if data.contraindication_tags:
        counts = {severity: 0 for severity in AlertSeverity}
        for tag in data.contraindication_tags:
            counts[severity_map[tag]] += 1
        for severity, count in counts.items():
            contraindication_deduction += min(
                count * _CONTRAINDICATION_DEDUCTION[severity],
                _CONTRAINDICATION_CAP[severity],
            )
        details.append(
            f"{len(data.contraindication_tags)} contraindication tag(s): "
            f"-{contraindication_deduction} "
            f"(critical {counts[AlertSeverity.CRITICAL]}, "
            f"warning {counts[AlertSeverity.WARNING]}, "
            f"info {counts[AlertSeverity.INFO]})"
        )
        if counts[AlertSeverity.CRITICAL] > 0:
            recommendations.append(
                "Serious contraindications exist. Consult your physician."
            )
    elif data.contraindication_count:
        contraindication_deduction = min(
            data.contraindication_count * _COUNT_ONLY_DEDUCTION, _COUNT_ONLY_CAP
        )
        details.append(
            f"{data.contraindication_count} contraindication(s): "
            f"-{contraindication_deduction}"
        )
        confidence *= _COUNT_ONLY_CONFIDENCE

    # ── 2. Label warnings ─────────────────────────────────────────────────────
    warning_deduction = 0
    if data.warnings:
        warning_deduction = min(len(data.warnings) * _WARNING_DEDUCTION, _WARNING_CAP)
        details.append(f"{len(data.warnings)} label warning(s): -{warning_deduction}")

    # ── 3. Side effects ───────────────────────────────────────────────────────
    side_effect_deduction = 0
    if data.side_effects:
        side_effect_deduction = min(
            len(data.side_effects) * _SIDE_EFFECT_DEDUCTION, _SIDE_EFFECT_CAP
        )
        details.append(
            f"{len(data.side_effects)} reported side effect(s): -{side_effect_deduction}"
        )

    # ── 4. Quality assurance ──────────────────────────────────────────────────
    quality_bonus = 0
    quality_notes: list[str] = []
    if data.third_party_tested:
        quality_bonus += _THIRD_PARTY_BONUS
        quality_notes.append(f"third-party tested (+{_THIRD_PARTY_BONUS})")
    if data.gmp_certified:
        quality_bonus += _GMP_BONUS
        quality_notes.append(f"GMP certified (+{_GMP_BONUS})")
    if data.organic_certified:
        quality_bonus += _ORGANIC_BONUS
        quality_notes.append(f"organic certified (+{_ORGANIC_BONUS})")
    if quality_bonus > 0:
        details.append(f"Quality assurance: +{quality_bonus} ({', '.join(quality_notes)})")
        recommendations.append("Quality assurance is well documented.")

    # ── 5. Ingredient interactions ────────────────────────────────────────────
    interaction_deduction = 0
    if data.interaction_risks:
        high = sum(1 for r in data.interaction_risks if r.risk_level == "high")
        medium = sum(1 for r in data.interaction_risks if r.risk_level == "medium")
        interaction_deduction = min(
            high * _INTERACTION_DEDUCTION["high"] + medium * _INTERACTION_DEDUCTION["medium"],
            _INTERACTION_CAP,
        )
        if interaction_deduction > 0:
            details.append(
                f"Ingredient interaction risk: -{interaction_deduction} "
                f"(high {high}, medium {medium})"
            )
            if high > 0:
                recommendations.append(
                    "A dangerous ingredient combination was detected. "
                    "Avoid use or consult your physician."
                )

    # ── 6. Manufacturing origin and age ───────────────────────────────────────
    manufacturing_bonus = 0
    if data.manufacturing_country:
        bonus = MANUFACTURING_COUNTRY_BONUS.get(
            data.manufacturing_country.strip().casefold(), 0
        )
        if bonus > 0:
            manufacturing_bonus = bonus
            details.append(f"Manufactured in {data.manufacturing_country}: +{bonus}")

    if data.manufacturing_year:
        age = year - data.manufacturing_year
        if age > _AGE_GRACE_YEARS:
            age_deduction = min(age * _AGE_DEDUCTION_PER_YEAR, _AGE_DEDUCTION_CAP)
            manufacturing_bonus -= age_deduction
            details.append(f"{age} years since manufacture: -{age_deduction}")
            recommendations.append(
                "This product was manufactured a while ago. Consider a newer batch."
            )

    breakdown = SafetyScoreBreakdown(
        contraindication_deduction=contraindication_deduction,
        warning_deduction=warning_deduction,
        side_effect_deduction=side_effect_deduction,
        quality_bonus=quality_bonus,
        interaction_deduction=interaction_deduction,
        manufacturing_bonus=manufacturing_bonus,
    )

    total = int(clamp(
        breakdown.base_score
        - breakdown.contraindication_deduction
        - breakdown.warning_deduction
        - breakdown.side_effect_deduction
        - breakdown.interaction_deduction
        + breakdown.quality_bonus
        + breakdown.manufacturing_bonus,
        0,
        100,
    ))

    if total >= 90:
        recommendations.append("A product with a very high level of safety.")
    elif total >= 70:
        recommendations.append("Generally safe, though individual responses vary.")
    elif total >= 50:
        recommendations.append("Read the precautions carefully before use.")
    else:
        recommendations.append(
            "There are safety concerns. Consulting a professional is recommended."
        )

    return SafetyScoreResult(
        total_score=total,
        breakdown=breakdown,
        details=tuple(details),
        recommendations=tuple(recommendations),
        confidence=confidence,
    )


def check_ingredient_interactions(
    ingredients: Sequence[Ingredient],
) -> list[InteractionRisk]:
    """Find known risky pairs among a product's ingredients.

    Pairs are matched on exact slugs against ``KNOWN_INTERACTIONS``; each
    unordered ingredient pair is checked once, in label order.
    """
    risks: list[InteractionRisk] = []
    for i, first in enumerate(ingredients):
        for second in ingredients[i + 1:]:
            pair = frozenset({first.slug, second.slug})
            for known in KNOWN_INTERACTIONS:
                if pair == known.slugs:
                    risks.append(
                        InteractionRisk(
                            ingredient_1=first.name,
                            ingredient_2=second.name,
                            risk_level=known.risk_level,
                            description=known.description,
                        )
                    )
    return risks


def safety_grade(score: float) -> SafetyGrade:
    """Letter grade for a detailed safety score."""
    if score >= 90:
        return SafetyGrade(LetterGrade.S, "highest safety")
    if score >= 80:
        return SafetyGrade(LetterGrade.A, "high safety")
    if score >= 70:
        return SafetyGrade(LetterGrade.B, "standard safety")
    if score >= 60:
        return SafetyGrade(LetterGrade.C, "needs attention")
    return SafetyGrade(LetterGrade.D, "needs review")
