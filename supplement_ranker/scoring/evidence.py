"""
Evidence evaluator: aggregates per-ingredient evidence levels into one
product-level score and letter grade.

Level → score (default policy)
------------------------------
    S=100  A=85  B=70  C=50  D=30      unknown → 50 (never 0)

Product score = mean over all ingredients (unknown levels count as 50).
An empty ingredient list returns a fixed fallback: score 50, level C,
no high-quality evidence.

``has_high_quality_evidence`` is True iff any ingredient scores >= 85
(grade A or S).  Aggregate grade: >=90 S, >=75 A, >=60 B, >=40 C, else D.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from supplement_ranker.config import DEFAULT_SCORING_CONFIG, EvidenceConfig
from supplement_ranker.models.product import Ingredient
from supplement_ranker.taxonomy.goal_taxonomy import EvidenceLevel, LetterGrade
from supplement_ranker.utils.numeric import round_half_up


@dataclass(frozen=True)
class EvidenceDetails:
    """Evidence evaluation for one product.

    Attributes:
        score:                   Rounded product-level score (0–100).
        evidence_level_score:    Unrounded mean of ingredient scores.
        overall_evidence_level:  Letter grade of the mean.
        has_high_quality_evidence: Any ingredient at grade A or better.
    """

    score:                     int
    evidence_level_score:      float
    overall_evidence_level:    LetterGrade
    has_high_quality_evidence: bool


def _evidence_config(config: EvidenceConfig | None) -> EvidenceConfig:
    return config or DEFAULT_SCORING_CONFIG.evidence


def evidence_level_to_score(
    level:  EvidenceLevel | None,
    config: EvidenceConfig | None = None,
) -> int:
    """Numeric score for an evidence level; ``None`` → the default (50)."""
    cfg = _evidence_config(config)
    if level is None:
        return cfg.default_score
    return cfg.level_scores.get(level, cfg.default_score)


def evaluate_evidence(
    ingredients: Sequence[Ingredient],
    config:      EvidenceConfig | None = None,
) -> EvidenceDetails:
    """Aggregate ingredient evidence into a product-level evaluation."""
    cfg = _evidence_config(config)

    if not ingredients:
        return EvidenceDetails(
            score=cfg.default_score,
            evidence_level_score=float(cfg.default_score),
            overall_evidence_level=LetterGrade.C,
            has_high_quality_evidence=False,
        )

    scores = [evidence_level_to_score(ing.evidence_level, cfg) for ing in ingredients]
    average = sum(scores) / len(scores)

    return EvidenceDetails(
        score=round_half_up(average),
        evidence_level_score=average,
        overall_evidence_level=cfg.grade_thresholds.grade(average),
        has_high_quality_evidence=any(s >= cfg.high_quality_threshold for s in scores),
    )
