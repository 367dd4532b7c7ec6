"""
Ranker: evaluates every candidate product for one user, sorts them, and
assigns ranks with reasons and warnings attached.

Usage flow
----------
1. recommend_product(product, profile)
   -> ScoredProduct  (one product, unranked)

2. score_products(products, profile) + rank_scored_products(scored)
   -> the two halves of recommend_products(); ``recommendations.detailed``
      adjusts scores between them.

3. recommend_products(products, profile, max_workers=4)
   -> list[RecommendationResult]  (all products, ranked 1..N)

4. top_recommendations(products, profile, limit=5)
   -> list[RecommendationResult]  (first ``limit`` of the ranked list)

Ordering
--------
Products are sorted by:
  1. overall score, descending
  2. safety score, descending
  3. evidence score, descending
  4. input position (stable sort)

Per-product evaluation is independent and may be fanned out over a thread
pool; the sort itself always runs in the calling thread.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from supplement_ranker.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from supplement_ranker.models.product import Product
from supplement_ranker.models.profile import UserProfile
from supplement_ranker.recommendations.aggregator import (
    FourScoreEvaluation,
    evaluate_product,
    letter_grade,
    recommendation_level,
)
from supplement_ranker.recommendations.justification import (
    build_reasons,
    build_warnings,
)
from supplement_ranker.taxonomy.goal_taxonomy import (
    LetterGrade,
    RecommendationLevel,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredProduct:
    """One evaluated product before ranking."""

    product:        Product
    scores:         FourScoreEvaluation
    grade:          LetterGrade
    recommendation: RecommendationLevel
    reasons:        tuple[str, ...]
    warnings:       tuple[str, ...]
    detailed_boost: int = 0


@dataclass(frozen=True)
class RecommendationResult:
    """A ranked recommendation, the engine's output record.

    Attributes:
        rank:           1-based position in the ranked list.
        product:        The evaluated product.
        scores:         Sub-scores, overall score and breakdowns.
        grade:          Letter grade of the overall score.
        recommendation: Recommendation level (safety gate applied).
        reasons:        Ordered positive justifications (never empty).
        warnings:       Ordered cautions (may be empty).
        detailed_boost: Points added by the detailed assessment (0 if none).
    """

    rank:           int
    product:        Product
    scores:         FourScoreEvaluation
    grade:          LetterGrade
    recommendation: RecommendationLevel
    reasons:        tuple[str, ...]
    warnings:       tuple[str, ...]
    detailed_boost: int = 0


def recommend_product(
    product: Product,
    profile: UserProfile,
    config:  ScoringConfig | None = None,
) -> ScoredProduct:
    """Evaluate one product and attach grade, level and justifications."""
    cfg = config or DEFAULT_SCORING_CONFIG
    scores = evaluate_product(product, profile, cfg)

    return ScoredProduct(
        product=product,
        scores=scores,
        grade=letter_grade(scores.overall_score, cfg.grading),
        recommendation=recommendation_level(
            scores.overall_score, scores.safety_score, cfg.grading
        ),
        reasons=tuple(build_reasons(scores)),
        warnings=tuple(build_warnings(scores)),
    )


def _ranking_key(scored: ScoredProduct) -> tuple[int, int, int]:
    s = scored.scores
    return (-s.overall_score, -s.safety_score, -s.evidence_score)


def score_products(
    products:    Sequence[Product],
    profile:     UserProfile,
    config:      ScoringConfig | None = None,
    max_workers: int | None = None,
) -> list[ScoredProduct]:
    """Evaluate every product, keeping input order.

    ``max_workers`` > 1 fans the per-product evaluation out over a thread
    pool; ``None`` or 1 evaluates sequentially.
    """
    cfg = config or DEFAULT_SCORING_CONFIG

    if max_workers is not None and max_workers > 1 and len(products) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(
                executor.map(lambda p: recommend_product(p, profile, cfg), products)
            )
    return [recommend_product(p, profile, cfg) for p in products]


def rank_scored_products(scored: Sequence[ScoredProduct]) -> list[RecommendationResult]:
    """Order already-scored products and assign ranks 1..N.

    ``scored`` must be in input order: ``sorted()`` is stable, so equal keys
    keep it.
    """
    ranked = sorted(scored, key=_ranking_key)

    return [
        RecommendationResult(
            rank=rank,
            product=sp.product,
            scores=sp.scores,
            grade=sp.grade,
            recommendation=sp.recommendation,
            reasons=sp.reasons,
            warnings=sp.warnings,
            detailed_boost=sp.detailed_boost,
        )
        for rank, sp in enumerate(ranked, start=1)
    ]


def recommend_products(
    products:    Sequence[Product],
    profile:     UserProfile,
    config:      ScoringConfig | None = None,
    max_workers: int | None = None,
) -> list[RecommendationResult]:
    """Evaluate and rank every product for one user.

    Args:
        products:    Candidate products (may be empty).
        profile:     The user being ranked for.
        config:      Scoring policy; defaults to the built-in policy.
        max_workers: Threads used for per-product evaluation.  ``None`` or
                     1 evaluates sequentially.

    Returns:
        RecommendationResult list ordered best first, ranks 1..N.
    """
    results = rank_scored_products(score_products(products, profile, config, max_workers))
    log_ranking_summary(results, profile)
    return results


def log_ranking_summary(results: Sequence[RecommendationResult], profile: UserProfile) -> None:
    gated = sum(
        1 for r in results if r.recommendation == RecommendationLevel.NOT_RECOMMENDED
    )
    logger.info(
        "Ranked %d products for priority=%s (%d not recommended).",
        len(results), profile.priority, gated,
    )


def top_recommendations(
    products:    Sequence[Product],
    profile:     UserProfile,
    limit:       int = 5,
    config:      ScoringConfig | None = None,
    max_workers: int | None = None,
) -> list[RecommendationResult]:
    """First ``limit`` entries of ``recommend_products``."""
    return recommend_products(products, profile, config, max_workers)[:limit]
