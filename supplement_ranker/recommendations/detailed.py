"""
Detailed-assessment ranking: the base evaluation plus score boosts derived
from the optional answers of a ``DetailedProfile``.

Boost sources (in this order)
-----------------------------
  1. secondary goals       flat ``secondary_goal_points`` per goal (default 5)
  2. main concern          table row selected by the answer
  3. age group             "
  4. exercise frequency    "
  5. stress level          "
  6. sleep quality         "
  7. alcohol consumption   "

For a table row, each ingredient is looked up by slug in the boost groups
(exact match, groups are disjoint) and earns the row's points for its group.
Two ingredients of the same group each earn the points; one ingredient never
matches twice within a row.

    applied boost  = min(sum of points, max_total_boost)          (default 50)
    boosted overall = min(100, overall + applied boost)

Grade and recommendation level are re-derived from the boosted overall; the
safety gate still applies.  When the applied boost is above
``reason_min_boost`` (default 10) the boost reason leads the reasons.  The
boosted products are then re-ranked with the ranker's comparator.

Usage::

    results = recommend_products_detailed(products, detailed_profile)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from supplement_ranker.config import (
    DEFAULT_SCORING_CONFIG,
    DetailedBoostConfig,
    ScoringConfig,
)
from supplement_ranker.models.product import Ingredient, Product
from supplement_ranker.models.profile import DetailedProfile
from supplement_ranker.recommendations.aggregator import (
    letter_grade,
    recommendation_level,
)
from supplement_ranker.recommendations.justification import build_boost_reason
from supplement_ranker.recommendations.ranker import (
    RecommendationResult,
    ScoredProduct,
    log_ranking_summary,
    rank_scored_products,
    score_products,
)
from supplement_ranker.taxonomy.lifestyle_taxonomy import slug_to_group

logger = logging.getLogger(__name__)

# (source label, DetailedProfile attribute, DetailedBoostConfig table)
_BOOST_TABLES: tuple[tuple[str, str, str], ...] = (
    ("main-concern", "main_concern",        "concern"),
    ("age-group",    "age_group",           "age_group"),
    ("exercise",     "exercise_frequency",  "exercise"),
    ("stress",       "stress_level",        "stress"),
    ("sleep",        "sleep_quality",       "sleep"),
    ("alcohol",      "alcohol_consumption", "alcohol"),
)


@dataclass(frozen=True)
class BoostItem:
    """One contribution to a product's detailed boost.

    ``ingredient`` is ``None`` for the flat secondary-goal boost.
    """

    source:     str
    ingredient: Optional[str]
    points:     int


@dataclass(frozen=True)
class DetailedBoost:
    """All boost contributions for one product.

    Attributes:
        items:   Contributions in source order, then ingredient order.
        total:   Uncapped sum of ``items``.
        applied: ``total`` capped at ``max_total_boost``.
    """

    items:   tuple[BoostItem, ...]
    total:   int
    applied: int


def compute_detailed_boost(
    ingredients: Sequence[Ingredient],
    profile:     DetailedProfile,
    config:      DetailedBoostConfig | None = None,
) -> DetailedBoost:
    """Sum the boost a product's ingredients earn from the detailed answers."""
    cfg = config or DEFAULT_SCORING_CONFIG.detailed
    groups = slug_to_group(cfg.groups)
    items: list[BoostItem] = []

    if profile.secondary_goals:
        items.append(
            BoostItem(
                source="secondary-goals",
                ingredient=None,
                points=cfg.secondary_goal_points * len(profile.secondary_goals),
            )
        )

    for source, attr, table in _BOOST_TABLES:
        answer = getattr(profile, attr)
        if answer is None:
            continue
        row = getattr(cfg, table).get(answer, {})
        for ingredient in ingredients:
            group = groups.get(ingredient.slug)
            if group is not None and group in row:
                items.append(BoostItem(source=source, ingredient=ingredient.name, points=row[group]))

    total = sum(item.points for item in items)
    return DetailedBoost(items=tuple(items), total=total, applied=min(total, cfg.max_total_boost))


def apply_detailed_boost(
    scored:  ScoredProduct,
    profile: DetailedProfile,
    config:  ScoringConfig | None = None,
) -> ScoredProduct:
    """Return ``scored`` with the detailed boost folded into its overall score."""
    cfg = config or DEFAULT_SCORING_CONFIG
    boost = compute_detailed_boost(scored.product.ingredients, profile, cfg.detailed)
    if boost.applied == 0:
        return scored

    overall = min(100, scored.scores.overall_score + boost.applied)
    scores = dataclasses.replace(scored.scores, overall_score=overall)

    reasons = scored.reasons
    if boost.applied > cfg.detailed.reason_min_boost:
        reasons = (build_boost_reason(boost.applied),) + reasons

    logger.debug(
        "Detailed boost for %s: +%d (uncapped %d, %d items).",
        scored.product.id, boost.applied, boost.total, len(boost.items),
    )
    return dataclasses.replace(
        scored,
        scores=scores,
        grade=letter_grade(overall, cfg.grading),
        recommendation=recommendation_level(overall, scores.safety_score, cfg.grading),
        reasons=reasons,
        detailed_boost=boost.applied,
    )


def recommend_products_detailed(
    products:    Sequence[Product],
    profile:     DetailedProfile,
    config:      ScoringConfig | None = None,
    max_workers: int | None = None,
) -> list[RecommendationResult]:
    """Rank products for a detailed profile.

    Args:
        products:    Candidate products (may be empty).
        profile:     Base profile fields plus detailed answers.
        config:      Scoring policy; defaults to the built-in policy.
        max_workers: Threads used for per-product evaluation.

    Returns:
        RecommendationResult list ordered best first on the boosted scores,
        ranks 1..N.
    """
    cfg = config or DEFAULT_SCORING_CONFIG
    scored = score_products(products, profile, cfg, max_workers)
    boosted = [apply_detailed_boost(sp, profile, cfg) for sp in scored]
    results = rank_scored_products(boosted)
    log_ranking_summary(results, profile)
    return results
