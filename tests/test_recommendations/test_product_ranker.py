"""
Tests for supplement_ranker/recommendations/ranker.py.

What we test
------------
recommend_products():
  - Ranks are exactly 1..N; overall score non-increasing with rank.
  - Tie-break: equal overall → higher safety first → higher evidence
    first → input order.
  - Safety gate holds for every result.
  - Threaded evaluation gives the same result as sequential.
  - Idempotent; empty input gives an empty list.

top_recommendations():
  - Returns the first ``limit`` ranked entries.
"""

from __future__ import annotations

import pytest

from supplement_ranker.config import PriorityWeights, ScoringConfig, WeightsConfig
from supplement_ranker.models.profile import UserProfile
from supplement_ranker.recommendations.ranker import (
    recommend_product,
    recommend_products,
    top_recommendations,
)
from supplement_ranker.taxonomy.goal_taxonomy import Priority, RecommendationLevel


def _cost_only_config() -> ScoringConfig:
    """Overall score == cost score, so ties are easy to construct."""
    cost_only = PriorityWeights(effectiveness=0.0, safety=0.0, cost=1.0, evidence=0.0)
    return ScoringConfig(weights=WeightsConfig(table={p: cost_only for p in Priority}))


@pytest.fixture
def catalog(make_product, make_ingredient):
    return [
        make_product(id="cheap", price=600, servings_per_day=1, servings_per_container=30),
        make_product(id="dear", price=9000, servings_per_day=1, servings_per_container=30),
        make_product(
            id="risky",
            price=600,
            servings_per_day=1,
            servings_per_container=30,
            ingredients=(make_ingredient(contraindications=("pregnant",)),),
        ),
        make_product(id="mid", price=2400, servings_per_day=1, servings_per_container=30),
        make_product(
            id="weak",
            price=1500,
            servings_per_day=1,
            servings_per_container=30,
            ingredients=(make_ingredient(evidence_level="D", related_goals=()),),
        ),
    ]


class TestRankDensity:
    def test_ranks_are_one_to_n(self, catalog):
        results = recommend_products(catalog, UserProfile(goals=["immune-boost"]))
        assert sorted(r.rank for r in results) == list(range(1, len(catalog) + 1))
        assert [r.rank for r in results] == list(range(1, len(catalog) + 1))

    def test_overall_non_increasing(self, catalog):
        results = recommend_products(catalog, UserProfile(conditions=["pregnant"]))
        overall = [r.scores.overall_score for r in results]
        assert overall == sorted(overall, reverse=True)

    def test_every_product_once(self, catalog):
        results = recommend_products(catalog, UserProfile())
        assert sorted(r.product.id for r in results) == sorted(p.id for p in catalog)

    def test_empty(self):
        assert recommend_products([], UserProfile()) == []


class TestSafetyGate:
    def test_gate_holds_for_all(self, catalog):
        results = recommend_products(catalog, UserProfile(conditions=["pregnant"]))
        for r in results:
            if r.scores.safety_score < 30:
                assert r.recommendation == RecommendationLevel.NOT_RECOMMENDED

    def test_risky_product_gated(self, catalog):
        results = recommend_products(catalog, UserProfile(conditions=["pregnant"]))
        risky = next(r for r in results if r.product.id == "risky")
        assert risky.scores.safety_score == 0
        assert risky.recommendation == RecommendationLevel.NOT_RECOMMENDED
        assert risky.warnings[0].startswith("Found 1 critical caution(s).")


class TestTieBreak:
    def test_safety_breaks_overall_tie(self, make_product, make_ingredient):
        less_safe = make_product(
            id="less-safe",
            ingredients=(make_ingredient(contraindications=("elderly",)),),
        )
        safe = make_product(id="safe")
        profile = UserProfile(conditions=["elderly"])

        results = recommend_products([less_safe, safe], profile, config=_cost_only_config())

        assert results[0].scores.overall_score == results[1].scores.overall_score
        assert [r.product.id for r in results] == ["safe", "less-safe"]

    def test_evidence_breaks_safety_tie(self, make_product, make_ingredient):
        weak = make_product(id="weak", ingredients=(make_ingredient(evidence_level="D"),))
        strong = make_product(id="strong", ingredients=(make_ingredient(evidence_level="S"),))

        results = recommend_products([weak, strong], UserProfile(), config=_cost_only_config())

        assert results[0].scores.safety_score == results[1].scores.safety_score
        assert [r.product.id for r in results] == ["strong", "weak"]

    def test_full_tie_keeps_input_order(self, make_product):
        products = [make_product(id=f"p{i}") for i in range(5)]
        results = recommend_products(products, UserProfile())
        assert [r.product.id for r in results] == ["p0", "p1", "p2", "p3", "p4"]
        assert [r.rank for r in results] == [1, 2, 3, 4, 5]


class TestConcurrency:
    def test_threaded_matches_sequential(self, catalog):
        profile = UserProfile(goals=["immune-boost"], conditions=["pregnant"], budget_per_day=50)
        sequential = recommend_products(catalog, profile)
        threaded = recommend_products(catalog, profile, max_workers=4)
        assert threaded == sequential

    def test_idempotent(self, catalog):
        profile = UserProfile(goals=["immune-boost"], priority="evidence")
        assert recommend_products(catalog, profile) == recommend_products(catalog, profile)


class TestRecommendProduct:
    def test_reasons_never_empty(self, make_product):
        scored = recommend_product(make_product(), UserProfile())
        assert len(scored.reasons) >= 1

    def test_grade_matches_overall(self, make_product, make_ingredient):
        product = make_product(ingredients=(make_ingredient(evidence_level="S"),))
        scored = recommend_product(product, UserProfile(goals=["immune-boost"]))
        assert scored.scores.overall_score == 100
        assert scored.grade == "S"
        assert scored.recommendation == RecommendationLevel.HIGHLY_RECOMMENDED


class TestTopRecommendations:
    def test_limit(self, catalog):
        profile = UserProfile()
        top = top_recommendations(catalog, profile, limit=2)
        full = recommend_products(catalog, profile)
        assert top == full[:2]

    def test_default_limit(self, make_product):
        products = [make_product(id=f"p{i}") for i in range(8)]
        assert len(top_recommendations(products, UserProfile())) == 5
