"""
Tests for supplement_ranker/recommendations/aggregator.py.

What we test
------------
- overall score stays in [0, 100] for every priority and extreme sub-scores.
- letter_grade thresholds.
- recommendation_level thresholds and the safety gate (< 30 wins over any
  overall score).
- evaluate_product(): end-to-end sub-scores for simple products, and the
  pregnancy scenario gated to not-recommended.
"""

from __future__ import annotations

import itertools

import pytest

from supplement_ranker.config import DEFAULT_SCORING_CONFIG
from supplement_ranker.models.profile import UserProfile
from supplement_ranker.recommendations.aggregator import (
    calculate_overall_score,
    evaluate_product,
    get_weights,
    letter_grade,
    recommendation_level,
)
from supplement_ranker.taxonomy.contraindication_taxonomy import RiskLevel
from supplement_ranker.taxonomy.goal_taxonomy import (
    LetterGrade,
    Priority,
    RecommendationLevel,
)


class TestOverallScore:
    @pytest.mark.parametrize("priority", list(Priority))
    def test_bounded(self, priority):
        weights = get_weights(priority)
        for subs in itertools.product([0, 50, 100], repeat=4):
            overall = calculate_overall_score(*subs, weights)
            assert 0 <= overall <= 100

    @pytest.mark.parametrize("priority", list(Priority))
    def test_all_hundred_is_hundred(self, priority):
        assert calculate_overall_score(100, 100, 100, 100, get_weights(priority)) == 100

    def test_cost_priority_weighting(self):
        # 0*0.10 + 100*0.25 + 100*0.60 + 0*0.05
        assert calculate_overall_score(0, 100, 100, 0, get_weights(Priority.COST)) == 85


class TestLetterGrade:
    @pytest.mark.parametrize(
        "score, grade",
        [(100, LetterGrade.S), (90, LetterGrade.S), (89, LetterGrade.A), (80, LetterGrade.A),
         (70, LetterGrade.B), (60, LetterGrade.C), (59, LetterGrade.D), (0, LetterGrade.D)],
    )
    def test_thresholds(self, score, grade):
        assert letter_grade(score) == grade


class TestRecommendationLevel:
    @pytest.mark.parametrize(
        "overall, level",
        [
            (80, RecommendationLevel.HIGHLY_RECOMMENDED),
            (79, RecommendationLevel.RECOMMENDED),
            (60, RecommendationLevel.RECOMMENDED),
            (59, RecommendationLevel.ACCEPTABLE),
            (40, RecommendationLevel.ACCEPTABLE),
            (39, RecommendationLevel.NOT_RECOMMENDED),
        ],
    )
    def test_thresholds(self, overall, level):
        assert recommendation_level(overall, safety_score=100) == level

    @pytest.mark.parametrize("overall", [0, 50, 95, 100])
    def test_safety_gate(self, overall):
        assert recommendation_level(overall, safety_score=29) == RecommendationLevel.NOT_RECOMMENDED

    def test_gate_boundary_is_strict(self):
        assert recommendation_level(95, safety_score=30) == RecommendationLevel.HIGHLY_RECOMMENDED


class TestEvaluateProduct:
    def test_ideal_product(self, make_product, make_ingredient):
        product = make_product(ingredients=(make_ingredient(evidence_level="S"),))
        profile = UserProfile(goals=["immune-boost"])
        ev = evaluate_product(product, profile)
        assert ev.effectiveness_score == 100
        assert ev.safety_score == 100
        assert ev.cost_score == 100
        assert ev.evidence_score == 100
        assert ev.overall_score == 100
        assert ev.safety_details.has_contraindications is False

    def test_no_goals_is_neutral(self, vitamin_c_product):
        ev = evaluate_product(vitamin_c_product, UserProfile())
        assert ev.effectiveness_score == 50

    def test_pregnancy_gated(self, make_product, make_ingredient):
        product = make_product(
            ingredients=(
                make_ingredient(evidence_level="S", contraindications=("pregnant", "breastfeeding")),
            )
        )
        profile = UserProfile(goals=["immune-boost"], conditions=["pregnant"], priority="cost")
        ev = evaluate_product(product, profile)

        check = ev.safety_details.safety_check_result
        assert len(check.alerts) == 1
        assert check.risk_level == RiskLevel.HIGH_RISK
        assert ev.safety_score == 0
        assert ev.overall_score == 75
        assert recommendation_level(ev.overall_score, ev.safety_score) == RecommendationLevel.NOT_RECOMMENDED

    def test_budget_selects_budget_regime(self, vitamin_c_product):
        ev = evaluate_product(vitamin_c_product, UserProfile(budget_per_day=20))
        assert ev.cost_details.budget_per_day == 20
        assert ev.cost_score == 60

    def test_idempotent(self, vitamin_c_product):
        profile = UserProfile(goals=["immune-boost"], conditions=["diabetes"])
        assert evaluate_product(vitamin_c_product, profile) == evaluate_product(vitamin_c_product, profile)

    def test_explicit_default_config(self, vitamin_c_product):
        profile = UserProfile(goals=["immune-boost"])
        assert evaluate_product(vitamin_c_product, profile, DEFAULT_SCORING_CONFIG) == \
            evaluate_product(vitamin_c_product, profile)
