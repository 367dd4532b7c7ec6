"""
Tests for supplement_ranker/scoring/safety_checker.py.

What we test
------------
check_product_safety():
  - Pregnant user vs ingredient tagged [pregnant, breastfeeding] → exactly
    one critical alert, high-risk, not safe.
  - One alert per (ingredient × matching condition), no de-duplication.
  - Ingredients without contraindications are always safe.
  - Risk level by counting: 2 warnings → medium, 1 warning → low, info → low.
  - Summaries per risk bucket.

score_safety_check():
  - Bucket base minus per-alert deductions, clamped to [0, 100].
  - Monotonic within a bucket.

sort_alerts_by_severity / check_multiple_products_safety.
"""

from __future__ import annotations

from supplement_ranker.scoring.safety_checker import (
    check_multiple_products_safety,
    check_product_safety,
    determine_risk_level,
    score_safety_check,
    sort_alerts_by_severity,
)
from supplement_ranker.taxonomy.contraindication_taxonomy import (
    AlertSeverity,
    ContraindicationTag,
    RiskLevel,
)

PREGNANT = ContraindicationTag.PREGNANT
DIABETES = ContraindicationTag.DIABETES
HYPERTENSION = ContraindicationTag.HYPERTENSION
ELDERLY = ContraindicationTag.ELDERLY


class TestMatching:
    def test_pregnancy_scenario(self, make_ingredient):
        ing = make_ingredient(contraindications=("pregnant", "breastfeeding"))
        result = check_product_safety([ing], [PREGNANT])

        assert len(result.alerts) == 1
        alert = result.alerts[0]
        assert alert.severity == AlertSeverity.CRITICAL
        assert alert.condition == PREGNANT
        assert alert.ingredient == "Vitamin C"
        assert result.risk_level == RiskLevel.HIGH_RISK
        assert result.is_overall_safe is False
        assert result.critical_count == 1

    def test_no_conditions_is_safe(self, make_ingredient):
        ing = make_ingredient(contraindications=("pregnant",))
        result = check_product_safety([ing], [])
        assert result.is_overall_safe
        assert result.risk_level == RiskLevel.SAFE
        assert result.alerts == ()

    def test_untagged_ingredient_is_safe(self, make_ingredient):
        result = check_product_safety([make_ingredient()], [PREGNANT, DIABETES])
        assert result.is_overall_safe

    def test_no_deduplication_across_ingredients(self, make_ingredient):
        a = make_ingredient(name="A", slug="a", contraindications=("pregnant",))
        b = make_ingredient(name="B", slug="b", contraindications=("pregnant",))
        result = check_product_safety([a, b], [PREGNANT])
        assert [x.ingredient_slug for x in result.alerts] == ["a", "b"]

    def test_alert_order_follows_ingredients_then_conditions(self, make_ingredient):
        a = make_ingredient(name="A", slug="a", contraindications=("diabetes", "pregnant"))
        result = check_product_safety([a], [PREGNANT, DIABETES])
        assert [x.condition for x in result.alerts] == [PREGNANT, DIABETES]

    def test_messages_mention_ingredient(self, make_ingredient):
        ing = make_ingredient(name="Ginkgo", slug="ginkgo", contraindications=("diabetes",))
        alert = check_product_safety([ing], [DIABETES]).alerts[0]
        assert "Ginkgo" in alert.message
        assert alert.condition_label == "diabetes"


class TestRiskLevel:
    def test_two_warnings_is_medium(self, make_ingredient):
        ing = make_ingredient(contraindications=("diabetes", "hypertension"))
        result = check_product_safety([ing], [DIABETES, HYPERTENSION])
        assert result.risk_level == RiskLevel.MEDIUM_RISK
        assert result.summary == "Found 2 cautions. Consult your physician before use."

    def test_one_warning_is_low(self, make_ingredient):
        ing = make_ingredient(contraindications=("diabetes",))
        result = check_product_safety([ing], [DIABETES])
        assert result.risk_level == RiskLevel.LOW_RISK
        assert result.summary == "Found 1 caution. Please review it before use."

    def test_info_only_is_low(self, make_ingredient):
        ing = make_ingredient(contraindications=("elderly",))
        result = check_product_safety([ing], [ELDERLY])
        assert result.risk_level == RiskLevel.LOW_RISK
        assert result.info_count == 1
        assert result.summary == "Found 1 minor caution(s)."

    def test_critical_summary(self, make_ingredient):
        ing = make_ingredient(contraindications=("pregnant",))
        result = check_product_safety([ing], [PREGNANT])
        assert result.summary.startswith("Found 1 critical caution(s).")

    def test_safe_summary(self, make_ingredient):
        result = check_product_safety([make_ingredient()], [])
        assert result.summary == "No contraindications for the selected health conditions."

    def test_determine_risk_level_direct(self):
        assert determine_risk_level(1, 5, 6) == RiskLevel.HIGH_RISK
        assert determine_risk_level(0, 2, 2) == RiskLevel.MEDIUM_RISK
        assert determine_risk_level(0, 1, 3) == RiskLevel.LOW_RISK
        assert determine_risk_level(0, 0, 0) == RiskLevel.SAFE


class TestScoreSafetyCheck:
    def _score(self, make_ingredient, tags, conditions):
        ing = make_ingredient(contraindications=tags)
        return score_safety_check(check_product_safety([ing], conditions))

    def test_safe_is_100(self, make_ingredient):
        assert self._score(make_ingredient, (), [PREGNANT]) == 100

    def test_single_warning(self, make_ingredient):
        # low-risk 75 - 10
        assert self._score(make_ingredient, ("diabetes",), [DIABETES]) == 65

    def test_single_info(self, make_ingredient):
        assert self._score(make_ingredient, ("elderly",), [ELDERLY]) == 75

    def test_two_warnings(self, make_ingredient):
        # medium-risk 50 - 20
        assert self._score(
            make_ingredient, ("diabetes", "hypertension"), [DIABETES, HYPERTENSION]
        ) == 30

    def test_critical_clamped_at_zero(self, make_ingredient):
        assert self._score(make_ingredient, ("pregnant",), [PREGNANT]) == 0

    def test_monotonic_within_medium_bucket(self, make_ingredient):
        two = self._score(
            make_ingredient, ("diabetes", "hypertension"), [DIABETES, HYPERTENSION]
        )
        three = self._score(
            make_ingredient,
            ("diabetes", "hypertension", "epilepsy"),
            [DIABETES, HYPERTENSION, ContraindicationTag.EPILEPSY],
        )
        assert three < two


class TestHelpers:
    def test_sort_alerts_by_severity(self, make_ingredient):
        ing = make_ingredient(contraindications=("elderly", "diabetes", "pregnant"))
        result = check_product_safety([ing], [ELDERLY, DIABETES, PREGNANT])
        ordered = sort_alerts_by_severity(result.alerts)
        assert [a.severity for a in ordered] == [
            AlertSeverity.CRITICAL, AlertSeverity.WARNING, AlertSeverity.INFO,
        ]

    def test_multiple_products_preserve_order(self, make_product, make_ingredient):
        safe = make_product(id="safe")
        risky = make_product(
            id="risky", ingredients=(make_ingredient(contraindications=("pregnant",)),)
        )
        checks = check_multiple_products_safety([safe, risky], [PREGNANT])
        assert [c.product_id for c in checks] == ["safe", "risky"]
        assert checks[0].result.is_overall_safe
        assert not checks[1].result.is_overall_safe
