"""
Tests for supplement_ranker/scoring/intake_limits.py.

What we test
------------
- Daily amount is per-serving amount times servings per day.
- Only a daily amount strictly above the limit is flagged.
- Ingredients without an upper limit are never flagged.
- Product checks keep label order and skip ingredients within limits.
- The reference deduction is 10 per flagged ingredient, capped at 30.
"""

from __future__ import annotations

import pytest

from supplement_ranker.scoring.intake_limits import (
    check_product_upper_limits,
    check_upper_limit,
    upper_limit_deduction,
)


class TestCheckUpperLimit:
    def test_exceeds(self, make_ingredient):
        check = check_upper_limit(
            make_ingredient(amount_mg_per_serving=1500, upper_limit_mg=2000), servings_per_day=2
        )
        assert check.daily_amount_mg == pytest.approx(3000)
        assert check.exceeds is True
        assert check.exceedance_rate == pytest.approx(150.0)
        assert check.warning == (
            "Daily intake of Vitamin C (3000mg) exceeds the "
            "tolerable upper intake level (2000mg)"
        )

    def test_equal_to_limit_not_flagged(self, make_ingredient):
        check = check_upper_limit(
            make_ingredient(amount_mg_per_serving=1000, upper_limit_mg=2000), servings_per_day=2
        )
        assert check.exceeds is False
        assert check.warning is None
        assert check.exceedance_rate == pytest.approx(100.0)

    def test_no_limit(self, make_ingredient):
        check = check_upper_limit(make_ingredient(amount_mg_per_serving=99999), 3)
        assert check.upper_limit_mg is None
        assert check.exceeds is False
        assert check.exceedance_rate is None


class TestProductChecks:
    @pytest.fixture
    def product(self, make_product, make_ingredient):
        return make_product(
            servings_per_day=2,
            ingredients=(
                make_ingredient(name="Zinc", amount_mg_per_serving=30, upper_limit_mg=40),
                make_ingredient(name="Vitamin C", amount_mg_per_serving=500, upper_limit_mg=2000),
                make_ingredient(name="Iron", amount_mg_per_serving=25, upper_limit_mg=45),
                make_ingredient(name="Calcium", amount_mg_per_serving=600),
            ),
        )

    def test_only_exceeding_in_label_order(self, product):
        assert [c.ingredient for c in check_product_upper_limits(product)] == ["Zinc", "Iron"]

    def test_deduction(self, product):
        assert upper_limit_deduction(product) == 20

    def test_deduction_capped(self, make_product, make_ingredient):
        ingredients = tuple(
            make_ingredient(name=f"Mineral {i}", amount_mg_per_serving=100, upper_limit_mg=50)
            for i in range(4)
        )
        assert upper_limit_deduction(make_product(ingredients=ingredients)) == 30

    def test_no_limits(self, vitamin_c_product):
        assert check_product_upper_limits(vitamin_c_product) == []
        assert upper_limit_deduction(vitamin_c_product) == 0
