"""
Tests for supplement_ranker/reporting/formatters.py.

What we test
------------
- format_ranking_table(): header, one row per record, reasons / warnings
  lines, empty-list message.
- format_safety_report(): one block per product with score and grade;
  upper intake warnings appear under their product only.
- format_cost_comparison(): rank order and the multi-ingredient note.
"""

from __future__ import annotations

from supplement_ranker.models.profile import UserProfile
from supplement_ranker.recommendations.ranker import recommend_products
from supplement_ranker.recommendations.reporter import recommendation_to_dict
from supplement_ranker.reporting.formatters import (
    format_cost_comparison,
    format_ranking_table,
    format_safety_report,
)
from supplement_ranker.scoring.cost_model import compare_cost_effectiveness
from supplement_ranker.scoring.safety_policy import DetailedSafetyPolicy


class TestFormatRankingTable:
    def test_rows_and_reasons(self, make_product):
        products = [make_product(id="a", name="Alpha"), make_product(id="b", name="Beta")]
        records = [recommendation_to_dict(r) for r in recommend_products(products, UserProfile())]

        text = format_ranking_table(records, "balanced", total=2)

        assert "=== Supplement Ranking ===" in text
        assert "Priority:  balanced" in text
        assert "Alpha" in text and "Beta" in text
        assert "+ " in text

    def test_hide_reasons(self, make_product):
        records = [
            recommendation_to_dict(r)
            for r in recommend_products([make_product()], UserProfile())
        ]
        text = format_ranking_table(records, "balanced", total=1, show_reasons=False)
        assert "          + " not in text

    def test_empty(self):
        assert "(no products to rank)" in format_ranking_table([], "cost", total=0)


class TestFormatSafetyReport:
    def test_block_per_product(self, make_product):
        product = make_product(id="x", name="Xeno", quality={"third_party_tested": True})
        policy = DetailedSafetyPolicy(current_year=2026)
        text = format_safety_report([(product, policy.report(product))])
        assert "[x] Xeno" in text
        assert "Score: 100" in text
        assert "Grade: S" in text

    def test_upper_limit_warning(self, make_product, make_ingredient):
        high = make_product(
            id="hi",
            servings_per_day=2,
            ingredients=(make_ingredient(amount_mg_per_serving=1500, upper_limit_mg=2000),),
        )
        plain = make_product(id="lo")
        policy = DetailedSafetyPolicy(current_year=2026)
        reports = [(p, policy.report(p)) for p in (high, plain)]
        limits = {p.id: policy.upper_limit_checks(p) for p in (high, plain)}
        text = format_safety_report(reports, limits)
        warning = (
            "      ! Daily intake of Vitamin C (3000mg) exceeds the "
            "tolerable upper intake level (2000mg)"
        )
        assert text.count(warning) == 1
        assert text.index(warning) < text.index("[lo]")

    def test_empty(self):
        assert "(no products in catalog)" in format_safety_report([])


class TestFormatCostComparison:
    def test_order_and_note(self, make_product, make_ingredient):
        multi = make_product(
            id="multi",
            name="Multi",
            ingredients=tuple(
                make_ingredient(name=f"I{i}", slug=f"i{i}", amount_mg_per_serving=100)
                for i in range(4)
            ),
        )
        single = make_product(id="single", name="Single", price=500)
        products = [multi, single]
        entries = compare_cost_effectiveness(products)

        text = format_cost_comparison(entries, products, 1000)

        assert text.index("Single") < text.index("Multi")
        assert "multi-ingredient" in text
        assert "Normalized to: 1000mg" in text
