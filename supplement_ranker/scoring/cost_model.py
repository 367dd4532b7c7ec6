"""
Unit normalizer and cost model: turns package price and serving data into
comparable per-day, per-serving and per-milligram costs.

Formulas
--------
    cost_per_serving   = price / servings_per_container
    cost_per_day       = cost_per_serving * servings_per_day
    days_per_container = servings_per_container / servings_per_day
    total_mg_per_serving = sum(ingredient.amount_mg_per_serving)
    total_mg_per_day     = total_mg_per_serving * servings_per_day

Cost-per-mg (dual algorithm)
----------------------------
    <= threshold ingredients (default 3):
        cost_per_mg = price / (total_mg_per_serving * servings_per_container)
    >  threshold ingredients (multi-ingredient, e.g. a multivitamin):
        only the N heaviest ingredients (default 5, stable sort by mass
        descending) contribute mass.  Dozens of trace ingredients would
        otherwise make cost-per-mg meaningless.

    A zero mass denominator yields 0.0 (defined edge case, not an error).

Normalized cost
---------------
    normalized_cost = cost_per_mg * baseline_mg        (default 1000mg)
    cost_efficiency_score: clamped linear map
        normalized_cost <= 5  → 100
        normalized_cost >= 50 → 0

All functions are pure and do no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from supplement_ranker.config import CostModelConfig, DEFAULT_SCORING_CONFIG
from supplement_ranker.models.product import Ingredient, Product
from supplement_ranker.utils.numeric import clamp, round_half_up


@dataclass(frozen=True)
class CostCalculation:
    """All per-unit cost figures for one product.

    Attributes:
        cost_per_day:        Cost of the recommended daily intake.
        cost_per_serving:    Cost of one serving.
        days_per_container:  Days one package lasts.
        total_mg_per_serving: Summed ingredient mass per serving (all ingredients).
        total_mg_per_day:    ``total_mg_per_serving * servings_per_day``.
        cost_per_mg:         Price per mg of (major) ingredient mass.
        is_multi_ingredient: True when the top-N regime was used for cost_per_mg.
    """

    cost_per_day:         float
    cost_per_serving:     float
    days_per_container:   float
    total_mg_per_serving: float
    total_mg_per_day:     float
    cost_per_mg:          float
    is_multi_ingredient:  bool


@dataclass(frozen=True)
class NormalizedCost:
    """``CostCalculation`` plus the baseline-normalized comparison figures."""

    calculation:           CostCalculation
    baseline_mg:           float
    normalized_cost:       float
    cost_efficiency_score: int


@dataclass(frozen=True)
class CostComparisonEntry:
    """One row of a cost-effectiveness comparison (rank 1 = cheapest)."""

    rank:          int
    product_index: int
    product_id:    str
    normalized:    NormalizedCost


@dataclass(frozen=True)
class SavingsResult:
    """How much cheaper one product is than another over a period."""

    savings_amount:  float
    savings_rate:    float   # percent of the more expensive total
    cheaper_product: Literal["A", "B"]


def _cost_config(config: CostModelConfig | None) -> CostModelConfig:
    return config or DEFAULT_SCORING_CONFIG.cost_model


# ── Basic unit conversions ────────────────────────────────────────────────────

def calculate_cost_per_serving(product: Product) -> float:
    return product.price / product.servings_per_container


def calculate_cost_per_day(product: Product) -> float:
    """Cost of the recommended daily intake.

    Example: 1980 for 250 servings at 2/day → 15.84 per day.
    """
    return calculate_cost_per_serving(product) * product.servings_per_day


def calculate_days_per_container(product: Product) -> float:
    return product.servings_per_container / product.servings_per_day


def calculate_total_mg_per_serving(ingredients: Sequence[Ingredient]) -> float:
    return sum(ing.amount_mg_per_serving for ing in ingredients)


def calculate_total_mg_per_day(product: Product) -> float:
    return calculate_total_mg_per_serving(product.ingredients) * product.servings_per_day


# ── Cost per mg ───────────────────────────────────────────────────────────────

def is_multi_ingredient(
    product: Product,
    config:  CostModelConfig | None = None,
) -> bool:
    """True when the product has more ingredients than the single-ingredient threshold."""
    return len(product.ingredients) > _cost_config(config).multi_ingredient_threshold


def select_major_ingredients(
    ingredients: Sequence[Ingredient],
    count:       int = 5,
) -> list[Ingredient]:
    """Return the ``count`` heaviest ingredients, heaviest first.

    The sort is stable: ingredients with equal mass keep their label order.
    Fewer than ``count`` ingredients → all of them.
    """
    ranked = sorted(ingredients, key=lambda ing: -ing.amount_mg_per_serving)
    return ranked[:count]


def calculate_cost_per_mg(
    product: Product,
    config:  CostModelConfig | None = None,
) -> float:
    """Price per milligram of active mass, using the dual algorithm.

    Returns 0.0 when the relevant mass is zero.
    """
    cfg = _cost_config(config)

    if is_multi_ingredient(product, cfg):
        counted = select_major_ingredients(product.ingredients, cfg.major_ingredient_count)
    else:
        counted = list(product.ingredients)

    total_mg = calculate_total_mg_per_serving(counted) * product.servings_per_container
    if total_mg == 0:
        return 0.0
    return product.price / total_mg


def calculate_comprehensive_cost(
    product: Product,
    config:  CostModelConfig | None = None,
) -> CostCalculation:
    """Compute every per-unit cost figure for one product."""
    cfg = _cost_config(config)
    return CostCalculation(
        cost_per_day=calculate_cost_per_day(product),
        cost_per_serving=calculate_cost_per_serving(product),
        days_per_container=calculate_days_per_container(product),
        total_mg_per_serving=calculate_total_mg_per_serving(product.ingredients),
        total_mg_per_day=calculate_total_mg_per_day(product),
        cost_per_mg=calculate_cost_per_mg(product, cfg),
        is_multi_ingredient=is_multi_ingredient(product, cfg),
    )


# ── Normalized cost & comparison ──────────────────────────────────────────────

def cost_efficiency_score(
    normalized_cost: float,
    config:          CostModelConfig | None = None,
) -> int:
    """Map a normalized cost onto 0–100 (cheaper is better), clamped."""
    cfg = _cost_config(config)
    best, worst = cfg.efficiency_best_cost, cfg.efficiency_worst_cost
    raw = (worst - normalized_cost) / (worst - best) * 100.0
    return round_half_up(clamp(raw, 0.0, 100.0))


def calculate_normalized_cost(
    product:     Product,
    baseline_mg: float | None = None,
    config:      CostModelConfig | None = None,
) -> NormalizedCost:
    """Cost of ``baseline_mg`` of the product's active mass.

    Example: vitamin C 1000mg × 250 servings at 1980 → 7.92 per 1000mg.

    Args:
        product:     Product to normalize.
        baseline_mg: Reference quantity; defaults to ``config.baseline_mg``.
        config:      Cost model policy.
    """
    cfg = _cost_config(config)
    baseline = cfg.baseline_mg if baseline_mg is None else baseline_mg
    calculation = calculate_comprehensive_cost(product, cfg)
    normalized = calculation.cost_per_mg * baseline

    return NormalizedCost(
        calculation=calculation,
        baseline_mg=baseline,
        normalized_cost=normalized,
        cost_efficiency_score=cost_efficiency_score(normalized, cfg),
    )


def compare_cost_effectiveness(
    products:    Sequence[Product],
    baseline_mg: float | None = None,
    config:      CostModelConfig | None = None,
) -> list[CostComparisonEntry]:
    """Rank products by normalized cost, cheapest first.

    Ties keep input order (stable sort).  Ranks are 1..N with no gaps.
    """
    normalized = [
        (index, product, calculate_normalized_cost(product, baseline_mg, config))
        for index, product in enumerate(products)
    ]
    normalized.sort(key=lambda row: row[2].normalized_cost)

    return [
        CostComparisonEntry(
            rank=rank,
            product_index=index,
            product_id=product.id,
            normalized=result,
        )
        for rank, (index, product, result) in enumerate(normalized, start=1)
    ]


def cost_efficiency_label(normalized_cost: float) -> str:
    """Benchmark label for a normalized cost (per baseline mg)."""
    if normalized_cost <= 10:
        return "outstanding"
    if normalized_cost <= 20:
        return "excellent"
    if normalized_cost <= 30:
        return "good"
    if normalized_cost <= 40:
        return "average"
    return "needs-review"


def calculate_savings(
    product_a: Product,
    product_b: Product,
    days:      int = 30,
) -> SavingsResult:
    """Compare the running cost of two products over ``days`` days.

    When both cost the same, ``cheaper_product`` is ``"B"`` with zero savings.
    """
    total_a = calculate_cost_per_day(product_a) * days
    total_b = calculate_cost_per_day(product_b) * days

    if total_a < total_b:
        return SavingsResult(
            savings_amount=total_b - total_a,
            savings_rate=(total_b - total_a) / total_b * 100.0,
            cheaper_product="A",
        )

    rate = (total_a - total_b) / total_a * 100.0 if total_a > 0 else 0.0
    return SavingsResult(
        savings_amount=total_a - total_b,
        savings_rate=rate,
        cheaper_product="B",
    )
