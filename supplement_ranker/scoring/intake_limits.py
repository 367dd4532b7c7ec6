"""
Tolerable upper intake checks: flags ingredients whose daily amount exceeds
the upper limit the catalog attached to them.

    daily_amount_mg  = amount_mg_per_serving * servings_per_day
    exceeds          = daily_amount_mg > upper_limit_mg        (strict)
    exceedance_rate  = daily_amount_mg / upper_limit_mg * 100  (percent)

Ingredients without ``upper_limit_mg`` are never flagged.  The check is
informational: it feeds the detailed safety report, never a score.

    upper_limit_deduction = min(10 * exceeding_count, 30)

is a reference figure for display only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from supplement_ranker.models.product import Ingredient, Product

_DEDUCTION_PER_INGREDIENT = 10
_DEDUCTION_CAP = 30


@dataclass(frozen=True)
class UpperLimitCheck:
    """Outcome of comparing one ingredient's daily amount with its upper limit.

    Attributes:
        ingredient:      Ingredient display name.
        ingredient_slug: Ingredient slug.
        daily_amount_mg: Amount taken per day at the recommended intake.
        upper_limit_mg:  Tolerable upper daily intake, ``None`` when unknown.
        exceeds:         True when the daily amount is above the limit.
        exceedance_rate: Daily amount as a percent of the limit, or ``None``.
        warning:         User-facing text when ``exceeds``, else ``None``.
    """

    ingredient:      str
    ingredient_slug: str
    daily_amount_mg: float
    upper_limit_mg:  Optional[float]
    exceeds:         bool
    exceedance_rate: Optional[float]
    warning:         Optional[str]


def check_upper_limit(ingredient: Ingredient, servings_per_day: float = 1.0) -> UpperLimitCheck:
    daily = ingredient.amount_mg_per_serving * servings_per_day
    limit = ingredient.upper_limit_mg

    if limit is None:
        return UpperLimitCheck(
            ingredient=ingredient.name,
            ingredient_slug=ingredient.slug,
            daily_amount_mg=daily,
            upper_limit_mg=None,
            exceeds=False,
            exceedance_rate=None,
            warning=None,
        )

    exceeds = daily > limit
    warning = None
    if exceeds:
        warning = (
            f"Daily intake of {ingredient.name} ({daily:g}mg) exceeds the "
            f"tolerable upper intake level ({limit:g}mg)"
        )

    return UpperLimitCheck(
        ingredient=ingredient.name,
        ingredient_slug=ingredient.slug,
        daily_amount_mg=daily,
        upper_limit_mg=limit,
        exceeds=exceeds,
        exceedance_rate=daily / limit * 100.0,
        warning=warning,
    )


def check_product_upper_limits(product: Product) -> list[UpperLimitCheck]:
    """Every ingredient of ``product`` above its upper limit, in label order."""
    checks = (
        check_upper_limit(ing, product.servings_per_day) for ing in product.ingredients
    )
    return [check for check in checks if check.exceeds]


def upper_limit_deduction(product: Product) -> int:
    """Reference deduction (0–30) for display; never applied to a score."""
    exceeding = len(check_product_upper_limits(product))
    return min(exceeding * _DEDUCTION_PER_INGREDIENT, _DEDUCTION_CAP)
