"""
Safety matcher: intersects each ingredient's contraindication tags with the
user's declared health conditions and turns the matches into alerts.

Matching
--------
Every (ingredient × user condition) pair where the condition appears in the
ingredient's contraindications produces one ``SafetyAlert``.  No
de-duplication: one ingredient can raise several alerts, and one condition
can raise alerts against several ingredients.  Alerts are emitted in
ingredient order, then in the user's condition order.

Risk level (by counting, not by score)
--------------------------------------
    >= 1 critical                      → high-risk
    >= 2 warnings (no criticals)       → medium-risk
    exactly 1 warning, or info only    → low-risk
    no alerts                          → safe

Ranking-path safety score
-------------------------
    score = base[risk_level] - 25 * critical_count - 10 * warning_count
    base  = {safe: 100, low-risk: 75, medium-risk: 50, high-risk: 0}
    clamped to [0, 100]

The bucket base keeps the coarse risk semantics; the per-alert deduction
keeps ordering monotonic inside a bucket.

Ingredients with no contraindications are always safe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from supplement_ranker.config import DEFAULT_SCORING_CONFIG, SafetyConfig
from supplement_ranker.models.product import Ingredient, Product
from supplement_ranker.taxonomy.contraindication_taxonomy import (
    AlertSeverity,
    ContraindicationTag,
    RiskLevel,
    contraindication_label,
)
from supplement_ranker.utils.numeric import clamp

_SEVERITY_ORDER: dict[AlertSeverity, int] = {
    AlertSeverity.CRITICAL: 0,
    AlertSeverity.WARNING:  1,
    AlertSeverity.INFO:     2,
}


@dataclass(frozen=True)
class SafetyAlert:
    """A single ingredient/condition contraindication match.

    Attributes:
        severity:        Severity of the matched condition.
        ingredient:      Ingredient display name.
        ingredient_slug: Ingredient slug.
        condition:       Matched user condition tag.
        condition_label: English label for the condition.
        message:         User-facing alert text.
    """

    severity:        AlertSeverity
    ingredient:      str
    ingredient_slug: str
    condition:       ContraindicationTag
    condition_label: str
    message:         str


@dataclass(frozen=True)
class SafetyCheckResult:
    """Outcome of matching one product against one user's conditions."""

    is_overall_safe: bool
    alerts:          tuple[SafetyAlert, ...]
    risk_level:      RiskLevel
    summary:         str
    critical_count:  int
    warning_count:   int
    info_count:      int


@dataclass(frozen=True)
class ProductSafetyCheck:
    """``SafetyCheckResult`` tagged with the product it belongs to."""

    product_id:   str
    product_name: str
    result:       SafetyCheckResult


def _safety_config(config: SafetyConfig | None) -> SafetyConfig:
    return config or DEFAULT_SCORING_CONFIG.safety


def build_alert_message(
    ingredient_name: str,
    condition:       ContraindicationTag,
    severity:        AlertSeverity,
) -> str:
    label = contraindication_label(condition)
    if severity == AlertSeverity.CRITICAL:
        return (
            f"IMPORTANT: {ingredient_name} is not recommended for people with {label}. "
            "Consult your physician."
        )
    if severity == AlertSeverity.WARNING:
        return (
            f"{ingredient_name} requires caution for people with {label}. "
            "Consider consulting your physician before use."
        )
    return f"{ingredient_name}: people with {label} should take care as a precaution."


def determine_risk_level(
    critical_count:  int,
    warning_count:   int,
    total_alerts:    int,
    config:          SafetyConfig | None = None,
) -> RiskLevel:
    """Classify overall risk from alert counts."""
    cfg = _safety_config(config)
    if critical_count > 0:
        return RiskLevel.HIGH_RISK
    if warning_count >= cfg.medium_risk_warning_count:
        return RiskLevel.MEDIUM_RISK
    if total_alerts > 0:
        return RiskLevel.LOW_RISK
    return RiskLevel.SAFE


def _build_summary(
    risk_level:     RiskLevel,
    critical_count: int,
    warning_count:  int,
    total_alerts:   int,
) -> str:
    if risk_level == RiskLevel.HIGH_RISK:
        return (
            f"Found {critical_count} critical caution(s). "
            "Use of this product is not recommended."
        )
    if risk_level == RiskLevel.MEDIUM_RISK:
        return f"Found {warning_count} cautions. Consult your physician before use."
    if warning_count == 1:
        return "Found 1 caution. Please review it before use."
    if total_alerts > 0:
        return f"Found {total_alerts} minor caution(s)."
    return "No contraindications for the selected health conditions."


def check_product_safety(
    ingredients: Sequence[Ingredient],
    conditions:  Sequence[ContraindicationTag],
    config:      SafetyConfig | None = None,
) -> SafetyCheckResult:
    """Match a product's ingredients against the user's conditions.

    Args:
        ingredients: Product ingredients with contraindication tags attached.
        conditions:  The user's declared conditions (may be empty).
        config:      Severity map and risk policy.

    Returns:
        SafetyCheckResult with every alert, counts, risk level and summary.
    """
    cfg = _safety_config(config)
    alerts: list[SafetyAlert] = []

    for ingredient in ingredients:
        if not ingredient.contraindications:
            continue
        for condition in conditions:
            if condition not in ingredient.contraindications:
                continue
            severity = cfg.severity_map[condition]
            alerts.append(
                SafetyAlert(
                    severity=severity,
                    ingredient=ingredient.name,
                    ingredient_slug=ingredient.slug,
                    condition=condition,
                    condition_label=contraindication_label(condition),
                    message=build_alert_message(ingredient.name, condition, severity),
                )
            )

    critical_count = sum(1 for a in alerts if a.severity == AlertSeverity.CRITICAL)
    warning_count  = sum(1 for a in alerts if a.severity == AlertSeverity.WARNING)
    info_count     = len(alerts) - critical_count - warning_count

    risk_level = determine_risk_level(critical_count, warning_count, len(alerts), cfg)

    return SafetyCheckResult(
        is_overall_safe=not alerts,
        alerts=tuple(alerts),
        risk_level=risk_level,
        summary=_build_summary(risk_level, critical_count, warning_count, len(alerts)),
        critical_count=critical_count,
        warning_count=warning_count,
        info_count=info_count,
    )


def score_safety_check(
    result: SafetyCheckResult,
    config: SafetyConfig | None = None,
) -> int:
    """Ranking-path safety score (0–100) from a ``SafetyCheckResult``."""
    cfg = _safety_config(config)
    score = (
        cfg.risk_base_scores[result.risk_level]
        - cfg.critical_deduction * result.critical_count
        - cfg.warning_deduction * result.warning_count
    )
    return int(clamp(score, 0, 100))


def check_multiple_products_safety(
    products:   Sequence[Product],
    conditions: Sequence[ContraindicationTag],
    config:     SafetyConfig | None = None,
) -> list[ProductSafetyCheck]:
    """Run ``check_product_safety`` for every product, preserving input order."""
    return [
        ProductSafetyCheck(
            product_id=product.id,
            product_name=product.name,
            result=check_product_safety(product.ingredients, conditions, config),
        )
        for product in products
    ]


def sort_alerts_by_severity(alerts: Sequence[SafetyAlert]) -> list[SafetyAlert]:
    """Critical first, then warning, then info; ties keep their order."""
    return sorted(alerts, key=lambda a: _SEVERITY_ORDER[a.severity])
