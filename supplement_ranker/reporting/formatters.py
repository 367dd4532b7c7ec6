"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept already-computed results and return plain multi-line
strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from typing import Mapping, Sequence

from supplement_ranker.models.product import Product
from supplement_ranker.scoring.cost_model import (
    CostComparisonEntry,
    cost_efficiency_label,
)
from supplement_ranker.scoring.intake_limits import UpperLimitCheck
from supplement_ranker.scoring.safety_scorer import SafetyScoreResult, safety_grade


# ── Ranking ───────────────────────────────────────────────────────────────────


def format_ranking_table(
    records:      list[dict],
    priority:     str,
    total:        int,
    show_reasons: bool = True,
) -> str:
    """Format ranked recommendations as an ASCII table.

    Args:
        records:      Dicts from ``recommendation_to_dict()``, best first.
        priority:     User priority (header).
        total:        Number of products evaluated (may exceed ``len(records)``).
        show_reasons: Print reasons and warnings under each row.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Supplement Ranking ===")
    lines.append(f"  Priority:  {priority}")
    lines.append(f"  Showing:   {len(records)} of {total}")

    if not records:
        lines.append("")
        lines.append("  (no products to rank)")
        return "\n".join(lines)

    lines.append("")
    header = (
        f"  {'Rank':>4}  {'Product':<32}  {'Grade':>5}  {'Overall':>7}  "
        f"{'Eff':>4}  {'Safe':>4}  {'Cost':>4}  {'Evid':>4}  Recommendation"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rec in records:
        scores = rec["scores"]
        name = str(rec["product_name"])[:32]
        lines.append(
            f"  {rec['rank']:>4}  {name:<32}  {rec['grade']:>5}  "
            f"{scores['overall']:>7}  {scores['effectiveness']:>4}  "
            f"{scores['safety']:>4}  {scores['cost']:>4}  {scores['evidence']:>4}  "
            f"{rec['recommendation']}"
        )
        if show_reasons:
            for reason in rec["reasons"]:
                lines.append(f"          + {reason}")
            for warning in rec["warnings"]:
                lines.append(f"          ! {warning}")

    return "\n".join(lines)


# ── Detailed safety ───────────────────────────────────────────────────────────


def format_safety_report(
    reports:      Sequence[tuple[Product, SafetyScoreResult]],
    upper_limits: Mapping[str, Sequence[UpperLimitCheck]] | None = None,
) -> str:
    """Format detailed per-product safety reports.

    One block per product: total score, grade, breakdown, itemized details,
    upper intake warnings (``upper_limits`` is keyed by product id) and
    recommendations.
    """
    upper_limits = upper_limits or {}
    lines: list[str] = []
    lines.append("")
    lines.append("=== Product Safety Report ===")

    if not reports:
        lines.append("")
        lines.append("  (no products in catalog)")
        return "\n".join(lines)

    for product, result in reports:
        grade = safety_grade(result.total_score)
        b = result.breakdown
        lines.append("")
        lines.append(f"  [{product.id}] {product.name}")
        lines.append(
            f"    Score: {result.total_score:>3}  Grade: {grade.grade} ({grade.label})  "
            f"Confidence: {result.confidence:.0%}"
        )
        lines.append(
            f"    Contraindications -{b.contraindication_deduction}  "
            f"Warnings -{b.warning_deduction}  "
            f"Side effects -{b.side_effect_deduction}  "
            f"Interactions -{b.interaction_deduction}  "
            f"Quality +{b.quality_bonus}  "
            f"Manufacturing {b.manufacturing_bonus:+d}"
        )
        for detail in result.details:
            lines.append(f"      - {detail}")
        for check in upper_limits.get(product.id, ()):
            lines.append(f"      ! {check.warning}")
        for rec in result.recommendations:
            lines.append(f"      > {rec}")

    return "\n".join(lines)


# ── Cost comparison ───────────────────────────────────────────────────────────


def format_cost_comparison(
    entries:     Sequence[CostComparisonEntry],
    products:    Sequence[Product],
    baseline_mg: float,
) -> str:
    """Format a normalized-cost comparison, cheapest first.

    Args:
        entries:     Output of ``compare_cost_effectiveness()``.
        products:    The same products, in the order passed to the comparison.
        baseline_mg: Reference quantity used for normalization (header).
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Cost Comparison ===")
    lines.append(f"  Normalized to: {baseline_mg:g}mg")

    if not entries:
        lines.append("")
        lines.append("  (no products in catalog)")
        return "\n".join(lines)

    lines.append("")
    header = (
        f"  {'Rank':>4}  {'Product':<32}  {'Per day':>9}  {'Per mg':>10}  "
        f"{'Normalized':>10}  {'Score':>5}  Label"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for entry in entries:
        product = products[entry.product_index]
        n = entry.normalized
        calc = n.calculation
        name = product.name[:32]
        multi = " *" if calc.is_multi_ingredient else ""
        lines.append(
            f"  {entry.rank:>4}  {name:<32}  {calc.cost_per_day:>9.2f}  "
            f"{calc.cost_per_mg:>10.5f}  {n.normalized_cost:>10.2f}  "
            f"{n.cost_efficiency_score:>5}  {cost_efficiency_label(n.normalized_cost)}{multi}"
        )

    if any(e.normalized.calculation.is_multi_ingredient for e in entries):
        lines.append("")
        lines.append("  * multi-ingredient: cost per mg counts the heaviest ingredients only")

    return "\n".join(lines)
