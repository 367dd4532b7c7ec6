"""
Recommendation report writer: dict, JSON and CSV renderings of a ranked
recommendation list.

The dict shape is the engine's output contract:

    rank, grade, recommendation, product_id, product_name,
    scores.{effectiveness, safety, cost, evidence, overall},
    reasons, warnings, details

File writers are I/O harness only; the engine never calls them.

Output files (written by ``supplement-ranker rank --output-dir``)
-----------------------------------------------------------------
  <output_dir>/recommendations_{run_date}.json
  <output_dir>/recommendations_{run_date}.csv
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from supplement_ranker.recommendations.ranker import RecommendationResult

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"


def recommendation_to_dict(result: RecommendationResult) -> dict[str, Any]:
    """Render one ``RecommendationResult`` as a JSON-ready dict."""
    s = result.scores
    safety = s.safety_details.safety_check_result
    cost = s.cost_details
    calc = cost.cost_calculation

    return {
        "rank":           result.rank,
        "grade":          str(result.grade),
        "recommendation": str(result.recommendation),
        "product_id":     result.product.id,
        "product_name":   result.product.name,
        "scores": {
            "effectiveness": s.effectiveness_score,
            "safety":        s.safety_score,
            "cost":          s.cost_score,
            "evidence":      s.evidence_score,
            "overall":       s.overall_score,
        },
        "reasons":  list(result.reasons),
        "warnings": list(result.warnings),
        "details": {
            "matched_goals":   [str(g) for g in s.effectiveness_details.matched_goals],
            "goal_match_rate": round(s.effectiveness_details.goal_match_rate, 4),
            "risk_level":      str(safety.risk_level),
            "alerts": [
                {
                    "severity":   str(a.severity),
                    "ingredient": a.ingredient,
                    "condition":  str(a.condition),
                    "message":    a.message,
                }
                for a in safety.alerts
            ],
            "cost_per_day":           round(calc.cost_per_day, 4),
            "cost_per_serving":       round(calc.cost_per_serving, 4),
            "days_per_container":     round(calc.days_per_container, 4),
            "cost_per_mg":            round(calc.cost_per_mg, 6),
            "cost_efficiency_rating": str(cost.cost_efficiency_rating),
            "evidence_level":         str(s.evidence_details.overall_evidence_level),
            "has_high_quality_evidence": s.evidence_details.has_high_quality_evidence,
            "detailed_boost":         result.detailed_boost,
        },
    }


def write_recommendation_json(
    results:    Sequence[RecommendationResult],
    output_dir: Path,
    run_date:   date | None = None,
) -> Path:
    """Write ranked recommendations to a structured JSON file.

    Args:
        results:    Output from recommend_products().
        output_dir: Target directory (created if missing).
        run_date:   Date label. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{run_date}.json"

    payload: dict[str, Any] = {
        "schema_version":  SCHEMA_VERSION,
        "generated_at":    run_date.isoformat(),
        "recommendations": [recommendation_to_dict(r) for r in results],
    }

    json_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Recommendation JSON written: %s (%d rows)", json_path, len(results))
    return json_path


def write_recommendation_csv(
    results:    Sequence[RecommendationResult],
    output_dir: Path,
    run_date:   date | None = None,
) -> Path:
    """Write ranked recommendations to a flat CSV file.

    Columns: rank, product_id, product_name, grade, recommendation, the five
    scores, cost_per_day, risk_level, reasons, warnings.  Multi-valued
    columns are joined with ``" | "``.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"recommendations_{run_date}.csv"

    fieldnames = [
        "rank", "product_id", "product_name", "grade", "recommendation",
        "overall", "effectiveness", "safety", "cost", "evidence",
        "cost_per_day", "risk_level", "reasons", "warnings",
    ]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            s = r.scores
            writer.writerow(
                {
                    "rank":           r.rank,
                    "product_id":     r.product.id,
                    "product_name":   r.product.name,
                    "grade":          str(r.grade),
                    "recommendation": str(r.recommendation),
                    "overall":        s.overall_score,
                    "effectiveness":  s.effectiveness_score,
                    "safety":         s.safety_score,
                    "cost":           s.cost_score,
                    "evidence":       s.evidence_score,
                    "cost_per_day":   f"{s.cost_details.cost_per_day:.2f}",
                    "risk_level":     str(s.safety_details.safety_check_result.risk_level),
                    "reasons":        " | ".join(r.reasons),
                    "warnings":       " | ".join(r.warnings),
                }
            )

    logger.info("Recommendation CSV written: %s", csv_path)
    return csv_path
