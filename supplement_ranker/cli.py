"""
Supplement Ranker CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the catalog (and profile).
  4. Run the pure scoring functions.
  5. Report result to stdout.

Install and run::

    pip install -e .
    supplement-ranker --help
    supplement-ranker validate-config
    supplement-ranker rank --catalog data/catalog.json --profile data/profile.json
    supplement-ranker safety-report --catalog data/catalog.json
    supplement-ranker compare-cost --catalog data/catalog.json --baseline-mg 500
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="supplement-ranker",
    help="Supplement Ranker: rank supplement products for one user profile.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from supplement_ranker.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from supplement_ranker.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_catalog_or_exit(catalog_path: str):
    """Load the product catalog, exiting with code 1 on any input error."""
    from supplement_ranker.catalog.loader import load_catalog

    try:
        return load_catalog(Path(catalog_path))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _load_profile_or_exit(profile_path: Optional[str]):
    """Load the user profile; no path means a neutral default profile."""
    from supplement_ranker.catalog.loader import load_profile
    from supplement_ranker.models.profile import UserProfile

    if profile_path is None:
        return UserProfile()
    try:
        return load_profile(Path(profile_path))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    scoring = config.scoring

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Multi-ingredient threshold: {scoring.cost_model.multi_ingredient_threshold}")
    typer.echo(f"  Major ingredient count:     {scoring.cost_model.major_ingredient_count}")
    typer.echo(f"  Baseline mg:                {scoring.cost_model.baseline_mg:g}")
    typer.echo(f"  Cost tariff bands:          {len(scoring.cost_scoring.absolute_tariff)}")
    typer.echo(f"  Safety gate:                {scoring.grading.safety_gate}")
    typer.echo(f"  Detailed boost cap:         {scoring.detailed.max_total_boost}")
    typer.echo(f"  Priorities:                 {', '.join(str(p) for p in scoring.weights.table)}")
    typer.echo(f"  Output dir:                 {config.output.output_dir}")
    typer.echo(f"  Log level:                  {config.logging.level}")
    typer.echo(f"  Debug mode:                 {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("rank")
def rank(
    catalog_path: str = typer.Option(
        ...,
        "--catalog",
        help="Path to the product catalog JSON file.",
    ),
    profile_path: Optional[str] = typer.Option(
        None,
        "--profile",
        help="Path to the user profile JSON file (default: neutral profile).",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        min=1,
        help="How many ranked products to show (default: output.default_top_n).",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        help="Threads for per-product evaluation (default: output.max_workers).",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        help="Output format: table or json.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Also write the full ranking as JSON + CSV into this directory.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Rank every catalog product for one user profile.

    \b
    Ordering: overall score, then safety, then evidence, then catalog order.
    Products with a safety score below the safety gate are always
    'not-recommended', whatever their overall score.  A profile with
    detailed-assessment answers boosts overall scores before ranking.
    """
    from supplement_ranker.models.profile import DetailedProfile
    from supplement_ranker.recommendations.detailed import recommend_products_detailed
    from supplement_ranker.recommendations.ranker import recommend_products
    from supplement_ranker.recommendations.reporter import (
        recommendation_to_dict,
        write_recommendation_csv,
        write_recommendation_json,
    )
    from supplement_ranker.reporting.formatters import format_ranking_table

    if output_format not in ("table", "json"):
        typer.echo(
            f"[ERROR] Unsupported format '{output_format}'. Use table or json.", err=True
        )
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    products = _load_catalog_or_exit(catalog_path)
    profile = _load_profile_or_exit(profile_path)

    rank_fn = (
        recommend_products_detailed if isinstance(profile, DetailedProfile) else recommend_products
    )
    results = rank_fn(
        products,
        profile,
        config=config.scoring,
        max_workers=workers or config.output.max_workers,
    )
    limit = top or config.output.default_top_n
    records = [recommendation_to_dict(r) for r in results[:limit]]

    if output_format == "json":
        typer.echo(json.dumps(records, indent=2, ensure_ascii=False))
    else:
        typer.echo(format_ranking_table(records, str(profile.priority), total=len(results)))

    if output_dir is not None:
        target = Path(output_dir)
        json_path = write_recommendation_json(results, target)
        csv_path = write_recommendation_csv(results, target)
        typer.echo(f"  JSON: {json_path}", err=True)
        typer.echo(f"  CSV:  {csv_path}", err=True)


@app.command("safety-report")
def safety_report(
    catalog_path: str = typer.Option(
        ...,
        "--catalog",
        help="Path to the product catalog JSON file.",
    ),
    year: Optional[int] = typer.Option(
        None,
        "--year",
        help="Reference year for product age (default: current year).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the detailed, itemized safety report for every catalog product.

    This report describes each product on its own and does not take a user
    profile; it never affects the ranking.
    """
    from supplement_ranker.reporting.formatters import format_safety_report
    from supplement_ranker.scoring.safety_policy import DetailedSafetyPolicy

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    products = _load_catalog_or_exit(catalog_path)
    policy = DetailedSafetyPolicy(config.scoring.safety, current_year=year)

    reports = [(product, policy.report(product)) for product in products]
    upper_limits = {product.id: policy.upper_limit_checks(product) for product in products}
    typer.echo(format_safety_report(reports, upper_limits))


@app.command("compare-cost")
def compare_cost(
    catalog_path: str = typer.Option(
        ...,
        "--catalog",
        help="Path to the product catalog JSON file.",
    ),
    baseline_mg: Optional[float] = typer.Option(
        None,
        "--baseline-mg",
        help="Reference quantity in mg (default: scoring.cost_model.baseline_mg).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Rank catalog products by normalized cost (cost of baseline mg), cheapest first."""
    from supplement_ranker.reporting.formatters import format_cost_comparison
    from supplement_ranker.scoring.cost_model import compare_cost_effectiveness

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if baseline_mg is not None and baseline_mg <= 0:
        typer.echo("[ERROR] --baseline-mg must be positive.", err=True)
        raise typer.Exit(code=1)

    products = _load_catalog_or_exit(catalog_path)
    cost_cfg = config.scoring.cost_model
    baseline = baseline_mg if baseline_mg is not None else cost_cfg.baseline_mg

    entries = compare_cost_effectiveness(products, baseline, cost_cfg)
    typer.echo(format_cost_comparison(entries, products, baseline))


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
