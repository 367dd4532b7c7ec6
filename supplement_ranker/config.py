"""
Application configuration management.

Load order (each layer overrides the previous):
  1. Built-in defaults           : the policy tables below
  2. ``config/default.toml``     : committed static defaults
  3. ``config/local.toml``       : optional local overrides (gitignored)
  4. ``.env``                    : local env overrides (gitignored)
  5. Environment variables       : ``SUPPLEMENT_RANKER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The scoring policy (weight table, cost tariff, multi-ingredient threshold,
severity map, grade thresholds) lives in ``ScoringConfig``.  Every scoring
function takes the relevant sub-config as an argument and falls back to the
built-in default instance when none is passed. There is no module-level
mutable policy state anywhere in the engine.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from supplement_ranker.taxonomy.contraindication_taxonomy import (
    DEFAULT_SEVERITY_MAP,
    AlertSeverity,
    ContraindicationTag,
    RiskLevel,
)
from supplement_ranker.taxonomy.goal_taxonomy import (
    CostEfficiencyRating,
    EvidenceLevel,
    LetterGrade,
    Priority,
)
from supplement_ranker.taxonomy.lifestyle_taxonomy import (
    DEFAULT_BOOST_GROUPS,
    AgeGroup,
    AlcoholConsumption,
    ExerciseFrequency,
    MainConcern,
    SleepQuality,
    StressLevel,
    overlapping_slugs,
)

logger = logging.getLogger(__name__)

_WEIGHT_TOLERANCE = 1e-9


# ── Shared building blocks ────────────────────────────────────────────────────


class GradeThresholds(BaseModel):
    """Inclusive lower bounds for the S/A/B/C letter grades (anything lower is D)."""

    model_config = ConfigDict(frozen=True)

    s: float
    a: float
    b: float
    c: float

    @model_validator(mode="after")
    def validate_descending(self) -> "GradeThresholds":
        if not self.s > self.a > self.b > self.c:
            raise ValueError(
                f"Grade thresholds must be strictly descending S > A > B > C, "
                f"got S={self.s}, A={self.a}, B={self.b}, C={self.c}."
            )
        return self

    def grade(self, score: float) -> LetterGrade:
        if score >= self.s:
            return LetterGrade.S
        if score >= self.a:
            return LetterGrade.A
        if score >= self.b:
            return LetterGrade.B
        if score >= self.c:
            return LetterGrade.C
        return LetterGrade.D


# ── Scoring sub-configs ───────────────────────────────────────────────────────


class CostModelConfig(BaseModel):
    """Unit normalization and cost-per-mg policy.

    Products with more than ``multi_ingredient_threshold`` ingredients are
    treated as multi-ingredient (e.g. multivitamins): only the
    ``major_ingredient_count`` heaviest ingredients count towards cost-per-mg.
    """

    model_config = ConfigDict(frozen=True)

    multi_ingredient_threshold: int = 3
    major_ingredient_count: int = 5
    baseline_mg: float = 1000.0
    efficiency_best_cost: float = 5.0    # normalized cost at/below this → 100
    efficiency_worst_cost: float = 50.0  # normalized cost at/above this → 0

    @field_validator("multi_ingredient_threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"multi_ingredient_threshold must be >= 0, got {v}.")
        return v

    @field_validator("major_ingredient_count")
    @classmethod
    def validate_major_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"major_ingredient_count must be >= 1, got {v}.")
        return v

    @field_validator("baseline_mg")
    @classmethod
    def validate_baseline(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"baseline_mg must be positive, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_anchors(self) -> "CostModelConfig":
        if self.efficiency_best_cost >= self.efficiency_worst_cost:
            raise ValueError(
                "efficiency_best_cost must be lower than efficiency_worst_cost."
            )
        return self


class TariffBand(BaseModel):
    """One step of the absolute daily-cost tariff.

    ``max_cost_per_day`` is an inclusive upper bound; ``None`` marks the
    open-ended last band.
    """

    model_config = ConfigDict(frozen=True)

    max_cost_per_day: Optional[float] = None
    score: int
    rating: CostEfficiencyRating

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"Tariff score must be in [0, 100], got {v}.")
        return v


_E = CostEfficiencyRating.EXCELLENT
_G = CostEfficiencyRating.GOOD
_F = CostEfficiencyRating.FAIR
_P = CostEfficiencyRating.POOR

DEFAULT_ABSOLUTE_TARIFF: tuple[TariffBand, ...] = (
    TariffBand(max_cost_per_day=20,  score=100, rating=_E),
    TariffBand(max_cost_per_day=40,  score=95,  rating=_E),
    TariffBand(max_cost_per_day=60,  score=88,  rating=_E),
    TariffBand(max_cost_per_day=80,  score=80,  rating=_G),
    TariffBand(max_cost_per_day=100, score=72,  rating=_G),
    TariffBand(max_cost_per_day=120, score=64,  rating=_F),
    TariffBand(max_cost_per_day=150, score=55,  rating=_F),
    TariffBand(max_cost_per_day=180, score=46,  rating=_F),
    TariffBand(max_cost_per_day=200, score=38,  rating=_P),
    TariffBand(max_cost_per_day=250, score=28,  rating=_P),
    TariffBand(max_cost_per_day=None, score=15, rating=_P),
)


class CostScoringConfig(BaseModel):
    """Daily-cost → score policy for both the absolute and budget regimes."""

    model_config = ConfigDict(frozen=True)

    absolute_tariff: tuple[TariffBand, ...] = DEFAULT_ABSOLUTE_TARIFF

    # Budget-relative regime
    within_budget_ceiling: float = 100.0  # score at zero cost
    within_budget_span: float = 50.0      # points lost between 0 and exactly-on-budget
    over_budget_base: float = 50.0
    over_budget_slope: float = 40.0       # points lost per 100% over budget
    over_budget_floor: int = 5
    excellent_budget_ratio: float = 0.6
    good_budget_ratio: float = 0.8

    @model_validator(mode="after")
    def validate_tariff(self) -> "CostScoringConfig":
        bands = self.absolute_tariff
        if not bands:
            raise ValueError("absolute_tariff must contain at least one band.")
        if bands[-1].max_cost_per_day is not None:
            raise ValueError("The last absolute_tariff band must be open-ended.")
        previous_bound: float | None = None
        previous_score: int | None = None
        for band in bands:
            if band.max_cost_per_day is None and band is not bands[-1]:
                raise ValueError("Only the last absolute_tariff band may be open-ended.")
            if band.max_cost_per_day is not None:
                if previous_bound is not None and band.max_cost_per_day <= previous_bound:
                    raise ValueError("absolute_tariff bounds must be strictly ascending.")
                previous_bound = band.max_cost_per_day
            if previous_score is not None and band.score > previous_score:
                raise ValueError("absolute_tariff scores must be non-increasing.")
            previous_score = band.score
        if not 0 < self.excellent_budget_ratio <= self.good_budget_ratio:
            raise ValueError(
                "Budget ratios must satisfy 0 < excellent_budget_ratio <= good_budget_ratio."
            )
        return self


DEFAULT_RISK_BASE_SCORES: dict[RiskLevel, int] = {
    RiskLevel.SAFE:        100,
    RiskLevel.LOW_RISK:    75,
    RiskLevel.MEDIUM_RISK: 50,
    RiskLevel.HIGH_RISK:   0,
}


class SafetyConfig(BaseModel):
    """Contraindication severity map and the ranking-path safety score policy."""

    model_config = ConfigDict(frozen=True)

    severity_map: dict[ContraindicationTag, AlertSeverity] = dict(DEFAULT_SEVERITY_MAP)
    risk_base_scores: dict[RiskLevel, int] = dict(DEFAULT_RISK_BASE_SCORES)
    critical_deduction: int = 25
    warning_deduction: int = 10
    medium_risk_warning_count: int = 2

    @field_validator("severity_map")
    @classmethod
    def validate_total_severity_map(
        cls, v: dict[ContraindicationTag, AlertSeverity]
    ) -> dict[ContraindicationTag, AlertSeverity]:
        missing = set(ContraindicationTag) - set(v)
        if missing:
            raise ValueError(
                f"severity_map must cover every contraindication tag; "
                f"missing {sorted(str(t) for t in missing)}."
            )
        return v

    @field_validator("risk_base_scores")
    @classmethod
    def validate_risk_base_scores(cls, v: dict[RiskLevel, int]) -> dict[RiskLevel, int]:
        missing = set(RiskLevel) - set(v)
        if missing:
            raise ValueError(
                f"risk_base_scores must cover every risk level; "
                f"missing {sorted(str(r) for r in missing)}."
            )
        return v


DEFAULT_EVIDENCE_SCORES: dict[EvidenceLevel, int] = {
    EvidenceLevel.S: 100,
    EvidenceLevel.A: 85,
    EvidenceLevel.B: 70,
    EvidenceLevel.C: 50,
    EvidenceLevel.D: 30,
}


class EvidenceConfig(BaseModel):
    """Evidence level → numeric score map and the evidence letter grades.

    Unknown evidence maps to ``default_score`` (50), never 0: unknown is not
    the same as disproven.
    """

    model_config = ConfigDict(frozen=True)

    level_scores: dict[EvidenceLevel, int] = dict(DEFAULT_EVIDENCE_SCORES)
    default_score: int = 50
    high_quality_threshold: int = 85
    grade_thresholds: GradeThresholds = GradeThresholds(s=90, a=75, b=60, c=40)

    @field_validator("level_scores")
    @classmethod
    def validate_level_scores(cls, v: dict[EvidenceLevel, int]) -> dict[EvidenceLevel, int]:
        missing = set(EvidenceLevel) - set(v)
        if missing:
            raise ValueError(
                f"level_scores must cover every evidence level; missing {sorted(missing)}."
            )
        return v


class EffectivenessConfig(BaseModel):
    """Goal-match effectiveness policy."""

    model_config = ConfigDict(frozen=True)

    neutral_score: int = 50          # returned when the user stated no goals
    goal_match_weight: float = 70.0  # points for a 100% goal match
    evidence_weight: float = 0.3     # share of the mean evidence score


class PriorityWeights(BaseModel):
    """One row of the aggregation weight table."""

    model_config = ConfigDict(frozen=True)

    effectiveness: float
    safety: float
    cost: float
    evidence: float

    @model_validator(mode="after")
    def validate_weights(self) -> "PriorityWeights":
        values = (self.effectiveness, self.safety, self.cost, self.evidence)
        if any(w < 0 for w in values):
            raise ValueError(f"Weights must be non-negative, got {values}.")
        total = sum(values)
        if abs(total - 1.0) > _WEIGHT_TOLERANCE:
            raise ValueError(f"Weights must sum to 1.0, got {total}.")
        return self


DEFAULT_WEIGHT_TABLE: dict[Priority, PriorityWeights] = {
    Priority.EFFECTIVENESS: PriorityWeights(effectiveness=0.40, safety=0.25, cost=0.25, evidence=0.10),
    Priority.SAFETY:        PriorityWeights(effectiveness=0.10, safety=0.50, cost=0.30, evidence=0.10),
    Priority.COST:          PriorityWeights(effectiveness=0.10, safety=0.25, cost=0.60, evidence=0.05),
    Priority.EVIDENCE:      PriorityWeights(effectiveness=0.15, safety=0.25, cost=0.30, evidence=0.30),
    Priority.BALANCED:      PriorityWeights(effectiveness=0.10, safety=0.30, cost=0.50, evidence=0.10),
}


class WeightsConfig(BaseModel):
    """Priority → weight-row lookup used by the aggregator."""

    model_config = ConfigDict(frozen=True)

    table: dict[Priority, PriorityWeights] = dict(DEFAULT_WEIGHT_TABLE)

    @field_validator("table")
    @classmethod
    def validate_all_priorities(
        cls, v: dict[Priority, PriorityWeights]
    ) -> dict[Priority, PriorityWeights]:
        missing = set(Priority) - set(v)
        if missing:
            raise ValueError(
                f"Weight table must define every priority; missing {sorted(missing)}."
            )
        return v

    def for_priority(self, priority: Priority) -> PriorityWeights:
        return self.table[priority]


class GradingConfig(BaseModel):
    """Overall letter grades and recommendation-level thresholds.

    ``safety_gate``: any product whose safety score is strictly below this
    value is ``not-recommended`` regardless of its overall score.
    """

    model_config = ConfigDict(frozen=True)

    overall_grade_thresholds: GradeThresholds = GradeThresholds(s=90, a=80, b=70, c=60)
    highly_recommended_min: int = 80
    recommended_min: int = 60
    acceptable_min: int = 40
    safety_gate: int = 30

    @model_validator(mode="after")
    def validate_levels(self) -> "GradingConfig":
        if not self.highly_recommended_min > self.recommended_min > self.acceptable_min:
            raise ValueError(
                "Recommendation thresholds must be strictly descending: "
                "highly_recommended_min > recommended_min > acceptable_min."
            )
        return self


def _b_vitamins(points: int) -> dict[str, int]:
    """The same boost for every B-vitamin group."""
    return {"vitamin-b": points, "vitamin-b6": points, "vitamin-b12": points}


DEFAULT_CONCERN_BOOSTS: dict[MainConcern, dict[str, int]] = {
    MainConcern.FATIGUE: {
        **_b_vitamins(25), "magnesium": 20, "iron": 20, "coenzyme-q10": 15, "vitamin-c": 10,
    },
    MainConcern.SLEEP: {"magnesium": 25, "melatonin": 25, "glycine": 20, "vitamin-b6": 15},
    MainConcern.IMMUNITY: {
        "vitamin-c": 25, "vitamin-d": 25, "zinc": 20, "vitamin-a": 15, "probiotics": 15,
    },
    MainConcern.APPEARANCE: {
        "vitamin-c": 25, "vitamin-e": 20, "vitamin-a": 20, "collagen": 15, "biotin": 15,
    },
    MainConcern.WEIGHT: {
        "dietary-fiber": 25, "protein": 20, "green-tea-extract": 15, "chromium": 10,
    },
    MainConcern.CONCENTRATION: {
        "dha": 25, **_b_vitamins(20), "vitamin-e": 15, "magnesium": 15,
    },
}

DEFAULT_AGE_BOOSTS: dict[AgeGroup, dict[str, int]] = {
    AgeGroup.TWENTIES:   {"protein": 10, **_b_vitamins(5)},
    AgeGroup.THIRTIES:   {"vitamin-c": 10, "vitamin-e": 10, "coenzyme-q10": 5},
    AgeGroup.FORTIES:    {"vitamin-d": 15, "calcium": 10, "coenzyme-q10": 10, "omega-3": 10},
    AgeGroup.FIFTIES: {
        "vitamin-d": 20, "calcium": 15, "coenzyme-q10": 15, "omega-3": 15, "glucosamine": 10,
    },
    AgeGroup.SIXTY_PLUS: {
        "vitamin-d": 25, "calcium": 20, "coenzyme-q10": 20, "omega-3": 20,
        "glucosamine": 15, "vitamin-b12": 15,
    },
}

DEFAULT_EXERCISE_BOOSTS: dict[ExerciseFrequency, dict[str, int]] = {
    ExerciseFrequency.DAILY:        {"protein": 25, "bcaa": 20, "vitamin-d": 10, "magnesium": 10},
    ExerciseFrequency.WEEKLY:       {"protein": 15, "bcaa": 10, "vitamin-d": 5},
    ExerciseFrequency.OCCASIONALLY: _b_vitamins(5),
    ExerciseFrequency.RARELY:       {},
}

DEFAULT_STRESS_BOOSTS: dict[StressLevel, dict[str, int]] = {
    StressLevel.HIGH: {
        "magnesium": 25, **_b_vitamins(20), "vitamin-c": 15, "ashwagandha": 15,
    },
    StressLevel.MODERATE: {"magnesium": 15, **_b_vitamins(10)},
    StressLevel.LOW:      {},
}

DEFAULT_SLEEP_BOOSTS: dict[SleepQuality, dict[str, int]] = {
    SleepQuality.POOR: {"magnesium": 25, "melatonin": 25, "glycine": 20, "vitamin-b6": 15},
    SleepQuality.FAIR: {"magnesium": 15, "melatonin": 10},
    SleepQuality.GOOD: {},
}

DEFAULT_ALCOHOL_BOOSTS: dict[AlcoholConsumption, dict[str, int]] = {
    AlcoholConsumption.FREQUENT:   {**_b_vitamins(25), "magnesium": 20, "zinc": 15, "vitamin-c": 10},
    AlcoholConsumption.MODERATE:   {**_b_vitamins(15), "magnesium": 10},
    AlcoholConsumption.OCCASIONAL: _b_vitamins(5),
    AlcoholConsumption.NONE:       {},
}


class DetailedBoostConfig(BaseModel):
    """Detailed-assessment boost policy.

    ``groups`` maps a boost group to ingredient slugs and must be disjoint.
    Every table maps an answer to ``{group: points}``; an ingredient whose
    slug is in a listed group earns those points once per table.

    The summed boost is capped at ``max_total_boost`` and the boosted
    overall score at 100.
    """

    model_config = ConfigDict(frozen=True)

    groups: dict[str, tuple[str, ...]] = dict(DEFAULT_BOOST_GROUPS)
    secondary_goal_points: int = 5
    max_total_boost: int = 50
    reason_min_boost: int = 10   # boost reason only when the boost is above this

    concern: dict[MainConcern, dict[str, int]] = dict(DEFAULT_CONCERN_BOOSTS)
    age_group: dict[AgeGroup, dict[str, int]] = dict(DEFAULT_AGE_BOOSTS)
    exercise: dict[ExerciseFrequency, dict[str, int]] = dict(DEFAULT_EXERCISE_BOOSTS)
    stress: dict[StressLevel, dict[str, int]] = dict(DEFAULT_STRESS_BOOSTS)
    sleep: dict[SleepQuality, dict[str, int]] = dict(DEFAULT_SLEEP_BOOSTS)
    alcohol: dict[AlcoholConsumption, dict[str, int]] = dict(DEFAULT_ALCOHOL_BOOSTS)

    @field_validator("groups")
    @classmethod
    def validate_disjoint_groups(
        cls, v: dict[str, tuple[str, ...]]
    ) -> dict[str, tuple[str, ...]]:
        overlaps = overlapping_slugs(v)
        if overlaps:
            raise ValueError(f"Boost groups must be disjoint; shared slugs: {overlaps}.")
        return v

    @model_validator(mode="after")
    def validate_tables(self) -> "DetailedBoostConfig":
        if self.secondary_goal_points < 0 or self.max_total_boost < 0:
            raise ValueError("Boost points and the boost cap must be non-negative.")
        for name in ("concern", "age_group", "exercise", "stress", "sleep", "alcohol"):
            for answer, row in getattr(self, name).items():
                unknown = sorted(set(row) - set(self.groups))
                if unknown:
                    raise ValueError(
                        f"{name}.{answer} references unknown boost groups {unknown}."
                    )
                negative = sorted(g for g, pts in row.items() if pts < 0)
                if negative:
                    raise ValueError(f"{name}.{answer} has negative points for {negative}.")
        return self


class ScoringConfig(BaseModel):
    """Every tunable policy constant of the evaluation and ranking engine."""

    model_config = ConfigDict(frozen=True)

    cost_model: CostModelConfig = CostModelConfig()
    cost_scoring: CostScoringConfig = CostScoringConfig()
    safety: SafetyConfig = SafetyConfig()
    evidence: EvidenceConfig = EvidenceConfig()
    effectiveness: EffectivenessConfig = EffectivenessConfig()
    weights: WeightsConfig = WeightsConfig()
    grading: GradingConfig = GradingConfig()
    detailed: DetailedBoostConfig = DetailedBoostConfig()


# ── Harness sub-configs ───────────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class OutputConfig(BaseModel):
    """Where the CLI writes report files and how many results it shows."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"
    default_top_n: int = 5
    max_workers: int = 1

    @field_validator("default_top_n", "max_workers")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Value must be >= 1, got {v}.")
        return v


class AppConfig(BaseModel):
    """Complete application configuration, the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    scoring: ScoringConfig = ScoringConfig()
    logging: LoggingConfig = LoggingConfig()
    output: OutputConfig = OutputConfig()
    debug: bool = False


DEFAULT_SCORING_CONFIG = ScoringConfig()


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file is
            absent (e.g. an installed wheel) the built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml_with_local(default_path)
        else:
            logger.debug("No %s found; using built-in defaults.", default_path)
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml_with_local(config_path)

    raw = _apply_env_overrides(raw)
    return _build_app_config(raw)


def _read_toml_with_local(config_path: Path) -> dict[str, Any]:
    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)
    return raw


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply SUPPLEMENT_RANKER_* env vars to the raw config dict.

    Supported overrides:
      SUPPLEMENT_RANKER_LOG_LEVEL    → raw["logging"]["level"]
      SUPPLEMENT_RANKER_OUTPUT_DIR   → raw["output"]["output_dir"]
      SUPPLEMENT_RANKER_MAX_WORKERS  → raw["output"]["max_workers"]
      SUPPLEMENT_RANKER_DEBUG        → raw["debug"]
    """
    if log_level := os.environ.get("SUPPLEMENT_RANKER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get("SUPPLEMENT_RANKER_OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if max_workers := os.environ.get("SUPPLEMENT_RANKER_MAX_WORKERS"):
        raw.setdefault("output", {})["max_workers"] = int(max_workers)

    if debug := os.environ.get("SUPPLEMENT_RANKER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure.

    The scoring section is merged over the built-in policy first, so a layer
    may override a single severity-map tag or weight row.
    """
    project = raw.pop("project", {})

    return AppConfig(
        scoring=ScoringConfig.model_validate(
            _deep_merge(DEFAULT_SCORING_CONFIG.model_dump(mode="json"), raw.get("scoring", {}))
        ),
        logging=LoggingConfig(**raw.get("logging", {})),
        output=OutputConfig(**raw.get("output", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
