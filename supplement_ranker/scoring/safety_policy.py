"""
Safety policies: two named strategies behind one interface.

  - ``RankingSafetyPolicy`` : coarse, user-specific score used as the
    aggregator's safety input (matcher + bucket/deduction score).
  - ``DetailedSafetyPolicy``: product-level, itemized report for standalone
    safety display (QA signals, interactions, origin, age) and upper
    intake limit checks.

The ranking path only uses ``RankingSafetyPolicy``.

Usage::

    policy = DetailedSafetyPolicy(current_year=2026)
    report = policy.report(product)
    score  = policy.score(product)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from supplement_ranker.config import DEFAULT_SCORING_CONFIG, SafetyConfig
from supplement_ranker.models.product import Product
from supplement_ranker.models.profile import UserProfile
from supplement_ranker.scoring.intake_limits import (
    UpperLimitCheck,
    check_product_upper_limits,
)
from supplement_ranker.scoring.safety_checker import (
    SafetyCheckResult,
    check_product_safety,
    score_safety_check,
)
from supplement_ranker.scoring.safety_scorer import (
    SafetyScoreInput,
    SafetyScoreResult,
    calculate_safety_score,
    check_ingredient_interactions,
)


class SafetyPolicy(ABC):
    """Abstract base for safety scoring strategies.

    Subclasses must:
      1. Set ``policy_name``.
      2. Implement ``score(product, profile) -> int`` returning 0–100.
    """

    policy_name: str

    def __init__(self, config: SafetyConfig | None = None) -> None:
        self.config = config or DEFAULT_SCORING_CONFIG.safety

    @abstractmethod
    def score(self, product: Product, profile: UserProfile | None = None) -> int:
        """Return a 0–100 safety score for ``product``."""


class RankingSafetyPolicy(SafetyPolicy):
    """User-specific contraindication score used for ranking."""

    policy_name = "ranking"

    def check(self, product: Product, profile: UserProfile | None = None) -> SafetyCheckResult:
        conditions = profile.conditions if profile is not None else ()
        return check_product_safety(product.ingredients, conditions, self.config)

    def score(self, product: Product, profile: UserProfile | None = None) -> int:
        return score_safety_check(self.check(product, profile), self.config)


class DetailedSafetyPolicy(SafetyPolicy):
    """Product-level detailed safety report.

    Contraindications are counted over the distinct tags of all ingredients,
    independent of any user profile: this report describes the product itself.
    """

    policy_name = "detailed"

    def __init__(
        self,
        config:       SafetyConfig | None = None,
        current_year: int | None = None,
    ) -> None:
        super().__init__(config)
        self.current_year = current_year

    def build_input(self, product: Product) -> SafetyScoreInput:
        tags = list(dict.fromkeys(
            tag for ing in product.ingredients for tag in ing.contraindications
        ))
        quality = product.quality
        return SafetyScoreInput(
            contraindication_tags=tags,
            warnings=list(quality.warnings),
            side_effects=list(quality.side_effects),
            third_party_tested=quality.third_party_tested,
            gmp_certified=quality.gmp_certified,
            organic_certified=quality.organic_certified,
            interaction_risks=check_ingredient_interactions(product.ingredients),
            manufacturing_country=quality.manufacturing_country,
            manufacturing_year=quality.manufacturing_year,
        )

    def report(self, product: Product) -> SafetyScoreResult:
        return calculate_safety_score(
            self.build_input(product),
            current_year=self.current_year,
            config=self.config,
        )

    def upper_limit_checks(self, product: Product) -> list[UpperLimitCheck]:
        """Ingredients whose daily amount exceeds their upper intake limit."""
        return check_product_upper_limits(product)

    def score(self, product: Product, profile: UserProfile | None = None) -> int:
        return self.report(product).total_score
