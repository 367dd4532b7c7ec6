"""
Ingredient and product models.

``Ingredient`` is a value object owned by a ``Product``; it carries the tags
the engine matches against a user profile (related goals, contraindications)
and its evidence level.  Tags must already be resolved by the catalog
collaborator; the engine never looks them up itself.

``Product`` holds package-level pricing and serving data.  ``days_supply`` is
always derived from the serving counts, never stored, so it cannot go stale.

Both models are frozen and validate at construction: negative prices or
amounts, non-positive serving counts, NaN or infinite numbers and unknown
tag values raise
``pydantic.ValidationError`` here so that scoring functions can assume valid
input.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from supplement_ranker.taxonomy.contraindication_taxonomy import ContraindicationTag
from supplement_ranker.taxonomy.goal_taxonomy import (
    EvidenceLevel,
    HealthGoal,
    normalize_evidence_level,
)


class Ingredient(BaseModel):
    """One active ingredient of a product, with its per-serving amount.

    Attributes:
        name: Display name, e.g. ``"Vitamin C"``.
        slug: Canonical lowercase identifier, e.g. ``"vitamin-c"``.
        category: Optional free-form category (``"vitamin"``, ``"mineral"``).
        evidence_level: S–D grade, or ``None`` when unknown.  Legacy labels
            ``高`` / ``中`` / ``低`` are accepted and mapped to A / B / D.
        related_goals: Health goals this ingredient is claimed to support.
        contraindications: Conditions this ingredient is inadvisable for.
        amount_mg_per_serving: Mass per serving in milligrams (>= 0).
        upper_limit_mg: Tolerable upper daily intake in milligrams, when known.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str
    slug: str
    category: Optional[str] = None
    evidence_level: Optional[EvidenceLevel] = None
    related_goals: tuple[HealthGoal, ...] = ()
    contraindications: tuple[ContraindicationTag, ...] = ()
    amount_mg_per_serving: float = 0.0
    upper_limit_mg: Optional[float] = None

    @field_validator("evidence_level", mode="before")
    @classmethod
    def normalize_legacy_evidence(cls, v: object) -> object:
        if v == "":
            return None
        return normalize_evidence_level(v)

    @field_validator("related_goals", "contraindications", mode="before")
    @classmethod
    def none_to_empty(cls, v: object) -> object:
        return () if v is None else v

    @field_validator("slug")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        if not v or " " in v or v != v.lower():
            raise ValueError(
                f"Ingredient slug '{v}' must be lowercase, non-empty, and contain no spaces."
            )
        return v

    @field_validator("amount_mg_per_serving")
    @classmethod
    def validate_amount(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"amount_mg_per_serving must be non-negative, got {v}.")
        return v

    @field_validator("upper_limit_mg")
    @classmethod
    def validate_upper_limit(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(f"upper_limit_mg must be positive when given, got {v}.")
        return v


class ProductQuality(BaseModel):
    """Quality-assurance and labelling signals used by the detailed safety report.

    None of these fields affect the ranking; they only feed
    ``DetailedSafetyPolicy`` / ``calculate_safety_score``.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    third_party_tested: bool = False
    gmp_certified: bool = False
    organic_certified: bool = False
    manufacturing_country: Optional[str] = None
    manufacturing_year: Optional[int] = None
    warnings: tuple[str, ...] = ()
    side_effects: tuple[str, ...] = ()


class Product(BaseModel):
    """A purchasable supplement product.

    ``price`` is currency-agnostic and assumed to already be in the user's
    base currency.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        price: Package price (>= 0).
        servings_per_day: Recommended servings per day (> 0).
        servings_per_container: Servings in one package (> 0).
        ingredients: Ordered ingredient list (may be empty).
        brand: Optional brand name.
        slug: Optional URL slug.
        quality: QA signals for the detailed safety report.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    name: str
    price: float
    servings_per_day: float
    servings_per_container: float
    ingredients: tuple[Ingredient, ...] = ()
    brand: Optional[str] = None
    slug: Optional[str] = None
    quality: ProductQuality = ProductQuality()

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Product id must not be empty.")
        return v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"price must be non-negative, got {v}.")
        return v

    @field_validator("servings_per_day", "servings_per_container")
    @classmethod
    def validate_servings(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Serving counts must be positive, got {v}.")
        return v

    @property
    def days_supply(self) -> float:
        """Days one container lasts at the recommended intake."""
        return self.servings_per_container / self.servings_per_day
