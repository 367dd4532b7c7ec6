"""
JSON import for product catalogs and user profiles.

Catalog format: either an object with a ``products`` array or a bare array.
Each entry is one ``Product`` with its ingredients (and their
contraindication / evidence / goal tags) already attached::

    {
      "products": [
        {
          "id": "vitc-1000",
          "name": "Vitamin C 1000",
          "price": 1980,
          "servings_per_day": 2,
          "servings_per_container": 250,
          "ingredients": [
            {"name": "Vitamin C", "slug": "vitamin-c", "evidence_level": "A",
             "related_goals": ["immune-boost"], "contraindications": [],
             "amount_mg_per_serving": 1000}
          ],
          "quality": {"third_party_tested": true, "manufacturing_country": "japan"}
        }
      ]
    }

Profile format: one JSON object matching ``UserProfile``::

    {"goals": ["immune-boost"], "conditions": ["pregnant"],
     "budget_per_day": 100, "priority": "balanced"}

Detailed-assessment answers may be added to the same object::

    {"goals": ["sleep-quality"], "main_concern": "sleep",
     "age_group": "40s", "secondary_goals": ["stress-relief"]}

All entries are validated before any are returned; a failing catalog raises
a single ``ValueError`` listing the first 10 failures.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from supplement_ranker.models.product import Product
from supplement_ranker.models.profile import (
    DETAILED_PROFILE_FIELDS,
    DetailedProfile,
    UserProfile,
)

logger = logging.getLogger(__name__)

_MAX_ERRORS_SHOWN = 10


def _read_json(path: Path, kind: str) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{kind} file is not valid JSON ({path.name}): {exc}") from exc


def parse_catalog(raw: Any, source: str = "<catalog>") -> list[Product]:
    """Validate an already-decoded catalog payload into ``Product`` objects.

    Raises:
        ValueError: If the payload has the wrong shape, any product fails
            validation, or two products share an ``id``.
    """
    if isinstance(raw, dict):
        if "products" not in raw:
            raise ValueError(f"Catalog object must contain a 'products' array: {source}")
        raw = raw["products"]

    if not isinstance(raw, list):
        raise ValueError(f"Catalog must be an array of products: {source}")

    products: list[Product] = []
    errors: list[tuple[int, str]] = []

    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            errors.append((i, "entry is not an object"))
            continue
        try:
            products.append(Product(**entry))
        except ValidationError as exc:
            errors.append((i, str(exc)))

    if errors:
        detail = "\n".join(f"  Product #{idx}: {msg}" for idx, msg in errors[:_MAX_ERRORS_SHOWN])
        more = len(errors) - _MAX_ERRORS_SHOWN
        suffix = f"\n  ... and {more} more" if more > 0 else ""
        raise ValueError(
            f"{len(errors)} product(s) failed validation in {source}:\n{detail}{suffix}"
        )

    seen: set[str] = set()
    duplicates: list[str] = []
    for product in products:
        if product.id in seen:
            duplicates.append(product.id)
        seen.add(product.id)
    if duplicates:
        raise ValueError(f"Duplicate product ids in {source}: {sorted(set(duplicates))}")

    if not products:
        logger.warning("Catalog is empty: %s", source)

    return products


def load_catalog(path: Path) -> list[Product]:
    """Load and validate a JSON product catalog.

    Args:
        path: Path to the catalog JSON file.

    Returns:
        Products in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the JSON is malformed or any product is invalid.
    """
    path = Path(path)
    products = parse_catalog(_read_json(path, "Catalog"), source=path.name)
    logger.info("Loaded %d products from %s", len(products), path.name)
    return products


def load_profile(path: Path) -> UserProfile:
    """Load and validate a JSON user profile.

    A profile carrying any detailed-assessment field (``secondary_goals``,
    ``age_group``, ...) is returned as a ``DetailedProfile``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the JSON is malformed or not an object.
        pydantic.ValidationError: If a field value is invalid.
    """
    path = Path(path)
    raw = _read_json(path, "Profile")
    if not isinstance(raw, dict):
        raise ValueError(f"Profile must be a JSON object: {path.name}")

    model = DetailedProfile if raw.keys() & DETAILED_PROFILE_FIELDS else UserProfile
    profile = model(**raw)
    logger.info(
        "Loaded profile from %s (%d goals, %d conditions, priority=%s)",
        path.name, len(profile.goals), len(profile.conditions), profile.priority,
    )
    return profile
