"""
Shared pytest fixtures for the Supplement Ranker test suite.

Provides:
  - ``make_ingredient`` / ``make_product``: factory fixtures with sensible
    defaults so each test only spells out the fields it cares about.
  - ``vitamin_c_product``: the reference single-ingredient product
    (1980 for 250 servings, 2/day, 1000mg vitamin C per serving).
  - ``catalog_file`` / ``profile_file``: JSON files written to ``tmp_path``
    for loader and CLI tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from supplement_ranker.models.product import Ingredient, Product
from supplement_ranker.models.profile import UserProfile


# ── Model factories ───────────────────────────────────────────────────────────

@pytest.fixture
def make_ingredient() -> Callable[..., Ingredient]:
    def _make(
        name: str = "Vitamin C",
        slug: str | None = None,
        amount_mg_per_serving: float = 1000.0,
        evidence_level: str | None = "A",
        related_goals: tuple[str, ...] = ("immune-boost",),
        contraindications: tuple[str, ...] = (),
        **kwargs: Any,
    ) -> Ingredient:
        return Ingredient(
            name=name,
            slug=slug or name.lower().replace(" ", "-"),
            amount_mg_per_serving=amount_mg_per_serving,
            evidence_level=evidence_level,
            related_goals=related_goals,
            contraindications=contraindications,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_product(make_ingredient) -> Callable[..., Product]:
    def _make(
        id: str = "p1",
        name: str | None = None,
        price: float = 1980.0,
        servings_per_day: float = 2,
        servings_per_container: float = 250,
        ingredients: tuple[Ingredient, ...] | None = None,
        **kwargs: Any,
    ) -> Product:
        return Product(
            id=id,
            name=name or f"Product {id}",
            price=price,
            servings_per_day=servings_per_day,
            servings_per_container=servings_per_container,
            ingredients=ingredients if ingredients is not None else (make_ingredient(),),
            **kwargs,
        )

    return _make


@pytest.fixture
def vitamin_c_product(make_product) -> Product:
    """1980 / 250 servings / 2 per day / 1000mg → 15.84 per day."""
    return make_product(id="vitc-1000", name="Vitamin C 1000")


@pytest.fixture
def neutral_profile() -> UserProfile:
    return UserProfile()


# ── JSON files ────────────────────────────────────────────────────────────────

def _catalog_payload() -> dict[str, Any]:
    return {
        "products": [
            {
                "id": "vitc-1000",
                "name": "Vitamin C 1000",
                "price": 1980,
                "servings_per_day": 2,
                "servings_per_container": 250,
                "ingredients": [
                    {
                        "name": "Vitamin C",
                        "slug": "vitamin-c",
                        "evidence_level": "A",
                        "related_goals": ["immune-boost", "skin-health"],
                        "contraindications": [],
                        "amount_mg_per_serving": 1000,
                    }
                ],
                "quality": {
                    "third_party_tested": True,
                    "manufacturing_country": "Japan",
                },
            },
            {
                "id": "iron-cal",
                "name": "Iron + Calcium",
                "price": 3000,
                "servings_per_day": 1,
                "servings_per_container": 30,
                "ingredients": [
                    {
                        "name": "Iron",
                        "slug": "iron",
                        "evidence_level": "B",
                        "related_goals": ["energy-recovery"],
                        "contraindications": ["pregnant"],
                        "amount_mg_per_serving": 10,
                    },
                    {
                        "name": "Calcium",
                        "slug": "calcium",
                        "evidence_level": "中",
                        "related_goals": ["bone-health"],
                        "contraindications": ["kidney-disease"],
                        "amount_mg_per_serving": 500,
                    },
                ],
            },
        ]
    }


@pytest.fixture
def catalog_payload() -> dict[str, Any]:
    return _catalog_payload()


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_catalog_payload(), ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def profile_file(tmp_path: Path) -> Path:
    path = tmp_path / "profile.json"
    path.write_text(
        json.dumps(
            {
                "goals": ["immune-boost"],
                "conditions": ["pregnant"],
                "priority": "balanced",
            }
        ),
        encoding="utf-8",
    )
    return path
