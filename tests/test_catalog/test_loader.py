"""
Tests for supplement_ranker/catalog/loader.py.

What we test
------------
- Object and bare-array catalogs both load, in file order.
- Legacy evidence labels survive the round through JSON.
- Missing file → FileNotFoundError; bad JSON / bad shape / invalid
  product / duplicate id → ValueError.
- NaN and Infinity literals in a catalog are rejected like any invalid value.
- Profile loading and validation; detailed-assessment keys select
  DetailedProfile.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from supplement_ranker.catalog.loader import load_catalog, load_profile, parse_catalog
from supplement_ranker.models.profile import DetailedProfile
from supplement_ranker.taxonomy.contraindication_taxonomy import ContraindicationTag
from supplement_ranker.taxonomy.goal_taxonomy import EvidenceLevel, HealthGoal
from supplement_ranker.taxonomy.lifestyle_taxonomy import MainConcern


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


class TestLoadCatalog:
    def test_object_form(self, catalog_file):
        products = load_catalog(catalog_file)
        assert [p.id for p in products] == ["vitc-1000", "iron-cal"]
        assert products[1].ingredients[1].evidence_level == EvidenceLevel.B
        assert products[0].quality.third_party_tested is True

    def test_bare_array(self, tmp_path, catalog_payload):
        path = _write(tmp_path / "c.json", catalog_payload["products"])
        assert len(load_catalog(path)) == 2

    def test_empty_catalog(self, tmp_path):
        assert load_catalog(_write(tmp_path / "c.json", [])) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="not valid JSON"):
            load_catalog(path)

    def test_object_without_products(self, tmp_path):
        with pytest.raises(ValueError, match="'products'"):
            load_catalog(_write(tmp_path / "c.json", {"items": []}))

    def test_invalid_product_reported(self, tmp_path, catalog_payload):
        catalog_payload["products"][1]["price"] = -5
        with pytest.raises(ValueError, match="1 product\\(s\\) failed validation"):
            load_catalog(_write(tmp_path / "c.json", catalog_payload))

    def test_duplicate_ids(self, catalog_payload):
        catalog_payload["products"][1]["id"] = "vitc-1000"
        with pytest.raises(ValueError, match="Duplicate product ids"):
            parse_catalog(catalog_payload)

    def test_non_object_entry(self):
        with pytest.raises(ValueError):
            parse_catalog([42])

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_price_rejected(self, literal):
        raw = json.loads(
            '[{"id": "p1", "name": "P", "price": ' + literal + ', '
            '"servings_per_day": 1, "servings_per_container": 30, "ingredients": []}]'
        )
        with pytest.raises(ValueError, match="failed validation"):
            parse_catalog(raw)

    def test_non_finite_amount_rejected(self, tmp_path, catalog_payload):
        catalog_payload["products"][0]["ingredients"][0]["amount_mg_per_serving"] = float("nan")
        path = tmp_path / "c.json"
        path.write_text(json.dumps(catalog_payload), encoding="utf-8")
        with pytest.raises(ValueError, match="failed validation"):
            load_catalog(path)


class TestLoadProfile:
    def test_load(self, profile_file):
        profile = load_profile(profile_file)
        assert profile.goals == (HealthGoal.IMMUNE_BOOST,)
        assert profile.conditions == (ContraindicationTag.PREGNANT,)

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_profile(tmp_path / "nope.json")

    def test_not_an_object(self, tmp_path):
        with pytest.raises(ValueError, match="JSON object"):
            load_profile(_write(tmp_path / "p.json", ["immune-boost"]))

    def test_invalid_value(self, tmp_path):
        with pytest.raises(ValidationError):
            load_profile(_write(tmp_path / "p.json", {"budget_per_day": -1}))

    def test_plain_profile_stays_basic(self, profile_file):
        assert type(load_profile(profile_file)) is not DetailedProfile

    def test_detailed_keys_select_detailed_profile(self, tmp_path):
        profile = load_profile(
            _write(
                tmp_path / "p.json",
                {"goals": ["energy-recovery"], "main_concern": "fatigue", "secondary_goals": []},
            )
        )
        assert isinstance(profile, DetailedProfile)
        assert profile.main_concern == MainConcern.FATIGUE
        assert profile.goals == (HealthGoal.ENERGY_RECOVERY,)

    def test_non_finite_budget_rejected(self, tmp_path):
        path = tmp_path / "p.json"
        path.write_text('{"budget_per_day": NaN}', encoding="utf-8")
        with pytest.raises(ValidationError):
            load_profile(path)
