"""Tests for the detailed-assessment vocabularies and boost groups."""

from __future__ import annotations

from supplement_ranker.taxonomy.lifestyle_taxonomy import (
    DEFAULT_BOOST_GROUPS,
    AgeGroup,
    MainConcern,
    overlapping_slugs,
    slug_to_group,
)


class TestAnswerEnums:
    def test_age_groups(self):
        assert [a.value for a in AgeGroup] == ["20s", "30s", "40s", "50s", "60plus"]

    def test_main_concerns(self):
        assert len(MainConcern) == 6
        assert MainConcern("concentration") == MainConcern.CONCENTRATION


class TestBoostGroups:
    def test_default_groups_disjoint(self):
        assert overlapping_slugs(DEFAULT_BOOST_GROUPS) == {}

    def test_b_vitamins_split(self):
        lookup = slug_to_group(DEFAULT_BOOST_GROUPS)
        assert lookup["vitamin-b1"] == "vitamin-b"
        assert lookup["vitamin-b6"] == "vitamin-b6"
        assert lookup["vitamin-b12"] == "vitamin-b12"

    def test_aliases(self):
        lookup = slug_to_group(DEFAULT_BOOST_GROUPS)
        assert lookup["vitamin-d3"] == "vitamin-d"
        assert lookup["whey-protein"] == "protein"
        assert lookup["fish-oil"] == "omega-3"
        assert "vitamin-bx" not in lookup

    def test_overlap_reported(self):
        groups = {"omega-3": ("fish-oil", "dha"), "dha": ("dha",)}
        assert overlapping_slugs(groups) == {"dha": ["omega-3", "dha"]}
