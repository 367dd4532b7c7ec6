"""
Detailed-assessment vocabularies and the ingredient boost groups.

  - ``AgeGroup``, ``ExerciseFrequency``, ``StressLevel``, ``SleepQuality``,
    ``AlcoholConsumption``, ``MainConcern``: optional answers of the detailed
    assessment, each selecting one row of a boost table.
  - ``DEFAULT_BOOST_GROUPS``: boost group name → ingredient slugs.

Boost tables are keyed by group, never by ingredient-name fragments.  The
groups are pairwise disjoint, so an ingredient belongs to at most one group
and matches at most one entry of any table row.  ``vitamin-b`` is the
complex and the B vitamins without their own group; ``vitamin-b6`` and
``vitamin-b12`` are separate groups.

This module has NO imports from any other ``supplement_ranker`` package.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Mapping


class AgeGroup(StrEnum):
    TWENTIES = "20s"
    THIRTIES = "30s"
    FORTIES = "40s"
    FIFTIES = "50s"
    SIXTY_PLUS = "60plus"


class ExerciseFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    OCCASIONALLY = "occasionally"
    RARELY = "rarely"


class StressLevel(StrEnum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class SleepQuality(StrEnum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class AlcoholConsumption(StrEnum):
    NONE = "none"
    OCCASIONAL = "occasional"
    MODERATE = "moderate"
    FREQUENT = "frequent"


class MainConcern(StrEnum):
    """The single issue the user most wants to address."""

    FATIGUE = "fatigue"
    SLEEP = "sleep"
    IMMUNITY = "immunity"
    APPEARANCE = "appearance"
    WEIGHT = "weight"
    CONCENTRATION = "concentration"


DEFAULT_BOOST_GROUPS: dict[str, tuple[str, ...]] = {
    "vitamin-a":         ("vitamin-a", "beta-carotene"),
    "vitamin-b":         ("vitamin-b-complex", "vitamin-b1", "vitamin-b2",
                          "vitamin-b3", "vitamin-b5", "folic-acid"),
    "vitamin-b6":        ("vitamin-b6",),
    "vitamin-b12":       ("vitamin-b12",),
    "vitamin-c":         ("vitamin-c",),
    "vitamin-d":         ("vitamin-d", "vitamin-d3"),
    "vitamin-e":         ("vitamin-e",),
    "biotin":            ("biotin",),
    "calcium":           ("calcium",),
    "chromium":          ("chromium",),
    "iron":              ("iron", "heme-iron"),
    "magnesium":         ("magnesium",),
    "zinc":              ("zinc",),
    "coenzyme-q10":      ("coenzyme-q10", "ubiquinol"),
    "omega-3":           ("omega-3", "fish-oil", "epa"),
    "dha":               ("dha",),
    "melatonin":         ("melatonin",),
    "glycine":           ("glycine",),
    "probiotics":        ("probiotics", "lactobacillus", "bifidobacterium"),
    "collagen":          ("collagen",),
    "dietary-fiber":     ("dietary-fiber", "psyllium"),
    "protein":           ("protein", "whey-protein", "soy-protein"),
    "bcaa":              ("bcaa",),
    "green-tea-extract": ("green-tea-extract",),
    "glucosamine":       ("glucosamine",),
    "ashwagandha":       ("ashwagandha",),
}


def overlapping_slugs(groups: Mapping[str, tuple[str, ...]]) -> dict[str, list[str]]:
    """Return every slug listed under more than one group, with its groups."""
    owners: dict[str, list[str]] = {}
    for group, slugs in groups.items():
        for slug in slugs:
            owners.setdefault(slug, []).append(group)
    return {slug: names for slug, names in owners.items() if len(names) > 1}


def slug_to_group(groups: Mapping[str, tuple[str, ...]]) -> dict[str, str]:
    """Invert a disjoint group mapping into ingredient slug → group name."""
    return {slug: group for group, slugs in groups.items() for slug in slugs}
