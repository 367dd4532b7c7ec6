"""Every subpackage docstring names each of its modules."""

from __future__ import annotations

import importlib
import pkgutil

import pytest

import supplement_ranker

SUBPACKAGES = [
    info.name
    for info in pkgutil.iter_modules(supplement_ranker.__path__)
    if info.ispkg
]


def test_subpackages_found():
    assert {"catalog", "models", "recommendations", "scoring", "taxonomy", "utils"} <= set(
        SUBPACKAGES
    )


@pytest.mark.parametrize("name", SUBPACKAGES)
def test_module_map_lists_every_module(name):
    package = importlib.import_module(f"supplement_ranker.{name}")
    doc = package.__doc__ or ""
    for info in pkgutil.iter_modules(package.__path__):
        assert info.name in doc, f"{name}/__init__.py does not list {info.name}"
