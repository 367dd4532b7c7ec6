"""Tests for supplement_ranker/utils/numeric.py."""

from __future__ import annotations

import pytest

from supplement_ranker.utils.numeric import clamp, round_half_up


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(72.5, 73), (72.4999, 72), (0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (100.0, 100)],
    )
    def test_values(self, value, expected):
        assert round_half_up(value) == expected

    def test_differs_from_builtin_round(self):
        assert round(72.5) == 72
        assert round_half_up(72.5) == 73


class TestClamp:
    def test_inside(self):
        assert clamp(50, 0, 100) == 50

    def test_bounds(self):
        assert clamp(-5, 0, 100) == 0
        assert clamp(150, 0, 100) == 100
