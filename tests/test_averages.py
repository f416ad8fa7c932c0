"""
Tests for the closed-form averages M1, M2, M4, M5.
"""

import pytest

from vsa_calculator.core.averages import (
    compute_vsa_m1,
    compute_vsa_m2,
    compute_vsa_m4,
    compute_vsa_m5,
)

METHODS = [compute_vsa_m1, compute_vsa_m2, compute_vsa_m4, compute_vsa_m5]


class TestThreeLayerProfile:
    """d = 5/10/15 m, vs = 180/300/600 m/s."""

    def test_m1_root_mean_square(self, three_layers):
        assert compute_vsa_m1(three_layers) == pytest.approx(464.11, abs=0.01)

    def test_m2_linear_mean(self, three_layers):
        assert compute_vsa_m2(three_layers) == pytest.approx(430.0)

    def test_m4(self, three_layers):
        assert compute_vsa_m4(three_layers) == pytest.approx(429.94, abs=0.01)

    def test_m5_travel_time(self, three_layers):
        assert compute_vsa_m5(three_layers) == pytest.approx(348.39, abs=0.01)

    def test_ordering(self, three_layers):
        """RMS >= arithmetic >= harmonic for any profile."""
        m1 = compute_vsa_m1(three_layers)
        m2 = compute_vsa_m2(three_layers)
        m5 = compute_vsa_m5(three_layers)
        assert m1 >= m2 >= m5


class TestLiterature:

    @pytest.mark.parametrize("func,key", [
        (compute_vsa_m1, "M1"),
        (compute_vsa_m2, "M2"),
        (compute_vsa_m4, "M4"),
        (compute_vsa_m5, "M5"),
    ])
    def test_ozkan(self, ozkan, func, key):
        expected = ozkan["expected"][key]
        assert func(ozkan["layers"]) == pytest.approx(expected, rel=0.015)


class TestEdgeCases:

    def test_m4_single_layer_exact(self):
        assert compute_vsa_m4([{"d": 10, "vs": 200}]) == 200

    @pytest.mark.parametrize("func", METHODS)
    def test_single_layer_returns_vs(self, func, single_layer):
        assert func(single_layer) == pytest.approx(250.0)

    @pytest.mark.parametrize("func", METHODS)
    def test_empty_profile(self, func):
        assert func([]) is None

    @pytest.mark.parametrize("func", METHODS)
    @pytest.mark.parametrize("bad_layer", [
        {"d": 0, "vs": 200},
        {"d": 5, "vs": 0},
        {"d": -1, "vs": 200},
        {"d": "", "vs": 200},
        {"d": 5, "vs": None},
    ])
    def test_invalid_layer(self, func, bad_layer, three_layers):
        assert func(three_layers + [bad_layer]) is None

    @pytest.mark.parametrize("func", METHODS)
    def test_uniform_profile(self, func):
        """Several identical layers behave like one layer."""
        layers = [{"d": 4.0, "vs": 300.0} for _ in range(5)]
        assert func(layers) == pytest.approx(300.0)
