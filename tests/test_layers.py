"""
Tests for the layer model.

1. Numeric checks and density normalisation (49 / 50 / 51 threshold)
2. Total thickness with non-numeric values
3. Depth trimming (clipping, truncation, immutability)
4. Validated layer arrays
"""

import math

import numpy as np
import pytest

from vsa_calculator.core.layers import (
    compute_g,
    compute_h,
    is_number,
    layer_arrays,
    layer_rho,
    normalize_rho,
    profile_is_valid,
    trim_layers_to_depth,
)


class TestIsNumber:

    @pytest.mark.parametrize("value", [0, 1, -2.5, 1e9, np.float64(3.0)])
    def test_finite_reals(self, value):
        assert is_number(value)

    @pytest.mark.parametrize("value", [None, "", "5", True, False, math.nan, math.inf, -math.inf])
    def test_rejected(self, value):
        assert not is_number(value)


class TestDensity:

    def test_threshold(self):
        """Values below 50 are t/m3, 50 and above are kg/m3."""
        assert normalize_rho(49) == 49000
        assert normalize_rho(50) == 50
        assert normalize_rho(51) == 51

    def test_typical_values(self):
        assert normalize_rho(1.9) == pytest.approx(1900.0)
        assert normalize_rho(1900) == 1900.0

    def test_explicit_unit_wins(self):
        assert normalize_rho(60, "t/m3") == 60000
        assert normalize_rho(1.9, "kg/m3") == 1.9

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            normalize_rho(1.9, "g/cm3")

    def test_layer_falls_back_to_default(self):
        assert layer_rho({"d": 1, "vs": 100}, 2.0) == pytest.approx(2000.0)
        assert layer_rho({"d": 1, "vs": 100, "rho": ""}, 1800) == 1800.0
        assert layer_rho({"d": 1, "vs": 100, "rho": 2100}, 1800) == 2100.0

    def test_shear_modulus(self):
        assert compute_g(200.0, 1900.0) == pytest.approx(7.6e7)


class TestComputeH:

    def test_sum(self, three_layers):
        assert compute_h(three_layers) == 30

    def test_non_numeric_ignored(self):
        layers = [{"d": 5, "vs": 100}, {"d": "", "vs": 200}, {"d": None, "vs": 300}, {"d": 2.5, "vs": 1}]
        assert compute_h(layers) == 7.5

    def test_blank_thickness_counts_as_zero(self):
        assert compute_h([{"d": 5}, {"d": ""}, {"d": 15}]) == 20

    def test_empty(self):
        assert compute_h([]) == 0


class TestTrimLayersToDepth:

    def test_clips_last_layer(self, three_layers):
        trimmed = trim_layers_to_depth(three_layers, 20)
        assert [L["d"] for L in trimmed] == [5, 10, 5]
        assert compute_h(trimmed) == 20

    def test_deeper_than_profile(self, three_layers):
        trimmed = trim_layers_to_depth(three_layers, 100)
        assert [L["d"] for L in trimmed] == [5, 10, 15]

    def test_exact_boundary(self, three_layers):
        trimmed = trim_layers_to_depth(three_layers, 15)
        assert [L["d"] for L in trimmed] == [5, 10]

    def test_zero_depth(self, three_layers):
        assert trim_layers_to_depth(three_layers, 0) == []

    def test_stops_at_non_numeric_layer(self):
        layers = [{"d": 5, "vs": 100}, {"d": 5, "vs": ""}, {"d": 5, "vs": 300}]
        trimmed = trim_layers_to_depth(layers, 30)
        assert len(trimmed) == 1

    def test_idempotent(self, three_layers):
        once = trim_layers_to_depth(three_layers, 17.5)
        assert trim_layers_to_depth(once, 17.5) == once

    def test_input_not_modified(self, three_layers):
        before = [dict(L) for L in three_layers]
        trimmed = trim_layers_to_depth(three_layers, 12)
        trimmed[-1]["vs"] = 1.0
        assert three_layers == before

    def test_other_keys_kept(self):
        trimmed = trim_layers_to_depth([{"id": "a", "d": 10, "vs": 200, "rho": 1.8}], 4)
        assert trimmed == [{"id": "a", "d": 4, "vs": 200, "rho": 1.8}]


class TestLayerArrays:

    def test_arrays(self):
        d, vs, rho = layer_arrays([{"d": 2, "vs": 100, "rho": 1.8}, {"d": 3, "vs": 200}], 1900)
        np.testing.assert_allclose(d, [2, 3])
        np.testing.assert_allclose(vs, [100, 200])
        np.testing.assert_allclose(rho, [1800, 1900])

    @pytest.mark.parametrize("bad", [
        [],
        [{"d": 0, "vs": 100}],
        [{"d": 5, "vs": -1}],
        [{"d": 5, "vs": "fast"}],
        [{"d": 5, "vs": 100, "rho": -3}],
        [{"d": 5, "vs": 100, "rho": 1.9, "rho_unit": "g/cm3"}],
    ])
    def test_invalid(self, bad):
        assert layer_arrays(bad, 1900) is None

    def test_profile_is_valid(self, three_layers):
        assert profile_is_valid(three_layers)
        assert not profile_is_valid([])
        assert not profile_is_valid([{"d": 1, "vs": None}])
