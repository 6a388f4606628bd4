#!/usr/bin/env python3
"""
Tests for compute_units: the characteristic value of an arbitrary unit,
obtained from its decomposition into basis dimensions.
"""

import pytest
import numpy as np

import geoscaling as gs
from geoscaling import GeoUnit, compute_units


class TestComputeUnits:
    def test_velocity(self, CharUnits_GEO, u):
        char = compute_units("cm/yr", CharUnits_GEO)
        assert char.magnitude == pytest.approx(1e-7)
        assert char.units == u.m / u.s

    def test_from_quantity(self, CharUnits_GEO, u):
        char = compute_units(3 * u.cm / u.yr, CharUnits_GEO)
        assert char.magnitude == pytest.approx(1e-7)

    def test_from_geounit(self, CharUnits_GEO, u):
        char = compute_units(GeoUnit(1e21 * u.Pa * u.s), CharUnits_GEO)
        assert char.to("Pa*s").magnitude == pytest.approx(1e20)

    def test_result_in_si_base_units(self, CharUnits_GEO, u):
        """km, MPa and degC scale with the SI values of the registry."""
        assert compute_units(u.km, CharUnits_GEO).units == u.m
        assert compute_units("MPa", CharUnits_GEO).to("Pa").magnitude == pytest.approx(1e7)
        char_T = compute_units("degC", CharUnits_GEO)
        assert char_T.units == u.K
        assert char_T.magnitude == pytest.approx(1273.15)

    def test_fractional_exponents(self, CharUnits_GEO, u):
        """Power-law prefactors have non-integer exponents."""
        char = compute_units(u.MPa**-3.05 / u.s, CharUnits_GEO)
        expected = (1e39**-3.05) * (1e6**3.05) * (1e13**5.1)
        assert char.magnitude == pytest.approx(expected, rel=1e-10)

    def test_dimensionless(self, CharUnits_GEO):
        assert compute_units("dimensionless", CharUnits_GEO).magnitude == 1.0

    def test_amount_of_substance(self, CharUnits_GEO, u):
        char = compute_units("J/mol", CharUnits_GEO)
        expected = CharUnits_GEO.J.to("J").magnitude
        assert char.magnitude == pytest.approx(expected)

    def test_no_units_registry(self, CharUnits_NONE, u):
        assert compute_units(u.m / u.s, CharUnits_NONE).magnitude == 1.0

    def test_unsupported_dimension(self, CharUnits_GEO, u):
        with pytest.raises(gs.DimensionMismatchError):
            compute_units(u.ampere, CharUnits_GEO)

    def test_unsupported_dimension_error_hierarchy(self, CharUnits_GEO, u):
        with pytest.raises(gs.DimensionalityError):
            compute_units("candela", CharUnits_GEO)
        with pytest.raises(gs.UnitsError):
            compute_units("candela", CharUnits_GEO)

    def test_not_a_unit(self, CharUnits_GEO):
        with pytest.raises(TypeError):
            compute_units(3.0, CharUnits_GEO)

    def test_precision_follows_parameter(self, CharUnits_GEO, u):
        x = GeoUnit(u.Quantity(np.array([1.0], dtype=np.float32), "km"))
        char = compute_units(x, CharUnits_GEO)
        assert np.asarray(char.magnitude).dtype == np.float32
