#!/usr/bin/env python3
"""
Unit tests for GeoUnit, the value type that keeps its units.

This test suite validates:
- Construction from numbers, arrays and Pint quantities
- Integer promotion and precision retention
- Arithmetic with numbers, arrays, quantities and other GeoUnits
- Indexing and item assignment
- The duck-typed accessors in geoscaling.units
"""

import pytest
import numpy as np

import geoscaling as gs
from geoscaling import GeoUnit


class TestConstruction:
    """Test how values, units and state are set up."""

    def test_bare_number(self, u):
        """A bare number is non-dimensional and unitless."""
        x = GeoUnit(3.0)
        assert x.val == 3.0
        assert x.unit == u.dimensionless
        assert not x.isdimensional

    def test_quantity(self, u):
        """A Pint quantity is stripped and remembered as dimensional."""
        x = GeoUnit(3 * u.km)
        assert x.val == 3.0
        assert x.unit == u.km
        assert x.isdimensional

    def test_explicit_unit(self, u):
        """A unit string attaches units to a bare value."""
        eta = GeoUnit(1e21, "Pa*s")
        assert eta.isdimensional
        assert eta.unit == u.Pa * u.s
        assert eta.quantity.to("Pa*s").magnitude == pytest.approx(1e21)

    def test_quantity_converted_to_explicit_unit(self, u):
        """A quantity given together with a unit is converted to that unit."""
        x = GeoUnit(500 * u.m, "km")
        assert x.val == pytest.approx(0.5)
        assert x.unit == u.km

    def test_sequence_of_quantities(self, u):
        """A list of quantities takes the unit of its first element."""
        x = GeoUnit([1 * u.km, 500 * u.m])
        assert x.unit == u.km
        np.testing.assert_allclose(x.val, [1.0, 0.5])

    def test_array(self):
        x = GeoUnit(np.array([1.0, 2.0, 3.0]))
        assert x.shape == (3,)
        assert len(x) == 3
        assert not x.isdimensional

    def test_copy_of_geounit(self, u):
        """Wrapping a GeoUnit keeps its unit and state."""
        x = GeoUnit(2.0, "m", isdimensional=False)
        y = GeoUnit(x)
        assert y.unit == u.m
        assert not y.isdimensional


class TestPrecision:
    """Test integer promotion and dtype retention."""

    def test_int64_promoted_to_float64(self):
        x = GeoUnit(np.array([1, 2, 3], dtype=np.int64))
        assert x.dtype == np.float64

    def test_int32_promoted_to_float32(self):
        x = GeoUnit(np.array([1, 2, 3], dtype=np.int32))
        assert x.dtype == np.float32

    def test_python_int_promoted(self):
        assert GeoUnit(5).dtype == np.float64

    def test_float32_kept(self, u):
        x = GeoUnit(u.Quantity(np.array([1.0, 2.0], dtype=np.float32), "m"))
        assert x.dtype == np.float32

    def test_payload_is_copied(self):
        """Changing the source array does not change the GeoUnit."""
        data = np.array([1.0, 2.0])
        x = GeoUnit(data, "m")
        data[0] = 10.0
        assert x.val[0] == 1.0


class TestArithmetic:
    """Test arithmetic with the different kinds of operands."""

    def test_with_number_returns_bare_value(self, u):
        x = GeoUnit(2.0 * u.m)
        result = x * 3
        assert not isinstance(result, GeoUnit)
        assert result == 6.0
        assert 3 + GeoUnit(2.0) == 5.0

    def test_with_geounit_combines_units(self, u):
        result = GeoUnit(2.0 * u.m) * GeoUnit(3.0 * u.s)
        assert isinstance(result, GeoUnit)
        assert result.val == pytest.approx(6.0)
        assert result.unit == u.m * u.s
        assert result.isdimensional

    def test_with_quantity_keeps_units(self, u):
        result = GeoUnit(2.0 * u.m) * (3.0 * u.s)
        assert result.magnitude == pytest.approx(6.0)
        assert result.units == u.m * u.s

    def test_nondimensional_with_quantity(self, u):
        """Non-dimensional values act as bare numbers."""
        x = GeoUnit(2.0, "m", isdimensional=False)
        result = x * (3.0 * u.s)
        assert result.magnitude == pytest.approx(6.0)
        assert result.units == u.s

    def test_with_array(self, u):
        x = GeoUnit(np.array([1.0, 2.0]), "m")
        np.testing.assert_allclose(x + np.array([1.0, 1.0]), [2.0, 3.0])
        np.testing.assert_allclose(np.array([1.0, 1.0]) + x, [2.0, 3.0])
        np.testing.assert_allclose(np.array([4.0, 4.0]) / x, [4.0, 2.0])

    def test_power(self):
        assert GeoUnit(3.0) ** 2 == pytest.approx(9.0)
        assert 2 ** GeoUnit(3.0) == pytest.approx(8.0)

    def test_negation(self, u):
        x = -GeoUnit(2.0 * u.m)
        assert isinstance(x, GeoUnit)
        assert x.val == -2.0
        assert x.unit == u.m


class TestComparison:
    """Test equality and closeness."""

    def test_equality(self, u):
        assert GeoUnit(2.0) == 2.0
        assert GeoUnit(2.0 * u.m) == GeoUnit(2.0 * u.m)
        assert GeoUnit(2.0 * u.m) != GeoUnit(2.0 * u.s)
        assert GeoUnit(np.array([1.0, 2.0])) == np.array([1.0, 2.0])

    def test_isclose(self, u):
        assert GeoUnit(1.0 + 1e-9).isclose(1.0)
        assert GeoUnit(np.array([1.0, 2.0]), "m").isclose(np.array([1.0, 2.0]))
        assert not GeoUnit(1.1).isclose(1.0)

    def test_not_hashable(self, u):
        with pytest.raises(TypeError):
            hash(GeoUnit(1.0 * u.m))


class TestIndexing:
    """Test item access and assignment."""

    def test_getitem_keeps_unit_and_state(self, u):
        T = GeoUnit([1300.0, 1400.0], "K")
        T0 = T[0]
        assert isinstance(T0, GeoUnit)
        assert T0.val == 1300.0
        assert T0.unit == u.K
        assert T0.isdimensional

    def test_slice(self, u):
        x = GeoUnit(np.arange(5.0), "m")
        assert x[1:3].shape == (2,)
        assert x[1:3].unit == u.m

    def test_setitem_number(self):
        T = GeoUnit([1300.0, 1400.0], "K")
        T[1] = 1500.0
        assert T.val[1] == 1500.0

    def test_setitem_quantity_converted(self, u):
        x = GeoUnit([1.0, 2.0], "km")
        x[0] = 500 * u.m
        assert x.val[0] == pytest.approx(0.5)
        assert x.unit == u.km


class TestAccessors:
    """Test the accessors that work on any value."""

    def test_is_dimensional(self, u):
        assert gs.is_dimensional(GeoUnit(3.0 * u.m))
        assert not gs.is_dimensional(GeoUnit(3.0))
        assert gs.is_dimensional(3.0 * u.m)
        assert not gs.is_dimensional(3.0)
        assert not gs.is_dimensional("granite")

    def test_num_value(self, u):
        assert gs.num_value(GeoUnit(3.0 * u.m)) == 3.0
        assert gs.num_value(3.0 * u.m) == 3.0
        assert gs.num_value(3.0) == 3.0

    def test_value_and_unit_value(self, u):
        x = GeoUnit(3.0 * u.m)
        assert gs.value(x) == 3.0 * u.m
        assert gs.unit_value(x) == 3.0 * u.m
        assert gs.unit_value(GeoUnit(3.0)) == 3.0

    def test_unit_of(self, u):
        assert gs.unit_of(GeoUnit(3.0 * u.m)) == u.m
        assert gs.unit_of(3.0 * u.s) == u.s
        assert gs.unit_of(3.0) is None

    def test_float_and_array(self, u):
        assert float(GeoUnit(3.0 * u.m)) == 3.0
        np.testing.assert_array_equal(np.asarray(GeoUnit([1.0, 2.0], "m")), [1.0, 2.0])


class TestDisplay:
    def test_repr(self, u):
        assert repr(GeoUnit(3.0 * u.km)).startswith("GeoUnit{dimensional, kilometer}")
        assert repr(GeoUnit(3.0)).startswith("GeoUnit{nondimensional")

    def test_latex(self, u):
        assert GeoUnit(3.0 * u.km)._repr_latex_().startswith("$3.0")

    def test_geounit_helper(self, u):
        v = gs.geounit(5, "cm/year")
        assert v.unit == u.cm / u.year
        assert v.val == 5.0
