#!/usr/bin/env python3
"""
Tests for the characteristic values (ScaleRegistry) and the factories
that create them in GEO, SI and non-dimensional units.
"""

import dataclasses

import pytest
import pint

import geoscaling as gs
from geoscaling import Dimension, UnitSystem


class TestGeoUnits:
    """GEO units: km, degC, MPa, Pa s and Myrs."""

    def test_defaults(self, CharUnits_GEO, u):
        g = CharUnits_GEO
        assert g.system is UnitSystem.GEO
        assert g.length.to("km").magnitude == pytest.approx(1000.0)
        assert g.stress.to("MPa").magnitude == pytest.approx(10.0)
        assert g.viscosity.to("Pa*s").magnitude == pytest.approx(1e20)

    def test_si_preferred_values(self, CharUnits_GEO):
        g = CharUnits_GEO
        assert g.m.to("m").magnitude == pytest.approx(1e6)
        assert g.K.to("K").magnitude == pytest.approx(1273.15)
        assert g.Pa.to("Pa").magnitude == pytest.approx(1e7)
        assert g.s.to("s").magnitude == pytest.approx(1e13)

    def test_time_in_myrs(self, CharUnits_GEO):
        assert CharUnits_GEO.time.to("Myrs").magnitude == pytest.approx(0.3169, rel=1e-3)

    def test_derived_values(self, CharUnits_GEO, u):
        g = CharUnits_GEO
        assert g.kg.to("kg").magnitude == pytest.approx(1e39)
        assert g.velocity.to("m/s").magnitude == pytest.approx(1e-7)
        assert g.density.to("kg/m**3").magnitude == pytest.approx(1e21)
        assert g.strainrate.to("1/s").magnitude == pytest.approx(1e-13)
        assert g.area.to("m**2").magnitude == pytest.approx(1e12)
        assert g.acceleration.to("m/s**2").magnitude == pytest.approx(1e-20)

    def test_helpers(self, CharUnits_GEO):
        assert CharUnits_GEO.SecYear == 3600 * 24 * 365.25
        assert CharUnits_GEO.Myrs == 1e6

    def test_custom_length(self, u):
        g = gs.geo_units(length=10 * u.km)
        assert g.m.to("m").magnitude == pytest.approx(1e4)

    def test_length_in_other_units(self, u):
        """The characteristic length may be given in any length unit."""
        g = gs.geo_units(length=1e6 * u.m)
        assert g.length.to("km").magnitude == pytest.approx(1000.0)
        assert g.length.units == u.km

    def test_bare_numbers_take_default_units(self):
        g = gs.geo_units(length=660, stress=100)
        assert g.length.to("km").magnitude == pytest.approx(660.0)
        assert g.stress.to("MPa").magnitude == pytest.approx(100.0)

    def test_wrong_dimension_fails(self, u):
        with pytest.raises(pint.DimensionalityError):
            gs.geo_units(length=1 * u.s)

    def test_display(self, CharUnits_GEO):
        text = str(CharUnits_GEO)
        assert "Employing GEO units" in text
        assert "Characteristic values" in text
        assert "0.3169" in text
        assert "<table" in CharUnits_GEO._repr_html_()


class TestSIUnits:
    def test_defaults(self, CharUnits_SI):
        g = CharUnits_SI
        assert g.system is UnitSystem.SI
        assert g.m.to("m").magnitude == pytest.approx(1000.0)
        assert g.K.to("K").magnitude == pytest.approx(1000.0)
        assert g.Pa.to("Pa").magnitude == pytest.approx(10.0)
        assert g.s.to("s").magnitude == pytest.approx(1e19)

    def test_km_input(self, u):
        g = gs.si_units(length=1 * u.km)
        assert g.length.to("m").magnitude == pytest.approx(1000.0)
        assert g.length.units == u.m


class TestNoUnits:
    def test_defaults(self, CharUnits_NONE):
        g = CharUnits_NONE
        assert g.system is UnitSystem.NONE
        assert g.m == 1.0
        assert g.kg == 1.0
        assert g.s == 1.0
        assert g.mol == 1.0

    def test_custom_values(self):
        g = gs.no_units(length=2.0, stress=4.0, viscosity=8.0)
        assert g.s == pytest.approx(2.0)
        assert g.kg == pytest.approx(4.0 * 2.0 * 2.0**2)

    def test_units_rejected(self, u):
        with pytest.raises(gs.ValidationError, match="length should not have units"):
            gs.no_units(length=1 * u.m)

    def test_dimensional_geounit_rejected(self, u):
        with pytest.raises(gs.ValidationError, match="stress should not have units"):
            gs.no_units(stress=gs.GeoUnit(1.0 * u.Pa))


class TestRegistry:
    """Test properties shared by all registries."""

    def test_frozen(self, CharUnits_GEO, u):
        with pytest.raises(dataclasses.FrozenInstanceError):
            CharUnits_GEO.length = 10 * u.km

    def test_characteristic(self, CharUnits_GEO):
        g = CharUnits_GEO
        assert g.characteristic(Dimension.LENGTH) is g.m
        assert g.characteristic(Dimension.MASS) is g.kg
        assert g.characteristic(Dimension.TIME) is g.s
        assert g.characteristic(Dimension.TEMPERATURE) is g.K
        assert g.characteristic(Dimension.AMOUNT) is g.mol

    def test_make_registry(self):
        assert gs.make_registry("geo").system is UnitSystem.GEO
        assert gs.make_registry(UnitSystem.SI).system is UnitSystem.SI
        assert gs.make_registry("NONE", length=3.0).m == 3.0

    def test_make_registry_unknown(self):
        with pytest.raises(gs.ValidationError):
            gs.make_registry("imperial")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            gs.make_registry("imperial")
