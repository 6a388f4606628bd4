"""
Unit-aware values.

GeoUnit
    A numerical value together with its units and dimensional state.
"""
from .quantities import GeoUnit, geounit
