# geoscaling/units.py
"""
High-level units utilities and the units exception hierarchy.

These functions work on anything that may carry units: a ``GeoUnit``,
a Pint quantity, a parameter structure or a plain number. They let calling
code ask the same questions without caring which of those it holds.

Key functions:
- is_dimensional() - Is the value currently expressed in physical units?
- num_value() - Numeric value with the units stripped
- value() - Value with its units re-attached
- unit_value() - Value with units if dimensional, bare number otherwise
- unit_of() - The unit a value is (or was) expressed in
"""

import pint


class UnitsError(Exception):
    """Exception raised for units-related errors."""

    pass


class DimensionalityError(UnitsError):
    """Exception raised for dimensional inconsistency errors."""

    pass


class NoUnitsError(UnitsError):
    """Exception raised when units are expected but not found."""

    pass


class ValidationError(UnitsError, ValueError):
    """Exception raised when characteristic values fail validation."""

    pass


class DimensionMismatchError(DimensionalityError):
    """
    Raised when a unit decomposes into a basis dimension that the scale
    registry does not cover (anything other than length, mass, time,
    temperature and amount of substance).
    """

    pass


class TypeCoercionError(UnitsError, TypeError):
    """
    Reserved for numeric payloads that cannot be represented.

    Integer payloads are promoted to floating point before any unit
    arithmetic, so this is not raised by the conversion routines.
    """

    pass


def is_dimensional(obj) -> bool:
    """
    True if ``obj`` is currently expressed in physical units.

    ``GeoUnit`` instances report their flag, parameter structures report
    whether any of their fields are dimensional, Pint quantities are
    dimensional unless they are unitless, and plain numbers are not.
    """
    if isinstance(obj, pint.Quantity):
        return not obj.unitless
    return bool(getattr(obj, "isdimensional", False))


def num_value(obj):
    """Numeric value, with no units."""
    if isinstance(obj, pint.Quantity):
        return obj.magnitude
    if hasattr(obj, "val") and hasattr(obj, "isdimensional"):
        return obj.val
    return obj


def value(obj):
    """Value with its units attached (a Pint quantity for ``GeoUnit``)."""
    if hasattr(obj, "quantity") and hasattr(obj, "isdimensional"):
        return obj.quantity
    return obj


def unit_value(obj):
    """Value with units if ``obj`` is dimensional, the bare number otherwise."""
    if hasattr(obj, "unit_value") and hasattr(obj, "isdimensional"):
        return obj.unit_value
    return obj


def unit_of(obj):
    """
    The unit of ``obj``.

    For a ``GeoUnit`` this is the retained unit, also after
    non-dimensionalisation. Returns ``None`` for plain numbers.
    """
    if isinstance(obj, pint.Quantity):
        return obj.units
    if hasattr(obj, "unit") and hasattr(obj, "isdimensional"):
        return obj.unit
    return None
