"""
Utilities to convert between dimensional and non-dimensional values.
"""
import logging
import threading
from enum import Enum

import numpy as np
import pint
from pint import compat as pint_compat
from pint import UnitRegistry

from ..function.quantities import GeoUnit
from ..parameters import (
    AbstractMaterialParam,
    AbstractMaterialParamsStruct,
    AbstractPhaseDiagramsStruct,
)
from ..units import DimensionMismatchError, num_value

logger = logging.getLogger(__name__)

u = UnitRegistry()
units = u

# Units that are useful in geodynamics
km = u.kilometer
m = u.meter
cm = u.centimeter
mm = u.millimeter
um = u.micrometer
yr = u.year
s = u.second
kg = u.kilogram
Pa = u.pascal
MPa = u.megapascal
kbar = u.kilobar
Pas = u.pascal * u.second
K = u.kelvin
C = u.degC
mol = u.mole
kJ = u.kilojoule
J = u.joule
Watt = u.watt
uW = u.microwatt

_INITIALISED = False
_INIT_LOCK = threading.Lock()


def initialise():
    """
    One-time initialisation of the units registry.

    Defines the ``Myrs`` (million years) unit, makes our registry Pint's
    application registry, and lets Pint quantities hand arithmetic with a
    ``GeoUnit`` over to the ``GeoUnit``. Calling it again is a no-op.

    Example
    -------
    >>> import geoscaling
    >>> geoscaling.initialise()
    >>> (1e13 * geoscaling.units.second).to("Myrs")
    """
    global _INITIALISED

    with _INIT_LOCK:
        if _INITIALISED:
            return

        u.define("million_years = 1e6 * year = Myrs")
        pint.set_application_registry(u)

        # Pint returns NotImplemented for upcast types, so that
        # ``Quantity * GeoUnit`` reaches GeoUnit.__rmul__
        fqn = f"{GeoUnit.__module__}.{GeoUnit.__qualname__}"
        pint_compat.upcast_type_map[fqn] = GeoUnit

        _INITIALISED = True
        logger.debug("Units registry initialised")


def is_initialised():
    return _INITIALISED


class Dimension(Enum):
    """The basis dimensions covered by a scale registry."""

    LENGTH = "length"
    MASS = "mass"
    TIME = "time"
    TEMPERATURE = "temperature"
    AMOUNT = "amount"


# Pint dimension names -> basis dimensions. This is the only place that
# knows about Pint's naming of the base dimensions.
PINT_DIMENSIONS = {
    "[length]": Dimension.LENGTH,
    "[mass]": Dimension.MASS,
    "[time]": Dimension.TIME,
    "[temperature]": Dimension.TEMPERATURE,
    "[substance]": Dimension.AMOUNT,
}


def _as_geounit(param):
    if isinstance(param, GeoUnit):
        return param
    if isinstance(param, pint.Quantity):
        return GeoUnit(param)
    if isinstance(param, (str, pint.Unit)):
        return GeoUnit(1.0, param)
    raise TypeError(f"Cannot determine units of {param!r}")


def _base_units(unit):
    """SI base units of ``unit`` (kelvin for degC, meter for km ...)."""
    return u.Quantity(1.0, unit).to_base_units().units


def _magnitude_base(scale):
    if isinstance(scale, pint.Quantity):
        return float(scale.to_base_units().magnitude)
    return float(scale)


def compute_units(param, g):
    """
    Computes the characteristic value of ``param`` for the registry ``g``.

    The unit of ``param`` is decomposed into its basis dimensions and
    the characteristic scale of every dimension is raised to its exponent
    (which may be fractional or negative) and multiplied in.

    Parameters
    ----------
    param : GeoUnit, pint.Quantity, pint.Unit or str
        The value (or just the unit) to compute the characteristic value for.
    g : ScaleRegistry
        The characteristic scales.

    Returns
    -------
    pint.Quantity
        The characteristic value, in the SI base units of ``param``.

    Raises
    ------
    DimensionMismatchError
        If the unit needs a dimension the registry does not cover.

    Example
    -------
    >>> g = geoscaling.geo_units()
    >>> compute_units("cm/yr", g)
    <Quantity(1e-07, 'meter / second')>
    """
    param = _as_geounit(param)
    dim = u.Quantity(1.0, param.unit).dimensionality

    char_val = 1.0
    for name, power in dim.items():
        dimension = PINT_DIMENSIONS.get(name)
        if dimension is None:
            raise DimensionMismatchError(
                f"Unit '{param.unit}' has dimension {name}, which cannot be "
                f"scaled (supported: {', '.join(PINT_DIMENSIONS)})"
            )
        scale = _magnitude_base(g.characteristic(dimension))
        char_val *= scale ** float(power)

    value = param.dtype.type(char_val)
    return u.Quantity(value, _base_units(param.unit))


def nondimensionalize(param, g):
    """
    Non-dimensionalize (scale) ``param`` with the characteristic values ``g``.

    Parameters
    ----------
    param : GeoUnit, pint.Quantity, parameter structure, number or str
        Plain numbers, arrays and strings are already non-dimensional and
        are returned unchanged. Pint quantities are returned as bare
        numbers. A ``GeoUnit`` is returned as a new, non-dimensional
        ``GeoUnit`` that remembers its unit. Parameter structures are
        returned as copies with every ``GeoUnit`` field scaled.
    g : ScaleRegistry
        The characteristic values.

    Example
    -------
    >>> import geoscaling
    >>> u = geoscaling.units
    >>> CharUnits = geoscaling.geo_units()
    >>> nondimensionalize(3 * u.cm / u.yr, CharUnits)
    0.009506426344208684

    In geodynamics one sometimes encounters more funky units

    >>> A = 6.3e-2 * u.MPa**-3.05 / u.s
    >>> nondimensionalize(A, CharUnits)
    7.068716262102384e14
    """
    if isinstance(param, GeoUnit):
        if not param.isdimensional:
            return param

        char_val = compute_units(param, g)
        val_nd = (param.quantity.to_base_units() / char_val).to("dimensionless").magnitude

        # store new value, but keep original units
        return GeoUnit(val_nd, param.unit, False, dtype=param.dtype)

    if isinstance(param, pint.Quantity) or _is_quantity_sequence(param):
        result = nondimensionalize(GeoUnit(param), g)
        return result.unit_value

    if isinstance(param, AbstractMaterialParam):
        return param.transform_units(lambda z: nondimensionalize(z, g))

    if isinstance(param, AbstractMaterialParamsStruct):
        logger.debug(f"Non-dimensionalizing phase {getattr(param, 'name', '')!r}")
        phase_mat = param.transform_units(lambda z: nondimensionalize(z, g))
        return phase_mat.with_nondimensional(True)

    if isinstance(param, AbstractPhaseDiagramsStruct):
        return param.rebuild(g)

    # strings, numbers and arrays without units
    return param


def dimensionalize(param, unit_or_g, g=None):
    """
    Dimensionalize ``param`` using the characteristic values ``g``.

    Can be called as ``dimensionalize(param, g)`` for values that remember
    their units (``GeoUnit`` and parameter structures), or as
    ``dimensionalize(param, unit, g)`` to give a non-dimensional number
    the units ``unit``. Values that already carry units are converted to
    ``unit`` without scaling.

    Example
    -------
    >>> CharUnits = geoscaling.geo_units()
    >>> v_ND = nondimensionalize(3 * u.cm / u.yr, CharUnits)
    >>> dimensionalize(v_ND, u.cm / u.yr, CharUnits)
    <Quantity(3.0, 'centimeter / year')>
    """
    if g is None:
        g = unit_or_g
        unit = None
    else:
        unit = unit_or_g

    if unit is not None:
        if isinstance(unit, str):
            unit = u.Unit(unit)

        # values that already carry units are only converted
        if isinstance(param, GeoUnit) and param.isdimensional:
            return param.quantity.to(unit)
        if isinstance(param, pint.Quantity) and not param.unitless:
            return param.to(unit)

        char_val = compute_units(GeoUnit(1.0, unit), g)
        return (np.asarray(num_value(param)) * char_val).to(unit)

    if isinstance(param, GeoUnit):
        if param.isdimensional:
            return param

        char_val = compute_units(param, g)
        val = (param.val * char_val).to(param.unit)

        # store new value, but keep original units
        return GeoUnit(val.magnitude, param.unit, True, dtype=param.dtype)

    if isinstance(param, AbstractMaterialParam):
        return param.transform_units(lambda z: dimensionalize(z, g))

    if isinstance(param, AbstractMaterialParamsStruct):
        logger.debug(f"Dimensionalizing phase {getattr(param, 'name', '')!r}")
        phase_mat = param.transform_units(lambda z: dimensionalize(z, g))
        return phase_mat.with_nondimensional(False)

    if isinstance(param, AbstractPhaseDiagramsStruct):
        return param.rebuild(None)

    return param


def _is_quantity_sequence(param):
    return (
        isinstance(param, (list, tuple))
        and len(param) > 0
        and isinstance(param[0], pint.Quantity)
    )


non_dimensionalise = nondimensionalize
dimensionalise = dimensionalize


def ndargs(g):
    """Decorator used to non-dimensionalise the arguments of a function"""

    def convert(obj):
        if isinstance(obj, (list, tuple)) and not _is_quantity_sequence(obj):
            return type(obj)([convert(val) for val in obj])
        else:
            return nondimensionalize(obj, g)

    def decorator(f):
        def new_f(*args, **kwargs):
            nd_args = [convert(arg) for arg in args]
            nd_kwargs = {name: convert(val) for name, val in kwargs.items()}
            return f(*nd_args, **nd_kwargs)

        new_f.__name__ = f.__name__
        new_f.__doc__ = f.__doc__
        return new_f

    return decorator
