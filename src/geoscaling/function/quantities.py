"""
GeoUnit - a value that remembers its units

Non-dimensionalisation strips the units from a number, after which we no
longer know how to transfer it back into the right units. A ``GeoUnit``
keeps the unit next to the (unit-stripped) numerical value, along with a
flag saying whether the value is currently dimensional:

- .val → numerical value, no units
- .unit → Pint Unit the value is (or was) expressed in
- .isdimensional → True if .val is in .unit, False if it has been scaled

Design Principles:
1. The unit never changes; only .val and .isdimensional do
2. The numeric precision of .val is fixed at construction
3. Unit arithmetic is delegated to Pint
"""

import numbers
import warnings
from typing import Optional, Union

import numpy as np
import pint


def _strip(val):
    """Split ``val`` into (magnitude, units or None)."""
    if isinstance(val, pint.Quantity):
        return val.magnitude, val.units

    is_sequence = isinstance(val, (list, tuple)) or (
        isinstance(val, np.ndarray) and val.dtype == object and val.ndim == 1
    )
    if is_sequence and len(val) > 0:
        first = val[0]
        if isinstance(first, pint.Quantity):
            unit = first.units
            mags = []
            for item in val:
                if isinstance(item, pint.Quantity):
                    mags.append(item.to(unit).magnitude)
                else:
                    warnings.warn(
                        f"Item {item!r} has no units, assuming it is in {unit}",
                        stacklevel=3,
                    )
                    mags.append(item)
            return np.asarray(mags), unit

    return val, None


def _promote(val, dtype=None):
    """
    Numeric payload as a numpy scalar or a (copied) array.

    Integers are promoted to floating point, 32-bit and smaller to float32
    and anything else to float64. Floating point values keep their precision.
    """
    arr = np.asarray(val)
    if dtype is None:
        if arr.dtype.kind in "iub":
            dtype = np.float32 if arr.dtype.itemsize <= 4 else np.float64
        elif arr.dtype.kind in "fc":
            dtype = arr.dtype
        else:
            dtype = np.float64

    arr = np.array(arr, dtype=dtype)
    if arr.ndim == 0:
        return arr[()]
    return arr


class GeoUnit:
    """
    A numerical value (scalar or array) with its units and dimensional state.

    Parameters
    ----------
    val : number, array-like, pint.Quantity, sequence of pint.Quantity or GeoUnit
        The value. Units are taken from a Pint quantity.
    unit : str or pint.Unit, optional
        Units of a bare ``val``. If ``val`` is a Pint quantity, it is
        converted to ``unit``.
    isdimensional : bool, optional
        Whether ``val`` is in ``unit`` (True) or has been scaled (False).
        Defaults to True whenever there are units.
    dtype : numpy dtype, optional
        Precision of the payload. Inferred from ``val`` if not given.

    Examples
    --------
    >>> eta = GeoUnit(1e21 * u.Pa * u.s)
    >>> eta.val           # 1e21
    >>> eta.unit          # <Unit('pascal * second')>
    >>> eta.isdimensional # True

    >>> T = GeoUnit([1300.0, 1400.0], "K")
    >>> T[0]              # GeoUnit{dimensional, kelvin}, 1300.0
    """

    # numpy defers to our reflected operators
    __array_ufunc__ = None

    def __init__(
        self,
        val,
        unit: Optional[Union[str, "pint.Unit"]] = None,
        isdimensional: Optional[bool] = None,
        dtype=None,
    ):
        from ..scaling import units as ureg

        if isinstance(val, GeoUnit):
            if unit is None:
                unit = val.unit
            if isdimensional is None:
                isdimensional = val.isdimensional
            if dtype is None:
                dtype = val.dtype
            val = val.val

        magnitude, qty_unit = _strip(val)

        if unit is None:
            unit = qty_unit if qty_unit is not None else ureg.dimensionless
        else:
            if isinstance(unit, str):
                unit = ureg.Unit(unit)
            if qty_unit is not None:
                magnitude = ureg.Quantity(magnitude, qty_unit).to(unit).magnitude

        if isdimensional is None:
            isdimensional = not ureg.Quantity(1, unit).unitless

        self._val = _promote(magnitude, dtype)
        self._unit = unit
        self._isdimensional = bool(isdimensional)

    # =========================================================================
    # Core Properties
    # =========================================================================

    @property
    def val(self):
        """Numerical value, with no units."""
        return self._val

    @property
    def unit(self):
        """The Pint Unit the value is (or was, before scaling) expressed in."""
        return self._unit

    @property
    def isdimensional(self) -> bool:
        return self._isdimensional

    @property
    def dtype(self):
        return np.asarray(self._val).dtype

    @property
    def shape(self):
        return np.shape(self._val)

    @property
    def size(self):
        return np.size(self._val)

    @property
    def quantity(self) -> "pint.Quantity":
        """Value with the unit attached."""
        from ..scaling import units as ureg

        return ureg.Quantity(self._val, self._unit)

    @property
    def unit_value(self):
        """Value with units if dimensional, the bare number otherwise."""
        if self._isdimensional:
            return self.quantity
        return self._val

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def _binary(self, other, op, reflected=False):
        def apply(a, b):
            return op(b, a) if reflected else op(a, b)

        # Combining two GeoUnits returns a GeoUnit
        if isinstance(other, GeoUnit):
            return GeoUnit(apply(self.quantity, other.quantity))

        if _strip(other)[1] is not None and not isinstance(other, pint.Quantity):
            other = GeoUnit(other).quantity

        # Units stay attached if the other operand has units
        if isinstance(other, pint.Quantity):
            return apply(self.unit_value, other)

        # Plain arrays cannot carry units, so only values are returned
        if isinstance(other, (np.ndarray, list, tuple)):
            return apply(self._val, np.asarray(other))

        if isinstance(other, (numbers.Number, np.generic)):
            return apply(self._val, other)

        return NotImplemented

    def __add__(self, other):
        return self._binary(other, lambda a, b: a + b)

    def __radd__(self, other):
        return self._binary(other, lambda a, b: a + b, reflected=True)

    def __sub__(self, other):
        return self._binary(other, lambda a, b: a - b)

    def __rsub__(self, other):
        return self._binary(other, lambda a, b: a - b, reflected=True)

    def __mul__(self, other):
        return self._binary(other, lambda a, b: a * b)

    def __rmul__(self, other):
        return self._binary(other, lambda a, b: a * b, reflected=True)

    def __truediv__(self, other):
        return self._binary(other, lambda a, b: a / b)

    def __rtruediv__(self, other):
        return self._binary(other, lambda a, b: a / b, reflected=True)

    def __pow__(self, exponent):
        return self._val ** _magnitude(exponent)

    def __rpow__(self, base):
        return _magnitude(base) ** self._val

    def __neg__(self) -> "GeoUnit":
        return GeoUnit(-self._val, self._unit, self._isdimensional, dtype=self.dtype)

    # =========================================================================
    # Comparisons
    # =========================================================================

    def __eq__(self, other):
        if isinstance(other, GeoUnit):
            return (
                self._unit == other.unit
                and self._isdimensional == other.isdimensional
                and np.array_equal(self._val, other.val)
            )
        if isinstance(other, (numbers.Number, np.generic, np.ndarray, list, tuple)):
            return bool(np.array_equal(self._val, np.asarray(other)))
        return NotImplemented

    # equality compares array payloads, which have no consistent hash
    __hash__ = None

    def isclose(self, other, rtol=1e-05, atol=1e-08) -> bool:
        """True if the values of ``self`` and ``other`` agree within tolerance."""
        return bool(np.allclose(self._val, _magnitude(other), rtol=rtol, atol=atol))

    # =========================================================================
    # Container behaviour
    # =========================================================================

    def __len__(self):
        return int(np.size(self._val))

    def __getitem__(self, index) -> "GeoUnit":
        return GeoUnit(self._val[index], self._unit, self._isdimensional, dtype=self.dtype)

    def __setitem__(self, index, val):
        # only the payload changes, the unit and state stay as they are
        if isinstance(val, pint.Quantity):
            val = val.to(self._unit).magnitude
        elif isinstance(val, GeoUnit):
            val = val.val
        self._val[index] = val

    def __array__(self, dtype=None, copy=None):
        return np.asarray(self._val, dtype=dtype)

    def __float__(self):
        return float(self._val)

    # =========================================================================
    # Display
    # =========================================================================

    def __repr__(self) -> str:
        state = "dimensional" if self._isdimensional else "nondimensional"
        return f"GeoUnit{{{state}, {self._unit}}}, {self._val!r}"

    def __str__(self) -> str:
        if self._isdimensional:
            return f"{self._val} [{self._unit}]"
        return str(self._val)

    def _repr_latex_(self):
        """LaTeX representation for Jupyter notebooks."""
        value = self._val

        if isinstance(value, np.floating):
            if value != 0 and (abs(value) < 0.01 or abs(value) >= 10000):
                value_latex = f"{value:.2e}".replace('e', r' \times 10^{') + '}'
            else:
                value_latex = str(value)
        else:
            value_latex = str(value)

        if self._isdimensional:
            units_str = str(self._unit).replace('**', '^').replace('*', r' \cdot ')
            return f"${value_latex} \\; \\mathrm{{{units_str}}}$"
        else:
            return f"${value_latex}$"


def _magnitude(obj):
    if isinstance(obj, GeoUnit):
        return obj.val
    if isinstance(obj, pint.Quantity):
        return obj.magnitude
    return obj


def geounit(val, unit: Optional[str] = None) -> GeoUnit:
    """
    Create a GeoUnit.

    Examples
    --------
    >>> viscosity = geounit(1e21, "Pa*s")
    >>> velocity = geounit(5, "cm/year")
    """
    return GeoUnit(val, unit)
