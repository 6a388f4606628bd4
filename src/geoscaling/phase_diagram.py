"""
Phase diagrams

Tabulated material properties (melt fraction, density) on a regular
temperature-pressure grid, as produced by thermodynamic modelling tools.
A table stands in for a formula-based law in a phase. It is not converted
value by value; it is re-read against the new characteristic values.

File format: whitespace separated columns, ``#`` starts a comment ::

    # T[K]     P[bar]   meltFrac   rho[kg/m^3]
    1000.0     1000.0   0.00       3200.0
    1000.0     2000.0   0.00       3210.0
    ...
"""

import logging
import os

import numpy as np
import pint

from .function.quantities import GeoUnit
from .parameters import AbstractPhaseDiagramsStruct

logger = logging.getLogger(__name__)

_COLUMNS = ("T", "P", "meltFrac", "rho")


class PhaseDiagramLookupTable(AbstractPhaseDiagramsStruct):
    """
    Phase diagram read from a text file.

    Parameters
    ----------
    filename : str
        Table to read
    char_dim : ScaleRegistry, optional
        If given, temperature, pressure and density are stored
        non-dimensionally with these characteristic values.

    Attributes
    ----------
    T, P : GeoUnit
        Grid axes (temperature and pressure in SI units, or scaled)
    meltFrac, rho : GeoUnit
        Tabulated values on the (T, P) grid
    """

    def __init__(self, filename, char_dim=None):
        self.filename = os.fspath(filename)
        self.char_dim = char_dim

        T, P, meltFrac, rho = self._read(self.filename)

        self.T = GeoUnit(T, "K")
        self.P = GeoUnit(GeoUnit(P, "bar").quantity.to("Pa"))
        self.meltFrac = GeoUnit(meltFrac)
        self.rho = GeoUnit(rho, "kg/m**3")

        if char_dim is not None:
            from .scaling import nondimensionalize

            self.T = nondimensionalize(self.T, char_dim)
            self.P = nondimensionalize(self.P, char_dim)
            self.rho = nondimensionalize(self.rho, char_dim)

        self._interpolators = {}

    @staticmethod
    def _read(filename):
        data = np.loadtxt(filename, comments="#", ndmin=2)
        if data.shape[1] < len(_COLUMNS):
            raise ValueError(
                f"Phase diagram {filename} has {data.shape[1]} columns, "
                f"expected {len(_COLUMNS)} ({', '.join(_COLUMNS)})"
            )

        # sort rows so that P varies fastest
        order = np.lexsort((data[:, 1], data[:, 0]))
        data = data[order]

        T_axis = np.unique(data[:, 0])
        P_axis = np.unique(data[:, 1])
        if T_axis.size * P_axis.size != data.shape[0]:
            raise ValueError(
                f"Phase diagram {filename} is not a regular grid: "
                f"{data.shape[0]} rows for {T_axis.size} x {P_axis.size} points"
            )

        shape = (T_axis.size, P_axis.size)
        meltFrac = data[:, 2].reshape(shape)
        rho = data[:, 3].reshape(shape)

        logger.debug(
            f"Read phase diagram {filename}: {T_axis.size} temperatures, "
            f"{P_axis.size} pressures"
        )
        return T_axis, P_axis, meltFrac, rho

    @property
    def isdimensional(self) -> bool:
        return self.char_dim is None

    def rebuild(self, char_dim):
        return PhaseDiagramLookupTable(self.filename, char_dim)

    def _interpolator(self, name):
        if name not in self._interpolators:
            from scipy.interpolate import RegularGridInterpolator

            self._interpolators[name] = RegularGridInterpolator(
                (np.asarray(self.T.val), np.asarray(self.P.val)),
                np.asarray(getattr(self, name).val),
                bounds_error=False,
                fill_value=None,
            )
        return self._interpolators[name]

    def _points(self, T, P):
        if isinstance(T, pint.Quantity):
            T = T.to("K").magnitude
        if isinstance(P, pint.Quantity):
            P = P.to("Pa").magnitude
        T, P = np.broadcast_arrays(np.asarray(T, dtype=float), np.asarray(P, dtype=float))
        return np.stack([T, P], axis=-1)

    def _evaluate(self, name, T, P):
        points = self._points(T, P)
        result = self._interpolator(name)(points)
        if result.ndim == 0:
            return float(result)
        return result

    def melt_frac(self, T, P):
        """Melt fraction at temperature ``T`` and pressure ``P``."""
        return self._evaluate("meltFrac", T, P)

    def density(self, T, P):
        """Density at temperature ``T`` and pressure ``P``."""
        rho = self._evaluate("rho", T, P)
        if self.rho.isdimensional:
            return GeoUnit(rho, self.rho.unit).quantity
        return rho

    def __repr__(self):
        state = "dimensional" if self.isdimensional else "nondimensional"
        return f"PhaseDiagramLookupTable({self.filename!r}, {state})"
