"""
Density laws
"""

from dataclasses import dataclass

import sympy

from .parameters import AbstractMaterialParam, MaterialParamsInfo, unit_field
from .function.quantities import GeoUnit
from .phase_diagram import PhaseDiagramLookupTable


@dataclass(frozen=True)
class AbstractDensity(AbstractMaterialParam):
    """Base class of density laws."""

    def compute(self, P, T):
        raise NotImplementedError


@dataclass(frozen=True)
class ConstantDensity(AbstractDensity):
    """
    Constant density.

    Attributes:
    -----------
    rho : GeoUnit
        Density [kg/m^3]
    """

    rho: GeoUnit = unit_field(2900.0, "kg/m**3")

    def compute(self, P=None, T=None):
        return self.unpack_units("rho")

    def param_info(self) -> MaterialParamsInfo:
        rho, rho_0 = sympy.symbols("rho rho_0")
        return MaterialParamsInfo(
            Equation=sympy.latex(sympy.Eq(rho, rho_0)), Comment="Constant density"
        )


@dataclass(frozen=True)
class PTDensity(AbstractDensity):
    r"""
    Pressure- and temperature-dependent density:

    .. math::

        \rho = \rho_0 \left(1 - \alpha (T - T_0) + \beta (P - P_0)\right)

    Attributes:
    -----------
    rho0 : GeoUnit
        Density at the reference conditions [kg/m^3]
    alpha : GeoUnit
        Thermal expansivity [1/K]
    beta : GeoUnit
        Compressibility [1/Pa]
    T0 : GeoUnit
        Reference temperature [K]
    P0 : GeoUnit
        Reference pressure [Pa]
    """

    rho0: GeoUnit = unit_field(2900.0, "kg/m**3")
    alpha: GeoUnit = unit_field(3e-5, "1/K")
    beta: GeoUnit = unit_field(1e-9, "1/Pa")
    T0: GeoUnit = unit_field(273.15, "K")
    P0: GeoUnit = unit_field(0.0, "Pa")

    def compute(self, P, T):
        rho0, alpha, beta, T0, P0 = self.unpack_units("rho0", "alpha", "beta", "T0", "P0")
        return rho0 * (1 - alpha * (T - T0) + beta * (P - P0))

    def param_info(self) -> MaterialParamsInfo:
        rho, rho0, alpha, beta, T, T0, P, P0 = sympy.symbols(
            "rho rho_0 alpha beta T T_0 P P_0"
        )
        eq = sympy.Eq(rho, rho0 * (1 - alpha * (T - T0) + beta * (P - P0)))
        return MaterialParamsInfo(
            Equation=sympy.latex(eq),
            Comment="Pressure and temperature dependent density",
        )


def _density(p, P, T):
    if isinstance(p, PhaseDiagramLookupTable):
        return p.density(T, P)
    return p.compute(P, T)


def compute_density(p, P, T, out=None, phases=None):
    """
    Density for a density law, a phase diagram, a phase, or a sequence of
    phases (together with a ``phases`` array).

    Example:
    --------
    >>> rho = compute_density(PTDensity(), 1e8 * u.Pa, 1273.15 * u.K)
    """
    from .materials import compute_param

    return compute_param(_density, "density", p, P, T, out=out, phases=phases)
