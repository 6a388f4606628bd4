"""
Melting parameterisations

Melt fraction as a function of temperature (and pressure). Laws work on
dimensional values (Pint quantities, with parameters in their units) and
on non-dimensional values (bare numbers, once the law has been
non-dimensionalised with the same characteristic values).
"""

from dataclasses import dataclass

import numpy as np
import sympy

from .parameters import AbstractMaterialParam, MaterialParamsInfo, unit_field
from .function.quantities import GeoUnit
from .phase_diagram import PhaseDiagramLookupTable


@dataclass(frozen=True)
class AbstractMeltingParam(AbstractMaterialParam):
    """Base class of melting parameterisations."""

    def meltfraction(self, P, T):
        raise NotImplementedError


@dataclass(frozen=True)
class MeltingParamCaricchi(AbstractMeltingParam):
    r"""
    Melt fraction from a temperature-dependent sigmoid fitted to
    experimental data for granitic systems (Caricchi et al., 2007):

    .. math::

        \phi = \frac{1}{1 + \exp\left(\frac{a - (T - c)}{b}\right)}

    Attributes:
    -----------
    a : GeoUnit
        Temperature offset of the inflection point [K]
    b : GeoUnit
        Width of the melting interval [K]
    c : GeoUnit
        Conversion from Kelvin to the Celsius scale the fit was made in [K]

    Example:
    --------
    >>> p = MeltingParamCaricchi()
    >>> p.meltfraction(0, 1073.15 * u.K)
    0.5
    """

    a: GeoUnit = unit_field(800.0, "K")
    b: GeoUnit = unit_field(23.0, "K")
    c: GeoUnit = unit_field(273.15, "K")

    def meltfraction(self, P, T):
        a, b, c = self.unpack_units("a", "b", "c")
        exponent = (a - (T - c)) / b
        # exponent is dimensionless; drop Pint's wrapper before exp
        exponent = _dimensionless(exponent)
        return 1.0 / (1.0 + np.exp(exponent))

    def param_info(self) -> MaterialParamsInfo:
        phi, T, a, b, c = sympy.symbols("phi T a b c")
        eq = sympy.Eq(phi, 1 / (1 + sympy.exp((a - (T - c)) / b)))
        return MaterialParamsInfo(
            Equation=sympy.latex(eq),
            Comment="Caricchi et al. (2007) melt fraction of granitic magma",
            BibTex_Reference=(
                "@article{Caricchi2007,\n"
                "  title={Non-Newtonian rheology of crystal-bearing magmas and "
                "implications for magma ascent dynamics},\n"
                "  author={Caricchi, L. and Burlini, L. and Ulmer, P. and "
                "Gerya, T. and Vassalli, M. and Papale, P.},\n"
                "  journal={Earth and Planetary Science Letters},\n"
                "  volume={264},\n"
                "  pages={402--419},\n"
                "  year={2007}\n"
                "}"
            ),
        )


def _dimensionless(val):
    if hasattr(val, "to") and hasattr(val, "magnitude"):
        return val.to("dimensionless").magnitude
    return val


def _meltfraction(p, P, T):
    if isinstance(p, PhaseDiagramLookupTable):
        return p.melt_frac(T, P)
    return p.meltfraction(P, T)


def compute_meltfraction(p, P, T, out=None, phases=None):
    """
    Melt fraction for a melting law, a phase diagram, a phase, or a
    sequence of phases (together with a ``phases`` array).

    Parameters:
    -----------
    p : melting law, PhaseDiagramLookupTable, MaterialParams or sequence
    P : pressure (Pint quantity, or bare number when non-dimensional)
    T : temperature (Pint quantity, or bare number when non-dimensional)
    out : np.ndarray, optional
        Array to store the result in
    phases : array of int, optional
        Phase number of every point, required for a sequence of phases

    Example:
    --------
    >>> T = np.linspace(500, 1500, 11) * u.degC
    >>> phi = compute_meltfraction(MeltingParamCaricchi(), 0, T.to("K"))
    """
    from .materials import compute_param

    return compute_param(_meltfraction, "melting", p, P, T, out=out, phases=phases)
