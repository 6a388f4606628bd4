"""
Characteristic scales for non-dimensionalisation.

A ``ScaleRegistry`` holds the handful of characteristic values chosen by
the user (length, temperature, stress and viscosity; time follows from
viscosity / stress) together with all secondary scales derived from
them. It is built once, with one of the factories below, and never
changes afterwards.

>>> CharUnits = geo_units()
>>> print(CharUnits)
Employing GEO units
Characteristic values:
         length:      1000.0 kilometer
         time:        0.3169 million_years
         stress:      10.0 megapascal
         temperature: 1000.0 degree_Celsius
>>> CharUnits.velocity
<Quantity(1e-07, 'meter / second')>

For a crustal-scale simulation a smaller characteristic length is more
appropriate:

>>> CharUnits = geo_units(length=10 * units.km)
"""
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pint

from ..units import ValidationError
from ._scaling import Dimension, initialise, units

logger = logging.getLogger(__name__)


class UnitSystem(Enum):
    """Unit system a registry is expressed in."""

    GEO = "GEO"
    SI = "SI"
    NONE = "NONE"


def _to_base(val):
    if isinstance(val, pint.Quantity):
        return val.to_base_units()
    return val


@dataclass(frozen=True, repr=False)
class ScaleRegistry:
    """
    Structure that holds the characteristic values used for
    non-dimensionalisation.

    Attributes:
    -----------
    system : UnitSystem
        Unit system the characteristic values are displayed in
    temperature, length, stress, time, viscosity : pint.Quantity or float
        Characteristic values in the units of ``system``
    K, m, Pa, s : pint.Quantity or float
        Characteristic temperature, length, stress and time in SI units
    kg, mol : pint.Quantity or float
        Characteristic mass (from stress) and amount of substance
    N, J, W, area, volume, velocity, density, acceleration, force,
    strainrate, heatcapacity, conductivity : pint.Quantity or float
        Derived characteristic values in SI units
    """

    system: UnitSystem
    temperature: Any = 1.0
    length: Any = 1.0
    stress: Any = 1.0
    time: Any = 1.0
    viscosity: Any = 1.0

    # primary characteristic values in SI units
    K: Any = 1.0
    m: Any = 1.0
    Pa: Any = 1.0
    s: Any = 1.0

    kg: Any = field(init=False)
    mol: Any = field(init=False)

    # derived
    N: Any = field(init=False)
    J: Any = field(init=False)
    W: Any = field(init=False)
    area: Any = field(init=False)
    volume: Any = field(init=False)
    velocity: Any = field(init=False)
    density: Any = field(init=False)
    acceleration: Any = field(init=False)
    force: Any = field(init=False)
    strainrate: Any = field(init=False)
    heatcapacity: Any = field(init=False)
    conductivity: Any = field(init=False)

    # helpful
    SecYear: float = field(init=False, default=3600 * 24 * 365.25)
    Myrs: float = field(init=False, default=1e6)
    cmYear: float = field(init=False, default=3600 * 24 * 365.25 * 100)

    def __post_init__(self):
        m, s, Pa, K = self.m, self.s, self.Pa, self.K

        # mass follows from stress; this may result in very large values
        kg = _to_base(Pa * m * s**2)
        if self.system is UnitSystem.NONE:
            mol = 1.0
        else:
            mol = units.Quantity(1.0, units.mole)

        N = _to_base(kg * m / s**2)
        J = _to_base(N * m)
        W = _to_base(J / s)

        derived = dict(
            kg=kg,
            mol=mol,
            N=N,
            J=J,
            W=W,
            area=_to_base(m**2),
            volume=_to_base(m**3),
            velocity=_to_base(m / s),
            density=_to_base(kg / m**3),
            acceleration=_to_base(m / s**2),
            force=_to_base(kg * m / s**2),
            strainrate=_to_base(1 / s),
            heatcapacity=_to_base(J / kg / K),
            conductivity=_to_base(W / m / K),
        )
        for name, val in derived.items():
            object.__setattr__(self, name, val)

    def characteristic(self, dimension: Dimension):
        """Characteristic value (SI units) of a basis dimension."""
        scales = {
            Dimension.LENGTH: self.m,
            Dimension.MASS: self.kg,
            Dimension.TIME: self.s,
            Dimension.TEMPERATURE: self.K,
            Dimension.AMOUNT: self.mol,
        }
        return scales[Dimension(dimension)]

    def __str__(self):
        if isinstance(self.time, pint.Quantity):
            time = f"{round(float(self.time.magnitude), 4)} {self.time.units}"
        else:
            time = f"{round(float(self.time), 4)}"

        return (
            f"Employing {self.system.value} units\n"
            f"Characteristic values:\n"
            f"         length:      {self.length}\n"
            f"         time:        {time}\n"
            f"         stress:      {self.stress}\n"
            f"         temperature: {self.temperature}\n"
        )

    __repr__ = __str__

    def _repr_html_(self):
        attributes = OrderedDict()
        for key in ["length", "time", "stress", "temperature", "viscosity"]:
            attributes[key] = getattr(self, key)
        header = (
            f"<p>Employing {self.system.value} units</p>"
            "<table style='border-collapse:collapse;'>"
            "<tr><th style='padding:4px 8px;border:1px solid #ccc;'>Characteristic</th>"
            "<th style='padding:4px 8px;border:1px solid #ccc;'>Value</th></tr>"
        )
        footer = "</table>"
        html = ""
        for key, val in attributes.items():
            if isinstance(val, pint.Quantity):
                val_str = f"{float(val.magnitude):.4g} {val.units:~}"
            else:
                val_str = f"{val:.4g}"
            html += (
                f"<tr>"
                f"<td style='padding:4px 8px;border:1px solid #ccc;'>{key}</td>"
                f"<td style='padding:4px 8px;border:1px solid #ccc;'>{val_str}</td>"
                f"</tr>"
            )
        return header + html + footer


def _with_unit(val, default_unit):
    """Attach ``default_unit`` to a bare number."""
    if isinstance(val, pint.Quantity):
        return val
    return units.Quantity(float(val), default_unit)


def geo_units(length=1000, temperature=1000, stress=10, viscosity=1e20):
    """
    Creates a non-dimensionalization object using GEO units.

    GEO units implies that upon dimensionalization, ``time`` will be in
    ``Myrs``, ``length`` in ``km``, stress in ``MPa``, etc. which is more
    convenient for typical geodynamic simulations than SI units. The
    characteristic values can be given in arbitrary units (``km`` or
    ``m``); bare numbers are taken to be in km, degC, MPa and Pa s.

    Parameters
    ----------
    length : pint.Quantity or float, default 1000 km
    temperature : pint.Quantity or float, default 1000 degC
    stress : pint.Quantity or float, default 10 MPa
    viscosity : pint.Quantity or float, default 1e20 Pa s

    Returns
    -------
    ScaleRegistry
    """
    initialise()

    temperature = _with_unit(temperature, "degC")
    length = _with_unit(length, "km")
    stress = _with_unit(stress, "MPa")
    viscosity = _with_unit(viscosity, "Pa*s")

    T = temperature.to("degC")
    Le = length.to("km")
    Sigma = stress.to("MPa")
    Eta = viscosity.to("Pa*s")

    T_SI = T.to("K")
    Le_SI = Le.to("m")
    Sigma_SI = Sigma.to("Pa")
    Time_SI = (Eta / Sigma_SI).to("s")
    t = Time_SI.to("Myrs")

    g = ScaleRegistry(
        UnitSystem.GEO,
        length=Le,
        temperature=T,
        stress=Sigma,
        viscosity=Eta,
        time=t,
        m=Le_SI,
        K=T_SI,
        Pa=Sigma_SI,
        s=Time_SI,
    )
    logger.debug(f"Created GEO scale registry: length={Le}, time={t}, stress={Sigma}")
    return g


def si_units(length=1000, temperature=1000, stress=10, viscosity=1e20):
    """
    Specify the characteristic values using SI units.

    Bare numbers are taken to be in m, K, Pa and Pa s.

    >>> CharUnits = si_units(length=1000 * units.m)

    Note that the same can be achieved if the input is given in ``km``:

    >>> CharUnits = si_units(length=1 * units.km)
    """
    temperature = _with_unit(temperature, "K")
    length = _with_unit(length, "m")
    stress = _with_unit(stress, "Pa")
    viscosity = _with_unit(viscosity, "Pa*s")

    T = temperature.to("K")
    Le = length.to("m")
    Sigma = stress.to("Pa")
    Eta = viscosity.to("Pa*s")
    Time_SI = (Eta / Sigma).to("s")

    g = ScaleRegistry(
        UnitSystem.SI,
        length=Le,
        temperature=T,
        stress=Sigma,
        viscosity=Eta,
        time=Time_SI,
        m=Le,
        K=T,
        Pa=Sigma,
        s=Time_SI,
    )
    logger.debug(f"Created SI scale registry: length={Le}, time={Time_SI}, stress={Sigma}")
    return g


def no_units(length=1, temperature=1, stress=1, viscosity=1):
    """
    Specify the characteristic values in non-dimensional units.

    Raises
    ------
    ValidationError
        If any of the inputs carries units.
    """
    inputs = OrderedDict(
        temperature=temperature, length=length, stress=stress, viscosity=viscosity
    )
    for name, val in inputs.items():
        if isinstance(val, pint.Quantity) and not val.unitless:
            raise ValidationError(f"{name} should not have units")
        if getattr(val, "isdimensional", False):
            raise ValidationError(f"{name} should not have units")

    T, Le, Sigma, Eta = (
        float(val.magnitude) if isinstance(val, pint.Quantity) else float(val)
        for val in inputs.values()
    )
    Time = Eta / Sigma

    g = ScaleRegistry(
        UnitSystem.NONE,
        length=Le,
        temperature=T,
        stress=Sigma,
        viscosity=Eta,
        time=Time,
        m=Le,
        K=T,
        Pa=Sigma,
        s=Time,
    )
    logger.debug(f"Created NONE scale registry: length={Le}, time={Time}, stress={Sigma}")
    return g


_FACTORIES = {
    UnitSystem.GEO: geo_units,
    UnitSystem.SI: si_units,
    UnitSystem.NONE: no_units,
}


def make_registry(system, **kwargs):
    """
    Create a ``ScaleRegistry`` for ``system`` ("GEO", "SI" or "NONE").

    Keyword arguments (``length``, ``temperature``, ``stress``,
    ``viscosity``) are passed on to the factory of that system.
    """
    if isinstance(system, str):
        try:
            system = UnitSystem(system.upper())
        except ValueError:
            raise ValidationError(
                f"Unknown unit system '{system}', "
                f"expected one of {[s.value for s in UnitSystem]}"
            )
    return _FACTORIES[system](**kwargs)
